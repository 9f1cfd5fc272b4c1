#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 bootcfg developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""CLI helper for Click."""

import logging
from typing import Any, Callable, Optional, TypeVar, Union

import click

from bootcfg import __version__ as bootcfg_version

FC = TypeVar("FC", bound=Union[Callable[..., Any], click.Command])
logger = logging.getLogger(__name__)

USAGE_ERROR_CODE = 1


class BootCfgCommand(click.Command):
    """Click command reporting usage errors with exit code 1.

    Unknown options and options missing their value end the run like any
    other configuration error instead of with click's usage code 2.
    """

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        """Parse arguments, re-labeling usage errors with the bootcfg exit code."""
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as exc:
            exc.exit_code = USAGE_ERROR_CODE
            raise


def bootcfg_apps_common_options(options: FC) -> FC:
    """Common click options.

    Sets -h/--help, --version; provides: `log_level: int` for logging.

    :return: click decorator
    """
    options = click.help_option("-h", "--help")(options)
    options = click.version_option(bootcfg_version, "--version")(options)
    options = click.option(
        "-vv",
        "--debug",
        "log_level",
        flag_value=logging.DEBUG,
        help="Display more debugging information.",
    )(options)
    options = click.option(
        "-v",
        "--verbose",
        "log_level",
        flag_value=logging.INFO,
        help="Print more detailed information",
    )(options)
    return options


def bootcfg_config_option(
    required: bool = False, help: Optional[str] = None  # pylint: disable=redefined-builtin
) -> Callable[[FC], FC]:
    """Click decorator handling the configuration file.

    Provides: `config: str` a path to the YAML/JSON configuration file.

    :param required: Configuration option is required, defaults to False
    :param help: Customized help message, defaults to None
    :return: Click decorator
    """
    return click.option(
        "-c",
        "--config",
        type=click.Path(exists=True, dir_okay=False, resolve_path=True),
        required=required,
        help=help or "Path to the YAML/JSON configuration file.",
    )


def bootcfg_output_option(
    required: bool = False, help: Optional[str] = None  # pylint: disable=redefined-builtin
) -> Callable[[FC], FC]:
    """Click decorator handling an output file.

    Provides: `output: str` a full path to the output file.

    :param required: Output option is required, defaults to False
    :param help: Customized help message, defaults to None
    :return: Click decorator
    """
    return click.option(
        "-o",
        "--output",
        type=click.Path(dir_okay=False, resolve_path=True),
        required=required,
        help=help or "Path to a file, where to store the output.",
    )
