#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 bootcfg developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""Error handling of the bootcfg command line applications."""

import logging
import sys
from functools import wraps
from typing import Any, Callable, Optional

import click

from bootcfg import BOOTCFG_DEBUG_LOG_FILE, BOOTCFG_DEBUG_LOGGING_DISABLED
from bootcfg.exceptions import BootCfgError, BootCfgValidationError

logger = logging.getLogger(__name__)


class BootCfgAppError(BootCfgError):
    """Application error with an explicit process exit code.

    :cvar fmt: Format string template for error message display.
    """

    fmt = "{description}"

    def __init__(self, desc: Optional[str] = None, error_code: int = 1) -> None:
        """Initialize the AppError.

        :param desc: Description to print out on command line, defaults to None
        :param error_code: Error code passed to OS, defaults to 1
        """
        super().__init__(desc)
        self.description = desc
        self.error_code = error_code


def catch_bootcfg_error(function: Callable) -> Callable:
    """Catch and handle bootcfg errors and other exceptions.

    Exit codes:

    - BootCfgAppError: its error code (1 when out of range)
    - BootCfgValidationError: 1
    - other BootCfgError: 2, traceback goes to the debug log
    - any other exception, including KeyboardInterrupt: 3

    :param function: The function to be decorated.
    :return: The decorated function.
    """

    @wraps(function)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            retval = function(*args, **kwargs)
            return retval
        except BootCfgAppError as app_exc:
            if app_exc.description:
                click.echo(f"{app_exc.__class__.__name__}: {app_exc}", err=True)
            if 0 < app_exc.error_code < 256:
                sys.exit(app_exc.error_code)
            sys.exit(1)
        except BootCfgValidationError as val_exc:
            click.echo(f"Error: {val_exc}", err=True)
            logger.debug(str(val_exc), exc_info=True)
            sys.exit(1)
        except BootCfgError as exc:
            click.echo(f"{exc.__class__.__name__}: {exc}", err=True)
            logger.debug(str(exc), exc_info=True)
            if not BOOTCFG_DEBUG_LOGGING_DISABLED:
                click.secho(
                    f"See debug log file: {BOOTCFG_DEBUG_LOG_FILE} for more info",
                    fg="yellow",
                    err=True,
                )
            sys.exit(2)
        except (Exception, KeyboardInterrupt) as base_exc:  # pylint: disable=broad-except
            click.echo(f"GENERAL ERROR: {type(base_exc).__name__}: {base_exc}", err=True)
            logger.debug(str(base_exc), exc_info=True)
            if not BOOTCFG_DEBUG_LOGGING_DISABLED:
                click.secho(
                    f"See debug log file: {BOOTCFG_DEBUG_LOG_FILE} for more info.",
                    fg="yellow",
                    err=True,
                )
            sys.exit(3)

    return wrapper
