#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 bootcfg developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""Console script collecting the firmware build configuration and running the build."""

import logging
import sys
from typing import Optional

import click
import colorama
import prettytable

from bootcfg.apps.utils import bootcfg_logger
from bootcfg.apps.utils.common_cli_options import (
    BootCfgCommand,
    bootcfg_apps_common_options,
    bootcfg_config_option,
    bootcfg_output_option,
)
from bootcfg.apps.utils.utils import BootCfgAppError, catch_bootcfg_error
from bootcfg.build import BuildConfig, validate
from bootcfg.build.collector import InteractiveCollector
from bootcfg.build.ddr import get_ddr_profiles
from bootcfg.build.dispatcher import DEFAULT_BUILD_SCRIPT, BuildScript, confirm, render_summary
from bootcfg.exceptions import BootCfgFileNotFoundError
from bootcfg.utils.misc import get_printable_path, write_file
from bootcfg.utils.schema_validator import CommentedConfig

logger = logging.getLogger(__name__)


def list_ddrparams(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    """Print the built-in DDR profiles and exit."""
    if not value or ctx.resilient_parsing:
        return
    ddr_profiles = get_ddr_profiles()
    table = prettytable.PrettyTable(["#", "Name", "Type", "Size", "Description"])
    table.align = "l"
    for index, profile in enumerate(ddr_profiles.profiles, start=1):
        name = profile.name
        if name == ddr_profiles.default:
            name = colorama.Fore.GREEN + name + colorama.Fore.RESET
        table.add_row([str(index), name, profile.mem_type, profile.size, profile.description])
    click.echo(table)
    click.echo(f"Default: {ddr_profiles.default}")
    ctx.exit()


@click.command(name="bootcfg", cls=BootCfgCommand, no_args_is_help=False)
@click.option("--flash", help="Boot flash type: NOR, NAND or NMBM.")
@click.option("--mtdparts", help="Full MTD partition table, must end with -(firmware).")
@click.option("--uboot-size", help="Size of the u-boot partition, e.g. 512k.")
@click.option("--uboot-env-size", help="Size of the u-boot-env partition, e.g. 512k.")
@click.option("--factory-size", help="Size of the factory partition, e.g. 512k.")
@click.option("--kernel-offset", help="Kernel offset in flash, hexadecimal (0x...) or decimal.")
@click.option("--reset-pin", help="Reset button GPIO, 0-48 or -1 to disable.")
@click.option("--sysled-pin", help="System LED GPIO, 0-48 or -1 to disable.")
@click.option("--cpufreq", help="CPU frequency in MHz, 400-1200.")
@click.option("--ramfreq", help="DRAM rate in MT/s: 400, 800, 1066 or 1200.")
@click.option("--ddrparam", help="DDR initialization parameters, see --list-ddrparams.")
@click.option("--baudrate", help="Serial console baud rate: 57600 or 115200.")
@click.option("--yes", is_flag=True, default=False, help="Do not ask for confirmation.")
@bootcfg_config_option()
@bootcfg_output_option(help="Store the final configuration into YAML file usable with --config.")
@click.option(
    "--script",
    default=DEFAULT_BUILD_SCRIPT,
    show_default=True,
    help="Build script called with the validated parameters.",
)
@click.option(
    "--list-ddrparams",
    is_flag=True,
    expose_value=False,
    is_eager=True,
    callback=list_ddrparams,
    help="List the built-in DDR parameter profiles and exit.",
)
@bootcfg_apps_common_options
def main(
    flash: Optional[str],
    mtdparts: Optional[str],
    uboot_size: Optional[str],
    uboot_env_size: Optional[str],
    factory_size: Optional[str],
    kernel_offset: Optional[str],
    reset_pin: Optional[str],
    sysled_pin: Optional[str],
    cpufreq: Optional[str],
    ramfreq: Optional[str],
    ddrparam: Optional[str],
    baudrate: Optional[str],
    yes: bool,
    config: Optional[str],
    output: Optional[str],
    script: str,
    log_level: int,
) -> None:
    """Configure the firmware build and run the build script.

    Parameters missing on the command line and in the configuration file are
    asked for interactively.
    """
    bootcfg_logger.install(level=log_level)

    build_config = BuildConfig.load(config) if config else BuildConfig()
    build_config.update(
        {
            "flash": flash,
            "mtdparts": mtdparts,
            "uboot_size": uboot_size,
            "uboot_env_size": uboot_env_size,
            "factory_size": factory_size,
            "kernel_offset": kernel_offset,
            "reset_pin": reset_pin,
            "sysled_pin": sysled_pin,
            "cpufreq": cpufreq,
            "ramfreq": ramfreq,
            "ddrparam": ddrparam,
            "baudrate": baudrate,
        }
    )
    build_config.yes = build_config.yes or yes

    if not build_config.mtdparts and build_config.has_size_tokens:
        build_config.synthesize_mtdparts()

    missing = build_config.missing_required
    if missing:
        logger.debug(f"Missing parameters: {', '.join(missing)}")
        click.echo("Entering interactive configuration...")
        InteractiveCollector().collect(build_config)
    build_config.apply_defaults()

    params = validate(build_config)

    if output:
        schemas = BuildConfig.get_validation_schemas()
        yaml_data = CommentedConfig("Firmware build configuration", schemas).get_config(
            params.to_config()
        )
        write_file(yaml_data, output)
        click.echo(f"The configuration has been saved into {get_printable_path(output)}")

    click.echo(render_summary(params, script))

    if not build_config.yes and not confirm():
        click.echo("Cancelled.")
        return

    build_script = BuildScript(script)
    try:
        exit_code = build_script.run(params.arguments)
    except BootCfgFileNotFoundError as exc:
        raise BootCfgAppError(str(exc)) from exc
    if exit_code != 0:
        raise BootCfgAppError(
            f"Build script {script} failed with exit status {exit_code}", error_code=exit_code
        )
    click.echo(
        f"Build finished, the images are in {get_printable_path(build_script.archive_dir)}/"
    )


@catch_bootcfg_error
def safe_main() -> None:
    """Call the main function."""
    sys.exit(main())  # pylint: disable=no-value-for-parameter


if __name__ == "__main__":
    safe_main()
