#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 bootcfg developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""Summary of the build parameters and invocation of the build script."""

import logging
import os
import subprocess
from typing import Callable, Optional, Sequence

import colorama
import prettytable

from bootcfg.build.config import BuildParameters
from bootcfg.build.ddr import DdrProfiles, get_ddr_profiles
from bootcfg.build.mtdparts import parse_mtdparts
from bootcfg.exceptions import BootCfgError, BootCfgFileNotFoundError, BootCfgValueError
from bootcfg.utils.misc import size_fmt

logger = logging.getLogger(__name__)

DEFAULT_BUILD_SCRIPT = "./customize.sh"
ARCHIVE_DIR = "archive"


def quote_argument(argument: str) -> str:
    """Quote argument for a POSIX shell, always using single quotes."""
    return "'" + argument.replace("'", "'\"'\"'") + "'"


def format_command(script: str, arguments: Sequence[str]) -> str:
    """Get the command line that runs the build script.

    :param script: Build script path.
    :param arguments: Positional arguments.
    :return: Printable command line.
    """
    return " ".join([script] + [quote_argument(arg) for arg in arguments])


def get_parameters_table(
    params: BuildParameters, ddr_profiles: Optional[DdrProfiles] = None
) -> prettytable.PrettyTable:
    """Get table of the build parameters."""
    ddr_profiles = ddr_profiles if ddr_profiles is not None else get_ddr_profiles()
    ddr_note = (
        ddr_profiles.get(params.ddrparam).description
        if params.ddrparam in ddr_profiles
        else colorama.Fore.YELLOW + "custom" + colorama.Fore.RESET
    )

    def _pin(pin: int) -> str:
        return "disabled" if pin < 0 else f"GPIO{pin}"

    table = prettytable.PrettyTable(["#", "Parameter", "Value", "Note"])
    table.align = "l"
    rows = [
        ("Flash type", params.flash.label, params.flash.description),
        ("MTD partitions", params.mtdparts, ""),
        ("Kernel offset", params.kernel_offset_text, f"{params.kernel_offset:#x}"),
        ("Reset pin", str(params.reset_pin), _pin(params.reset_pin)),
        ("System LED pin", str(params.sysled_pin), _pin(params.sysled_pin)),
        ("CPU frequency", str(params.cpufreq), "MHz"),
        ("DRAM rate", params.ramfreq.label, "MT/s"),
        ("DDR parameters", params.ddrparam, ddr_note),
        ("Baud rate", params.baudrate.label, "bit/s"),
    ]
    for index, (name, value, note) in enumerate(rows, start=1):
        table.add_row(
            [str(index), name, colorama.Fore.GREEN + value + colorama.Fore.RESET, note or ""]
        )
    return table


def get_layout_table(mtdparts: str, kernel_offset: Optional[int] = None) -> prettytable.PrettyTable:
    """Get table of the flash layout described by the partition table.

    :param mtdparts: Partition table.
    :param kernel_offset: Kernel offset marked in the partition containing it.
    :raises BootCfgValueError: The partition table cannot be parsed.
    :return: Layout table.
    """
    table = prettytable.PrettyTable(["Partition", "Offset", "Size", "Note"])
    table.align = "l"
    for partition in parse_mtdparts(mtdparts):
        size = "rest of flash" if partition.size is None else size_fmt(partition.size)
        notes = []
        if partition.read_only:
            notes.append("read-only")
        if kernel_offset is not None and partition.offset <= kernel_offset and (
            partition.end is None or kernel_offset < partition.end
        ):
            notes.append(f"kernel at {kernel_offset:#x}")
        table.add_row([partition.name, f"{partition.offset:#08x}", size, ", ".join(notes)])
    return table


def render_summary(params: BuildParameters, script: str = DEFAULT_BUILD_SCRIPT) -> str:
    """Render summary of the build about to be run.

    :param params: Validated build parameters.
    :param script: Build script path.
    :return: Multi-line summary ending with the exact command line.
    """
    lines = ["Build configuration:", str(get_parameters_table(params))]
    try:
        lines.append("Flash layout:")
        lines.append(str(get_layout_table(params.mtdparts, params.kernel_offset)))
    except BootCfgValueError as exc:
        lines.pop()
        logger.debug(f"Flash layout not shown: {exc}")
    lines.append("Will execute:")
    lines.append("  " + format_command(script, params.arguments))
    return "\n".join(lines)


def confirm(input_func: Callable[[str], str] = input) -> bool:
    """Ask for confirmation; only 'y' or 'Y' confirms.

    :param input_func: Reads one answer; receives the prompt text.
    :return: True when confirmed.
    """
    try:
        answer = input_func("Proceed? [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() == "y"


class BuildScript:
    """Downstream build script called with the build parameters.

    Standard streams are inherited so the script output goes straight to the
    user.
    """

    def __init__(self, path: str = DEFAULT_BUILD_SCRIPT, cwd: Optional[str] = None) -> None:
        """Create the build script handle.

        :param path: Script path, relative paths are resolved against cwd.
        :param cwd: Working directory of the script, defaults to the current one.
        """
        self.path = path
        self.cwd = cwd or os.getcwd()

    def __repr__(self) -> str:
        return f"BuildScript({self.path!r}, cwd={self.cwd!r})"

    @property
    def archive_dir(self) -> str:
        """Directory where the build script stores its artifacts."""
        return os.path.join(self.cwd, ARCHIVE_DIR)

    def run(self, arguments: Sequence[str]) -> int:
        """Run the script and wait for it to finish.

        :param arguments: Positional arguments.
        :raises BootCfgFileNotFoundError: The script does not exist.
        :raises BootCfgError: The script cannot be executed.
        :return: Exit status of the script.
        """
        script_path = self.path if os.path.isabs(self.path) else os.path.join(self.cwd, self.path)
        if not os.path.isfile(script_path):
            raise BootCfgFileNotFoundError(f"Build script not found: {script_path}")
        command = [script_path, *arguments]
        logger.info(f"Running {format_command(self.path, arguments)} in {self.cwd}")
        try:
            completed = subprocess.run(command, cwd=self.cwd, check=False)  # nosec: subprocess
        except OSError as exc:
            raise BootCfgError(f"Cannot execute build script {self.path}: {exc}") from exc
        logger.debug(f"Build script finished with exit status {completed.returncode}")
        return completed.returncode
