#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 bootcfg developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""Interactive collection of missing build parameters.

The collector only fills gaps and applies declared defaults; whether the
answers make sense is decided by the validator afterwards. End of input counts
as an empty answer, so a closed standard input selects every default.
"""

import logging
from typing import Callable, Optional, Sequence

import click

from bootcfg.build.config import (
    CPU_FREQ_CHOICES,
    DEFAULT_BAUD_RATE,
    DEFAULT_CPU_FREQ,
    DEFAULT_FLASH,
    DEFAULT_KERNEL_OFFSET,
    DEFAULT_RAM_FREQ,
    GPIO_DISABLED,
    BaudRate,
    BuildConfig,
    FlashType,
    RamFrequency,
)
from bootcfg.build.ddr import DdrProfiles, get_ddr_profiles
from bootcfg.build.mtdparts import (
    DEFAULT_FACTORY_SIZE,
    DEFAULT_UBOOT_ENV_SIZE,
    DEFAULT_UBOOT_SIZE,
)

logger = logging.getLogger(__name__)


class InteractiveCollector:
    """Prompt the user for the fields missing in a build configuration."""

    def __init__(
        self,
        ddr_profiles: Optional[DdrProfiles] = None,
        print_func: Callable[[str], None] = click.echo,
        input_func: Callable[[str], str] = input,
    ) -> None:
        """Create the collector.

        :param ddr_profiles: Built-in DDR profiles offered in the menu.
        :param print_func: Output of menus and messages.
        :param input_func: Reads one answer; receives the prompt text.
        """
        self.ddr_profiles = ddr_profiles if ddr_profiles is not None else get_ddr_profiles()
        self.print_func = print_func
        self.input_func = input_func

    def _read(self, prompt: str) -> str:
        try:
            answer = self.input_func(prompt)
        except EOFError:
            self.print_func("")
            return ""
        return answer.strip()

    def ask(self, prompt: str, default: Optional[str] = None) -> str:
        """Ask for free text.

        :param prompt: Question.
        :param default: Value used for an empty answer.
        :return: Answer or default.
        """
        if default:
            return self._read(f"{prompt} [default: {default}] > ") or default
        return self._read(f"{prompt} > ")

    def _print_menu(self, prompt: str, items: Sequence[str]) -> None:
        self.print_func(prompt)
        for index, item in enumerate(items, start=1):
            self.print_func(f"  {index}) {item}")

    @staticmethod
    def _pick(answer: str, items: Sequence[str]) -> Optional[str]:
        if not answer.isascii() or not answer.isdigit() or not 1 <= int(answer) <= len(items):
            return None
        return items[int(answer) - 1]

    def select_from(self, prompt: str, items: Sequence[str]) -> Optional[str]:
        """Numbered choice without a default.

        :param prompt: Menu title.
        :param items: Offered values.
        :return: Chosen value, None for an empty or invalid answer.
        """
        self._print_menu(prompt, items)
        return self._pick(self._read(f"Select number (1-{len(items)}) > "), items)

    def select_with_default(self, prompt: str, default: str, items: Sequence[str]) -> str:
        """Numbered choice falling back to default on an empty or invalid answer.

        :param prompt: Menu title.
        :param default: Value used when no valid number is entered.
        :param items: Offered values.
        :return: Chosen value or default.
        """
        self._print_menu(prompt, items)
        choice = self._pick(self._read(f"Select number (default: {default}) > "), items)
        if choice is None:
            logger.debug(f"Using default '{default}' for '{prompt}'")
            return default
        return choice

    def _collect_ddrparam(self) -> str:
        self.print_func("Select DDR initialization parameters (or leave empty for a custom value):")
        choice = self.select_from("Built-in profiles:", self.ddr_profiles.names)
        if choice:
            return choice
        return self.ask(
            "Custom DDR parameters (must match a case item of the build script)",
            self.ddr_profiles.default,
        )

    def collect(self, config: BuildConfig) -> BuildConfig:
        """Prompt for every field of the configuration that was not provided.

        The partition table is rebuilt from the partition sizes unless it was
        given explicitly.

        :param config: Configuration to complete, updated in place.
        :return: The same configuration.
        """
        logger.info("Entering interactive configuration")
        if not config.flash:
            config.flash = self.select_with_default(
                "Select flash type:", DEFAULT_FLASH.label, FlashType.labels()
            )
        if not config.mtdparts or config.mtdparts_from_sizes:
            if not config.uboot_size:
                config.uboot_size = self.ask(
                    "u-boot partition size (e.g. 512k/1m)", DEFAULT_UBOOT_SIZE
                )
            if not config.uboot_env_size:
                config.uboot_env_size = self.ask(
                    "u-boot-env partition size (e.g. 512k)", DEFAULT_UBOOT_ENV_SIZE
                )
            if not config.factory_size:
                config.factory_size = self.ask(
                    "factory partition size (e.g. 512k)", DEFAULT_FACTORY_SIZE
                )
            config.synthesize_mtdparts()
        if not config.kernel_offset:
            # the offset depends on the flash layout, the default is only an example
            config.kernel_offset = self.ask(
                f"Kernel offset (e.g. {DEFAULT_KERNEL_OFFSET})", DEFAULT_KERNEL_OFFSET
            )
        if not config.reset_pin:
            config.reset_pin = self.ask(
                "Reset button GPIO (0-48, -1 to disable)", str(GPIO_DISABLED)
            )
        if not config.sysled_pin:
            config.sysled_pin = self.ask(
                "System LED GPIO (0-48, -1 to disable)", str(GPIO_DISABLED)
            )
        if not config.cpufreq:
            config.cpufreq = self.select_with_default(
                "Select CPU frequency (MHz):",
                str(DEFAULT_CPU_FREQ),
                [str(freq) for freq in CPU_FREQ_CHOICES],
            )
        if not config.ramfreq:
            config.ramfreq = self.select_with_default(
                "Select DRAM rate (MT/s):", DEFAULT_RAM_FREQ.label, RamFrequency.labels()
            )
        if not config.ddrparam:
            config.ddrparam = self._collect_ddrparam()
        if not config.baudrate:
            config.baudrate = self.select_with_default(
                "Select serial baud rate:", DEFAULT_BAUD_RATE.label, BaudRate.labels()
            )
        return config
