#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 bootcfg developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""Build configuration record and its validated form.

``BuildConfig`` holds the raw text values as they come from the command line,
the configuration file or the prompts; unset fields are None. The validator
turns a complete record into ``BuildParameters`` with typed values.
"""

import logging
import os
from dataclasses import dataclass, fields
from typing import Any, Optional

from bootcfg import BOOTCFG_DATA_FOLDER
from bootcfg.build.mtdparts import build_mtdparts
from bootcfg.exceptions import BootCfgKeyError
from bootcfg.utils.enum import BootCfgEnum
from bootcfg.utils.misc import load_configuration
from bootcfg.utils.schema_validator import check_config

logger = logging.getLogger(__name__)


class FlashType(BootCfgEnum):
    """Boot flash type."""

    NOR = (0, "NOR", "SPI NOR flash")
    NAND = (1, "NAND", "SPI NAND flash")
    NMBM = (2, "NMBM", "SPI NAND flash with NAND mapped-block management")


class RamFrequency(BootCfgEnum):
    """DRAM data rate in MT/s."""

    RATE_400 = (400, "400", "400 MT/s")
    RATE_800 = (800, "800", "800 MT/s")
    RATE_1066 = (1066, "1066", "1066 MT/s")
    RATE_1200 = (1200, "1200", "1200 MT/s")


class BaudRate(BootCfgEnum):
    """Serial console baud rate."""

    BAUD_57600 = (57600, "57600")
    BAUD_115200 = (115200, "115200")


CPU_FREQ_MIN = 400
CPU_FREQ_MAX = 1200
CPU_FREQ_CHOICES = (880, 1000, 1100, 1200)

GPIO_MIN = 0
GPIO_MAX = 48
GPIO_DISABLED = -1

DEFAULT_FLASH = FlashType.NMBM
DEFAULT_KERNEL_OFFSET = "0x180000"
DEFAULT_CPU_FREQ = 1000
DEFAULT_RAM_FREQ = RamFrequency.RATE_1200
DEFAULT_BAUD_RATE = BaudRate.BAUD_115200

# Fields whose absence after parsing switches to interactive collection
REQUIRED_FIELDS = ("flash", "mtdparts", "kernel_offset", "cpufreq", "ramfreq", "ddrparam")


@dataclass
class BuildConfig:
    """Build configuration as collected, not yet validated."""

    flash: Optional[str] = None
    mtdparts: Optional[str] = None
    uboot_size: Optional[str] = None
    uboot_env_size: Optional[str] = None
    factory_size: Optional[str] = None
    kernel_offset: Optional[str] = None
    reset_pin: Optional[str] = None
    sysled_pin: Optional[str] = None
    cpufreq: Optional[str] = None
    ramfreq: Optional[str] = None
    ddrparam: Optional[str] = None
    baudrate: Optional[str] = None
    yes: bool = False
    mtdparts_from_sizes: bool = False

    @classmethod
    def value_fields(cls) -> list[str]:
        """Names of the textual configuration fields."""
        return [f.name for f in fields(cls) if f.name not in ("yes", "mtdparts_from_sizes")]

    @staticmethod
    def get_validation_schemas() -> list[dict[str, Any]]:
        """Get validation schemas of the configuration file."""
        return [load_configuration(os.path.join(BOOTCFG_DATA_FOLDER, "config_schema.yaml"))]

    @classmethod
    def load(cls, path: str) -> "BuildConfig":
        """Load and check configuration file.

        :param path: YAML or JSON configuration file.
        :raises BootCfgError: The file cannot be loaded or does not match the schema.
        :return: New record.
        """
        data = load_configuration(path)
        check_config(data, cls.get_validation_schemas(), check_unknown_props=True)
        logger.info(f"Configuration loaded from {path}")
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BuildConfig":
        """Create record from configuration file data.

        Numbers are converted to their decimal text; unknown keys are ignored.

        :param data: Loaded configuration file.
        :return: New record.
        """
        config = cls(yes=bool(data.get("skip_confirmation", False)))
        config.update({key: data.get(key) for key in cls.value_fields()})
        return config

    def update(self, values: dict[str, Any]) -> None:
        """Overwrite fields with the values that are not None.

        :param values: Field name to value mapping.
        :raises BootCfgKeyError: Unknown field name.
        """
        valid = self.value_fields()
        for key, value in values.items():
            if key not in valid:
                raise BootCfgKeyError(f"Unknown build configuration field '{key}'")
            if value is None:
                continue
            logger.debug(f"Setting {key}={value}")
            setattr(self, key, str(value))

    @property
    def size_tokens(self) -> dict[str, Optional[str]]:
        """Partition sizes keyed by partition name."""
        return {
            "u-boot": self.uboot_size,
            "u-boot-env": self.uboot_env_size,
            "factory": self.factory_size,
        }

    @property
    def has_size_tokens(self) -> bool:
        """At least one partition size is set."""
        return any(self.size_tokens.values())

    @property
    def missing_required(self) -> list[str]:
        """Required fields that are still unset or empty."""
        return [name for name in REQUIRED_FIELDS if not getattr(self, name)]

    def synthesize_mtdparts(self) -> str:
        """Build the partition table from the partition sizes and store it."""
        self.mtdparts = build_mtdparts(self.uboot_size, self.uboot_env_size, self.factory_size)
        self.mtdparts_from_sizes = True
        logger.debug(f"Partition table synthesized: {self.mtdparts}")
        return self.mtdparts

    def apply_defaults(self) -> None:
        """Fill the optional fields that have a fixed default."""
        if self.reset_pin is None:
            self.reset_pin = str(GPIO_DISABLED)
        if self.sysled_pin is None:
            self.sysled_pin = str(GPIO_DISABLED)
        if self.baudrate is None:
            self.baudrate = DEFAULT_BAUD_RATE.label


@dataclass(frozen=True)
class BuildParameters:
    """Validated build parameters."""

    flash: FlashType
    mtdparts: str
    kernel_offset: int
    kernel_offset_text: str
    reset_pin: int
    sysled_pin: int
    cpufreq: int
    ramfreq: RamFrequency
    ddrparam: str
    baudrate: BaudRate

    @property
    def arguments(self) -> list[str]:
        """Positional arguments of the build script in their fixed order."""
        return [
            self.flash.label,
            self.mtdparts,
            self.kernel_offset_text,
            str(self.reset_pin),
            str(self.sysled_pin),
            str(self.cpufreq),
            self.ramfreq.label,
            self.ddrparam,
            self.baudrate.label,
        ]

    def to_config(self) -> dict[str, Any]:
        """Get data of a configuration file reproducing these parameters."""
        return {
            "flash": self.flash.label,
            "mtdparts": self.mtdparts,
            "kernel_offset": self.kernel_offset_text,
            "reset_pin": self.reset_pin,
            "sysled_pin": self.sysled_pin,
            "cpufreq": self.cpufreq,
            "ramfreq": self.ramfreq.tag,
            "ddrparam": self.ddrparam,
            "baudrate": self.baudrate.tag,
        }
