#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 bootcfg developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""MTD partition table helpers.

The boot loader receives its flash layout as an ``mtdparts`` string without the
device prefix, e.g. ``512k(u-boot),512k(u-boot-env),512k(factory),-(firmware)``.
The table is normally built from the sizes of the three fixed partitions in
front of the firmware; the firmware partition takes the rest of the flash.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

from bootcfg.exceptions import BootCfgValueError

logger = logging.getLogger(__name__)

SIZE_TOKEN_PATTERN = re.compile(r"^[0-9]+[kKmM]$")
FIRMWARE_PARTITION = "firmware"
FIRMWARE_MARKER = f"),-({FIRMWARE_PARTITION})"

DEFAULT_UBOOT_SIZE = "512k"
DEFAULT_UBOOT_ENV_SIZE = "512k"
DEFAULT_FACTORY_SIZE = "512k"

_UNITS = {"": 1, "k": 1 << 10, "m": 1 << 20, "g": 1 << 30}
_PARTITION_PATTERN = re.compile(
    r"^(?P<size>-|(?:0x[0-9a-fA-F]+|[0-9]+)[kKmMgG]?)"
    r"(?:@(?P<offset>(?:0x[0-9a-fA-F]+|[0-9]+)[kKmMgG]?))?"
    r"\((?P<name>[^()]+)\)"
    r"(?P<flags>(?:ro|lk)*)$"
)


def is_size_token(value: str) -> bool:
    """Check that value is a partition size token: digits followed by k or m."""
    return bool(SIZE_TOKEN_PATTERN.fullmatch(value))


def _memparse(value: str) -> int:
    """Convert number with optional k/m/g suffix into bytes."""
    unit = value[-1].lower() if value[-1].lower() in _UNITS else ""
    number = value[: len(value) - len(unit)]
    return int(number, 0) * _UNITS[unit]


def build_mtdparts(
    uboot_size: Optional[str] = None,
    uboot_env_size: Optional[str] = None,
    factory_size: Optional[str] = None,
) -> str:
    """Build the partition table from the sizes of the fixed partitions.

    Sizes are embedded verbatim; missing ones fall back to the defaults.

    :param uboot_size: Size of the u-boot partition.
    :param uboot_env_size: Size of the u-boot-env partition.
    :param factory_size: Size of the factory partition.
    :return: Partition table string ending with the firmware partition.
    """
    u = uboot_size or DEFAULT_UBOOT_SIZE
    e = uboot_env_size or DEFAULT_UBOOT_ENV_SIZE
    f = factory_size or DEFAULT_FACTORY_SIZE
    return f"{u}(u-boot),{e}(u-boot-env),{f}(factory),-({FIRMWARE_PARTITION})"


DEFAULT_MTDPARTS = build_mtdparts()


def has_firmware_partition(mtdparts: Optional[str]) -> bool:
    """Check that the table ends with the catch-all firmware partition."""
    if not mtdparts:
        return False
    return FIRMWARE_MARKER in mtdparts


@dataclass(frozen=True)
class MtdPartition:
    """Single partition of the table.

    ``size`` is None for the partition that fills the rest of the flash.
    """

    name: str
    offset: int
    size: Optional[int] = None
    read_only: bool = False

    @property
    def end(self) -> Optional[int]:
        """Offset of the first byte after the partition, None when unbounded."""
        if self.size is None:
            return None
        return self.offset + self.size


def parse_mtdparts(mtdparts: str) -> list[MtdPartition]:
    """Parse partition table string into partitions with resolved offsets.

    Entries follow the kernel syntax ``size[@offset](name)[ro][lk]``; only the
    last entry may use ``-`` as size.

    :param mtdparts: Partition table without the device prefix.
    :raises BootCfgValueError: The table cannot be parsed.
    :return: List of partitions in table order.
    """
    if not mtdparts:
        raise BootCfgValueError("Empty MTD partition table")
    entries = mtdparts.split(",")
    partitions: list[MtdPartition] = []
    offset = 0
    for index, entry in enumerate(entries):
        match = _PARTITION_PATTERN.fullmatch(entry.strip())
        if not match:
            raise BootCfgValueError(f"Invalid MTD partition entry '{entry}'")
        if match.group("offset"):
            offset = _memparse(match.group("offset"))
        size: Optional[int] = None
        if match.group("size") == "-":
            if index != len(entries) - 1:
                raise BootCfgValueError(
                    f"Only the last partition may fill the rest of flash, got '{entry}'"
                )
        else:
            size = _memparse(match.group("size"))
        partition = MtdPartition(
            name=match.group("name"),
            offset=offset,
            size=size,
            read_only="ro" in match.group("flags"),
        )
        logger.debug(f"Parsed partition {partition}")
        partitions.append(partition)
        if size is not None:
            offset += size
    return partitions
