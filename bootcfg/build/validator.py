#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 bootcfg developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""Build configuration validator.

Rules are checked in a fixed order and the first violation raises
``BootCfgValidationError``; nothing is reported past it.
"""

import logging
import re
from typing import Optional

from bootcfg.build.config import (
    CPU_FREQ_MAX,
    CPU_FREQ_MIN,
    GPIO_DISABLED,
    GPIO_MAX,
    GPIO_MIN,
    BaudRate,
    BuildConfig,
    BuildParameters,
    FlashType,
    RamFrequency,
)
from bootcfg.build.ddr import DdrProfiles, get_ddr_profiles
from bootcfg.build.mtdparts import DEFAULT_MTDPARTS, has_firmware_partition, is_size_token
from bootcfg.exceptions import BootCfgValidationError

logger = logging.getLogger(__name__)

KERNEL_OFFSET_PATTERN = re.compile(r"^(0x[0-9a-fA-F]+|[0-9]+)$")
SIGNED_INT_PATTERN = re.compile(r"^-?[0-9]+$")
UNSIGNED_INT_PATTERN = re.compile(r"^[0-9]+$")


def parse_int_in_range(
    value: Optional[str],
    name: str,
    minimum: int,
    maximum: int,
    signed: bool = False,
    special: tuple[int, ...] = (),
) -> int:
    """Parse decimal integer text and check its range.

    :param value: Text to parse.
    :param name: Parameter name used in the error message.
    :param minimum: Lowest accepted value.
    :param maximum: Highest accepted value.
    :param signed: Accept a leading minus sign, defaults to False.
    :param special: Values accepted outside of the range.
    :raises BootCfgValidationError: Value is not an integer or is out of range.
    :return: Parsed value.
    """
    hint = ", ".join(str(x) for x in special)
    hint = f"{hint} or {minimum}-{maximum}" if hint else f"{minimum}-{maximum}"
    pattern = SIGNED_INT_PATTERN if signed else UNSIGNED_INT_PATTERN
    if not value or not pattern.fullmatch(value):
        raise BootCfgValidationError(f"{name} must be an integer ({hint}), got '{value or ''}'")
    number = int(value)
    if number not in special and not minimum <= number <= maximum:
        raise BootCfgValidationError(f"{name} is out of range ({hint}), got {number}")
    return number


def _check_mtdparts(config: BuildConfig) -> str:
    if not config.mtdparts or not has_firmware_partition(config.mtdparts):
        raise BootCfgValidationError(
            f"Invalid MTD partition table '{config.mtdparts or ''}', "
            f"expected e.g. {DEFAULT_MTDPARTS}"
        )
    for label, token in config.size_tokens.items():
        if token and not is_size_token(token):
            raise BootCfgValidationError(
                f"Size of partition {label} must be digits followed by k or m "
                f"(e.g. 512k, 1m), got '{token}'"
            )
    return config.mtdparts


def _check_flash(config: BuildConfig) -> FlashType:
    if not config.flash or not FlashType.contains(config.flash, case_sensitive=True):
        raise BootCfgValidationError(
            f"Flash type must be one of {'/'.join(FlashType.labels())}, got '{config.flash or ''}'"
        )
    return FlashType.from_label(config.flash, case_sensitive=True)


def _check_kernel_offset(config: BuildConfig) -> int:
    offset = config.kernel_offset
    if not offset or not KERNEL_OFFSET_PATTERN.fullmatch(offset):
        raise BootCfgValidationError(
            f"kernel-offset must be hexadecimal (e.g. 0x60000) or decimal, got '{offset or ''}'"
        )
    return int(offset, 16) if offset.startswith("0x") else int(offset, 10)


def _check_ramfreq(config: BuildConfig) -> RamFrequency:
    if not config.ramfreq or not RamFrequency.contains(config.ramfreq, case_sensitive=True):
        raise BootCfgValidationError(
            f"ramfreq supports only {'/'.join(RamFrequency.labels())}, got '{config.ramfreq or ''}'"
        )
    return RamFrequency.from_label(config.ramfreq, case_sensitive=True)


def _check_baudrate(config: BuildConfig) -> BaudRate:
    if not config.baudrate or not BaudRate.contains(config.baudrate, case_sensitive=True):
        raise BootCfgValidationError(
            f"baudrate supports only {' or '.join(BaudRate.labels())}, "
            f"got '{config.baudrate or ''}'"
        )
    return BaudRate.from_label(config.baudrate, case_sensitive=True)


def _check_ddrparam(config: BuildConfig, ddr_profiles: DdrProfiles) -> str:
    if not config.ddrparam:
        raise BootCfgValidationError("ddrparam must not be empty")
    if config.ddrparam not in ddr_profiles:
        logger.warning(
            f"DDR parameters '{config.ddrparam}' are not in the built-in list, "
            "make sure the build script knows them"
        )
    return config.ddrparam


def validate(config: BuildConfig, ddr_profiles: Optional[DdrProfiles] = None) -> BuildParameters:
    """Validate complete build configuration.

    Order of the checks: partition table, partition sizes, flash type, kernel
    offset, reset pin, system LED pin, CPU frequency, DRAM rate, baud rate and
    DDR parameters.

    :param config: Collected configuration.
    :param ddr_profiles: Known DDR profiles, defaults to the built-in list.
    :raises BootCfgValidationError: First violated rule.
    :return: Typed build parameters.
    """
    mtdparts = _check_mtdparts(config)
    flash = _check_flash(config)
    kernel_offset = _check_kernel_offset(config)
    reset_pin = parse_int_in_range(
        config.reset_pin, "reset-pin", GPIO_MIN, GPIO_MAX, signed=True, special=(GPIO_DISABLED,)
    )
    sysled_pin = parse_int_in_range(
        config.sysled_pin, "sysled-pin", GPIO_MIN, GPIO_MAX, signed=True, special=(GPIO_DISABLED,)
    )
    cpufreq = parse_int_in_range(config.cpufreq, "cpufreq", CPU_FREQ_MIN, CPU_FREQ_MAX)
    ramfreq = _check_ramfreq(config)
    baudrate = _check_baudrate(config)
    if ddr_profiles is None:
        ddr_profiles = get_ddr_profiles()
    ddrparam = _check_ddrparam(config, ddr_profiles)

    params = BuildParameters(
        flash=flash,
        mtdparts=mtdparts,
        kernel_offset=kernel_offset,
        kernel_offset_text=config.kernel_offset or "",
        reset_pin=reset_pin,
        sysled_pin=sysled_pin,
        cpufreq=cpufreq,
        ramfreq=ramfreq,
        ddrparam=ddrparam,
        baudrate=baudrate,
    )
    logger.info(f"Build configuration is valid: {params}")
    return params
