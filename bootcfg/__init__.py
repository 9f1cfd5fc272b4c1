#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 bootcfg developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""bootcfg - boot loader build configurator.

Collects and validates the hardware parameters of a boot loader build (flash
type, MTD partition layout, kernel offset, GPIO pins, clock rates, DDR
initialization profile and serial baud rate) and hands them to the build script.
"""

import os
from typing import Optional, Union

from packaging.version import Version, parse
from platformdirs import PlatformDirs

from .__version__ import __version__


def value_to_bool(value: Optional[Union[bool, int, str]]) -> bool:
    """Convert value to boolean from various input formats.

    :param value: Value to convert to boolean (string, int, bool, or None).
    :return: Boolean representation of the input value.
    """
    if isinstance(value, str):
        return value in ("True", "true", "T", "1")
    return bool(value)


version: Version = parse(__version__)

__author__ = "bootcfg developers"
__license__ = "BSD-3-Clause"

BOOTCFG_VERSION_BASE = version.base_version

BOOTCFG_DATA_FOLDER = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data")
BOOTCFG_PLATFORM_DIRS = PlatformDirs(
    appname="bootcfg",
    version=BOOTCFG_VERSION_BASE,
    ensure_exists=False,
)

BOOTCFG_DEBUG_LOGGING_DISABLED = value_to_bool(os.environ.get("BOOTCFG_DEBUG_LOGGING_DISABLED"))
BOOTCFG_DEBUG_LOG_FILE = os.environ.get(
    "BOOTCFG_DEBUG_LOG_FILE", os.path.join(BOOTCFG_PLATFORM_DIRS.user_log_dir, "debug.log")
)

BOOTCFG_YML_INDENT = 2
