#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 bootcfg developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""Boot loader build configuration.

The package is split along the stages of a run: the configuration record and
its typed form, the partition-table helpers, the interactive collector, the
validator and the dispatcher that calls the build script.
"""

from bootcfg.build.config import BaudRate, BuildConfig, BuildParameters, FlashType, RamFrequency
from bootcfg.build.validator import validate

__all__ = [
    "BaudRate",
    "BuildConfig",
    "BuildParameters",
    "FlashType",
    "RamFrequency",
    "validate",
]
