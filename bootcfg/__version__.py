#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 bootcfg developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""Version of the bootcfg package."""

__version__ = "1.2.0"
