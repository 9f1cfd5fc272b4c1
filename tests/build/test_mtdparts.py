#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 bootcfg developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""Tests of the MTD partition table helpers."""

import pytest

from bootcfg.build.mtdparts import (
    DEFAULT_MTDPARTS,
    MtdPartition,
    build_mtdparts,
    has_firmware_partition,
    is_size_token,
    parse_mtdparts,
)
from bootcfg.exceptions import BootCfgValueError


@pytest.mark.parametrize(
    "token,expected",
    [
        ("512k", True),
        ("1m", True),
        ("64K", True),
        ("2M", True),
        ("0k", True),
        ("512", False),
        ("k", False),
        ("512kb", False),
        ("1g", False),
        ("-512k", False),
        (" 512k", False),
        ("0x100k", False),
        ("512k\n", False),
        ("1m\n\n", False),
        ("", False),
    ],
)
def test_is_size_token(token: str, expected: bool) -> None:
    """Test the size token shape: digits followed by a single k or m."""
    assert is_size_token(token) is expected


def test_build_mtdparts_defaults() -> None:
    """Test that missing sizes fall back to 512k."""
    assert build_mtdparts() == "512k(u-boot),512k(u-boot-env),512k(factory),-(firmware)"
    assert DEFAULT_MTDPARTS == build_mtdparts()


@pytest.mark.parametrize(
    "uboot,env,factory,expected",
    [
        ("1m", None, None, "1m(u-boot),512k(u-boot-env),512k(factory),-(firmware)"),
        (None, "64k", None, "512k(u-boot),64k(u-boot-env),512k(factory),-(firmware)"),
        (None, None, "1M", "512k(u-boot),512k(u-boot-env),1M(factory),-(firmware)"),
        ("192K", "64K", "64K", "192K(u-boot),64K(u-boot-env),64K(factory),-(firmware)"),
    ],
)
def test_build_mtdparts_verbatim(uboot: str, env: str, factory: str, expected: str) -> None:
    """Test that the sizes are embedded without normalization."""
    result = build_mtdparts(uboot, env, factory)
    assert result == expected
    assert result.endswith("-(firmware)")


@pytest.mark.parametrize(
    "mtdparts,expected",
    [
        ("512k(u-boot),512k(u-boot-env),512k(factory),-(firmware)", True),
        ("192k(u-boot),-(firmware)", True),
        ("512k(u-boot),-(rootfs)", False),
        ("-(firmware)", False),
        ("", False),
        (None, False),
    ],
)
def test_has_firmware_partition(mtdparts: str, expected: bool) -> None:
    """Test detection of the trailing firmware partition."""
    assert has_firmware_partition(mtdparts) is expected


def test_parse_mtdparts() -> None:
    """Test that offsets are accumulated and the last partition is unbounded."""
    partitions = parse_mtdparts("512k(u-boot),64k(u-boot-env)ro,1m(factory),-(firmware)")
    assert partitions == [
        MtdPartition("u-boot", 0, 0x80000),
        MtdPartition("u-boot-env", 0x80000, 0x10000, read_only=True),
        MtdPartition("factory", 0x90000, 0x100000),
        MtdPartition("firmware", 0x190000, None),
    ]
    assert partitions[0].end == 0x80000
    assert partitions[-1].end is None


def test_parse_mtdparts_explicit_offset() -> None:
    """Test entries placed with an explicit offset."""
    partitions = parse_mtdparts("256k(u-boot),0x10000@0x50000(config),-(firmware)")
    assert partitions[1].offset == 0x50000
    assert partitions[2].offset == 0x60000


@pytest.mark.parametrize(
    "mtdparts",
    [
        "",
        "-(firmware),512k(u-boot)",
        "512k(u-boot),,-(firmware)",
        "512x(u-boot),-(firmware)",
        "512k u-boot,-(firmware)",
    ],
)
def test_parse_mtdparts_invalid(mtdparts: str) -> None:
    """Test that malformed tables are refused."""
    with pytest.raises(BootCfgValueError):
        parse_mtdparts(mtdparts)
