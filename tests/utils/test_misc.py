#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 bootcfg developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""Tests of the file and configuration helpers."""

import os
from typing import Any

import pytest

from bootcfg import value_to_bool
from bootcfg.exceptions import BootCfgError
from bootcfg.utils.misc import (
    find_file,
    get_printable_path,
    load_configuration,
    load_text,
    size_fmt,
    write_file,
)


@pytest.mark.parametrize(
    "value,expected",
    [(None, False), (True, True), ("True", True), ("1", True), ("false", False), (0, False)],
)
def test_value_to_bool(value: Any, expected: bool) -> None:
    """Test conversion of environment values."""
    assert value_to_bool(value) is expected


@pytest.mark.parametrize(
    "num,expected",
    [
        (0, "0 B"),
        (1023, "1023 B"),
        (1024, "1.0 kiB"),
        (512 * 1024, "512.0 kiB"),
        (1 << 20, "1.0 MiB"),
    ],
)
def test_size_fmt(num: int, expected: str) -> None:
    """Test human readable sizes."""
    assert size_fmt(num) == expected


def test_write_and_load_text(tmpdir: Any) -> None:
    """Test that missing directories are created."""
    path = os.path.join(str(tmpdir), "a", "b", "file.txt")
    assert write_file("hello", path) == 5
    assert load_text(path) == "hello"
    assert find_file("file.txt", search_paths=[os.path.dirname(path)]) == path.replace("\\", "/")


def test_find_file_missing(tmpdir: Any) -> None:
    """Test that a missing file is reported."""
    with pytest.raises(BootCfgError, match="not found"):
        find_file("missing.txt", search_paths=[str(tmpdir)])
    assert find_file("missing.txt", search_paths=[str(tmpdir)], raise_exc=False) == ""


@pytest.mark.parametrize(
    "content,expected",
    [
        ('{"flash": "NOR", "cpufreq": 880}', {"flash": "NOR", "cpufreq": 880}),
        ("flash: NOR\ncpufreq: 880\n", {"flash": "NOR", "cpufreq": 880}),
    ],
)
def test_load_configuration(tmpdir: Any, content: str, expected: dict) -> None:
    """Test loading of JSON and YAML configuration."""
    path = os.path.join(str(tmpdir), "config.txt")
    write_file(content, path)
    assert load_configuration(path) == expected


@pytest.mark.parametrize("content", ["", "- NOR\n- NAND\n", "flash: [NOR\n"])
def test_load_configuration_invalid(tmpdir: Any, content: str) -> None:
    """Test that empty, non-mapping and malformed files are refused."""
    path = os.path.join(str(tmpdir), "config.yaml")
    write_file(content, path)
    with pytest.raises(BootCfgError):
        load_configuration(path)


def test_load_configuration_missing(tmpdir: Any) -> None:
    """Test that a missing file is refused."""
    with pytest.raises(BootCfgError, match="Can't load configuration file"):
        load_configuration(os.path.join(str(tmpdir), "missing.yaml"))


def test_get_printable_path(tmpdir: Any, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test paths relative to the working directory."""
    monkeypatch.chdir(str(tmpdir))
    cwd = os.getcwd()
    assert get_printable_path(cwd) == "."
    assert get_printable_path(os.path.join(cwd, "archive")) == "./archive"
    outside = os.path.dirname(cwd).replace("\\", "/")
    assert get_printable_path(outside) == outside
