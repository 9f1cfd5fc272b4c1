#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 bootcfg developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""Tests of the summary, the confirmation and the build script call."""

import os
import subprocess
from typing import Any

import pytest

from bootcfg.build import BuildConfig, validate
from bootcfg.build.dispatcher import (
    BuildScript,
    confirm,
    format_command,
    get_layout_table,
    quote_argument,
    render_summary,
)
from bootcfg.exceptions import BootCfgError, BootCfgFileNotFoundError


@pytest.fixture
def params() -> Any:
    """Validated parameters of the reference build."""
    config = BuildConfig(
        flash="NOR",
        mtdparts="512k(u-boot),512k(u-boot-env),512k(factory),-(firmware)",
        kernel_offset="0x180000",
        reset_pin="13",
        sysled_pin="-1",
        cpufreq="880",
        ramfreq="1066",
        ddrparam="DDR3-256MiB",
        baudrate="115200",
    )
    return validate(config)


@pytest.mark.parametrize(
    "argument,expected",
    [("NOR", "'NOR'"), ("-1", "'-1'"), ("a b", "'a b'"), ("it's", "'it'\"'\"'s'"), ("", "''")],
)
def test_quote_argument(argument: str, expected: str) -> None:
    """Test single quoting of the arguments."""
    assert quote_argument(argument) == expected


def test_render_summary(params: Any) -> None:
    """Test that the summary ends with the exact command line."""
    summary = render_summary(params)
    assert summary.startswith("Build configuration:")
    assert "Flash layout:" in summary
    assert summary.splitlines()[-1] == (
        "  ./customize.sh 'NOR' '512k(u-boot),512k(u-boot-env),512k(factory),-(firmware)' "
        "'0x180000' '13' '-1' '880' '1066' 'DDR3-256MiB' '115200'"
    )
    assert summary.splitlines()[-2] == "Will execute:"


def test_render_summary_unparsable_layout(params: Any) -> None:
    """Test that a table the layout parser does not understand is still summarized."""
    params = validate(BuildConfig.from_dict({**params.to_config(), "mtdparts": "x),-(firmware)"}))
    summary = render_summary(params, "build.sh")
    assert "Flash layout:" not in summary
    assert format_command("build.sh", params.arguments) in summary


def test_layout_table() -> None:
    """Test the partition layout with the kernel marked."""
    table = get_layout_table("512k(u-boot),512k(u-boot-env),512k(factory),-(firmware)", 0x180000)
    text = str(table)
    assert "0x180000" in text
    assert "rest of flash" in text
    assert "512.0 kiB" in text


@pytest.mark.parametrize(
    "answer,expected",
    [("y", True), ("Y", True), (" y\n", True), ("yes", False), ("n", False), ("", False)],
)
def test_confirm(answer: str, expected: bool) -> None:
    """Test that only y confirms."""
    prompts = []

    def input_func(prompt: str) -> str:
        prompts.append(prompt)
        return answer

    assert confirm(input_func) is expected
    assert prompts == ["Proceed? [y/N] "]


def test_confirm_eof() -> None:
    """Test that closed input declines."""

    def input_func(prompt: str) -> str:
        raise EOFError

    assert confirm(input_func) is False


def test_build_script_run(script_calls: Any, params: Any) -> None:
    """Test that the script gets the nine arguments in order."""
    script = BuildScript()
    assert script.run(params.arguments) == 0
    command, cwd = script_calls[0]
    assert cwd == os.getcwd()
    assert os.path.basename(command[0]) == "customize.sh"
    assert command[1:] == params.arguments
    assert script.archive_dir == os.path.join(os.getcwd(), "archive")


def test_build_script_exit_status(script_calls: Any, params: Any) -> None:
    """Test that the exit status of the script is returned."""
    script_calls.returncode = 4
    assert BuildScript("customize.sh").run(params.arguments) == 4


def test_build_script_missing(tmpdir: Any, params: Any) -> None:
    """Test that a missing script is reported."""
    with pytest.raises(BootCfgFileNotFoundError):
        BuildScript(cwd=str(tmpdir)).run(params.arguments)


def test_build_script_not_executable(
    script_calls: Any, params: Any, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test that the operating system error is wrapped."""

    def fake_run(command: list[str], **kwargs: Any) -> subprocess.CompletedProcess:
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr("bootcfg.build.dispatcher.subprocess.run", fake_run)
    with pytest.raises(BootCfgError, match="Cannot execute"):
        BuildScript().run(params.arguments)
