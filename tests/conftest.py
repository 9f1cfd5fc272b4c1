#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 bootcfg developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""pytest configuration and shared test fixtures."""

import logging
import os
import subprocess
from typing import Any

import pytest

from tests.cli_runner import CliRunner

os.environ["BOOTCFG_DEBUG_LOGGING_DISABLED"] = "True"


class ScriptCalls(list):
    """Record of the build script invocations.

    :ivar returncode: Exit status reported for every call.
    """

    returncode = 0


@pytest.fixture
def cli_runner() -> CliRunner:
    """Get CLI runner instance for testing.

    :return: CliRunner instance for testing CLI commands.
    """
    return CliRunner()


@pytest.fixture(scope="module")
def data_dir(request: Any) -> str:
    """Get test data directory path for the current test module.

    :param request: Pytest request fixture containing test execution context.
    :return: Absolute path to the test data directory.
    """
    logging.debug(f"data_dir for module: {request.fspath}")
    data_path = os.path.join(os.path.dirname(request.fspath), "data")
    logging.debug(f"data_dir: {data_path}")
    return data_path


@pytest.fixture
def tests_root_dir() -> str:
    """Get the root directory of tests.

    :return: Absolute path to the tests root directory.
    """
    return os.path.dirname(os.path.abspath(__file__))


@pytest.fixture
def script_calls(tmpdir: Any, monkeypatch: pytest.MonkeyPatch) -> ScriptCalls:
    """Working directory with a build script whose execution is only recorded.

    The current directory is switched to a temporary one containing
    ``customize.sh``; every call of ``subprocess.run`` is stored with its
    ``cwd`` and answered with ``returncode`` of the record.

    :param tmpdir: Temporary directory.
    :param monkeypatch: Pytest monkeypatch fixture.
    :return: List of (command, cwd) tuples.
    """
    script = os.path.join(str(tmpdir), "customize.sh")
    with open(script, "w", encoding="utf-8") as f:
        f.write("#!/bin/sh\nexit 0\n")
    monkeypatch.chdir(str(tmpdir))
    calls = ScriptCalls()

    def fake_run(command: list[str], **kwargs: Any) -> subprocess.CompletedProcess:
        calls.append((command, kwargs.get("cwd")))
        return subprocess.CompletedProcess(command, calls.returncode)

    monkeypatch.setattr("bootcfg.build.dispatcher.subprocess.run", fake_run)
    return calls
