#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 bootcfg developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""CLI testing utilities.

Click's runner extended with the check of the expected exit code.
"""

import traceback
from typing import Any

import importlib_metadata
from click.testing import CliRunner as _CliRunner
from click.testing import Result
from packaging.version import Version

CLICK_HAS_MIX_STDERR = Version(importlib_metadata.version("click")) < Version("8.2.0")


class CliRunner(_CliRunner):
    """CLI test runner asserting the exit code of each invocation."""

    def invoke(self, *args: Any, expected_code: int = 0, **kwargs: Any) -> Result:
        """Invoke CLI command and check its exit code.

        :param args: Arguments to be passed to the parent invoke method.
        :param expected_code: Expected exit code (default: 0). Use -1 to expect any non-zero code.
        :param kwargs: Keyword arguments to be passed to the parent invoke method.
        :return: Result object from the CLI command execution.
        """
        result = super().invoke(*args, **kwargs)

        if expected_code == -1:
            assert result.exit_code != 0, self._build_error_message(result, expected_code)
        else:
            assert result.exit_code == expected_code, self._build_error_message(
                result, expected_code
            )
        return result

    def _build_error_message(self, result: Result, expected_code: int) -> str:
        """Build error message from CLI test result.

        :param result: Click test result object containing execution details.
        :param expected_code: Expected exit code for the CLI command.
        :return: Expected and actual codes, output and stack trace.
        """
        error_msg = f"Expected code: {expected_code}, Actual code: {result.exit_code} \n"
        if result.exception:
            error_msg += f"{result.exception}\n"
        # mix_stderr was removed in click 8.2
        error_msg += (
            result.output
            if (CLICK_HAS_MIX_STDERR and getattr(self, "mix_stderr", False))
            else result.stderr
        )
        if result.exc_info and result.exc_info[2]:
            extracted_list = traceback.extract_tb(result.exc_info[2])
            for item in traceback.StackSummary.from_list(extracted_list).format():
                error_msg += f"{item}"
        return error_msg
