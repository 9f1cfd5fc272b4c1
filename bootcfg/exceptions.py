#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 bootcfg developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""bootcfg exception classes."""

from typing import Optional


class BootCfgError(Exception):
    """bootcfg base exception.

    All errors raised by the library derive from this class so the command line
    front end can report them uniformly.

    :cvar fmt: Default error message format template.
    """

    fmt = "bootcfg: {description}"

    def __init__(self, desc: Optional[str] = None) -> None:
        """Initialize the base exception.

        :param desc: Optional description of the exception.
        """
        super().__init__()
        self.description = desc

    def __str__(self) -> str:
        return self.fmt.format(description=self.description or "Unknown Error")


class BootCfgKeyError(BootCfgError, KeyError):
    """Missing or unknown key."""


class BootCfgValueError(BootCfgError, ValueError):
    """Invalid value passed to a bootcfg operation."""


class BootCfgTypeError(BootCfgError, TypeError):
    """Value of unexpected type."""


class BootCfgValidationError(BootCfgError, ValueError):
    """Build configuration violates a hardware constraint.

    Raised by the validator on the first rule that fails; the run is not
    continued.
    """

    fmt = "{description}"


class BootCfgFileNotFoundError(BootCfgError, FileNotFoundError):
    """Required file does not exist."""
