#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 bootcfg developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""Enumeration base with numeric tags and textual labels.

Build parameters travel as text (command line, prompts, script arguments) but
are checked and handled as enumerations; every member therefore carries both a
tag and the exact label used on the wire.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from typing_extensions import Self

from bootcfg.exceptions import BootCfgKeyError, BootCfgTypeError


@dataclass(frozen=True)
class BootCfgEnumMember:
    """Single member of a bootcfg enumeration."""

    tag: int
    label: str
    description: Optional[str] = None


class BootCfgEnum(BootCfgEnumMember, Enum):
    """Enumeration whose members compare equal to their tag or their label."""

    def __eq__(self, __value: object) -> bool:
        return self.tag == __value or self.label == __value

    def __hash__(self) -> int:
        return hash((self.tag, self.label, self.description))

    def __str__(self) -> str:
        return self.label

    @classmethod
    def labels(cls) -> list[str]:
        """Get list of labels of all enum members.

        :return: List of all labels.
        """
        return [value.label for value in cls.__members__.values()]

    @classmethod
    def contains(cls, obj: Union[int, str], case_sensitive: bool = False) -> bool:
        """Check if member with given tag/label exists in enum.

        :param obj: Label or tag of enum member to check for existence.
        :param case_sensitive: Compare labels exactly, defaults to False.
        :raises BootCfgTypeError: Object must be either string or integer.
        :return: True if member exists, False otherwise.
        """
        if not isinstance(obj, (int, str)):
            raise BootCfgTypeError("Object must be either string or integer")
        try:
            if isinstance(obj, int):
                cls.from_tag(obj)
            else:
                cls.from_label(obj, case_sensitive=case_sensitive)
            return True
        except BootCfgKeyError:
            return False

    @classmethod
    def from_tag(cls, tag: int) -> Self:
        """Get enum member with given tag.

        :param tag: Tag to be used for searching
        :raises BootCfgKeyError: If enum with given tag is not found
        :return: Found enum member
        """
        for item in cls.__members__.values():
            if item.tag == tag:
                return item
        raise BootCfgKeyError(f"There is no {cls.__name__} item with tag {tag} defined")

    @classmethod
    def from_label(cls, label: str, case_sensitive: bool = False) -> Self:
        """Get enum member with given label.

        :param label: Label to be used for searching
        :param case_sensitive: Compare labels exactly, defaults to False
        :raises BootCfgKeyError: If enum with given label is not found or label is not string
        :return: Found enum member
        """
        if not isinstance(label, str):
            raise BootCfgKeyError("Label must be string")
        for item in cls.__members__.values():
            if case_sensitive:
                if item.label == label:
                    return item
            elif item.label.upper() == label.upper():
                return item
        raise BootCfgKeyError(f"There is no {cls.__name__} item with label {label} defined")
