#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 bootcfg developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""Built-in DDR initialization profiles.

The list is kept as package data next to the other configuration files so it
can be updated together with the build script it mirrors.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from bootcfg import BOOTCFG_DATA_FOLDER
from bootcfg.exceptions import BootCfgError, BootCfgKeyError
from bootcfg.utils.misc import load_configuration

logger = logging.getLogger(__name__)

DDR_PROFILES_FILE = os.path.join(BOOTCFG_DATA_FOLDER, "ddr_profiles.yaml")


@dataclass(frozen=True)
class DdrProfile:
    """Named DDR initialization profile."""

    name: str
    mem_type: str
    size: str
    description: str = ""


class DdrProfiles:
    """Ordered collection of DDR profiles with a default entry."""

    def __init__(self, profiles: list[DdrProfile], default: str) -> None:
        """Create the collection.

        :param profiles: Profiles in menu order.
        :param default: Name of the profile offered when nothing is chosen.
        """
        self.profiles = profiles
        self.default = default

    def __len__(self) -> int:
        return len(self.profiles)

    def __contains__(self, name: object) -> bool:
        return any(profile.name == name for profile in self.profiles)

    @property
    def names(self) -> list[str]:
        """Profile names in menu order."""
        return [profile.name for profile in self.profiles]

    def get(self, name: str) -> DdrProfile:
        """Get profile by its exact name.

        :param name: Profile name.
        :raises BootCfgKeyError: Unknown profile.
        :return: Found profile.
        """
        for profile in self.profiles:
            if profile.name == name:
                return profile
        raise BootCfgKeyError(f"Unknown DDR profile '{name}'")

    @classmethod
    def load(cls, path: Optional[str] = None) -> "DdrProfiles":
        """Load profiles from YAML file.

        :param path: Profiles file, defaults to the built-in list.
        :raises BootCfgError: The file has unexpected structure.
        :return: Loaded collection.
        """
        path = path or DDR_PROFILES_FILE
        data = load_configuration(path)
        try:
            profiles = [
                DdrProfile(
                    name=str(item["name"]),
                    mem_type=str(item.get("type", "")),
                    size=str(item.get("size", "")),
                    description=str(item.get("description", "")),
                )
                for item in data["profiles"]
            ]
            default = str(data["default"])
        except (KeyError, TypeError) as exc:
            raise BootCfgError(f"Invalid DDR profiles file {path}: {exc}") from exc
        logger.debug(f"Loaded {len(profiles)} DDR profiles from {path}")
        return cls(profiles, default)


_builtin_profiles: Optional[DdrProfiles] = None


def get_ddr_profiles() -> DdrProfiles:
    """Get the built-in DDR profiles, loaded once per process."""
    global _builtin_profiles  # pylint: disable=global-statement
    if _builtin_profiles is None:
        _builtin_profiles = DdrProfiles.load()
    return _builtin_profiles
