#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 bootcfg developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""Miscellaneous file and formatting helpers."""

import json
import logging
import os
from typing import Callable, Optional, Union

import yaml

from bootcfg.exceptions import BootCfgError

logger = logging.getLogger(__name__)


def get_abs_path(file_path: str, base_dir: Optional[str] = None) -> str:
    """Convert relative or absolute file path to normalized absolute path.

    :param file_path: File path to be converted to absolute path.
    :param base_dir: Base directory to create absolute path, defaults to the system CWD.
    :return: Absolute file path with normalized separators.
    """
    if os.path.isabs(file_path):
        return file_path.replace("\\", "/")

    return os.path.abspath(os.path.join(base_dir or os.getcwd(), file_path)).replace("\\", "/")


def _find_path(
    path: str,
    check_func: Callable[[str], bool],
    use_cwd: bool = True,
    search_paths: Optional[list[str]] = None,
    raise_exc: bool = True,
) -> str:
    """Find and return the full path to a file or directory.

    Search paths take precedence over current working directory when both are specified.

    :param path: File name, part of file path or full path to search for.
    :param check_func: Function to validate if the found path exists and meets criteria.
    :param use_cwd: Try current working directory to find the file, defaults to True.
    :param search_paths: List of paths where to search for the file, defaults to None.
    :param raise_exc: Raise exception if file is not found, defaults to True.
    :return: Full absolute path, empty string if not found and raise_exc is False.
    :raises BootCfgError: File not found in any of the searched locations.
    """
    path = path.replace("\\", "/")

    if os.path.isabs(path):
        if not check_func(path):
            if raise_exc:
                raise BootCfgError(f"Path '{path}' not found")
            return ""
        return path
    if search_paths:
        for dir_candidate in search_paths:
            if not dir_candidate:
                continue
            path_candidate = get_abs_path(path, base_dir=dir_candidate.replace("\\", "/"))
            if check_func(path_candidate):
                return path_candidate
    if use_cwd and check_func(path):
        return get_abs_path(path)
    searched_in: list[str] = []
    if use_cwd:
        searched_in.append(os.path.abspath(os.curdir))
    if search_paths:
        searched_in.extend(filter(None, search_paths))
    searched_in = [s.replace("\\", "/") for s in searched_in]
    err_str = f"Path '{path}' not found, Searched in: {', '.join(searched_in)}"
    if not raise_exc:
        logger.debug(err_str)
        return ""
    raise BootCfgError(err_str)


def find_file(
    file_path: str,
    use_cwd: bool = True,
    search_paths: Optional[list[str]] = None,
    raise_exc: bool = True,
) -> str:
    """Find file in filesystem.

    :param file_path: File name, part of file path or full path to search for.
    :param use_cwd: Try current working directory to find the file, defaults to True.
    :param search_paths: List of paths where to search for the file, defaults to None.
    :param raise_exc: Raise exception if file is not found, defaults to True.
    :return: Full absolute path to the found file.
    :raises BootCfgError: File not found in any of the search locations.
    """
    return _find_path(
        path=file_path,
        check_func=os.path.isfile,
        use_cwd=use_cwd,
        search_paths=search_paths,
        raise_exc=raise_exc,
    )


def load_text(path: str, search_paths: Optional[list[str]] = None) -> str:
    """Load text file content into string.

    :param path: Path to the text file to load.
    :param search_paths: List of directories to search for the file, defaults to None.
    :return: Content of the text file as string.
    """
    path = find_file(path, search_paths=search_paths)
    logger.debug(f"Loading text file from {path}")
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def write_file(data: Union[str, bytes], path: str, mode: str = "w", encoding: str = "utf-8") -> int:
    """Write data to a file, creating parent directories when needed.

    :param data: Data to write to the file.
    :param path: Path to the target file.
    :param mode: File writing mode ('w' for text, 'wb' for binary), defaults to 'w'.
    :param encoding: Text encoding, defaults to 'utf-8'.
    :return: Number of characters or bytes written to the file.
    """
    path = path.replace("\\", "/")
    folder = os.path.dirname(path)
    if folder and not os.path.exists(folder):
        os.makedirs(folder, exist_ok=True)

    logger.debug(f"Storing {'binary' if 'b' in mode else 'text'} file at {path}")
    with open(path, mode, encoding=None if "b" in mode else encoding) as f:
        return f.write(data)


def load_configuration(path: str, search_paths: Optional[list[str]] = None) -> dict:
    """Load configuration from YAML or JSON file.

    JSON is tried first, YAML second.

    :param path: Path to configuration file (relative or absolute).
    :param search_paths: List of paths where to search for the file, defaults to None.
    :raises BootCfgError: When file cannot be loaded, parsed, or contains invalid format.
    :return: Content of configuration as dictionary.
    """
    try:
        config = load_text(path, search_paths=search_paths)
    except Exception as exc:
        raise BootCfgError(f"Can't load configuration file: {str(exc)}") from exc

    config_data = None
    try:
        config_data = json.loads(config)
    except json.JSONDecodeError:
        try:
            config_data = yaml.safe_load(config)
        except (yaml.YAMLError, UnicodeDecodeError):
            pass

    if not config_data:
        raise BootCfgError(f"Can't parse configuration file: {path}")
    if not isinstance(config_data, dict):
        raise BootCfgError(f"Invalid configuration file: {path}")

    return config_data


def size_fmt(num: Union[float, int], use_kibibyte: bool = True) -> str:
    """Format byte size into human-readable string representation.

    :param num: The byte size value to format.
    :param use_kibibyte: Use binary prefixes (1024-based) with 'iB' suffix, defaults to True.
    :return: Formatted size string with value and unit (e.g., "1.5 MiB", "1024 B").
    """
    base, suffix = [(1000.0, "B"), (1024.0, "iB")][use_kibibyte]
    i = "B"
    for i in ["B"] + [i + suffix for i in list("kMGTP")]:
        if num < base:
            break
        num /= base

    return f"{int(num)} {i}" if i == "B" else f"{num:3.1f} {i}"


def get_printable_path(path: str) -> str:
    """Get path relative to the current working directory when it lies below it.

    :param path: Absolute or relative file path to convert.
    :return: Display-friendly file path string.
    """
    abs_path = get_abs_path(path)
    cwd = get_abs_path(os.getcwd())
    if abs_path == cwd:
        return "."
    if abs_path.startswith(cwd + "/"):
        return "./" + os.path.relpath(abs_path, cwd).replace("\\", "/")
    return abs_path
