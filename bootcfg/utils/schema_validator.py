#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 bootcfg developers
#
# SPDX-License-Identifier: BSD-3-Clause

"""JSON schema checking of configuration files and commented YAML export."""

import copy
import io
import logging
import textwrap
from typing import Any, Callable, Optional

import fastjsonschema
from deepmerge import always_merger
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap as CMap

from bootcfg import BOOTCFG_YML_INDENT
from bootcfg.exceptions import BootCfgError

logger = logging.getLogger(__name__)


def _print_validation_fail_reason(exc: fastjsonschema.JsonSchemaValueException) -> str:
    """Format JSON schema validation failure into human-readable error message.

    :param exc: The JSON schema validation exception to process.
    :return: Formatted error message explaining the validation failure reason.
    """
    message = str(exc)
    if exc.rule == "required":
        missing = filter(lambda x: x not in exc.value.keys(), exc.rule_definition)
        message += f"; Missing field(s): {', '.join(missing)}"
    elif exc.rule == "enum":
        message += f"; Allowed values: {', '.join(str(x) for x in exc.rule_definition)}"
    elif exc.rule == "pattern":
        message += f"; Value '{exc.value}' does not match '{exc.rule_definition}'"
    return message


def check_unknown_properties(config_dict: dict, schema_dict: dict) -> None:
    """Log a warning for every configuration key the schema does not describe.

    :param config_dict: Configuration dictionary to check.
    :param schema_dict: JSON schema dictionary defining allowed properties.
    """
    schema_props = set(schema_dict.get("properties", {}).keys())
    for key in config_dict:
        if key not in schema_props:
            logger.warning(f"Unknown property found in configuration: '{key}'")


def check_config(
    config: dict[str, Any],
    schemas: list[dict[str, Any]],
    extra_formatters: Optional[dict[str, Callable[[str], bool]]] = None,
    check_unknown_props: bool = False,
) -> None:
    """Check the configuration by provided list of validation schemas.

    The schemas are merged together before the check.

    :param config: Configuration dictionary to validate.
    :param schemas: List of JSON schema dictionaries for validation.
    :param extra_formatters: Additional custom format validators for schema validation.
    :param check_unknown_props: Whether to warn about unknown properties in config.
    :raises BootCfgError: Invalid validation schema or configuration validation failed.
    """
    config_to_check = copy.deepcopy(config)

    schema: dict[str, Any] = {}
    for sch in schemas:
        always_merger.merge(schema, copy.deepcopy(sch))

    if check_unknown_props:
        check_unknown_properties(config_to_check, schema)

    try:
        validator = fastjsonschema.compile(schema, formats=extra_formatters or {})
    except (TypeError, fastjsonschema.JsonSchemaDefinitionException) as exc:
        raise BootCfgError(f"Invalid validation schema to check config: {str(exc)}") from exc
    try:
        validator(config_to_check)
    except fastjsonschema.JsonSchemaValueException as exc:
        message = _print_validation_fail_reason(exc)
        raise BootCfgError(f"Configuration validation failed: {message}") from exc


class CommentedConfig:
    """Commented YAML configuration writer.

    Every key is preceded by a comment built from the ``title`` and
    ``description`` of its schema property.

    :cvar MAX_LINE_LENGTH: Maximum line length for generated comments.
    """

    MAX_LINE_LENGTH = 100 - 2  # Minus '# '

    def __init__(self, main_title: str, schemas: list[dict[str, Any]]) -> None:
        """Initialize configuration writer.

        :param main_title: Title printed at the top of the file.
        :param schemas: JSON schemas describing the configuration keys.
        """
        self.main_title = main_title
        self.schema: dict[str, Any] = {}
        for sch in schemas:
            always_merger.merge(self.schema, copy.deepcopy(sch))

    def _get_title_block(self) -> str:
        delimiter = "=" * self.MAX_LINE_LENGTH
        title_str = f" == {self.main_title} == ".center(self.MAX_LINE_LENGTH)
        return delimiter + "\n" + title_str + "\n" + delimiter

    def _get_comment(self, key: str) -> Optional[str]:
        prop = self.schema.get("properties", {}).get(key)
        if not prop:
            return None
        comment = prop.get("title", key)
        if "description" in prop:
            comment += ": " + prop["description"]
        return "\n".join(textwrap.wrap(comment, self.MAX_LINE_LENGTH))

    def get_config(self, config: dict[str, Any]) -> str:
        """Render configuration as commented YAML text.

        :param config: Configuration data; keys keep their order.
        :return: YAML document.
        """
        cmap = CMap()
        for key, value in config.items():
            cmap[key] = value
            comment = self._get_comment(key)
            if comment:
                cmap.yaml_set_comment_before_after_key(key, before=comment)
        cmap.yaml_set_start_comment(self._get_title_block())

        yaml = YAML(pure=True)
        yaml.indent(sequence=BOOTCFG_YML_INDENT * 2, offset=BOOTCFG_YML_INDENT)
        yaml.width = 200
        stream = io.StringIO()
        yaml.dump(cmap, stream)
        return stream.getvalue()
