# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Validate JSON source text against a schema and locate every issue.

The steps run in a fixed order: parse, index, strictify, evaluate. Each step
that fails ends the run with the issues it produced; structural validation is
never attempted on text with syntax errors. No exception leaves
:func:`validate_json` or :func:`validate_json_file`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from ..config import validator_config
from ..exceptions import SchemaDefinitionError
from ..models.json_schema_loader import schema_from_dict
from ..models.schema_spec import SchemaSpec, is_schema_spec, strictify
from ..parsing.json_parser import ParseOptions, node_value, parse_tree
from ..parsing.pointer_index import PointerIndex, build_pointer_index
from .enricher import enrich_issue, syntax_issue
from .issues import IssueKind, ValidationResult
from .schema_adapter import evaluate

logger = logging.getLogger(__name__)

SchemaInput = Union[SchemaSpec, Mapping[str, Any]]


def _describe(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


def _as_spec(schema: Any) -> SchemaSpec:
    if is_schema_spec(schema):
        return schema
    if isinstance(schema, Mapping):
        return schema_from_dict(schema)
    raise SchemaDefinitionError(
        f"Schema must be a schema spec or a JSON Schema mapping, got {type(schema).__name__}"
    )


def validate_json(
    json_text: Any,
    schema: SchemaInput,
    parse_options: Optional[ParseOptions] = None,
) -> ValidationResult[Any]:
    """Validate raw JSON text.

    Args:
        json_text: JSON source text
        schema: Schema spec tree, or a JSON Schema mapping to convert
        parse_options: Parser relaxations; defaults to the global configuration

    Returns:
        A valid result carrying the parsed data (defaults applied), or an
        invalid one listing every issue with its pointer and position
    """
    if not isinstance(json_text, str):
        return ValidationResult.single_error("Invalid input: expected string", IssueKind.INPUT)

    options = parse_options if parse_options is not None else validator_config.parse_options()

    try:
        tree, syntax_errors = parse_tree(json_text, options)
    except Exception as e:
        logger.warning(f"Parser failed: {_describe(e)}")
        return ValidationResult.single_error(f"Parse error: {_describe(e)}", IssueKind.SYNTAX)

    if syntax_errors:
        return ValidationResult.failure([syntax_issue(error, json_text) for error in syntax_errors])

    pointer_index: PointerIndex = {}
    data: Any = None
    try:
        if tree is not None:
            data = node_value(tree)
            pointer_index = build_pointer_index(tree, json_text)
    except Exception as e:
        logger.warning(f"Failed to process parse tree: {_describe(e)}")
        return ValidationResult.single_error(
            f"Error processing JSON structure: {_describe(e)}", IssueKind.PROCESSING
        )

    try:
        strict_spec = strictify(_as_spec(schema))
    except Exception as e:
        logger.warning(f"Failed to prepare schema: {_describe(e)}")
        return ValidationResult.single_error(f"Schema error: {_describe(e)}", IssueKind.SCHEMA)

    try:
        evaluation = evaluate(strict_spec, data)
        if evaluation.valid:
            return ValidationResult.success(evaluation.data)
        issues = [enrich_issue(issue, pointer_index, json_text) for issue in evaluation.issues]
    except SchemaDefinitionError as e:
        logger.warning(f"Schema could not be compiled: {_describe(e)}")
        return ValidationResult.single_error(f"Schema error: {_describe(e)}", IssueKind.SCHEMA)
    except Exception as e:
        logger.warning(f"Schema evaluation failed: {_describe(e)}")
        return ValidationResult.single_error(
            f"Validation error: {_describe(e)}", IssueKind.OTHER, json_pointer="root"
        )

    return ValidationResult.failure(issues)


def validate_json_file(
    file_path: Union[str, Path],
    schema: SchemaInput,
    encoding: Optional[str] = None,
    parse_options: Optional[ParseOptions] = None,
) -> ValidationResult[Any]:
    """Read ``file_path`` and validate its contents.

    Any failure to read or decode the file becomes a single ``File error``
    issue instead of an exception.
    """
    encoding = encoding or validator_config.encoding
    try:
        logger.debug(f"Reading JSON file: {file_path}")
        # newline="" keeps "\r\n" so offsets match the file.
        with open(file_path, "r", encoding=encoding, newline="") as stream:
            raw = stream.read()
    except Exception as e:
        return ValidationResult.single_error(f"File error: {_describe(e)}", IssueKind.FILE)

    return validate_json(raw, schema, parse_options)
