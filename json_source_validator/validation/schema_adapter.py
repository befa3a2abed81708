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

"""Run the schema engine and normalize what it reports.

The engine is ``jsonschema`` (Draft 7) with three keywords replaced so that
its errors already carry the location callers need:

* ``required`` reports one error per missing field, with the field name
  appended to the error path.
* ``additionalProperties: false`` reports one error per unknown key, with
  the key appended to the error path.
* ``type`` reports both the expected and the received JSON type.

Everything downstream works on :class:`SchemaIssue` only.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Tuple

import jsonschema
from jsonschema.exceptions import SchemaError
from jsonschema.exceptions import ValidationError as EngineError
from jsonschema.protocols import Validator

from ..exceptions import SchemaDefinitionError
from ..models.schema_spec import SchemaSpec, apply_defaults, to_json_schema
from .issues import IssueKind, SchemaIssue

logger = logging.getLogger(__name__)

_UNION_KEYWORDS = ("anyOf",)
_VALUE_KEYWORDS = frozenset({
    "enum",
    "minimum",
    "maximum",
    "exclusiveMinimum",
    "exclusiveMaximum",
    "multipleOf",
    "minLength",
    "maxLength",
    "pattern",
    "format",
    "minItems",
    "maxItems",
    "uniqueItems",
    "minProperties",
    "maxProperties",
})


def json_type_name(value: Any) -> str:
    """JSON type name of a dematerialized value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _expected_types(types: Any) -> List[str]:
    return [types] if isinstance(types, str) else list(types)


def _required(validator, required_fields, instance, schema):
    if not validator.is_type(instance, "object"):
        return
    for name in required_fields:
        if name not in instance:
            yield EngineError(f"Required field '{name}' is missing", path=[name])


def _additional_properties(validator, additional, instance, schema):
    if not validator.is_type(instance, "object"):
        return

    properties = schema.get("properties", {})
    patterns = list(schema.get("patternProperties", {}))
    extras = [
        key for key in instance
        if key not in properties and not any(re.search(p, key) for p in patterns)
    ]

    if validator.is_type(additional, "object"):
        for extra in extras:
            yield from validator.descend(instance[extra], additional, path=extra)
    elif additional is False:
        for extra in extras:
            yield EngineError(f"Unexpected field '{extra}' is not allowed", path=[extra])


def _type(validator, types, instance, schema):
    expected = _expected_types(types)
    if not any(validator.is_type(instance, t) for t in expected):
        yield EngineError(
            f"Invalid type: expected {' | '.join(expected)}, received {json_type_name(instance)}"
        )


StrictDraft7Validator = jsonschema.validators.extend(
    jsonschema.Draft7Validator,
    validators={
        "required": _required,
        "additionalProperties": _additional_properties,
        "type": _type,
    },
)


@dataclass(frozen=True)
class SchemaEvaluation:
    """Either ``valid`` with ``data`` or not valid with at least one issue."""

    valid: bool
    data: Any = None
    issues: Tuple[SchemaIssue, ...] = ()


def flatten_errors(error: EngineError) -> Iterator[EngineError]:
    """Expand union failures into the leaf errors of every alternative."""
    if error.validator in _UNION_KEYWORDS and error.context:
        for sub_error in error.context:
            yield from flatten_errors(sub_error)
    else:
        yield error


def normalize_error(error: EngineError) -> SchemaIssue:
    path = tuple(error.absolute_path)
    keyword = error.validator

    if keyword == "required":
        return SchemaIssue(path=path, kind=IssueKind.MISSING, message=error.message)

    if keyword == "additionalProperties":
        return SchemaIssue(path=path, kind=IssueKind.UNEXPECTED, message=error.message)

    if keyword == "type":
        return SchemaIssue(
            path=path,
            kind=IssueKind.INVALID_TYPE,
            message=error.message,
            expected=" | ".join(_expected_types(error.validator_value)),
            received=json_type_name(error.instance),
        )

    if keyword in _VALUE_KEYWORDS:
        return SchemaIssue(path=path, kind=IssueKind.INVALID_VALUE, message=f"Invalid value: {error.message}")

    return SchemaIssue(path=path, kind=IssueKind.OTHER, message=error.message)


def build_engine(spec: SchemaSpec) -> Validator:
    """Compile ``spec`` and return a ready engine instance.

    Raises:
        SchemaDefinitionError: If the spec cannot be compiled into a valid JSON Schema
    """
    document = to_json_schema(spec)
    try:
        StrictDraft7Validator.check_schema(document)
    except SchemaError as e:
        raise SchemaDefinitionError(f"Compiled schema is invalid: {e.message}") from e
    return StrictDraft7Validator(document, format_checker=jsonschema.Draft7Validator.FORMAT_CHECKER)


def evaluate(spec: SchemaSpec, value: Any, engine: Optional[Validator] = None) -> SchemaEvaluation:
    """Validate a dematerialized value against ``spec``.

    Args:
        spec: Schema spec tree (normally already strictified)
        value: Plain data built from the parse tree
        engine: Engine from :func:`build_engine`, built on demand when omitted

    Returns:
        A valid evaluation carrying ``value`` with defaults applied, or an
        invalid one carrying the flattened issues in engine order.
    """
    if engine is None:
        engine = build_engine(spec)

    issues = [
        normalize_error(leaf)
        for error in engine.iter_errors(value)
        for leaf in flatten_errors(error)
    ]
    if issues:
        logger.debug(f"Schema evaluation produced {len(issues)} issue(s)")
        return SchemaEvaluation(valid=False, issues=tuple(issues))

    return SchemaEvaluation(valid=True, data=apply_defaults(spec, value))
