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

"""Load JSON Schema documents and convert them to schema spec trees."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Set, Union

import yaml

from ..exceptions import SchemaLoadError
from ..utils.json_pointer import escape_token, pointer_to_path
from .schema_spec import (
    ANY,
    MISSING,
    SCALAR_TYPES,
    ArraySpec,
    FieldSpec,
    ObjectSpec,
    ScalarSpec,
    SchemaSpec,
    UnionSpec,
)

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")

# Keywords that constrain values but have no schema spec equivalent.
UNSUPPORTED_KEYWORDS = (
    "not",
    "if",
    "then",
    "else",
    "dependencies",
    "dependentRequired",
    "dependentSchemas",
    "patternProperties",
    "propertyNames",
    "contains",
    "additionalItems",
    "unevaluatedProperties",
    "unevaluatedItems",
)
_OBJECT_KEYWORDS = ("properties", "required", "additionalProperties", "minProperties", "maxProperties")
_ARRAY_KEYWORDS = ("items", "minItems", "maxItems", "uniqueItems")


class _SchemaConverter:
    """Converts one JSON Schema document; ``$ref`` results are shared within it."""

    def __init__(self, root: Mapping[str, Any]):
        self._root = root
        self._refs: Dict[str, SchemaSpec] = {}
        self._resolving: Set[str] = set()

    def convert(self, node: Any, where: str, ref: Optional[str] = None) -> SchemaSpec:
        if node is True or (isinstance(node, Mapping) and not node):
            return ANY
        if node is False:
            raise SchemaLoadError(f"'false' schemas are not supported (at {where})")
        if not isinstance(node, Mapping):
            raise SchemaLoadError(f"Schema at {where} must be an object, got {type(node).__name__}")

        if "$ref" in node:
            return self._resolve_ref(node["$ref"], where)

        for keyword in UNSUPPORTED_KEYWORDS:
            if keyword in node:
                raise SchemaLoadError(f"Unsupported keyword '{keyword}' (at {where})")

        for keyword in ("anyOf", "oneOf"):
            if keyword in node:
                options = node[keyword]
                if not isinstance(options, list) or not options:
                    raise SchemaLoadError(f"'{keyword}' at {where} must be a non-empty list")
                return UnionSpec(
                    tuple(self.convert(opt, f"{where}/{keyword}/{i}") for i, opt in enumerate(options))
                )

        if "allOf" in node:
            parts = node["allOf"]
            if isinstance(parts, list) and len(parts) == 1:
                return self.convert(parts[0], f"{where}/allOf/0", ref)
            raise SchemaLoadError(f"'allOf' with more than one member is not supported (at {where})")

        node_type = node.get("type")
        if node_type is None:
            if any(k in node for k in _OBJECT_KEYWORDS):
                node_type = "object"
            elif any(k in node for k in _ARRAY_KEYWORDS):
                node_type = "array"
            else:
                node_type = "any"

        if isinstance(node_type, list):
            if len(node_type) == 1:
                return self._typed(node, node_type[0], where, ref)
            return UnionSpec(tuple(self._typed(node, t, where) for t in node_type))
        return self._typed(node, node_type, where, ref)

    def _typed(self, node: Mapping[str, Any], node_type: str, where: str, ref: Optional[str] = None) -> SchemaSpec:
        if node_type == "object":
            additional = node.get("additionalProperties", True)
            if not isinstance(additional, (bool, Mapping)):
                raise SchemaLoadError(f"'additionalProperties' at {where} must be a boolean or a schema")
            obj = ObjectSpec(
                fields={},
                allow_extra=additional is not False,
                min_properties=node.get("minProperties"),
                max_properties=node.get("maxProperties"),
            )
            if ref is not None:
                # Registered before the fields so self-references resolve to this node.
                self._refs[ref] = obj
            if "additionalProperties" in node and additional is not False:
                object.__setattr__(obj, "extra", self.convert(additional, f"{where}/additionalProperties"))

            required_fields = node.get("required", [])
            if not isinstance(required_fields, list):
                raise SchemaLoadError(f"'required' at {where} must be a list")
            properties = node.get("properties", {})
            if not isinstance(properties, Mapping):
                raise SchemaLoadError(f"'properties' at {where} must be an object")

            for name, sub in properties.items():
                default = sub.get("default", MISSING) if isinstance(sub, Mapping) else MISSING
                obj.fields[name] = FieldSpec(
                    self.convert(sub, f"{where}/properties/{escape_token(name)}"),
                    required=name in required_fields,
                    default=default,
                )
            for name in required_fields:
                if name not in obj.fields:
                    obj.fields[name] = FieldSpec(ANY, required=True)
            return obj

        if node_type == "array":
            items = node.get("items", {})
            if isinstance(items, list):
                raise SchemaLoadError(f"Tuple-style 'items' is not supported (at {where})")
            return ArraySpec(
                self.convert(items, f"{where}/items"),
                min_items=node.get("minItems"),
                max_items=node.get("maxItems"),
                unique_items=bool(node.get("uniqueItems", False)),
            )

        if node_type in SCALAR_TYPES:
            enum = node.get("enum")
            if "const" in node:
                enum = [node["const"]]
            return ScalarSpec(
                type=node_type,
                enum=tuple(enum) if enum is not None else None,
                minimum=node.get("minimum"),
                maximum=node.get("maximum"),
                min_length=node.get("minLength"),
                max_length=node.get("maxLength"),
                pattern=node.get("pattern"),
                exclusive_minimum=node.get("exclusiveMinimum"),
                exclusive_maximum=node.get("exclusiveMaximum"),
                multiple_of=node.get("multipleOf"),
                format=node.get("format"),
            )

        raise SchemaLoadError(f"Unknown type '{node_type}' at {where}")

    def _resolve_ref(self, ref: Any, where: str) -> SchemaSpec:
        if not isinstance(ref, str) or not (ref == "#" or ref.startswith("#/")):
            raise SchemaLoadError(f"Only local '$ref' values are supported, got {ref!r} (at {where})")
        if ref in self._refs:
            return self._refs[ref]
        if ref in self._resolving:
            raise SchemaLoadError(
                f"Recursive reference {ref} must point directly at an object schema (at {where})"
            )

        target: Any = self._root
        for token in pointer_to_path(ref[1:]):
            if not isinstance(target, Mapping) or token not in target:
                raise SchemaLoadError(f"Unresolvable reference {ref} (at {where})")
            target = target[token]

        self._resolving.add(ref)
        try:
            spec = self.convert(target, ref, ref=ref)
        finally:
            self._resolving.discard(ref)
        self._refs[ref] = spec
        return spec


def schema_from_dict(document: Mapping[str, Any]) -> SchemaSpec:
    """Convert a JSON Schema document into a schema spec tree.

    Supported: ``type`` (including lists), ``properties``, ``required``,
    ``additionalProperties`` (``false`` closes the object, a schema or ``true``
    makes it a map whose values follow that schema), ``minProperties``,
    ``maxProperties``, ``items``, ``minItems``, ``maxItems``, ``uniqueItems``,
    ``anyOf``/``oneOf``, single-member ``allOf``, ``enum``/``const``, numeric
    bounds including the exclusive ones, ``multipleOf``, string bounds,
    ``pattern``, ``format``, ``default`` and local ``$ref``
    (``#/definitions/...`` or ``#/$defs/...``), including references that
    recurse into an object.

    Keywords listed in ``UNSUPPORTED_KEYWORDS`` raise instead of being
    ignored. ``oneOf`` is read as ``anyOf``, so a value matching several
    options is accepted.

    Raises:
        SchemaLoadError: If the document uses something that cannot be converted
    """
    if not isinstance(document, Mapping):
        raise SchemaLoadError(f"Schema document must be an object, got {type(document).__name__}")
    return _SchemaConverter(document).convert(document, "#")


def load_schema(schema_path: Union[str, Path]) -> SchemaSpec:
    """Load a JSON or YAML schema file and convert it to a schema spec tree.

    Args:
        schema_path: Path to a ``.json``, ``.yaml`` or ``.yml`` JSON Schema file

    Returns:
        Schema spec tree

    Raises:
        SchemaLoadError: If the file is missing, unreadable, or not a usable schema
    """
    path = Path(schema_path)
    if not path.is_file():
        raise SchemaLoadError(f"Schema file not found: {path}")

    logger.debug(f"Loading schema file: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() in YAML_SUFFIXES:
                document = yaml.safe_load(f)
            else:
                document = json.load(f)
    except json.JSONDecodeError as e:
        raise SchemaLoadError(f"Invalid JSON in schema file {path}: {e.msg} (line {e.lineno})") from e
    except yaml.YAMLError as e:
        raise SchemaLoadError(f"Invalid YAML in schema file {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise SchemaLoadError(f"Failed to read schema file {path}: {e}") from e

    return schema_from_dict(document)
