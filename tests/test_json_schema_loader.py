import json

import pytest

from json_source_validator.exceptions import SchemaLoadError
from json_source_validator.models.json_schema_loader import load_schema, schema_from_dict
from json_source_validator.models.schema_spec import (
    ANY,
    MISSING,
    ArraySpec,
    ObjectSpec,
    ScalarSpec,
    UnionSpec,
)

WORKFLOW_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["name", "nodes"],
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "active": {"type": "boolean", "default": False},
        "nodes": {"type": "array", "items": {"$ref": "#/definitions/node"}},
    },
    "definitions": {
        "node": {
            "type": "object",
            "required": ["id"],
            "properties": {
                "id": {"type": "string"},
                "kind": {"enum": ["trigger", "action"]},
            },
            "additionalProperties": False,
        },
    },
}


def test_schema_from_dict():
    spec = schema_from_dict(WORKFLOW_SCHEMA)

    assert isinstance(spec, ObjectSpec)
    assert spec.allow_extra is True
    assert spec.fields["name"].required
    assert spec.fields["name"].spec == ScalarSpec("string", min_length=1)
    assert spec.fields["active"].default is False
    assert spec.fields["nodes"].default is MISSING

    node = spec.fields["nodes"].spec.item
    assert isinstance(node, ObjectSpec)
    assert node.allow_extra is False
    assert node.fields["kind"].spec == ScalarSpec("any", enum=("trigger", "action"))
    assert not node.fields["kind"].required


def test_type_lists_become_unions():
    spec = schema_from_dict({"type": ["string", "null"]})
    assert spec == UnionSpec((ScalarSpec("string"), ScalarSpec("null")))
    assert schema_from_dict({"type": ["integer"]}) == ScalarSpec("integer")


def test_any_of_and_single_all_of():
    spec = schema_from_dict({"anyOf": [{"type": "integer"}, {"const": "auto"}]})
    assert spec == UnionSpec((ScalarSpec("integer"), ScalarSpec("any", enum=("auto",))))
    assert schema_from_dict({"allOf": [{"type": "number"}]}) == ScalarSpec("number")
    assert schema_from_dict({}) is ANY
    assert schema_from_dict({"items": {"type": "string"}}) == ArraySpec(ScalarSpec("string"))


def test_required_without_property_is_any():
    spec = schema_from_dict({"required": ["x"]})
    assert spec.fields["x"].required
    assert spec.fields["x"].spec is ANY


def test_recursive_reference():
    spec = schema_from_dict(
        {
            "$ref": "#/$defs/tree",
            "$defs": {
                "tree": {
                    "type": "object",
                    "properties": {"children": {"type": "array", "items": {"$ref": "#/$defs/tree"}}},
                },
            },
        }
    )
    assert spec.fields["children"].spec.item is spec


@pytest.mark.parametrize(
    "document",
    [
        {"$ref": "other.json#/definitions/x"},
        {"$ref": "#/definitions/missing"},
        {"type": "array", "items": [{"type": "string"}]},
        {"not": {"type": "string"}},
        {"type": "object", "patternProperties": {"^x-": {"type": "string"}}},
        {"if": {"type": "string"}, "then": {"minLength": 1}},
        {"type": "object", "dependencies": {"a": ["b"]}},
        {"properties": {"a": {"type": "array", "contains": {"type": "integer"}}}},
        {"type": "object", "additionalProperties": 3},
        {"allOf": [{"type": "string"}, {"minLength": 1}]},
        {"type": "date"},
        {"properties": {"a": False}},
        {"anyOf": []},
        {"properties": []},
        ["not", "an", "object"],
    ],
)
def test_unsupported_documents(document):
    with pytest.raises(SchemaLoadError):
        schema_from_dict(document)


def test_load_json_schema(tmp_path):
    path = tmp_path / "workflow.schema.json"
    path.write_text(json.dumps(WORKFLOW_SCHEMA), encoding="utf-8")
    assert load_schema(path) == schema_from_dict(WORKFLOW_SCHEMA)


def test_load_yaml_schema(tmp_path):
    path = tmp_path / "schema.yaml"
    path.write_text(
        "type: object\nrequired: [a]\nproperties:\n  a:\n    type: integer\n  b:\n    type: string\n",
        encoding="utf-8",
    )
    spec = load_schema(str(path))
    assert spec.fields["a"].required
    assert spec.fields["a"].spec == ScalarSpec("integer")
    assert spec.fields["b"].spec == ScalarSpec("string")


def test_load_schema_errors(tmp_path):
    with pytest.raises(SchemaLoadError, match="not found"):
        load_schema(tmp_path / "missing.json")

    bad_json = tmp_path / "bad.json"
    bad_json.write_text("{", encoding="utf-8")
    with pytest.raises(SchemaLoadError, match="Invalid JSON"):
        load_schema(bad_json)

    bad_yaml = tmp_path / "bad.yaml"
    bad_yaml.write_text("a: [1\n", encoding="utf-8")
    with pytest.raises(SchemaLoadError, match="Invalid YAML"):
        load_schema(bad_yaml)


def test_additional_properties_schema_becomes_map():
    spec = schema_from_dict(
        {
            "type": "object",
            "properties": {"connections": {"type": "object", "additionalProperties": {"type": "array"}}},
        }
    )
    connections = spec.fields["connections"].spec
    assert connections.fields == {}
    assert connections.extra == ArraySpec(ANY)
    # The root declares nothing about extra keys, so it stays a plain open object.
    assert spec.extra is None


def test_additional_properties_true_is_a_map_of_anything():
    assert schema_from_dict({"type": "object", "additionalProperties": True}).extra is ANY
    assert schema_from_dict({"additionalProperties": {}}).extra is ANY
    closed = schema_from_dict({"type": "object", "additionalProperties": False})
    assert closed.extra is None
    assert closed.allow_extra is False


def test_recursive_map_values():
    spec = schema_from_dict(
        {
            "$ref": "#/definitions/tree",
            "definitions": {"tree": {"type": "object", "additionalProperties": {"$ref": "#/definitions/tree"}}},
        }
    )
    assert spec.extra is spec


def test_bounds_and_flags_are_carried():
    spec = schema_from_dict(
        {
            "type": "object",
            "minProperties": 1,
            "maxProperties": 3,
            "properties": {
                "ratio": {"type": "number", "exclusiveMinimum": 0, "exclusiveMaximum": 1},
                "step": {"type": "integer", "multipleOf": 2},
                "email": {"type": "string", "format": "email"},
                "tags": {"type": "array", "uniqueItems": True},
            },
        }
    )
    assert (spec.min_properties, spec.max_properties) == (1, 3)
    assert spec.fields["ratio"].spec == ScalarSpec("number", exclusive_minimum=0, exclusive_maximum=1)
    assert spec.fields["step"].spec == ScalarSpec("integer", multiple_of=2)
    assert spec.fields["email"].spec == ScalarSpec("string", format="email")
    assert spec.fields["tags"].spec == ArraySpec(ANY, unique_items=True)


def test_type_is_inferred_from_object_and_array_keywords():
    assert isinstance(schema_from_dict({"minProperties": 1}), ObjectSpec)
    assert schema_from_dict({"uniqueItems": True}) == ArraySpec(ANY, unique_items=True)


def test_unsupported_keyword_is_named():
    with pytest.raises(SchemaLoadError, match="Unsupported keyword 'not'"):
        schema_from_dict({"properties": {"v": {"not": {"type": "string"}}}})
