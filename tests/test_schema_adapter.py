import pytest

from json_source_validator.exceptions import SchemaDefinitionError
from json_source_validator.models.schema_spec import (
    INTEGER,
    STRING,
    ArraySpec,
    ObjectSpec,
    ScalarSpec,
    UnionSpec,
    optional,
    required,
    strictify,
)
from json_source_validator.validation.issues import IssueKind, SchemaIssue
from json_source_validator.validation.schema_adapter import build_engine, evaluate, json_type_name


def kinds_and_paths(evaluation):
    return [(issue.kind, issue.path) for issue in evaluation.issues]


@pytest.mark.parametrize(
    "value, name",
    [(None, "null"), (True, "boolean"), (1, "integer"), (1.5, "number"), ("s", "string"), ([], "array"), ({}, "object")],
)
def test_json_type_name(value, name):
    assert json_type_name(value) == name


def test_valid_value_gets_defaults():
    spec = strictify(ObjectSpec(fields={"a": required(INTEGER), "b": optional(STRING, default="x")}))
    evaluation = evaluate(spec, {"a": 1})
    assert evaluation.valid
    assert evaluation.issues == ()
    assert evaluation.data == {"a": 1, "b": "x"}


def test_missing_field_has_name_in_path():
    spec = strictify(ObjectSpec(fields={"a": required(INTEGER), "b": required(INTEGER)}))
    evaluation = evaluate(spec, {"a": 1})
    assert not evaluation.valid
    assert evaluation.data is None
    assert evaluation.issues == (
        SchemaIssue(path=("b",), kind=IssueKind.MISSING, message="Required field 'b' is missing"),
    )


def test_each_unknown_key_is_its_own_issue():
    spec = strictify(ObjectSpec(fields={"a": required(INTEGER)}))
    evaluation = evaluate(spec, {"a": 1, "c": True, "d": None})
    assert kinds_and_paths(evaluation) == [
        (IssueKind.UNEXPECTED, ("c",)),
        (IssueKind.UNEXPECTED, ("d",)),
    ]
    assert evaluation.issues[0].message == "Unexpected field 'c' is not allowed"


def test_open_objects_accept_unknown_keys():
    spec = ObjectSpec(fields={"a": required(INTEGER)})
    assert evaluate(spec, {"a": 1, "c": True}).valid


def test_type_issue_carries_expected_and_received():
    spec = strictify(ObjectSpec(fields={"items": required(ArraySpec(INTEGER))}))
    evaluation = evaluate(spec, {"items": [1, "two"]})
    (issue,) = evaluation.issues
    assert issue.path == ("items", 1)
    assert issue.kind is IssueKind.INVALID_TYPE
    assert issue.message == "Invalid type: expected integer, received string"
    assert (issue.expected, issue.received) == ("integer", "string")


def test_value_constraints():
    spec = strictify(
        ObjectSpec(
            fields={
                "kind": required(ScalarSpec("string", enum=("trigger", "action"))),
                "count": required(ScalarSpec("integer", minimum=0)),
            }
        )
    )
    evaluation = evaluate(spec, {"kind": "other", "count": -1})
    assert [issue.kind for issue in evaluation.issues] == [IssueKind.INVALID_VALUE, IssueKind.INVALID_VALUE]
    assert {issue.path for issue in evaluation.issues} == {("kind",), ("count",)}
    assert all(issue.message.startswith("Invalid value: ") for issue in evaluation.issues)


def test_union_failures_are_flattened():
    inner = ObjectSpec(fields={"x": required(STRING)})
    spec = strictify(ObjectSpec(fields={"u": required(UnionSpec((INTEGER, inner)))}))

    evaluation = evaluate(spec, {"u": {"y": 1}})
    assert kinds_and_paths(evaluation) == [
        (IssueKind.INVALID_TYPE, ("u",)),
        (IssueKind.UNEXPECTED, ("u", "y")),
        (IssueKind.MISSING, ("u", "x")),
    ]


def test_cyclic_spec_is_evaluated():
    tree = ObjectSpec(fields={"value": required(INTEGER)})
    tree.fields["children"] = optional(ArraySpec(tree))
    spec = strictify(tree)

    value = {"value": 1, "children": [{"value": 2, "children": [{"value": "3", "extra": 0}]}]}
    evaluation = evaluate(spec, value)
    assert kinds_and_paths(evaluation) == [
        (IssueKind.INVALID_TYPE, ("children", 0, "children", 0, "value")),
        (IssueKind.UNEXPECTED, ("children", 0, "children", 0, "extra")),
    ]


def test_engine_can_be_reused():
    spec = strictify(ObjectSpec(fields={"a": required(INTEGER)}))
    engine = build_engine(spec)
    assert evaluate(spec, {"a": 1}, engine=engine).valid
    assert not evaluate(spec, {}, engine=engine).valid


def test_invalid_compiled_schema():
    with pytest.raises(SchemaDefinitionError, match="Compiled schema is invalid"):
        build_engine(ScalarSpec("string", min_length=-1))
