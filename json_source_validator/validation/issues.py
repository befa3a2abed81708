from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar, Union

T = TypeVar("T")

PathSegment = Union[str, int]


class IssueKind(str, Enum):
    INPUT = "input"
    SYNTAX = "syntax"
    PROCESSING = "processing"
    SCHEMA = "schema"
    FILE = "file"
    MISSING = "missing"
    UNEXPECTED = "unexpected"
    INVALID_TYPE = "invalid_type"
    INVALID_VALUE = "invalid_value"
    OTHER = "other"


@dataclass(frozen=True)
class SchemaIssue:
    """A structural issue as reported by the schema engine, before positioning."""

    path: Tuple[PathSegment, ...]
    kind: IssueKind
    message: str
    expected: Optional[str] = None
    received: Optional[str] = None


@dataclass(frozen=True)
class ValidationIssue:
    message: str
    json_pointer: str = ""
    line: int = 0  # 1-based, 0 when no position is known
    column: int = 0  # 1-based, 0 when no position is known
    suggestion: Optional[str] = None
    kind: Optional[IssueKind] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["kind"] = self.kind.value if self.kind is not None else None
        if self.suggestion is None:
            del data["suggestion"]
        return data


@dataclass
class ValidationResult(Generic[T]):
    """Outcome of one validation call.

    ``data`` is set only when ``valid`` is true, and ``errors`` is empty
    exactly when ``valid`` is true.
    """

    valid: bool
    data: Optional[T] = None
    errors: List[ValidationIssue] = field(default_factory=list)

    @classmethod
    def success(cls, data: T) -> "ValidationResult[T]":
        return cls(valid=True, data=data, errors=[])

    @classmethod
    def failure(cls, errors: List[ValidationIssue]) -> "ValidationResult[T]":
        if not errors:
            raise ValueError("A failed validation result needs at least one issue")
        return cls(valid=False, data=None, errors=list(errors))

    @classmethod
    def single_error(
        cls,
        message: str,
        kind: IssueKind,
        json_pointer: str = "",
    ) -> "ValidationResult[T]":
        return cls.failure([ValidationIssue(message=message, json_pointer=json_pointer, kind=kind)])

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "valid": self.valid,
            "errors": [issue.to_dict() for issue in self.errors],
        }
        if self.valid:
            result["data"] = self.data
        return result
