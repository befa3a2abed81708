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

"""Attach source positions and suggestions to issues."""

import logging
from typing import Optional

from ..parsing.json_parser import ParseError, print_parse_error_code
from ..parsing.pointer_index import PointerIndex
from ..utils.json_pointer import path_to_pointer
from ..utils.source_location import lookup_source, position_from_offset
from .issues import IssueKind, SchemaIssue, ValidationIssue

logger = logging.getLogger(__name__)

SYNTAX_PREFIX = "Syntax error: "
VALIDATION_PREFIX = "Validation error: "

REMOVE_FIELD_SUGGESTION = "Remove this field, it is not allowed by the schema"


def suggest(issue: SchemaIssue) -> Optional[str]:
    """Return an actionable hint for ``issue``, or ``None`` when there is none."""
    if issue.kind is IssueKind.MISSING and issue.path:
        return f'Add missing field: "{issue.path[-1]}"'
    if issue.kind is IssueKind.UNEXPECTED:
        return REMOVE_FIELD_SUGGESTION
    if issue.kind is IssueKind.INVALID_TYPE and issue.expected and issue.received:
        return f"Expected type '{issue.expected}', got '{issue.received}'"
    return None


def enrich_issue(issue: SchemaIssue, pointer_index: PointerIndex, text: str) -> ValidationIssue:
    pointer = path_to_pointer(issue.path)
    loc = lookup_source(pointer_index, text, pointer)
    if not loc.resolved:
        logger.debug(f"No source position for {pointer or '(root)'}")

    return ValidationIssue(
        message=f"{VALIDATION_PREFIX}{issue.message}",
        suggestion=suggest(issue),
        json_pointer=pointer,
        line=loc.line,
        column=loc.column,
        kind=issue.kind,
    )


def syntax_issue(error: ParseError, text: str) -> ValidationIssue:
    line, column = position_from_offset(text, error.offset)
    return ValidationIssue(
        message=f"{SYNTAX_PREFIX}{print_parse_error_code(error.error)}",
        json_pointer="",
        line=line,
        column=column,
        kind=IssueKind.SYNTAX,
    )
