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

"""Grouped, human-readable summaries of validation issues."""

from typing import Dict, List, Sequence, Tuple

from ..validation.issues import IssueKind, ValidationIssue

MISSING = "missing"
INVALID = "invalid"
UNEXPECTED = "unexpected"
OTHER = "other"

# Rendering order of the groups.
CATEGORY_HEADERS: Tuple[Tuple[str, str], ...] = (
    (MISSING, "Missing Required Fields:"),
    (INVALID, "Invalid Values:"),
    (UNEXPECTED, "Unexpected Fields:"),
    (OTHER, "Other Issues:"),
)

_KIND_CATEGORIES: Dict[IssueKind, str] = {
    IssueKind.MISSING: MISSING,
    IssueKind.INVALID_TYPE: INVALID,
    IssueKind.INVALID_VALUE: INVALID,
    IssueKind.UNEXPECTED: UNEXPECTED,
}


def categorize(issue: ValidationIssue) -> str:
    """Pick the summary group of ``issue``.

    A structural kind (missing, unexpected, invalid type or value) decides
    on its own. Any other issue, with or without a kind, is sorted by its
    message text, so "Invalid input" and "Syntax error: Invalid symbol" land
    under invalid values.
    """
    if issue.kind in _KIND_CATEGORIES:
        return _KIND_CATEGORIES[issue.kind]

    message = issue.message.lower()
    if "missing" in message or "required" in message:
        return MISSING
    if "unexpected" in message:
        return UNEXPECTED
    if "invalid" in message:
        return INVALID
    return OTHER


def group_issues_by_category(issues: Sequence[ValidationIssue]) -> Dict[str, List[ValidationIssue]]:
    grouped: Dict[str, List[ValidationIssue]] = {category: [] for category, _ in CATEGORY_HEADERS}
    for issue in issues:
        grouped[categorize(issue)].append(issue)
    return grouped


def create_error_summary(issues: Sequence[ValidationIssue]) -> str:
    """Render ``issues`` grouped under fixed headers.

    Groups without issues are left out, so an empty sequence renders as an
    empty string. Issues keep their input order within a group.
    """
    grouped = group_issues_by_category(issues)
    parts: List[str] = []

    for category, header in CATEGORY_HEADERS:
        members = grouped[category]
        if not members:
            continue
        parts.append(f"\n{header}")
        for issue in members:
            parts.append(f"   - {issue.message}")
            if issue.suggestion:
                parts.append(f"      Hint: {issue.suggestion}")

    return "\n".join(parts)
