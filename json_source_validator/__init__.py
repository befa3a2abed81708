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

"""Validate JSON source text against a schema with line/column and JSON Pointer locations."""

__version__ = "0.1.0"

from .exceptions import (
    JsonSourceValidatorError,
    SchemaDefinitionError,
    SchemaLoadError,
)
from .models import (
    ArraySpec,
    FieldSpec,
    ObjectSpec,
    ScalarSpec,
    UnionSpec,
    load_schema,
    schema_from_dict,
    strictify,
)
from .parsing import ParseOptions
from .report import create_error_summary
from .validation import (
    IssueKind,
    ValidationIssue,
    ValidationResult,
    validate_json,
    validate_json_file,
)

__all__ = [
    'ArraySpec',
    'FieldSpec',
    'IssueKind',
    'JsonSourceValidatorError',
    'ObjectSpec',
    'ParseOptions',
    'ScalarSpec',
    'SchemaDefinitionError',
    'SchemaLoadError',
    'UnionSpec',
    'ValidationIssue',
    'ValidationResult',
    'create_error_summary',
    'load_schema',
    'schema_from_dict',
    'strictify',
    'validate_json',
    'validate_json_file',
]
