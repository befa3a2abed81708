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

"""Schema spec trees and their JSON Schema representation."""

from .json_schema_loader import load_schema, schema_from_dict
from .schema_spec import (
    ANY,
    BOOLEAN,
    INTEGER,
    MISSING,
    NULL,
    NUMBER,
    STRING,
    ArraySpec,
    FieldSpec,
    ObjectSpec,
    ScalarSpec,
    SchemaSpec,
    UnionSpec,
    apply_defaults,
    is_schema_spec,
    nullable,
    optional,
    required,
    strictify,
    to_json_schema,
)

__all__ = [
    'ANY',
    'BOOLEAN',
    'INTEGER',
    'MISSING',
    'NULL',
    'NUMBER',
    'STRING',
    'ArraySpec',
    'FieldSpec',
    'ObjectSpec',
    'ScalarSpec',
    'SchemaSpec',
    'UnionSpec',
    'apply_defaults',
    'is_schema_spec',
    'load_schema',
    'nullable',
    'optional',
    'required',
    'schema_from_dict',
    'strictify',
    'to_json_schema',
]
