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

"""Position-annotated JSON parsing and pointer indexing."""

from .json_parser import (
    NodeType,
    ParseError,
    ParseErrorCode,
    ParseNode,
    ParseOptions,
    node_value,
    parse_tree,
    print_parse_error_code,
)
from .pointer_index import PointerIndex, build_pointer_index

__all__ = [
    'NodeType',
    'ParseError',
    'ParseErrorCode',
    'ParseNode',
    'ParseOptions',
    'PointerIndex',
    'build_pointer_index',
    'node_value',
    'parse_tree',
    'print_parse_error_code',
]
