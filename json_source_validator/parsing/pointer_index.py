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

"""Map JSON Pointers to the offsets of the values they address."""

from __future__ import annotations

import logging
from typing import Dict, Optional

from ..utils.json_pointer import JsonPointer, join_pointer
from .json_parser import NodeType, ParseNode, decode_string_literal

logger = logging.getLogger(__name__)

PointerIndex = Dict[JsonPointer, int]


def _key_from_source(key_node: ParseNode, text: str) -> Optional[str]:
    # The key node spans the quotes; the literal key is what lies between them.
    key_start = key_node.offset + 1
    key_end = key_node.offset + key_node.length - 1
    if key_start < 0 or key_end > len(text) or key_start > key_end:
        return None

    raw = text[key_start:key_end]
    decoded = decode_string_literal(raw)
    return raw if decoded is None else decoded


def build_pointer_index(root: Optional[ParseNode], text: str, pointer: JsonPointer = "") -> PointerIndex:
    """Build the pointer -> offset index for a parse tree.

    Every reachable value is recorded, starting with ``pointer`` for ``root``
    itself. Children that are missing or malformed are skipped so that one
    bad node costs only its own subtree.

    Args:
        root: Parse tree (or subtree) to index
        text: Source text the tree was parsed from
        pointer: Pointer of ``root`` within the whole document

    Returns:
        Mapping from JSON Pointer to character offset
    """
    index: PointerIndex = {}

    def _walk(node: Optional[ParseNode], path: JsonPointer) -> None:
        if node is None or not isinstance(getattr(node, "offset", None), int):
            return

        index[path] = node.offset

        children = node.children or []
        if node.type is NodeType.OBJECT:
            for idx in range(0, len(children), 2):
                key_node = children[idx]
                value_node = children[idx + 1] if idx + 1 < len(children) else None
                if key_node is None or value_node is None or not isinstance(key_node.length, int):
                    logger.debug(f"Skipping incomplete property at {path or '/'} (child {idx})")
                    continue

                key = _key_from_source(key_node, text)
                if key is None:
                    logger.debug(
                        f"Skipping property at offset {key_node.offset}: key bounds exceed the text"
                    )
                    continue
                _walk(value_node, join_pointer(path, key))

        elif node.type is NodeType.ARRAY:
            for idx, child in enumerate(children):
                if child is None:
                    continue
                _walk(child, join_pointer(path, idx))

    _walk(root, pointer)
    return index
