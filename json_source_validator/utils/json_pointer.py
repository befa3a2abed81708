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

"""RFC 6901 JSON Pointer helpers.

Pointers built here are the keys of the pointer index and the lookup keys
derived from schema issue paths, so both sides must go through the same
escaping.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Union

JsonPointer = str
PathSegment = Union[str, int]


def escape_token(token: str) -> str:
    # "~" must be replaced first so the "~1" produced for "/" is not re-escaped.
    return token.replace("~", "~0").replace("/", "~1")


def unescape_token(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


def join_pointer(base: Optional[JsonPointer], token: PathSegment) -> JsonPointer:
    """Append one segment to ``base``; an empty or missing base is the root."""
    escaped = escape_token(str(token))
    if not base:
        return f"/{escaped}"
    return f"{base}/{escaped}"


def path_to_pointer(path: Optional[Iterable[PathSegment]]) -> JsonPointer:
    """Convert an issue path such as ``["items", 0, "name"]`` to ``/items/0/name``."""
    if not path:
        return ""
    segments = [escape_token(str(segment)) for segment in path]
    if not segments:
        return ""
    return "/" + "/".join(segments)


def pointer_to_path(pointer: JsonPointer) -> List[str]:
    """Split a pointer back into unescaped segments.

    Array indices come back as strings; the pointer alone cannot tell them
    apart from numeric object keys.
    """
    if pointer == "":
        return []
    if not pointer.startswith("/"):
        raise ValueError(f"JSON Pointer must be empty or start with '/': {pointer!r}")
    return [unescape_token(token) for token in pointer[1:].split("/")]
