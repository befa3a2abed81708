from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

_LINE_SEPARATOR_RE = re.compile(r"\r?\n")

NO_POSITION: Tuple[int, int] = (0, 0)


@dataclass(frozen=True)
class SourceLocation:
    file_path: Optional[Path] = None
    json_pointer: Optional[str] = None
    line: int = 0  # 1-based, 0 when unknown
    column: int = 0  # 1-based, 0 when unknown

    @property
    def resolved(self) -> bool:
        return self.line > 0 and self.column > 0


def position_from_offset(text: str, offset: Any) -> Tuple[int, int]:
    """Map a character offset in ``text`` to a 1-based ``(line, column)``.

    ``\\n`` and ``\\r\\n`` both end a line. Offsets that are not integers,
    are negative, or lie past the end of the text resolve to ``(0, 0)``.
    """
    if not isinstance(text, str):
        return NO_POSITION
    if isinstance(offset, bool) or not isinstance(offset, int):
        logger.debug(f"Cannot resolve non-integer offset {offset!r}")
        return NO_POSITION
    if offset < 0 or offset > len(text):
        logger.debug(f"Offset {offset} is outside the text (length {len(text)})")
        return NO_POSITION

    lines = _LINE_SEPARATOR_RE.split(text[:offset])
    return len(lines), len(lines[-1]) + 1


def lookup_source(
    pointer_index: Optional[Dict[str, int]],
    text: str,
    json_pointer: Optional[str],
    file_path: Optional[Path] = None,
) -> SourceLocation:
    """Resolve ``json_pointer`` through the pointer index to a source location."""
    if pointer_index is None or json_pointer is None:
        return SourceLocation(file_path=file_path, json_pointer=json_pointer)

    offset = pointer_index.get(json_pointer)
    if offset is None:
        return SourceLocation(file_path=file_path, json_pointer=json_pointer)

    line, column = position_from_offset(text, offset)
    return SourceLocation(file_path=file_path, json_pointer=json_pointer, line=line, column=column)


def format_source(loc: Optional[SourceLocation]) -> str:
    if not loc:
        return ""

    parts = []
    if loc.file_path is not None:
        if loc.resolved:
            parts.append(f"source= {loc.file_path}:{loc.line}:{loc.column}")
        else:
            parts.append(f"source= {loc.file_path}")
    elif loc.resolved:
        parts.append(f"line= {loc.line} column= {loc.column}")

    if loc.json_pointer:
        parts.append(f"pointer= {loc.json_pointer}")

    if not parts:
        return ""

    return " (" + " ".join(parts) + ")"
