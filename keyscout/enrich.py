# File: keyscout/enrich.py
"""keyscout.enrich: post-processing of scan results (deduplication and context slices)."""

from __future__ import annotations

import dataclasses
import re
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from keyscout.logger import logger
from keyscout.models import EnrichedRecord

__all__: Sequence[str] = (
    "CONTEXT_TAIL",
    "NEWLINE_MARK",
    "deduplicate",
    "extract_context",
    "attach_context",
)

#: characters kept after the match start on top of the requested width
CONTEXT_TAIL = 40
NEWLINE_MARK = "⏎"

_NEWLINE_RE = re.compile(r"\r?\n")


def deduplicate(records: Iterable[EnrichedRecord]) -> List[EnrichedRecord]:
    """Keep the first record of every (url, key) pair, preserving order."""
    seen: Set[Tuple[str, str]] = set()
    unique: List[EnrichedRecord] = []
    total = 0
    for record in records:
        total += 1
        ident = (record.url, record.key)
        if ident in seen:
            continue
        seen.add(ident)
        unique.append(record)
    if total != len(unique):
        logger.debug("Removed %d duplicate pairs", total - len(unique))
    return unique


def extract_context(text: str, offset: int, width: Optional[int]) -> Optional[str]:
    """
    Slice ``[offset - width, offset + width + 40)`` of *text*, clamped to its bounds.

    Newlines are replaced by a visible marker so the slice prints on one line.
    A zero or missing width disables context and returns None.
    """
    if not width or width <= 0:
        return None
    start = max(0, offset - width)
    end = min(len(text), offset + width + CONTEXT_TAIL)
    return _NEWLINE_RE.sub(NEWLINE_MARK, text[start:end])


def attach_context(
    text: str, records: Iterable[EnrichedRecord], width: Optional[int]
) -> List[EnrichedRecord]:
    """Return copies of *records* carrying their context slice (None when disabled)."""
    return [
        dataclasses.replace(r, context=extract_context(text, r.offset, width)) for r in records
    ]
