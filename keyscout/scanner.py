# === FILE: keyscout/scanner.py ===
"""
Scanner for hard-coded API keys in JavaScript.

Looks for request chains of the form::

    .post("https://api.example.com/x").set("x-api-key", "SECRET")

and turns them into :class:`~keyscout.models.EnrichedRecord` objects.
"""
from __future__ import annotations

import re
from typing import List, Optional

from keyscout.enrich import attach_context, deduplicate
from keyscout.lines import LineMapper
from keyscout.logger import logger
from keyscout.models import EnrichedRecord, MatchRecord

__all__ = ["PAIR_RE", "find_pairs", "scan"]


def _literal(name: str) -> str:
    # a literal ends at the first quote equal to the opening one
    return rf"""(?: '(?P<{name}_sq>[^'\n]*)' | "(?P<{name}_dq>[^"\n]*)" )"""


PAIR_RE = re.compile(
    rf"""
    \.post \s* \( \s* {_literal('url')} \s* \)
    \s* \.set \s* \( \s* (?: 'x-api-key' | "x-api-key" )
    \s* , \s* {_literal('key')}
    """,
    re.IGNORECASE | re.VERBOSE,
)


def _group(match: re.Match[str], name: str) -> str:
    single = match.group(f"{name}_sq")
    return single if single is not None else match.group(f"{name}_dq")


def find_pairs(text: str) -> List[MatchRecord]:
    """Return every non-overlapping match in *text*, left to right."""
    return [
        MatchRecord(url=_group(m, "url"), key=_group(m, "key"), offset=m.start())
        for m in PAIR_RE.finditer(text)
    ]


def scan(text: str, *, unique: bool = False, context: Optional[int] = 0) -> List[EnrichedRecord]:
    """
    Run the whole pipeline over *text*.

    Parameters
    ----------
    text : str
        Source text (usually a JavaScript bundle).
    unique : bool
        Drop later records repeating an earlier (url, key) pair.
    context : int
        Width of the surrounding-text slice; 0 disables it.

    Returns
    -------
    List[EnrichedRecord]
        Records in order of appearance.
    """
    matches = find_pairs(text)
    mapper = LineMapper(text)
    records = [EnrichedRecord.from_match(m, mapper.line_of(m.offset)) for m in matches]
    if unique:
        records = deduplicate(records)
    records = attach_context(text, records, context)
    logger.debug("Scanned %d chars over %d lines: %d pairs", len(text), mapper.line_count, len(records))
    return records
