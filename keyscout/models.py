# keyscout/models.py
"""
Data models for the KeyScout scanner.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True, slots=True)
class MatchRecord:
    """A (url, key) pair found in scanned text and the offset where the call starts."""

    url: str
    key: str
    offset: int


@dataclass(frozen=True, slots=True)
class EnrichedRecord:
    """A match annotated with its 1-based line number and optional surrounding text."""

    url: str
    key: str
    offset: int
    line: int
    context: Optional[str] = None

    @classmethod
    def from_match(cls, match: MatchRecord, line: int) -> EnrichedRecord:
        return cls(url=match.url, key=match.key, offset=match.offset, line=line)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
