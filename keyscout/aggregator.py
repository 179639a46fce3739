# File: keyscout/aggregator.py
"""keyscout.aggregator: per-script outcomes of a crawl and the aggregate report."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from keyscout.models import EnrichedRecord
from keyscout.report.text_report import render_text


@dataclass(slots=True)
class ScriptOutcome:
    """Result of scanning one script: its pairs, or the error that stopped it."""

    url: str
    pairs: List[EnrichedRecord] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def as_dict(self, *, json_mode: bool = True, unique: bool = False) -> Dict[str, Any]:
        """Element of the aggregate: ``{url, error}``, ``{url, count, pairs}`` or ``{url, output}``."""
        if self.error is not None:
            return {"url": self.url, "error": self.error}
        if json_mode:
            return {
                "url": self.url,
                "count": len(self.pairs),
                "pairs": [p.as_dict() for p in self.pairs],
            }
        return {"url": self.url, "output": render_text(self.url, self.pairs, unique=unique).strip()}


@dataclass(slots=True)
class CrawlReport:
    """Everything one crawl produced, outcomes in script discovery order."""

    root_url: str
    scripts: List[str] = field(default_factory=list)
    outcomes: List[ScriptOutcome] = field(default_factory=list)

    @property
    def pair_count(self) -> int:
        return sum(len(o.pairs) for o in self.outcomes)

    @property
    def failures(self) -> List[ScriptOutcome]:
        return [o for o in self.outcomes if not o.ok]

    def to_list(self, *, json_mode: bool = True, unique: bool = False) -> List[Dict[str, Any]]:
        return [o.as_dict(json_mode=json_mode, unique=unique) for o in self.outcomes]

    def json(self, *, pretty: bool = False, json_mode: bool = True, unique: bool = False) -> str:
        """JSON array of the per-script elements."""
        return json.dumps(
            self.to_list(json_mode=json_mode, unique=unique),
            ensure_ascii=False,
            indent=2 if pretty else None,
        )
