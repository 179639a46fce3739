# File: keyscout/report/text_report.py
"""keyscout.report.text_report: plain-text console format of a single scan."""

from __future__ import annotations

from typing import List, Sequence

from keyscout.models import EnrichedRecord


def render_text(url: str, records: Sequence[EnrichedRecord], *, unique: bool = False) -> str:
    """Render the header, the count line and one block per record."""
    lines: List[str] = [
        f"Fetched: {url}",
        f'Found {len(records)} {"unique " if unique else ""}.post/.set("x-api-key") pair(s).',
        "",
    ]
    for record in records:
        lines.append(f"URL: {record.url}")
        lines.append(f"KEY: {record.key}")
        lines.append(f"Line: {record.line}")
        if record.context:
            lines.append(f"Context: ...{record.context}...")
        lines.append("")
    return "\n".join(lines) + "\n"
