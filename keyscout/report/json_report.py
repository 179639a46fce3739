# keyscout/report/json_report.py

"""
JSON output for KeyScout.

Serialises scan results and writes timestamped capture files.
"""
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Optional
from urllib.parse import urlparse

from keyscout.aggregator import CrawlReport


def render_json(data: Any, output_path: Path | str) -> Path:
    """
    Write *data* as JSON to *output_path*, creating parent directories.

    :param data: any JSON-serialisable payload
    :param output_path: path of the JSON file
    :return: Path of the saved file
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    return output


def capture_filename(root_url: str, output_dir: Path | str = "captures", now: Optional[datetime] = None) -> Path:
    """
    Build ``<output_dir>/<host> - <YYYYMMDDHHMMSS>.txt`` for a crawl of *root_url*.

    The host is lower-cased and loses a leading ``www.``.
    """
    host = (urlparse(root_url).hostname or "unknown").removeprefix("www.")
    stamp = (now or datetime.now()).strftime("%Y%m%d%H%M%S")
    return Path(output_dir) / f"{host} - {stamp}.txt"


def write_capture(
    report: CrawlReport,
    output_dir: Path | str = "captures",
    *,
    unique: bool = False,
    now: Optional[datetime] = None,
) -> Path:
    """
    Save the per-script results of *report* under *output_dir*.

    Example:
    ```python
    from keyscout.report.json_report import write_capture
    path = write_capture(report, 'captures')
    print(f"Results written to file: {path}")
    ```
    """
    path = capture_filename(report.root_url, output_dir, now)
    return render_json(report.to_list(json_mode=True, unique=unique), path)
