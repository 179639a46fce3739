# File: tests/test_report.py
"""Console text, capture file and HTML report rendering."""
import json
from datetime import datetime
from pathlib import Path

from keyscout.aggregator import CrawlReport, ScriptOutcome
from keyscout.models import EnrichedRecord
from keyscout.report.html_report import render_html
from keyscout.report.json_report import capture_filename, render_json, write_capture
from keyscout.report.text_report import render_text

PAIR = EnrichedRecord(url="https://api.example.com/x", key="SECRET", offset=3, line=1)


def make_report() -> CrawlReport:
    return CrawlReport(
        root_url="https://www.Example.com/home",
        scripts=["https://example.com/a.js", "https://example.com/b.js"],
        outcomes=[
            ScriptOutcome(url="https://example.com/a.js", pairs=[PAIR]),
            ScriptOutcome(url="https://example.com/b.js", error="Failed to fetch: 500"),
        ],
    )


def test_render_text_blocks():
    with_context = EnrichedRecord(url="u", key="k", offset=0, line=7, context="ab⏎cd")
    text = render_text("https://example.com/a.js", [PAIR, with_context], unique=True)
    assert text == (
        "Fetched: https://example.com/a.js\n"
        'Found 2 unique .post/.set("x-api-key") pair(s).\n'
        "\n"
        "URL: https://api.example.com/x\n"
        "KEY: SECRET\n"
        "Line: 1\n"
        "\n"
        "URL: u\n"
        "KEY: k\n"
        "Line: 7\n"
        "Context: ...ab⏎cd...\n"
        "\n"
    )


def test_outcome_elements():
    report = make_report()
    ok, failed = report.to_list()
    assert ok == {
        "url": "https://example.com/a.js",
        "count": 1,
        "pairs": [
            {"url": "https://api.example.com/x", "key": "SECRET", "offset": 3, "line": 1, "context": None}
        ],
    }
    assert failed == {"url": "https://example.com/b.js", "error": "Failed to fetch: 500"}

    text_element = report.outcomes[0].as_dict(json_mode=False)
    assert set(text_element) == {"url", "output"}
    assert text_element["output"].startswith("Fetched: https://example.com/a.js")
    assert text_element["output"].endswith("Line: 1")


def test_capture_filename_strips_www():
    when = datetime(2024, 3, 9, 7, 5, 1)
    path = capture_filename("https://www.Example.com/home?x=1", "captures", when)
    assert path == Path("captures") / "example.com - 20240309070501.txt"


def test_write_capture_creates_directory(tmp_path):
    out_dir = tmp_path / "captures" / "nested"
    when = datetime(2024, 1, 2, 3, 4, 5)
    saved = write_capture(make_report(), out_dir, now=when)
    assert saved == out_dir / "example.com - 20240102030405.txt"
    data = json.loads(saved.read_text(encoding="utf-8"))
    assert [d["url"] for d in data] == ["https://example.com/a.js", "https://example.com/b.js"]
    assert data[0]["count"] == 1
    assert data[1]["error"] == "Failed to fetch: 500"


def test_render_json_keeps_unicode(tmp_path):
    saved = render_json({"context": "a⏎b"}, tmp_path / "out.json")
    assert "a⏎b" in saved.read_text(encoding="utf-8")


def test_render_html_bundled_template(tmp_path):
    saved = render_html(make_report(), None, tmp_path / "reports" / "report.html")
    html = saved.read_text(encoding="utf-8")
    assert "SECRET" in html
    assert "Failed to fetch: 500" in html
    assert "1 pair(s)" in html


def test_render_html_escapes_values(tmp_path):
    report = CrawlReport(
        root_url="https://example.com/",
        scripts=["https://example.com/a.js"],
        outcomes=[
            ScriptOutcome(
                url="https://example.com/a.js",
                pairs=[EnrichedRecord(url="u", key="<b>k</b>", offset=0, line=1)],
            )
        ],
    )
    html = render_html(report, None, tmp_path / "r.html").read_text(encoding="utf-8")
    assert "&lt;b&gt;k&lt;/b&gt;" in html
