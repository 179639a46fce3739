# File: keyscout/crawler/__init__.py
"""keyscout.crawler: discovery and fetching of page scripts."""

from .crawler import ScriptCrawler
from .fetcher import Fetcher, FetchError, fetch_text
from .script_extractor import extract_script_srcs

__all__ = ["ScriptCrawler", "Fetcher", "FetchError", "fetch_text", "extract_script_srcs"]
