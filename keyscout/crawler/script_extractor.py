# keyscout/crawler/script_extractor.py
"""
Discovery of external ``<script src>`` URLs in page markup.
"""
from __future__ import annotations

import posixpath
import re
from typing import List
from urllib.parse import urljoin, urlparse, urlunparse

from keyscout.logger import logger

SCRIPT_SRC_RE = re.compile(r"""<script[^>]+src=["']([^"']+)["']""", re.IGNORECASE)

_DEFAULT_PORTS = {"http": 80, "https": 443}


def normalize_script_url(src: str, base: str) -> str | None:
    """
    Resolve *src* against *base* and reduce it to a canonical form.

    Scheme and host are lower-cased, default ports dropped, dot segments
    collapsed, query string and fragment removed. Returns None for values
    that do not resolve to an http(s) URL.
    """
    try:
        parsed = urlparse(urljoin(base, src.strip()))
        port = parsed.port
    except ValueError:
        return None
    scheme = parsed.scheme.lower()
    if scheme not in _DEFAULT_PORTS or not parsed.hostname:
        return None

    host = parsed.hostname
    if ":" in host:
        host = f"[{host}]"
    if port is not None and port != _DEFAULT_PORTS[scheme]:
        host = f"{host}:{port}"
    if parsed.username is not None:
        auth = parsed.username if parsed.password is None else f"{parsed.username}:{parsed.password}"
        host = f"{auth}@{host}"

    path = parsed.path or "/"
    norm = posixpath.normpath(path)
    # normpath keeps a leading "//" and drops a trailing slash
    if norm.startswith("//"):
        norm = "/" + norm.lstrip("/")
    if path.endswith("/") and not norm.endswith("/"):
        norm += "/"

    return urlunparse((scheme, host, norm, parsed.params, "", ""))


def extract_script_srcs(html: str, base: str) -> List[str]:
    """
    Return the distinct script URLs of *html* in order of appearance.

    The tag match is a tolerant regex, not an HTML parse.
    """
    scripts: dict[str, None] = {}
    for raw in SCRIPT_SRC_RE.findall(html):
        url = normalize_script_url(raw, base)
        if url is None:
            logger.debug("Skipping script src %r", raw)
            continue
        logger.debug("Normalized script URL: %s -> %s", raw, url)
        scripts.setdefault(url, None)
    return list(scripts)
