# === FILE: llms_scout/doc_finder.py ===

"""Heuristics for recognising documentation pages.

A URL counts as documentation when its path or hostname looks like
technical, reference or help content. The same heuristics feed link
scoring, domain classification and the ``is_documentation`` flag of
visited pages.
"""

from __future__ import annotations

import re
from typing import Iterable, Mapping, Optional
from urllib.parse import urlparse

__all__ = [
    "DOCS_PATH_MARKERS",
    "DOCS_HOST_PREFIXES",
    "is_documentation_url",
    "is_docs_landing_page",
    "classify_page",
]

DOCS_PATH_MARKERS: tuple[str, ...] = (
    "/docs",
    "/documentation",
    "/guide",
    "/guides",
    "/developer",
    "/developers",
    "/api",
    "/reference",
    "/getting-started",
    "/tutorials",
    "/help",
    "/manual",
    "/learn",
    "/knowledge",
    "/support",
    "/wiki",
    "/handbook",
    "/sdk",
    "/faq",
)
DOCS_HOST_PREFIXES: tuple[str, ...] = (
    "docs.",
    "developer.",
    "developers.",
    "api.",
    "help.",
    "support.",
    "wiki.",
    "knowledge.",
)

_VERSIONED_RE = re.compile(r"/v\d+(\.\d+)*(/|$)")
_LANDING_TAILS = ("", "index", "index.html", "overview", "introduction", "intro", "getting-started", "home")
_PAGE_KEYWORDS = ("documentation", "api reference", "developer guide", "developer docs", "sdk", "user guide")


def _split(url: str) -> Optional[tuple[str, str]]:
    try:
        parsed = urlparse(url)
    except ValueError:
        return None
    return (parsed.hostname or "", parsed.path.lower())


def _matches_marker(path: str) -> Optional[str]:
    """Return the docs marker the path starts a segment with, if any."""
    for marker in DOCS_PATH_MARKERS:
        idx = path.find(marker)
        while idx != -1:
            end = idx + len(marker)
            # "/api" must not match "/apiary"; "/guide" is allowed to match "/guides"
            if end == len(path) or path[end] in "/-_.s":
                return marker
            idx = path.find(marker, idx + 1)
    return None


def is_documentation_url(url: str) -> bool:
    """True when *url* looks like it hosts documentation or help content."""
    parts = _split(url)
    if parts is None:
        return False
    host, path = parts
    if host.startswith(DOCS_HOST_PREFIXES):
        return True
    if _matches_marker(path):
        return True
    return bool(_VERSIONED_RE.search(path))


def is_docs_landing_page(url: str) -> bool:
    """True for the entry page of a documentation section (``/docs``, ``docs.x.com/``, ``/api/overview``)."""
    if not is_documentation_url(url):
        return False
    parts = _split(url)
    if parts is None:
        return False
    host, path = parts
    segments = [seg for seg in path.split("/") if seg]
    if host.startswith(DOCS_HOST_PREFIXES):
        return len(segments) == 0 or (len(segments) == 1 and segments[0] in _LANDING_TAILS)
    if not segments:
        return False
    head = "/" + segments[0]
    if head not in DOCS_PATH_MARKERS:
        return False
    return len(segments) == 1 or (len(segments) == 2 and segments[1] in _LANDING_TAILS)


def classify_page(url: str, title: str = "", headings: Mapping[str, Iterable[str]] | None = None) -> bool:
    """Decide ``is_documentation`` for a fetched page from its URL, title and headings."""
    if is_documentation_url(url):
        return True
    texts = [title or ""]
    for items in (headings or {}).values():
        texts.extend(items)
    haystack = " ".join(texts).lower()
    return any(keyword in haystack for keyword in _PAGE_KEYWORDS)
