# llms_scout/crawler/urls.py
"""
URL normalization and link filtering utilities for LLMSScout.
"""
from __future__ import annotations

import re
from typing import List, Optional
from urllib.parse import urlparse, urlunparse

__all__ = (
    "normalize_url",
    "ensure_scheme",
    "hostname_of",
    "path_segments",
    "is_crawlable_link",
)

_ASSET_EXTENSIONS = (
    ".jpg", ".jpeg", ".png", ".gif", ".svg", ".webp", ".ico",
    ".css", ".js", ".json", ".xml",
    ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx",
    ".zip", ".rar", ".tar", ".gz",
    ".mp3", ".mp4", ".avi", ".mov", ".wmv",
)
_ADMIN_RE = re.compile(
    r"(/wp-admin(/|$)|wp-login\.php|/(admin|login|log-in|signin|sign-in|logout|signup|sign-up)(/|$))",
    re.IGNORECASE,
)
_SKIP_SCHEMES = ("mailto:", "javascript:", "tel:", "data:")


def normalize_url(url: str) -> str:
    """
    Canonical form of *url*: lower-cased scheme and host, no query,
    no fragment, no trailing slash (the root collapses to ``scheme://host``).

    Garbage in, garbage out: anything without a scheme and host is returned unchanged.
    """
    try:
        parsed = urlparse(url.strip())
    except (AttributeError, ValueError):
        return url
    if not parsed.scheme or not parsed.netloc:
        return url
    scheme = parsed.scheme.lower()
    netloc = parsed.netloc.lower()
    path = parsed.path.rstrip("/")
    return urlunparse((scheme, netloc, path, "", "", ""))


def ensure_scheme(url: str) -> str:
    """Prefix ``https://`` when the user typed a bare host."""
    url = url.strip()
    if not url.startswith(("http://", "https://")):
        url = "https://" + url
    return url


def hostname_of(url: str) -> Optional[str]:
    """Lower-case hostname of *url* or None when it cannot be parsed."""
    try:
        host = urlparse(url).hostname
    except (AttributeError, ValueError):
        return None
    return host or None


def path_segments(url: str) -> List[str]:
    """Non-empty path segments of *url*."""
    try:
        path = urlparse(url).path
    except (AttributeError, ValueError):
        return []
    return [seg for seg in path.split("/") if seg]


def is_crawlable_link(url: str) -> bool:
    """
    Only plain http(s) pages are worth a visit: no fragments, no binary
    assets, no admin or login screens.
    """
    if not url or url.lower().startswith(_SKIP_SCHEMES) or "#" in url:
        return False
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return False
    path = parsed.path.lower()
    if path.endswith(_ASSET_EXTENSIONS):
        return False
    return not _ADMIN_RE.search(path)
