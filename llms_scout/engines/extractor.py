# llms_scout/engines/extractor.py
"""Structured page extraction shared by all engines.

Both implementations return the same mapping::

    {
        "title": str,
        "meta_description": str,
        "headings": {"h1": [...], "h2": [...], "h3": [...]},
        "body_text": str,
        "links": [{"url": str, "text": str, "is_nav": bool}, ...],
    }

The browser engine runs :data:`EXTRACT_SCRIPT` inside the page; the HTTP
engine parses the raw markup with BeautifulSoup in :func:`extract_from_html`.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, List
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag

__all__ = ("Extractor", "EXTRACT_SCRIPT", "extract_from_html", "DEFAULT_EXTRACTOR")

_WS_RE = re.compile(r"\s+")
_HIDDEN_STYLE_RE = re.compile(r"display\s*:\s*none|visibility\s*:\s*hidden", re.IGNORECASE)
_NAV_HINT_RE = re.compile(r"(^|[-_\s])(nav|navbar|navigation|menu|sidebar|sidenav|toc)([-_\s]|$)", re.IGNORECASE)
_NAV_TAGS = ("nav", "header", "aside")
_STRIP_TAGS = ["script", "style", "noscript", "template", "svg", "iframe"]
_MAIN_SELECTORS = ("main", "article", "[role=main]", "#content", ".content")
_FALLBACK_TEXT_LIMIT = 100

EXTRACT_SCRIPT = r"""
(maxChars) => {
  const clean = (s) => (s || '').replace(/\s+/g, ' ').trim();
  const navHint = /(^|[-_\s])(nav|navbar|navigation|menu|sidebar|sidenav|toc)([-_\s]|$)/i;
  const isNav = (el) => {
    for (let n = el.parentElement; n; n = n.parentElement) {
      const tag = n.tagName.toLowerCase();
      if (tag === 'nav' || tag === 'header' || tag === 'aside') return true;
      if (n.getAttribute('role') === 'navigation') return true;
      const hint = (n.id || '') + ' ' + (typeof n.className === 'string' ? n.className : '');
      if (navHint.test(hint)) return true;
    }
    return false;
  };
  const linkText = (a) => {
    let text = clean(a.innerText || a.textContent);
    if (!text) text = clean(a.getAttribute('title'));
    if (!text) text = clean(a.getAttribute('aria-label'));
    if (!text) {
      const img = a.querySelector('img[alt]');
      if (img) text = clean(img.getAttribute('alt'));
    }
    if (!text && a.parentElement) text = clean(a.parentElement.textContent).slice(0, 100);
    return text;
  };
  const meta = document.querySelector('meta[name="description"], meta[property="og:description"]');
  const headings = {h1: [], h2: [], h3: []};
  document.querySelectorAll('h1, h2, h3').forEach((h) => {
    const t = clean(h.innerText || h.textContent);
    if (t) headings[h.tagName.toLowerCase()].push(t);
  });
  const links = Array.from(document.querySelectorAll('a[href]')).map((a) => ({
    url: a.href,
    text: linkText(a),
    is_nav: isNav(a),
  }));
  const root = document.querySelector('main, article, [role=main], #content, .content') || document.body;
  let body = '';
  if (root) {
    const copy = root.cloneNode(true);
    copy.querySelectorAll('script, style, noscript, template, svg, iframe, [hidden], [aria-hidden="true"]')
      .forEach((el) => el.remove());
    copy.querySelectorAll('[style]').forEach((el) => {
      if (/display\s*:\s*none|visibility\s*:\s*hidden/i.test(el.getAttribute('style'))) el.remove();
    });
    body = root === document.body ? clean(root.innerText) : clean(copy.textContent);
    if (!body) body = clean(copy.textContent);
  }
  return {
    title: clean(document.title),
    meta_description: meta ? clean(meta.getAttribute('content')) : '',
    headings,
    body_text: body.slice(0, maxChars),
    links,
  };
}
"""


def _clean(text: Any) -> str:
    if not isinstance(text, str):
        return ""
    return _WS_RE.sub(" ", text).strip()


def _is_hidden(tag: Tag) -> bool:
    if tag.attrs is None:
        return False
    if tag.has_attr("hidden") or tag.get("aria-hidden") == "true":
        return True
    style = tag.get("style")
    return isinstance(style, str) and bool(_HIDDEN_STYLE_RE.search(style))


def _in_nav(tag: Tag) -> bool:
    for parent in tag.parents:
        if not isinstance(parent, Tag) or parent.name == "[document]":
            continue
        if parent.name in _NAV_TAGS or parent.get("role") == "navigation":
            return True
        classes = parent.get("class") or []
        hint = " ".join([parent.get("id") or "", *classes]) if isinstance(classes, list) else str(classes)
        if _NAV_HINT_RE.search(hint):
            return True
    return False


def _link_text(tag: Tag) -> str:
    text = _clean(tag.get_text(" ", strip=True))
    for attr in ("title", "aria-label"):
        if text:
            break
        text = _clean(tag.get(attr))
    if not text:
        img = tag.find("img", alt=True)
        if isinstance(img, Tag):
            text = _clean(img.get("alt"))
    if not text and isinstance(tag.parent, Tag):
        text = _clean(tag.parent.get_text(" ", strip=True))[:_FALLBACK_TEXT_LIMIT]
    return text


def extract_from_html(html: str, base_url: str, max_chars: int = 5000) -> Dict[str, Any]:
    """Parse *html* fetched from *base_url* into the extraction mapping."""
    soup = BeautifulSoup(html or "", "html.parser")
    for element in soup(_STRIP_TAGS):
        element.decompose()

    title_tag = soup.find("title")
    title = _clean(title_tag.get_text()) if title_tag else ""

    meta = soup.find("meta", attrs={"name": "description"}) or soup.find(
        "meta", attrs={"property": "og:description"}
    )
    meta_description = _clean(meta.get("content")) if isinstance(meta, Tag) else ""

    headings: Dict[str, List[str]] = {"h1": [], "h2": [], "h3": []}
    for tag in soup.find_all(["h1", "h2", "h3"]):
        text = _clean(tag.get_text(" ", strip=True))
        if text:
            headings[tag.name].append(text)

    links: List[Dict[str, Any]] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href = tag.get("href")
        if not isinstance(href, str) or not href.strip():
            continue
        links.append(
            {
                "url": urljoin(base_url, href.strip()),
                "text": _link_text(tag),
                "is_nav": _in_nav(tag),
            }
        )

    for tag in soup.find_all(True):
        if isinstance(tag, Tag) and not tag.decomposed and _is_hidden(tag):
            tag.decompose()

    root = None
    for selector in _MAIN_SELECTORS:
        root = soup.select_one(selector)
        if root is not None:
            break
    if root is None:
        root = soup.body or soup
    body_text = _clean(root.get_text(" ", strip=True))

    return {
        "title": title,
        "meta_description": meta_description,
        "headings": headings,
        "body_text": body_text[:max_chars],
        "links": links,
    }


@dataclass(slots=True, frozen=True)
class Extractor:
    """What :meth:`EnginePage.evaluate` runs: a browser script and its BeautifulSoup twin."""

    max_chars: int = 5000
    script: str = EXTRACT_SCRIPT

    def from_html(self, html: str, base_url: str) -> Dict[str, Any]:
        return extract_from_html(html, base_url, self.max_chars)


DEFAULT_EXTRACTOR = Extractor()
