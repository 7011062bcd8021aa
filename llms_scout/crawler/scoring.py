# llms_scout/crawler/scoring.py
"""
Link prioritisation: an additive score per candidate link.
"""
from __future__ import annotations

from typing import Optional
from urllib.parse import urlparse

from llms_scout.config import ScoringProfile
from llms_scout.crawler.domains import DomainTracker
from llms_scout.crawler.models import CandidateLink, ScoredLink
from llms_scout.crawler.urls import hostname_of, is_crawlable_link, path_segments
from llms_scout.doc_finder import is_docs_landing_page, is_documentation_url

__all__ = ("LinkScorer",)


class LinkScorer:
    """Pure scoring of candidate links with the weights of a :class:`ScoringProfile`."""

    def __init__(self, profile: Optional[ScoringProfile] = None) -> None:
        self.profile = profile or ScoringProfile()

    @staticmethod
    def admit(url: str) -> bool:
        """Filter applied before scoring; rejected links never reach the frontier."""
        return is_crawlable_link(url)

    def score(self, link: CandidateLink, tracker: DomainTracker) -> int:
        p = self.profile
        url = link.url
        try:
            path = urlparse(url).path.lower()
        except ValueError:
            path = ""
        text = (link.anchor_text or "").lower()
        haystack = f"{path} {text}"
        host = hostname_of(url) or ""

        total = 0
        is_docs = is_documentation_url(url)
        if is_docs:
            total += p.documentation
            if is_docs_landing_page(url):
                total += p.docs_landing
            if "api" in haystack:
                total += p.api_mention
            if "sdk" in haystack or "developer" in haystack:
                total += p.sdk_mention

        if host in tracker.known_docs_domains:
            total += p.known_docs_host
        if host in tracker.related_subdomains:
            total += p.related_host

        for keyword, bonus in p.topics.items():
            if keyword in haystack:
                total += bonus

        if link.is_nav_origin:
            total += p.nav_origin

        if not is_docs:
            total -= p.depth_penalty * len(path_segments(url))
        return total

    def score_link(self, link: CandidateLink, tracker: DomainTracker) -> ScoredLink:
        return ScoredLink.from_candidate(link, self.score(link, tracker))
