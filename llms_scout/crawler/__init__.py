"""Crawl engine core: URL handling, domain tracking, scoring, frontier, visitor and orchestrator."""

from llms_scout.crawler.domains import DomainTracker, compute_root_domain
from llms_scout.crawler.frontier import CrawlFrontier
from llms_scout.crawler.models import (
    Batch,
    CandidateLink,
    Classification,
    CrawlResult,
    CrawlStats,
    DomainReason,
    ExtractedLink,
    NavigationResult,
    PageRecord,
    ScoredLink,
)
from llms_scout.crawler.scoring import LinkScorer
from llms_scout.crawler.urls import normalize_url

__all__ = [
    "Batch",
    "CandidateLink",
    "Classification",
    "CrawlFrontier",
    "CrawlResult",
    "CrawlStats",
    "DomainReason",
    "DomainTracker",
    "ExtractedLink",
    "LinkScorer",
    "NavigationResult",
    "PageRecord",
    "ScoredLink",
    "compute_root_domain",
    "normalize_url",
]
