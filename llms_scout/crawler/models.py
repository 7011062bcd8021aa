# llms_scout/crawler/models.py
"""
Data models for the LLMSScout crawler.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

NormalizedURL = str


class DomainReason(str, Enum):
    """Why a hostname was (or was not) considered part of the crawl."""

    VARIANT = "variant"
    RELATED = "related"
    DOCS_SUBDOMAIN = "docs_subdomain"
    HELP_SUBDOMAIN = "help_subdomain"
    UNRELATED = "unrelated"
    INVALID = "invalid"


@dataclass(slots=True, frozen=True)
class Classification:
    """Result of :meth:`DomainTracker.classify`; ``promote`` asks the caller to record the host."""

    hostname: Optional[str]
    related: bool
    reason: DomainReason
    promote: bool = False


@dataclass(slots=True, frozen=True)
class ExtractedLink:
    """An anchor found on a rendered page."""

    url: str
    text: str = ""
    is_nav: bool = False


@dataclass(slots=True, frozen=True)
class CandidateLink:
    url: NormalizedURL
    anchor_text: str = ""
    is_nav_origin: bool = False
    source_depth: int = 0


@dataclass(slots=True, frozen=True)
class ScoredLink:
    """A candidate link with its priority; ordering key of the frontier."""

    url: NormalizedURL
    anchor_text: str
    is_nav_origin: bool
    source_depth: int
    priority_score: int

    @classmethod
    def from_candidate(cls, link: CandidateLink, score: int) -> ScoredLink:
        return cls(
            url=link.url,
            anchor_text=link.anchor_text,
            is_nav_origin=link.is_nav_origin,
            source_depth=link.source_depth,
            priority_score=score,
        )

    @property
    def depth(self) -> int:
        """Depth of the target page: one below the page that linked to it."""
        return self.source_depth + 1


@dataclass(slots=True, frozen=True)
class PageRecord:
    """Structured content of one successfully visited page."""

    url: NormalizedURL
    title: str
    meta_description: str
    headings: Dict[str, Tuple[str, ...]]
    body_text: str
    outbound_links: Tuple[ExtractedLink, ...]
    is_documentation: bool
    depth: int

    def to_dict(self, *, include_links: bool = False) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "url": self.url,
            "title": self.title,
            "meta_description": self.meta_description,
            "headings": {level: list(items) for level, items in self.headings.items()},
            "body_text": self.body_text,
            "is_documentation": self.is_documentation,
            "depth": self.depth,
        }
        if include_links:
            data["outbound_links"] = [asdict(link) for link in self.outbound_links]
        return data


@dataclass(slots=True, frozen=True)
class Batch:
    """Pages accumulated since the previous emission."""

    index: int
    pages: Tuple[PageRecord, ...]

    def __len__(self) -> int:
        return len(self.pages)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "batch": self.index,
            "size": len(self.pages),
            "pages": [page.to_dict() for page in self.pages],
        }


@dataclass(slots=True, frozen=True)
class NavigationResult:
    """What the rendering engine reports after navigating; ``status`` is None when no response arrived."""

    final_url: str
    status: Optional[int]

    @property
    def ok(self) -> bool:
        return self.status is not None and self.status < 400


@dataclass(slots=True)
class CrawlStats:
    """Aggregate counters of one crawl run."""

    discovered: int = 0
    filtered: int = 0
    unrelated: int = 0
    rejected: int = 0
    enqueued: int = 0
    attempted: int = 0
    succeeded: int = 0
    failed: int = 0
    skipped: int = 0
    retried: int = 0
    batches_emitted: int = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass(slots=True)
class CrawlResult:
    """Final outcome of a crawl: visited pages in discovery order plus counters."""

    seed_url: str
    root_domain: str
    pages: List[PageRecord] = field(default_factory=list)
    batches: List[Batch] = field(default_factory=list)
    generated: List[str] = field(default_factory=list)
    stats: CrawlStats = field(default_factory=CrawlStats)
    domains: Dict[str, List[str]] = field(default_factory=dict)
    duration: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seed_url": self.seed_url,
            "root_domain": self.root_domain,
            "duration": round(self.duration, 3),
            "stats": self.stats.to_dict(),
            "domains": self.domains,
            "pages": [page.to_dict() for page in self.pages],
            "batches": [[page.url for page in batch.pages] for batch in self.batches],
            "generated": self.generated,
        }
