# llms_scout/crawler/domains.py
"""
Domain equivalence tracking: which hostnames belong to the crawled company.

``classify`` only reads state; ``record`` is the single place where a
classification is written back. ``is_related_domain`` runs both.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Set

from llms_scout.crawler.models import Classification, DomainReason
from llms_scout.crawler.urls import hostname_of
from llms_scout.doc_finder import is_documentation_url

__all__ = ("DomainTracker", "compute_root_domain")

_MULTIPART_SECOND_LEVEL = frozenset({"co", "com", "org", "net", "gov"})
_DOCS_PREFIXES = ("docs.", "developer.", "developers.", "api.")
_HELP_MARKERS = ("help", "support", "learn", "doc")

logger = logging.getLogger("LLMSScout.domains")


def compute_root_domain(hostname: str) -> str:
    """
    Registrable domain of *hostname*: drop the leading label, but keep
    three labels for ``*.co.uk``-style suffixes.

    >>> compute_root_domain("www.example.com")
    'example.com'
    >>> compute_root_domain("example.co.uk")
    'example.co.uk'
    """
    labels = [label for label in hostname.lower().strip(".").split(".") if label]
    if len(labels) <= 2:
        return ".".join(labels)
    if labels[-2] in _MULTIPART_SECOND_LEVEL and len(labels[-1]) == 2:
        return ".".join(labels[-3:])
    return ".".join(labels[1:])


class DomainTracker:
    """Hostnames seen as the same site, related subdomains and documentation hosts of one crawl."""

    def __init__(self, seed_url: str) -> None:
        host = hostname_of(seed_url)
        if host is None:
            raise ValueError(f"seed URL has no hostname: {seed_url!r}")
        self.seed_hostname: str = host
        self.root_domain: str = compute_root_domain(host)
        self.domain_variants: Set[str] = {host}
        self.related_subdomains: Set[str] = set()
        self.known_docs_domains: Set[str] = set()

    # ------------------------------------------------------------------ #
    # Classification                                                      #
    # ------------------------------------------------------------------ #

    def _is_subdomain(self, host: str) -> bool:
        return host.endswith("." + self.root_domain)

    def classify(self, url: str) -> Classification:
        """Pure check of *url* against the tracked domains; never mutates state."""
        try:
            host = hostname_of(url)
            if not host:
                return Classification(None, False, DomainReason.INVALID)
            if host in self.domain_variants:
                return Classification(host, True, DomainReason.VARIANT)
            if host in self.related_subdomains:
                return Classification(host, True, DomainReason.RELATED)
            if host.startswith(_DOCS_PREFIXES) and self._is_subdomain(host):
                return Classification(host, True, DomainReason.DOCS_SUBDOMAIN, promote=True)
            if self._is_subdomain(host) and (
                is_documentation_url(url) or any(marker in host for marker in _HELP_MARKERS)
            ):
                return Classification(host, True, DomainReason.HELP_SUBDOMAIN, promote=True)
            return Classification(host, False, DomainReason.UNRELATED)
        except Exception as exc:  # malformed links must never stop the crawl
            logger.debug("Cannot classify %r: %s", url, exc)
            return Classification(None, False, DomainReason.INVALID)

    def record(self, url: str, classification: Classification) -> None:
        """Apply the side effects a classification asks for."""
        if not classification.promote or not classification.hostname:
            return
        host = classification.hostname
        if host not in self.known_docs_domains:
            logger.info("Documentation domain discovered: %s (via %s)", host, url)
        self.known_docs_domains.add(host)
        self.related_subdomains.add(host)

    def is_related_domain(self, url: str) -> bool:
        """Classify *url* and record any promotion it implies."""
        classification = self.classify(url)
        self.record(url, classification)
        return classification.related

    # ------------------------------------------------------------------ #
    # Redirects                                                           #
    # ------------------------------------------------------------------ #

    def add_domain(self, url: str) -> Optional[str]:
        """
        Register the hostname a redirect landed on.

        Returns the set name the host was added to, or None.
        """
        try:
            host = hostname_of(url)
            if not host:
                return None
            if host in (self.root_domain, "www." + self.root_domain, self.seed_hostname):
                self.domain_variants.add(host)
                logger.debug("Domain variant added: %s", host)
                return "domain_variants"
            if self._is_subdomain(host):
                self.related_subdomains.add(host)
                if is_documentation_url(url) or host.startswith(_DOCS_PREFIXES):
                    self.known_docs_domains.add(host)
                logger.debug("Related subdomain added: %s", host)
                return "related_subdomains"
        except Exception as exc:
            logger.debug("Cannot add domain from %r: %s", url, exc)
        return None

    def snapshot(self) -> Dict[str, List[str]]:
        return {
            "root_domain": [self.root_domain],
            "domain_variants": sorted(self.domain_variants),
            "related_subdomains": sorted(self.related_subdomains),
            "known_docs_domains": sorted(self.known_docs_domains),
        }
