"""
Excluded Domains
Hosts on which no rewriting is attempted, with the reason for each.
"""

import logging
from typing import Dict, Optional

from .services.vocabulary_service import get_vocabulary_service

logger = logging.getLogger(__name__)


def _normalize_host(host: str) -> str:
    host = (host or '').strip().lower().rstrip('.')
    # location.host carries the port
    if ':' in host:
        host = host.split(':', 1)[0]
    return host


class DomainExclusions:
    """Lookup of excluded domains; subdomains inherit their parent's exclusion."""

    def __init__(self, domains: Optional[Dict[str, str]] = None):
        if domains is None:
            domains = get_vocabulary_service().get_excluded_domains().get('excluded_domains') or {}
        self._domains = {_normalize_host(domain): str(reason) for domain, reason in domains.items()}

    def _matching_domain(self, host: str) -> Optional[str]:
        host = _normalize_host(host)
        while host:
            if host in self._domains:
                return host
            if '.' not in host:
                return None
            host = host.split('.', 1)[1]
        return None

    def in_excluded_domain(self, host: str) -> bool:
        return self._matching_domain(host) is not None

    def get_why_excluded(self, host: str) -> Optional[str]:
        domain = self._matching_domain(host)
        return self._domains[domain] if domain else None


_domain_exclusions: Optional[DomainExclusions] = None


def get_domain_exclusions() -> DomainExclusions:
    """Get the process-wide exclusion list."""
    global _domain_exclusions
    if _domain_exclusions is None:
        _domain_exclusions = DomainExclusions()
    return _domain_exclusions
