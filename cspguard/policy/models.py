"""CSP policy records."""
from dataclasses import dataclass, replace
from typing import Tuple


@dataclass(frozen=True)
class FetchPolicy:
    """
    One fetch directive (``script-src``, ``img-src``...) and its sources.

    Records are immutable: use the ``with_*`` helpers (or
    ``dataclasses.replace``) to derive a changed copy.
    """
    id: str
    report_only: bool = False
    host_sources: Tuple[str, ...] = ()
    scheme_sources: Tuple[str, ...] = ()
    self_allowed: bool = False
    inline_allowed: bool = False
    eval_allowed: bool = False
    nonce_values: Tuple[str, ...] = ()
    hashes: Tuple[str, ...] = ()
    dynamic_allowed: bool = False
    event_handlers_allowed: bool = False

    def with_hosts(self, hosts) -> 'FetchPolicy':
        return replace(self, host_sources=tuple(hosts))

    def with_nonce(self, nonce: str) -> 'FetchPolicy':
        if nonce in self.nonce_values:
            return self
        return replace(self, nonce_values=self.nonce_values + (nonce,))

    def without_unsafe(self) -> 'FetchPolicy':
        """Copy with unsafe-inline/unsafe-eval off and enforced (not report-only)."""
        return replace(self, report_only=False, inline_allowed=False, eval_allowed=False)


@dataclass(frozen=True)
class FlagPolicy:
    """A directive without sources, e.g. ``upgrade-insecure-requests``."""
    id: str
    report_only: bool = False
