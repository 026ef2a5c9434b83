"""CSP nonce generation and script tag injection."""
import re
import secrets
import logging
from typing import Protocol

logger = logging.getLogger(__name__)

# Opening <script ...> tag that does not already carry a nonce attribute
SCRIPT_TAG_RE = re.compile(
    r'(<script\b)(?![^>]*?(?<![\w-])nonce\s*=)([^>]*)>',
    re.IGNORECASE | re.DOTALL,
)
NONCE_ATTR_RE = re.compile(r'(?<![\w-])nonce\s*=', re.IGNORECASE)


class NonceSource(Protocol):
    def next(self) -> str: ...


class SecretsNonceSource:
    """Cryptographically secure nonce generator."""

    def __init__(self, nbytes: int = 16):
        self.nbytes = nbytes

    def next(self) -> str:
        # urlsafe base64 never contains quotes or angle brackets
        return secrets.token_urlsafe(self.nbytes)


def _rewrite(html: str, nonce: str, count: int) -> str:
    def add_nonce(match):
        attributes = match.group(2).strip()
        if attributes:
            return f'{match.group(1)} nonce="{nonce}" {attributes}>'
        return f'{match.group(1)} nonce="{nonce}">'

    try:
        # Openings after the last '>' can never complete a tag; keep them out of the scan
        end = html.rfind('>') + 1
        return SCRIPT_TAG_RE.sub(add_nonce, html[:end], count=count) + html[end:]
    except Exception as e:
        logger.error(f"Failed to add nonce to script tags: {e}")
        return html


def inject(html: str, nonce: str) -> str:
    """
    Add ``nonce="..."`` to every script tag that does not have one yet.

    The attribute goes right after the tag name; existing attributes keep
    their order. Tags that already declare a nonce are left untouched, so
    running this twice gives the same result as running it once.
    """
    if not html or '<script' not in html.lower():
        return html
    return _rewrite(html, nonce, count=0)


def inject_first(tag: str, nonce: str) -> str:
    """Add a nonce to the first script tag only (single rendered tag)."""
    if not tag:
        return tag
    return _rewrite(tag, nonce, count=1)


def declares_nonce(tag: str) -> bool:
    """Check whether markup already declares a nonce attribute."""
    return NONCE_ATTR_RE.search(tag) is not None
