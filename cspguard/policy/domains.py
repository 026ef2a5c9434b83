"""Wildcard domain matching for the third-party blocklist."""
import re
from functools import lru_cache
from typing import Iterable, List, Pattern


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> Pattern:
    """
    Compile a wildcard domain pattern into an anchored regex.

    ``*`` matches any run of characters (including none). Everything else,
    dots included, matches literally. Matching is case-insensitive.
    """
    body = '.*'.join(re.escape(part) for part in pattern.split('*'))
    return re.compile(body, re.IGNORECASE | re.DOTALL)


def matches(host: str, pattern: str) -> bool:
    """Check whether a host matches a single wildcard pattern."""
    return compile_pattern(pattern).fullmatch(host) is not None


def is_blocked(host: str, patterns: Iterable[str]) -> bool:
    """Check whether a host matches any of the blocked patterns."""
    return any(matches(host, pattern) for pattern in patterns)


def parse_patterns(text: str) -> List[str]:
    """Split newline-delimited pattern text, dropping blank lines."""
    if not text:
        return []
    return [line.strip() for line in text.split('\n') if line.strip()]
