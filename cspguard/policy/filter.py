"""Filtering of collected CSP policies."""
import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from cspguard.policy.domains import is_blocked
from cspguard.policy.models import FetchPolicy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BlockConfig:
    """Third-party blocking settings for one request."""
    enabled: bool = False
    patterns: Tuple[str, ...] = ()


def remove_unsafe_policies(policies: Sequence) -> List:
    """Strip unsafe-inline and unsafe-eval, keeping 'self', hosts, schemes and nonces."""
    result = []
    for policy in policies:
        if isinstance(policy, FetchPolicy) and (policy.inline_allowed or policy.eval_allowed):
            logger.debug(f"Removing unsafe-inline/unsafe-eval from {policy.id}")
            policy = policy.without_unsafe()
        result.append(policy)
    return result


def filter_blocked_hosts(policies: Sequence, block_config: BlockConfig) -> List:
    """Drop host sources matching a blocked domain pattern."""
    if not block_config.enabled:
        return list(policies)

    result = []
    for policy in policies:
        if isinstance(policy, FetchPolicy):
            hosts = [h for h in policy.host_sources if not is_blocked(h, block_config.patterns)]
            if len(hosts) != len(policy.host_sources):
                logger.debug(
                    f"Blocked hosts removed from {policy.id}: "
                    f"{[h for h in policy.host_sources if h not in hosts]}"
                )
                policy = policy.with_hosts(hosts)
        result.append(policy)
    return result


def filter_policies(policies: Sequence, block_config: BlockConfig, remove_unsafe: bool = True) -> List:
    """
    Apply unsafe removal, then third-party host filtering, to every policy.

    Order and count are preserved; only fields inside a policy change.
    Returns the input unmodified if filtering fails.
    """
    try:
        result = list(policies)
        if remove_unsafe:
            result = remove_unsafe_policies(result)
        return filter_blocked_hosts(result, block_config)
    except Exception as e:
        logger.error(f"Failed to filter CSP policies: {e}")
        return list(policies)
