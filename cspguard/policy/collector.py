"""Policy collectors."""
from typing import Callable, List, Protocol

from cspguard.policy.filter import BlockConfig, filter_policies
from cspguard.policy.models import FetchPolicy, FlagPolicy


class PolicyCollector(Protocol):
    def collect(self) -> List: ...


class ConfigPolicyCollector:
    """Build policy records from the ``csp`` section of the configuration."""

    def __init__(self, settings):
        self.settings = settings

    def collect(self) -> List:
        policies = []
        for spec in self.settings.policies:
            policies.append(FetchPolicy(
                id=spec.id,
                report_only=spec.reportOnly,
                host_sources=tuple(spec.hosts),
                scheme_sources=tuple(spec.schemes),
                self_allowed=spec.selfAllowed,
                inline_allowed=spec.inlineAllowed,
                eval_allowed=spec.evalAllowed,
                nonce_values=tuple(spec.nonces),
                hashes=tuple(spec.hashes),
                dynamic_allowed=spec.dynamicAllowed,
                event_handlers_allowed=spec.eventHandlersAllowed,
            ))
        for flag in self.settings.flags:
            policies.append(FlagPolicy(id=flag))
        return policies


class FilteringPolicyCollector:
    """
    Wrap another collector and filter whatever it returns.

    The block configuration is read through ``block_config_provider`` on
    every call so a config reload takes effect on the next collection.
    """

    def __init__(self, inner: PolicyCollector, block_config_provider: Callable[[], BlockConfig],
                 remove_unsafe: bool = True):
        self.inner = inner
        self.block_config_provider = block_config_provider
        self.remove_unsafe = remove_unsafe

    def collect(self) -> List:
        policies = self.inner.collect()
        return filter_policies(policies, self.block_config_provider(), self.remove_unsafe)
