"""CSP policy model and filtering."""
from cspguard.policy.models import FetchPolicy, FlagPolicy
from cspguard.policy.filter import BlockConfig, filter_policies
from cspguard.policy.collector import ConfigPolicyCollector, FilteringPolicyCollector

__all__ = ['FetchPolicy', 'FlagPolicy', 'BlockConfig', 'filter_policies',
           'ConfigPolicyCollector', 'FilteringPolicyCollector']
