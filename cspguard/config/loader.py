"""Configuration loader for CSP Guard."""
import yaml
import os
import logging
from typing import Optional
from pydantic import ValidationError

from cspguard.policy.filter import BlockConfig
from cspguard.security.gate import GateFlags
from cspguard.validation.schemas import CspSettings

logger = logging.getLogger(__name__)


class Config:
    """Application configuration."""

    def __init__(self, config_path: Optional[str] = None):
        """Load configuration from YAML file."""
        if config_path is None:
            config_path = os.getenv("CSPGUARD_CONFIG", "config.yaml")

        with open(config_path, 'r') as f:
            raw_config = yaml.safe_load(f) or {}

        # Server settings
        server = raw_config.get('server', {})
        self.port = server.get('port', 4750)
        self.host = server.get('host', '0.0.0.0')

        # Logging
        logging_config = raw_config.get('logging', {})
        self.log_level = logging_config.get('level', 'INFO')

        # CSP settings; a broken section disables the module instead of failing startup
        try:
            self.csp = CspSettings.model_validate(raw_config.get('csp') or {})
        except ValidationError as e:
            logger.error(f"Invalid csp configuration, nonce injection and domain blocking disabled: {e}")
            self.csp = CspSettings()

    @property
    def enabled(self) -> bool:
        return self.csp.enabled

    def gate_flags(self) -> GateFlags:
        """Flags consulted when deciding whether a request is excluded."""
        return GateFlags(
            enabled=self.csp.enabled,
            exclude_rest_api=self.csp.excludeRestApi,
            exclude_admin_token=self.csp.excludeAdminToken,
        )

    def blocked_domain_patterns(self):
        """Blocked domain patterns; empty when third-party blocking is off."""
        if not self.csp.blockThirdPartyDomains:
            return []
        return list(self.csp.blockedDomains)

    def block_config(self) -> BlockConfig:
        return BlockConfig(
            enabled=self.csp.blockThirdPartyDomains,
            patterns=tuple(self.blocked_domain_patterns()),
        )
