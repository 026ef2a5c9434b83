"""Unit tests for configuration loader."""
import pytest
from cspguard.config.loader import Config
from cspguard.policy.filter import BlockConfig


def test_config_loading(sample_config):
    """Test basic configuration loading."""
    config = Config(sample_config)
    assert config.port == 4750
    assert config.log_level == "DEBUG"
    assert config.enabled is True

    flags = config.gate_flags()
    assert flags.enabled is True
    assert flags.exclude_rest_api is True
    assert flags.exclude_admin_token is True

    assert config.blocked_domain_patterns() == ["*.doubleclick.net", "ads.*"]
    assert config.block_config() == BlockConfig(enabled=True, patterns=("*.doubleclick.net", "ads.*"))
    assert [p.id for p in config.csp.policies] == ['default-src', 'script-src', 'img-src', 'style-src']


def test_config_blocked_domains_as_list(write_config):
    """Test blocked domains given as a YAML list."""
    config = Config(write_config("""
csp:
  blockThirdPartyDomains: true
  blockedDomains:
    - " *.evil.com "
    - ""
    - ads.*
"""))
    assert config.blocked_domain_patterns() == ["*.evil.com", "ads.*"]


def test_config_blocking_disabled_has_no_patterns(write_config):
    """Test that patterns are ignored while blocking is off."""
    config = Config(write_config("""
csp:
  enabled: true
  blockThirdPartyDomains: false
  blockedDomains: "*.evil.com"
"""))
    assert config.blocked_domain_patterns() == []
    assert config.block_config().enabled is False


def test_config_defaults(write_config):
    """Test an empty file gives disabled defaults."""
    config = Config(write_config(""))
    assert config.port == 4750
    assert config.log_level == "INFO"
    assert config.enabled is False
    assert config.gate_flags().enabled is False
    assert config.csp.policies == []


def test_config_invalid_csp_section_disables_module(write_config):
    """Test that an invalid csp section falls back to disabled defaults."""
    config = Config(write_config("""
csp:
  enabled: true
  blockThirdPartyDomains: true
  blockedDomains: 42
"""))
    assert config.enabled is False
    assert config.block_config() == BlockConfig()


def test_config_scheme_colons_stripped(sample_config):
    """Test scheme sources are stored without a trailing colon."""
    config = Config(sample_config)
    img = [p for p in config.csp.policies if p.id == 'img-src'][0]
    assert img.schemes == ['data', 'https']


def test_config_missing_file(temp_dir):
    """Test that a missing config file raises."""
    with pytest.raises(FileNotFoundError):
        Config(f"{temp_dir}/missing.yaml")
