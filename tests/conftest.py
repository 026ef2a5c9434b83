"""Pytest configuration and fixtures."""
import pytest
import tempfile
import os
import shutil
from flask import render_template_string
from cspguard.app import create_app


SAMPLE_CONFIG = """
server:
  port: 4750
  host: "0.0.0.0"

logging:
  level: "DEBUG"

csp:
  enabled: true
  excludeRestApi: true
  excludeAdminToken: true
  blockThirdPartyDomains: true
  blockedDomains: |
    *.doubleclick.net

    ads.*
  flags:
    - upgrade-insecure-requests
  policies:
    - id: default-src
      selfAllowed: true
    - id: script-src
      selfAllowed: true
      inlineAllowed: true
      evalAllowed: true
      hosts:
        - ads.tracker.com
        - cdn.shop.com
        - stats.g.doubleclick.net
    - id: img-src
      selfAllowed: true
      schemes: ["data:", "https"]
    - id: style-src
      reportOnly: true
      selfAllowed: true
"""

PAGE_HTML = (
    '<html><head><script type="text/x-magento-init" id="init">{}</script></head>'
    '<body><script nonce="existing">ok()</script><SCRIPT src="/app.js"></SCRIPT></body></html>'
)


@pytest.fixture
def temp_dir():
    """Create a temporary directory."""
    temp = tempfile.mkdtemp()
    yield temp
    shutil.rmtree(temp)


@pytest.fixture
def write_config(temp_dir):
    """Write YAML content to a config file and return its path."""
    def _write(content, name='config.yaml'):
        config_path = os.path.join(temp_dir, name)
        with open(config_path, 'w') as f:
            f.write(content)
        return config_path
    return _write


@pytest.fixture
def sample_config(write_config):
    """Create a sample configuration file."""
    return write_config(SAMPLE_CONFIG)


@pytest.fixture
def app(sample_config):
    """Create Flask app for testing, with a few HTML pages."""
    app = create_app(sample_config)
    app.config['TESTING'] = True

    @app.route('/page')
    def page():
        return PAGE_HTML

    @app.route('/rest/V1/products')
    def rest_products():
        return PAGE_HTML

    @app.route('/integration/admin/token')
    def admin_token():
        return PAGE_HTML

    @app.route('/plain')
    def plain():
        return '<html><body><p>no scripts here</p></body></html>'

    @app.route('/template')
    def template():
        return render_template_string(
            '<html><body>'
            '{{ csp_script("init()", type_="text/javascript", data_role="boot") }}'
            '<script nonce="{{ csp_nonce() }}">later()</script>'
            '</body></html>'
        )

    yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()
