"""Main Flask application."""
import os
import logging
from flask import Flask, jsonify, current_app
from flask_cors import CORS
from cspguard.config.loader import Config
from cspguard.policy.collector import ConfigPolicyCollector, FilteringPolicyCollector
from cspguard.policy.models import FetchPolicy
from cspguard.security.headers import apply_security_headers, render_policies
from cspguard.security.templating import register_template_helpers


def create_app(config_path: str = None):
    """Create and configure Flask application."""
    app = Flask(__name__)

    # Enable CORS
    CORS(app)

    # Load configuration
    try:
        config = Config(config_path)
        app.config['CSPGUARD_CONFIG'] = config
    except Exception as e:
        logging.error(f"Failed to load configuration: {e}")
        raise

    # Configure logging
    logging.basicConfig(
        level=getattr(logging, str(config.log_level).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # Policies from config, with unsafe sources and blocked hosts filtered out
    app.config['CSP_COLLECTOR'] = FilteringPolicyCollector(
        ConfigPolicyCollector(config.csp),
        lambda: current_app.config['CSPGUARD_CONFIG'].block_config(),
    )

    apply_security_headers(app)
    register_template_helpers(app)

    app.logger.info(
        f"CSP nonce injection {'enabled' if config.enabled else 'disabled'}, "
        f"{len(config.blocked_domain_patterns())} blocked domain pattern(s)"
    )

    # Health check endpoint
    @app.route('/health', methods=['GET'])
    def health_check():
        """Health check endpoint for Docker healthchecks."""
        return jsonify({'status': 'ok'}), 200

    @app.route('/api/csp/policies', methods=['GET'])
    def csp_policies():
        """Show the filtered policy set and the headers it renders to."""
        policies = current_app.config['CSP_COLLECTOR'].collect()
        return jsonify({
            'policies': [
                {
                    'id': p.id,
                    'reportOnly': p.report_only,
                    'hosts': list(p.host_sources),
                    'schemes': list(p.scheme_sources),
                    'selfAllowed': p.self_allowed,
                    'inlineAllowed': p.inline_allowed,
                    'evalAllowed': p.eval_allowed,
                } if isinstance(p, FetchPolicy) else {'id': p.id, 'reportOnly': p.report_only}
                for p in policies
            ],
            'headers': render_policies(policies),
        }), 200

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'error': 'not_found', 'message': 'Resource not found'}), 404

    @app.errorhandler(500)
    def internal_error(error):
        app.logger.error(f"500 Internal Server Error: {error}")
        return jsonify({'error': 'internal_error', 'message': 'Internal server error'}), 500

    return app


if __name__ == '__main__':
    config_path = os.getenv('CSPGUARD_CONFIG', 'config.yaml')
    app = create_app(config_path)
    config = app.config['CSPGUARD_CONFIG']
    app.run(host=config.host, port=config.port, debug=False)
