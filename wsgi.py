"""WSGI entry point: ``gunicorn wsgi:application``."""
import os
from cspguard.app import create_app

# Config path falls back to CSPGUARD_CONFIG, then config.yaml
application = create_app(os.getenv('CSPGUARD_CONFIG'))

if __name__ == '__main__':
    config = application.config['CSPGUARD_CONFIG']
    application.run(host=config.host, port=config.port)
