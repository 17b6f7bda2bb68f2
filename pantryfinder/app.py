"""App factory for the PantryFinder API server.

- Loads settings from the environment (see ``config.py``)
- Opens the SQLite store and makes sure the schema exists
- Mounts the API blueprint under ``BASE_PATH``/``BASE_URL``, or at ``/``
  when that value cannot be used
- Serves the built frontend in production
"""

import logging
import os

from dotenv import load_dotenv
from flask import Flask

from .api import api_bp
from .base_path import safe_mount
from .config import load_config
from .db import PantryStore
from .static_serve import spa_bp


def create_app(test_config=None, store=None):
    app = Flask(__name__)
    app.config.from_mapping(load_config())
    if test_config:
        app.config.from_mapping(test_config)

    if store is None:
        store = PantryStore(app.config['DATABASE'])
        store.init_schema()
    app.extensions['pantryfinder.store'] = store
    app.logger.info('Using database at %s', store.path)

    @app.route('/health')
    def health_check():
        """Health check endpoint"""
        return {'status': 'healthy', 'service': 'PantryFinder Backend'}

    app.config['MOUNT_PATH'] = safe_mount(app, app.config['BASE_PATH'], api_bp)

    if app.config['SERVE_STATIC']:
        app.logger.info('Serving frontend from %s', app.config['STATIC_DIR'])
        app.register_blueprint(spa_bp)

    return app


def configure_logging():
    logging.basicConfig(
        level=os.environ.get('LOG_LEVEL', 'INFO').upper(),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )


def main():
    load_dotenv()
    configure_logging()
    app = create_app()
    app.run(host='0.0.0.0', port=app.config['PORT'])
