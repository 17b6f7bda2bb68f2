"""Serve the built single-page frontend with client-side routing fallback."""

import os

from flask import Blueprint, current_app, jsonify, request, send_from_directory

spa_bp = Blueprint('spa', __name__)


def _static_dir():
    return current_app.config['STATIC_DIR']


@spa_bp.route('/')
def serve_index():
    return send_from_directory(_static_dir(), 'index.html')


@spa_bp.route('/<path:filename>')
def serve_asset(filename):
    """Serve a built asset, or index.html so the client router can take over."""
    if '/api/' in f'/{filename}':
        return jsonify({'error': 'Not found'}), 404
    if os.path.isfile(os.path.join(_static_dir(), filename)):
        return send_from_directory(_static_dir(), filename)
    return send_from_directory(_static_dir(), 'index.html')


@spa_bp.app_errorhandler(404)
def not_found(e):
    if request.method == 'GET' and '/api/' not in request.path:
        return send_from_directory(_static_dir(), 'index.html')
    return jsonify({'error': 'Not found'}), 404
