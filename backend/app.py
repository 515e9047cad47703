"""
Obsidian Labs API Backend
A Flask API serving the label catalog and forwarding site forms
"""

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException
import logging
import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from config import Settings, configure_logging, init_app_config
from catalog import CatalogFetcher
from catalog_cache import CatalogCache
from errors import LabelApiError
from notification_service import DiscordNotifier
from spotify_client import SpotifyClient

logger = configure_logging()


def build_catalog_cache(settings: Settings) -> CatalogCache:
    """Wire the Spotify client, fetcher and cache from settings"""
    client = SpotifyClient(settings.spotify_client_id, settings.spotify_client_secret)
    fetcher = CatalogFetcher(
        client,
        settings.spotify_playlist_id,
        label=settings.label_name,
        prefix=settings.catalog_prefix
    )
    return CatalogCache(fetcher, ttl=settings.cache_ttl_seconds)


def register_error_handlers(app):
    """Convert errors into JSON responses"""

    @app.errorhandler(LabelApiError)
    def handle_label_api_error(error):
        logger.warning(f"{request.method} {request.path} failed: {error.message}")
        return jsonify({'error': error.message}), error.status_code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        # Let Flask render its own HTTP errors (404, 405, ...)
        if isinstance(error, HTTPException):
            return error
        logger.error(f"Unhandled error on {request.method} {request.path}: {error}", exc_info=True)
        return jsonify({'error': 'Internal server error'}), 500


def create_app(settings: Settings = None, catalog_cache: CatalogCache = None,
               notifier: DiscordNotifier = None) -> Flask:
    """
    Create the Flask application

    Args:
        settings: Settings to use (read from the environment if not provided)
        catalog_cache: Catalog cache (built from settings if not provided)
        notifier: Webhook notifier (built from settings if not provided)

    Returns:
        Configured Flask app
    """
    settings = settings or Settings.from_env()

    app = Flask(__name__)
    CORS(app)
    init_app_config(app, settings)

    app.extensions['catalog_cache'] = catalog_cache or build_catalog_cache(settings)
    app.extensions['notifier'] = notifier or DiscordNotifier(
        settings.discord_webhook_url, username=settings.label_name
    )

    logger.info(f"Spotify credentials present: {bool(settings.spotify_client_id)}")
    logger.info(f"Discord webhook configured: {bool(settings.discord_webhook_url)}")

    from routes import register_blueprints
    register_blueprints(app)
    register_error_handlers(app)

    # Request/response logging
    @app.before_request
    def log_request():
        """Log incoming requests"""
        logger.info(f"{request.method} {request.path}")

    @app.after_request
    def log_response(response):
        """Log response status"""
        logger.info(f"{request.method} {request.path} - {response.status_code}")
        return response

    return app


app = create_app()


if __name__ == '__main__':
    # Running directly with 'python app.py' (not gunicorn)
    port = app.config['SETTINGS'].port
    logger.info(f"Obsidian Labs API running on port {port} (PID {os.getpid()})")
    app.run(host='0.0.0.0', port=port)
