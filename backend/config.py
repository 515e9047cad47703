"""
Configuration Module for the Obsidian Labs API
Handles logging setup, environment settings and Flask app initialization
"""

import os
import logging
from dataclasses import dataclass
from typing import Optional

DEFAULT_PORT = 4000
DEFAULT_CACHE_TTL_SECONDS = 10 * 60
DEFAULT_LABEL_NAME = 'Obsidian Labs'
DEFAULT_CATALOG_PREFIX = 'OBL'


def configure_logging():
    """
    Configure application logging with standard format

    LOG_LEVEL can override the default INFO level.

    Returns:
        Logger instance for the config module
    """
    level = os.environ.get('LOG_LEVEL', 'INFO').upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    return logging.getLogger(__name__)


def _env(name: str) -> Optional[str]:
    """Read an environment variable, treating blank values as unset"""
    value = os.environ.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class Settings:
    """Environment-sourced settings. Unset values are None."""
    spotify_client_id: Optional[str] = None
    spotify_client_secret: Optional[str] = None
    spotify_playlist_id: Optional[str] = None
    discord_webhook_url: Optional[str] = None
    port: int = DEFAULT_PORT
    cache_ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS
    label_name: str = DEFAULT_LABEL_NAME
    catalog_prefix: str = DEFAULT_CATALOG_PREFIX

    @classmethod
    def from_env(cls) -> 'Settings':
        """
        Build settings from the process environment

        Call load_dotenv() first if a .env file should be honoured.
        """
        return cls(
            spotify_client_id=_env('SPOTIFY_CLIENT_ID'),
            spotify_client_secret=_env('SPOTIFY_CLIENT_SECRET'),
            spotify_playlist_id=_env('SPOTIFY_PLAYLIST_ID'),
            discord_webhook_url=_env('DISCORD_WEBHOOK_URL'),
            port=int(_env('PORT') or DEFAULT_PORT),
            cache_ttl_seconds=float(_env('CATALOG_CACHE_TTL_SECONDS') or DEFAULT_CACHE_TTL_SECONDS),
            label_name=_env('LABEL_NAME') or DEFAULT_LABEL_NAME,
            catalog_prefix=_env('CATALOG_PREFIX') or DEFAULT_CATALOG_PREFIX,
        )


def init_app_config(app, settings: Settings):
    """
    Initialize Flask app configuration

    This sets up:
    - Custom JSON provider for releases and dates
    - The settings object, reachable as app.config['SETTINGS']

    Args:
        app: Flask application instance
        settings: Settings to attach to the app
    """
    from utils.json_provider import CustomJSONProvider
    app.json = CustomJSONProvider(app)
    app.json.sort_keys = False
    app.config['SETTINGS'] = settings
