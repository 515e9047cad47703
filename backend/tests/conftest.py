"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
from pathlib import Path
from unittest.mock import Mock

# Backend modules are imported as top-level modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import Settings


def make_response(status_code=200, json_data=None, text=''):
    """Build a fake requests.Response."""
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.json = Mock(return_value=json_data)
    response.text = text
    return response


def make_item(position, album_type='album', total_tracks=10, with_album=True, with_track=True):
    """Build a raw Spotify playlist entry."""
    if not with_track:
        return {'added_at': '2024-01-01T00:00:00Z', 'track': None}

    track = {
        'id': f'track{position}',
        'name': f'Track {position}',
        'artists': [{'name': f'Artist {position}'}, {'name': 'Featured'}],
        'duration_ms': 180000 + position,
        'explicit': False,
        'external_urls': {'spotify': f'https://open.spotify.com/track/track{position}'},
    }
    if with_album:
        track['album'] = {
            'album_type': album_type,
            'total_tracks': total_tracks,
            'release_date': '2024-05-01',
            'images': [{'url': f'https://i.scdn.co/image/cover{position}'}],
            'external_urls': {'spotify': f'https://open.spotify.com/album/album{position}'},
        }
    return {'added_at': '2024-06-01T12:00:00Z', 'track': track}


def make_page(items, total, offset=0):
    """Build a raw Spotify playlist page."""
    return {'items': items, 'total': total, 'offset': offset, 'limit': 100}


@pytest.fixture
def settings():
    """Fully configured settings."""
    return Settings(
        spotify_client_id='client-id',
        spotify_client_secret='client-secret',
        spotify_playlist_id='playlist123',
        discord_webhook_url='https://discord.com/api/webhooks/1/abc',
    )


@pytest.fixture
def mock_session():
    """Fake requests.Session with post/get mocks."""
    session = Mock()
    session.post = Mock()
    session.get = Mock()
    return session


class FakeClock:
    """Manually advanced clock for cache tests."""

    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()
