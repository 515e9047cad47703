"""
Spotify API Client

Handles the network side of catalog ingestion:
- Client-credentials token exchange
- Playlist page retrieval

Every call returns a Result. Failures carry UpstreamAuthError or
UpstreamFetchError with the upstream body embedded; nothing is retried
and no token is kept between calls.
"""

import base64
import logging
from typing import Optional

import requests

from errors import ConfigurationError, UpstreamAuthError, UpstreamFetchError
from results import Result

logger = logging.getLogger(__name__)

TOKEN_URL = 'https://accounts.spotify.com/api/token'
API_BASE_URL = 'https://api.spotify.com/v1'
PAGE_SIZE = 100


class SpotifyClient:
    """
    Thin Spotify Web API client for the catalog fetcher
    """

    def __init__(self, client_id: Optional[str], client_secret: Optional[str],
                 session: Optional[requests.Session] = None,
                 token_url: str = TOKEN_URL, api_base_url: str = API_BASE_URL):
        """
        Initialize Spotify Client

        Args:
            client_id: Spotify application client id
            client_secret: Spotify application client secret
            session: Optional requests session (a new one is created if not provided)
            token_url: Token endpoint
            api_base_url: Web API base URL
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.session = session or requests.Session()
        self.token_url = token_url
        self.api_base_url = api_base_url.rstrip('/')

    # ========================================================================
    # AUTHENTICATION
    # ========================================================================

    def get_access_token(self) -> Result:
        """
        Exchange the client credentials for a bearer token

        Returns:
            Result holding the access token, or a ConfigurationError /
            UpstreamAuthError failure
        """
        if not self.client_id or not self.client_secret:
            logger.error("Spotify credentials not found in environment variables")
            return Result.failure(ConfigurationError("Missing Spotify credentials."))

        credentials = f"{self.client_id}:{self.client_secret}"
        credentials_b64 = base64.b64encode(credentials.encode()).decode()

        try:
            response = self.session.post(
                self.token_url,
                headers={
                    'Authorization': f'Basic {credentials_b64}',
                    'Content-Type': 'application/x-www-form-urlencoded'
                },
                data={'grant_type': 'client_credentials'}
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Failed to reach Spotify token endpoint: {e}")
            return Result.failure(UpstreamAuthError(f"Spotify token error: {e}"))

        if not response.ok:
            logger.error(f"Spotify token exchange failed: {response.status_code} - {response.text}")
            return Result.failure(UpstreamAuthError(f"Spotify token error: {response.text}"))

        try:
            access_token = response.json()['access_token']
        except (ValueError, KeyError):
            logger.error(f"Unexpected Spotify token response: {response.text}")
            return Result.failure(UpstreamAuthError(f"Spotify token error: {response.text}"))

        logger.debug("Spotify authentication successful")
        return Result.success(access_token)

    # ========================================================================
    # PLAYLISTS
    # ========================================================================

    def get_playlist_page(self, token: str, playlist_id: str,
                          offset: int = 0, limit: int = PAGE_SIZE) -> Result:
        """
        Retrieve one page of playlist entries

        Args:
            token: Bearer token from get_access_token()
            playlist_id: Spotify playlist id
            offset: Index of the first entry to return
            limit: Page size

        Returns:
            Result holding the raw page ({'items': [...], 'total': n, ...})
        """
        url = f"{self.api_base_url}/playlists/{playlist_id}/tracks"
        try:
            response = self.session.get(
                url,
                params={'limit': limit, 'offset': offset},
                headers={'Authorization': f'Bearer {token}'}
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Failed to reach Spotify playlist endpoint: {e}")
            return Result.failure(UpstreamFetchError(f"Spotify playlist error: {e}"))

        if not response.ok:
            logger.error(f"Spotify playlist page failed (offset={offset}): "
                         f"{response.status_code} - {response.text}")
            return Result.failure(UpstreamFetchError(f"Spotify playlist error: {response.text}"))

        try:
            page = response.json()
        except ValueError:
            logger.error(f"Unexpected Spotify playlist response (offset={offset}): {response.text}")
            return Result.failure(UpstreamFetchError(f"Spotify playlist error: {response.text}"))

        logger.debug(f"Fetched playlist page offset={offset} limit={limit}")
        return Result.success(page)
