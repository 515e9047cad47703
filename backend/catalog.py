"""
Catalog Module
Turns the label playlist into the list of releases served by the API

The pipeline is: token exchange -> paginated playlist retrieval ->
normalization. Each playlist entry becomes one Release; entries without a
track or album are dropped, and catalog numbers follow the entry's
position in the playlist, so dropped entries leave gaps.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional

from config import DEFAULT_CATALOG_PREFIX, DEFAULT_LABEL_NAME
from errors import ConfigurationError
from results import Result
from spotify_client import PAGE_SIZE, SpotifyClient

logger = logging.getLogger(__name__)

RELEASE_TYPE_SINGLE = 'single'
RELEASE_TYPE_EP = 'EP'
RELEASE_TYPE_ALBUM = 'album'

# Albums with this many tracks or fewer are treated as EPs
EP_MAX_TRACKS = 6


@dataclass(frozen=True)
class Release:
    """One normalized catalog entry"""
    catalog_number: str
    title: str
    primary_artist: str
    all_artists: tuple = ()
    release_date: Optional[str] = None
    cover_art_url: str = ''
    spotify_track_url: str = ''
    spotify_track_id: Optional[str] = None
    spotify_album_url: str = ''
    duration_ms: Optional[int] = None
    explicit: bool = False
    label: str = DEFAULT_LABEL_NAME
    release_type: str = RELEASE_TYPE_ALBUM
    platform_links: dict = field(default_factory=dict)
    added_to_playlist_at: Optional[str] = None

    def to_json(self) -> dict:
        """Wire representation used by the browsing frontend"""
        return {
            'catalogNumber': self.catalog_number,
            'title': self.title,
            'primaryArtist': self.primary_artist,
            'allArtists': list(self.all_artists),
            'releaseDate': self.release_date,
            'coverArtUrl': self.cover_art_url,
            'spotifyTrackUrl': self.spotify_track_url,
            'spotifyTrackId': self.spotify_track_id,
            'spotifyAlbumUrl': self.spotify_album_url,
            'durationMs': self.duration_ms,
            'explicit': self.explicit,
            'label': self.label,
            'releaseType': self.release_type,
            'platformLinks': dict(self.platform_links),
            'addedToPlaylistAt': self.added_to_playlist_at,
        }


# ============================================================================
# NORMALIZATION
# ============================================================================

def infer_release_type(album: dict) -> str:
    """
    Classify an album as single, EP or album

    A heuristic: Spotify's album_type wins for singles, then short albums
    count as EPs. An unknown track count falls through to 'album'.
    """
    if album.get('album_type') == 'single':
        return RELEASE_TYPE_SINGLE

    total_tracks = album.get('total_tracks')
    if total_tracks and total_tracks <= EP_MAX_TRACKS:
        return RELEASE_TYPE_EP

    return RELEASE_TYPE_ALBUM


def format_catalog_number(position: int, prefix: str = DEFAULT_CATALOG_PREFIX) -> str:
    """Catalog number for a 1-based playlist position, e.g. 7 -> OBL-007"""
    return f"{prefix}-{position:03d}"


def _spotify_url(obj: dict) -> str:
    return (obj.get('external_urls') or {}).get('spotify') or ''


def normalize_release(item: dict, position: int,
                      label: str = DEFAULT_LABEL_NAME,
                      prefix: str = DEFAULT_CATALOG_PREFIX) -> Optional[Release]:
    """
    Convert one playlist entry to a Release

    Args:
        item: Raw playlist entry ({'track': {...}, 'added_at': ...})
        position: 1-based position of the entry in the playlist
        label: Label name stamped on the release
        prefix: Catalog number prefix

    Returns:
        Release, or None if the entry has no track or the track has no album
    """
    track = item.get('track')
    if not track or track.get('album') is None:
        return None

    album = track['album']
    artists = [artist for artist in (track.get('artists') or []) if artist]
    images = [image for image in (album.get('images') or []) if image]
    track_url = _spotify_url(track)

    return Release(
        catalog_number=format_catalog_number(position, prefix),
        title=track.get('name'),
        primary_artist=(artists[0].get('name') or '') if artists else '',
        all_artists=tuple(artist.get('name') or '' for artist in artists),
        release_date=album.get('release_date'),
        cover_art_url=(images[0].get('url') or '') if images else '',
        spotify_track_url=track_url,
        spotify_track_id=track.get('id'),
        spotify_album_url=_spotify_url(album),
        duration_ms=track.get('duration_ms'),
        explicit=bool(track.get('explicit')),
        label=label,
        release_type=infer_release_type(album),
        platform_links={'spotify': track_url},
        added_to_playlist_at=item.get('added_at'),
    )


def normalize_releases(items: list, label: str = DEFAULT_LABEL_NAME,
                       prefix: str = DEFAULT_CATALOG_PREFIX) -> list:
    """
    Normalize playlist entries, keeping playlist order

    Skipped entries keep their position, so catalog numbers are never
    reassigned.
    """
    releases = []
    for position, item in enumerate(items, start=1):
        release = normalize_release(item or {}, position, label, prefix)
        if release is None:
            logger.debug(f"Skipping playlist entry {position}: missing track or album")
            continue
        releases.append(release)
    return releases


# ============================================================================
# PAGINATION
# ============================================================================

def iter_playlist_pages(fetch_page: Callable[[int, int], Result],
                        page_size: int = PAGE_SIZE) -> Iterator[Result]:
    """
    Lazily request playlist pages in increasing offset order

    Stops once the retrieved count reaches the reported total, after the
    first failed page, or on an empty page. Calling again starts over.

    Args:
        fetch_page: Callable taking (offset, limit) and returning a page Result
        page_size: Number of entries requested per page

    Yields:
        Page Results
    """
    offset = 0
    while True:
        result = fetch_page(offset, page_size)
        yield result
        if not result.ok:
            return

        page = result.value or {}
        page_items = page.get('items') or []
        total = page.get('total') or 0
        offset += len(page_items)

        if not page_items or offset >= total:
            return


def collect_playlist_items(pages) -> Result:
    """
    Concatenate page items in retrieval order

    Returns:
        Result holding the full item list, or the first page failure
    """
    items = []
    for result in pages:
        if not result.ok:
            return result
        items.extend((result.value or {}).get('items') or [])
    return Result.success(items)


# ============================================================================
# FETCHER
# ============================================================================

class CatalogFetcher:
    """
    Runs the full ingestion pipeline for one playlist
    """

    def __init__(self, client: SpotifyClient, playlist_id: Optional[str],
                 label: str = DEFAULT_LABEL_NAME,
                 prefix: str = DEFAULT_CATALOG_PREFIX,
                 page_size: int = PAGE_SIZE):
        self.client = client
        self.playlist_id = playlist_id
        self.label = label
        self.prefix = prefix
        self.page_size = page_size

    def fetch(self) -> Result:
        """
        Fetch and normalize the playlist

        Returns:
            Result holding the list of Releases
        """
        if not self.playlist_id:
            return Result.failure(
                ConfigurationError("Missing SPOTIFY_PLAYLIST_ID environment variable.")
            )

        token_result = self.client.get_access_token()
        if not token_result.ok:
            return token_result
        token = token_result.value

        def fetch_page(offset, limit):
            return self.client.get_playlist_page(token, self.playlist_id, offset, limit)

        items_result = collect_playlist_items(iter_playlist_pages(fetch_page, self.page_size))
        if not items_result.ok:
            return items_result

        items = items_result.value
        releases = normalize_releases(items, self.label, self.prefix)
        logger.info(f"Fetched {len(items)} playlist entries, "
                    f"{len(releases)} releases ({len(items) - len(releases)} skipped)")
        return Result.success(releases)
