import time
import logging

import requests
from spotipy.exceptions import SpotifyException
from spotipy.oauth2 import SpotifyOauthError

from errors import RemoteAppendError, RemoteFetchError

log = logging.getLogger(__name__)

# Spotify API allows max 100 tracks per add request
MAX_BATCH_SIZE = 100

PLAYLIST_ITEM_FIELDS = "items(track(id,type)),next"

REMOTE_ERRORS = (SpotifyException, SpotifyOauthError, requests.exceptions.RequestException)


def parse_retry_after(headers, default=5):
    """Seconds from a Retry-After header, `default` when missing or not a whole number."""
    try:
        return max(0, int((headers or {}).get("Retry-After", default)))
    except (TypeError, ValueError):
        return default


# === Helper to handle rate limit ===
def safe_spotify_call(func, *args, **kwargs):
    """Wrap Spotify calls to handle 429 errors (Too Many Requests)."""
    while True:
        try:
            return func(*args, **kwargs)
        except SpotifyException as e:
            if e.http_status == 429:
                retry_after = parse_retry_after(e.headers)
                log.warning(f"⚠️ Rate limited. Retrying after {retry_after} seconds...")
                time.sleep(retry_after + 1)
            else:
                raise


def get_track_ids(items):
    """Track IDs of playlist items, skipping removed tracks, local files and episodes."""
    ids = []
    for item in items:
        track = item.get('track')
        if not track or track.get('type', 'track') != 'track':
            continue
        if track.get('id'):
            ids.append(track['id'])
    return ids


class SpotifyPlaylistGateway:
    """
    Lists and appends playlist tracks through spotipy.

    `spotify_manager` is anything with a get_client() returning a spotipy.Spotify,
    asked again before every request so that long-running processes keep a fresh token.
    """

    def __init__(self, spotify_manager, batch_size=MAX_BATCH_SIZE):
        if not 0 < batch_size <= MAX_BATCH_SIZE:
            raise ValueError(f"batch_size must be between 1 and {MAX_BATCH_SIZE}")
        self.spotify_manager = spotify_manager
        self.batch_size = batch_size

    def list_tracks(self, playlist_id):
        """Return every track ID of a playlist in playlist order, following all pages."""
        try:
            sp = self.spotify_manager.get_client()
            results = safe_spotify_call(
                sp.playlist_items,
                playlist_id,
                fields=PLAYLIST_ITEM_FIELDS,
                additional_types=('track',),
            )
            track_ids = get_track_ids(results['items'])

            while results.get('next'):
                results = safe_spotify_call(sp.next, results)
                track_ids.extend(get_track_ids(results['items']))
        except REMOTE_ERRORS as e:
            raise RemoteFetchError(playlist_id, f"failed to fetch playlist tracks: {e}") from e

        log.debug(f"📥 Fetched {len(track_ids)} tracks from playlist {playlist_id}")
        return track_ids

    def append_tracks(self, playlist_id, track_ids):
        """
        Add tracks to a playlist in order, at most `batch_size` per request.

        Batches go out one after another; the first failing batch stops the rest
        and raises RemoteAppendError with that batch's index range.
        """
        total_batches = -(-len(track_ids) // self.batch_size)

        for i in range(0, len(track_ids), self.batch_size):
            batch = track_ids[i:i + self.batch_size]
            end = i + len(batch) - 1
            try:
                sp = self.spotify_manager.get_client()
                safe_spotify_call(sp.playlist_add_items, playlist_id, batch)
            except REMOTE_ERRORS as e:
                raise RemoteAppendError(playlist_id, i, end) from e
            log.debug(f"   Added batch {i // self.batch_size + 1}/{total_batches} to playlist {playlist_id}")
