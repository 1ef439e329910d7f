"""Test configuration and fixtures"""

import pytest

from errors import RemoteAppendError, RemoteFetchError


class FakeGateway:
    """In-memory playlists standing in for SpotifyPlaylistGateway."""

    def __init__(self, playlists=None):
        self.playlists = {pid: list(tracks) for pid, tracks in (playlists or {}).items()}
        self.failing_fetch = set()
        self.failing_append = set()
        self.fetch_calls = []
        self.append_calls = []

    def list_tracks(self, playlist_id):
        self.fetch_calls.append(playlist_id)
        if playlist_id in self.failing_fetch:
            raise RemoteFetchError(playlist_id)
        return list(self.playlists.get(playlist_id, []))

    def append_tracks(self, playlist_id, track_ids):
        self.append_calls.append((playlist_id, list(track_ids)))
        if playlist_id in self.failing_append:
            raise RemoteAppendError(playlist_id, 0, len(track_ids) - 1)
        self.playlists.setdefault(playlist_id, []).extend(track_ids)


@pytest.fixture
def fake_gateway():
    """Master playlist 'master' with one track and three sub-playlists"""
    return FakeGateway({
        'master': ['t1'],
        'subA': ['t1', 't2', 't3'],
        'subB': ['b1'],
        'subC': ['c1', 'c2'],
    })


@pytest.fixture
def playlist_urls():
    return {
        'master': 'https://open.spotify.com/playlist/master',
        'subs': [
            'https://open.spotify.com/playlist/subA',
            'https://open.spotify.com/playlist/subB?si=abc123',
            'https://open.spotify.com/playlist/subC',
        ],
    }


@pytest.fixture
def spotify_env(monkeypatch):
    """Spotify credentials in the environment"""
    monkeypatch.setenv('SPOTIFY_CLIENT_ID', 'client-id')
    monkeypatch.setenv('SPOTIFY_CLIENT_SECRET', 'client-secret')
    monkeypatch.setenv('SPOTIFY_REFRESH_TOKEN', 'refresh-token')
    monkeypatch.delenv('DISCORD_WEBHOOK_URL', raising=False)
    monkeypatch.delenv('CALLBACK_URL', raising=False)
