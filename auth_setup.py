import os
import time
import spotipy
from spotipy.oauth2 import SpotifyOAuth
import logging

from config import DEFAULT_CALLBACK_URL
from errors import ConfigError

log = logging.getLogger(__name__)

SCOPES = "playlist-read-private playlist-read-collaborative playlist-modify-public playlist-modify-private"

# Spotify tokens typically expire after 3600 seconds, refresh 5 minutes before that
TOKEN_REFRESH_MARGIN = 300


def get_env_var(var_name):
    """Get environment variable or raise ConfigError if missing."""
    value = os.environ.get(var_name)
    if not value:
        raise ConfigError(f"Missing required environment variable: {var_name}")
    return value


class SpotifyClientManager:
    """
    Hands out an authenticated spotipy client for a long-running process.

    Authorization is done once, out of band; the refresh token it produced is
    read from SPOTIFY_REFRESH_TOKEN and the access token is refreshed shortly
    before it expires.
    """

    def __init__(self, callback_url=DEFAULT_CALLBACK_URL):
        self.client_id = get_env_var("SPOTIFY_CLIENT_ID")
        self.client_secret = get_env_var("SPOTIFY_CLIENT_SECRET")
        self.refresh_token = get_env_var("SPOTIFY_REFRESH_TOKEN")
        log.debug(f"🔑 Spotify credentials: client_id={self.client_id} client_secret=********")

        self.sp_oauth = SpotifyOAuth(
            client_id=self.client_id,
            client_secret=self.client_secret,
            redirect_uri=callback_url,
            scope=SCOPES,
            open_browser=False,
            show_dialog=False
        )

        self.token_info = None
        self.token_refresh_time = 0
        self._client = None
        self._refresh_access_token()

    def _refresh_access_token(self):
        try:
            self.token_info = self.sp_oauth.refresh_access_token(self.refresh_token)
        except Exception as e:
            log.error(f"❌ Failed to refresh access token: {e}")
            raise
        self.token_refresh_time = time.time()
        # Spotify may rotate the refresh token
        self.refresh_token = self.token_info.get('refresh_token') or self.refresh_token
        self._client = spotipy.Spotify(auth=self.token_info['access_token'])
        log.info("✅ Spotify access token refreshed successfully")

    def _token_expiring(self):
        if not self.token_info:
            return True

        expires_in = self.token_info.get('expires_in', 3600)
        time_since_refresh = time.time() - self.token_refresh_time
        if time_since_refresh >= (expires_in - TOKEN_REFRESH_MARGIN):
            log.info(f"⏰ Token expiring soon (refreshed {int(time_since_refresh)}s ago), refreshing now...")
            return True
        return False

    def get_client(self):
        """Spotify client with a valid access token. Call before each batch of API calls."""
        if self._token_expiring():
            self._refresh_access_token()
        return self._client
