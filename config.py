# config.py
import os
import math
from dataclasses import dataclass, field

from errors import ConfigError

# Playlist URLs, one per line. Blank lines and lines starting with '#' are ignored.
SUB_PLAYLISTS_FILE = 'data/subplaylists.txt'
MASTER_PLAYLIST_FILE = 'data/masterplaylist.txt'

CHECK_INTERVAL = 15 * 60  # seconds
DEV_CHECK_INTERVAL = 10  # seconds, used with --dev

DEFAULT_CALLBACK_URL = 'http://127.0.0.1:8888/callback'


@dataclass
class Config:
    master_playlist_url: str
    sub_playlist_urls: list = field(default_factory=list)
    check_interval: float = CHECK_INTERVAL
    dev_mode: bool = False
    callback_url: str = DEFAULT_CALLBACK_URL


def read_playlist_file(filename):
    """Read playlist URLs from a file, one per line."""
    try:
        with open(filename, 'r', encoding='utf-8') as f:
            lines = [line.strip() for line in f]
    except OSError as e:
        raise ConfigError(f"reading {filename}: {e}") from e

    return [line for line in lines if line and not line.startswith('#')]


def load_config(dev=False, interval=None, sub_playlists_file=SUB_PLAYLISTS_FILE,
                master_playlist_file=MASTER_PLAYLIST_FILE):
    """
    Build the configuration from the playlist files and environment.

    `interval` (seconds) overrides the default check interval, which is
    CHECK_INTERVAL or DEV_CHECK_INTERVAL in dev mode.
    """
    if interval is None:
        interval = DEV_CHECK_INTERVAL if dev else CHECK_INTERVAL
    if not math.isfinite(interval) or interval <= 0:
        raise ConfigError(f"check interval must be a positive number, got {interval}")

    sub_urls = read_playlist_file(sub_playlists_file)

    master_urls = read_playlist_file(master_playlist_file)
    if len(master_urls) != 1:
        raise ConfigError(
            f"{master_playlist_file} must contain exactly one playlist URL, found {len(master_urls)}"
        )

    return Config(
        master_playlist_url=master_urls[0],
        sub_playlist_urls=sub_urls,
        check_interval=interval,
        dev_mode=dev,
        callback_url=os.environ.get('CALLBACK_URL') or DEFAULT_CALLBACK_URL,
    )
