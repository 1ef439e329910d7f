import os
import sys
import signal
import logging
import threading

import click
from dotenv import load_dotenv

from auth_setup import SpotifyClientManager
from config import load_config
from discord_notifier import send_sync_notification
from errors import ConfigError, MalformedReference, SyncError
from playlist_monitor import PlaylistMonitor
from spotify_gateway import SpotifyPlaylistGateway

log = logging.getLogger(__name__)


def setup_logging(dev=False):
    """INFO to stderr; dev mode switches to DEBUG and adds logger name and line."""
    if dev:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s | %(levelname)s | %(name)s:%(lineno)d | %(message)s",
            datefmt="%H:%M:%S",
            force=True
        )
    else:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s | %(levelname)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            force=True
        )
    # urllib3 is noisy at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def install_signal_handlers(stop_event):
    def handle_signal(signum, frame):
        log.info(f"🛑 Received shutdown signal ({signal.Signals(signum).name})")
        stop_event.set()

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)


@click.command()
@click.option('--dev', is_flag=True, help='Development mode: short check interval and debug logging')
@click.option('--interval', type=float, default=None, help='Seconds between playlist checks')
@click.option('--env-file', type=click.Path(dir_okay=False), default='.env', show_default=True,
              help='File with SPOTIFY_* environment variables')
def cli(dev, interval, env_file):
    """Copy tracks newly added to the sub-playlists into the master playlist."""
    load_dotenv(env_file)
    setup_logging(dev)

    log.info("🚀 Starting spotify playlist syncer")

    try:
        cfg = load_config(dev=dev, interval=interval)
    except ConfigError as e:
        log.error(f"❌ Failed to load config: {e}")
        sys.exit(1)

    log.info(f"⚙️ Loaded configuration: {len(cfg.sub_playlist_urls)} sub-playlists, "
             f"master {cfg.master_playlist_url}, check interval {cfg.check_interval}s")

    try:
        spotify_manager = SpotifyClientManager(callback_url=cfg.callback_url)
    except ConfigError as e:
        log.error(f"❌ Missing spotify credentials: {e}")
        sys.exit(1)
    except Exception as e:
        log.error(f"❌ Failed to create spotify client: {e}")
        sys.exit(1)

    notifier = send_sync_notification if os.environ.get('DISCORD_WEBHOOK_URL') else None

    try:
        monitor = PlaylistMonitor(
            SpotifyPlaylistGateway(spotify_manager),
            cfg.master_playlist_url,
            cfg.sub_playlist_urls,
            cfg.check_interval,
            notifier=notifier,
        )
    except MalformedReference as e:
        log.error(f"❌ Failed to create monitor, bad master playlist URL: {e}")
        sys.exit(1)

    stop_event = threading.Event()
    install_signal_handlers(stop_event)

    try:
        monitor.start(stop_event)
    except SyncError as e:
        log.error(f"❌ Monitor failed: {e}")
        sys.exit(1)
    except Exception:
        log.exception("❌ Monitor failed unexpectedly")
        sys.exit(1)

    log.info("👋 Spotify playlist syncer stopped")


if __name__ == '__main__':
    cli()
