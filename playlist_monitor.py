import logging
from enum import Enum

from errors import MalformedReference, SyncError
from known_tracks import KnownTrackRegistry
from playlist_refs import extract_playlist_id

log = logging.getLogger(__name__)


class MonitorState(Enum):
    CREATED = "created"
    INITIALIZING = "initializing"
    READY = "ready"
    SCANNING = "scanning"
    STOPPED = "stopped"


class PlaylistMonitor:
    """
    Watches the sub-playlists and copies newly added tracks into the master playlist.

    On startup every track already present in a sub-playlist or in master becomes
    known for that sub-playlist. Each scan then appends only tracks that showed up
    since. Tracks are marked known as soon as they are detected, so a failed add
    is not retried (at most once, best effort).
    """

    def __init__(self, gateway, master_playlist_url, sub_playlist_urls, check_interval, notifier=None):
        self.gateway = gateway
        self.check_interval = check_interval
        self.notifier = notifier
        self.master_id = extract_playlist_id(master_playlist_url)

        self.sub_ids = []
        for url in sub_playlist_urls:
            try:
                playlist_id = extract_playlist_id(url)
            except MalformedReference as e:
                log.error(f"❌ Skipping sub-playlist, cannot extract playlist ID: {e}")
                continue
            if playlist_id in self.sub_ids:
                log.warning(f"⚠️ Sub-playlist {playlist_id} listed more than once, watching it once")
                continue
            self.sub_ids.append(playlist_id)

        self.known_tracks = KnownTrackRegistry()
        self.state = MonitorState.CREATED

    def initialize(self):
        """
        Prefetch existing tracks of master and every sub-playlist.

        A master fetch failure propagates. A sub-playlist that cannot be fetched is
        skipped and stays unregistered until restart: every later scan of it
        fails with UninitializedSource.
        """
        if self.state is not MonitorState.CREATED:
            raise RuntimeError(f"monitor already initialized (state: {self.state.value})")

        self.state = MonitorState.INITIALIZING
        log.info("🔄 Initializing monitor by prefetching existing tracks")

        try:
            master_track_ids = self.gateway.list_tracks(self.master_id)
        except Exception:
            self.state = MonitorState.STOPPED
            raise
        log.info(f"📝 Found {len(master_track_ids)} tracks in master playlist {self.master_id}")

        for sub_id in self.sub_ids:
            try:
                sub_track_ids = self.gateway.list_tracks(sub_id)
            except SyncError as e:
                log.warning(f"⚠️ Failed to get tracks from sub-playlist {sub_id}, skipping: {e}")
                continue
            except Exception:
                log.exception(f"❌ Unexpected error getting tracks from sub-playlist {sub_id}, skipping")
                continue

            self.known_tracks.initialize_source(sub_id, sub_track_ids, master_track_ids)
            log.info(f"✅ Initialized sub-playlist {sub_id} ({len(sub_track_ids)} tracks)")

        self.state = MonitorState.READY
        log.info("✅ Monitor initialization complete")

    def scan_all_playlists(self):
        """
        Check every sub-playlist once, in order, and add their new tracks to master.

        A failing sub-playlist is logged and skipped; the others are still processed.
        Returns {sub_playlist_id: [added track IDs]} for sub-playlists that added tracks.
        """
        if self.state is not MonitorState.READY:
            raise RuntimeError(f"monitor not ready to scan (state: {self.state.value})")

        self.state = MonitorState.SCANNING
        log.debug("🔍 Scanning all playlists")
        added = {}
        try:
            for playlist_id in self.sub_ids:
                try:
                    new_tracks = self.scan_playlist(playlist_id)
                except SyncError as e:
                    log.error(f"❌ Scanning playlist {playlist_id} failed: {e}")
                    continue
                except Exception:
                    log.exception(f"❌ Unexpected error scanning playlist {playlist_id}")
                    continue
                if new_tracks:
                    added[playlist_id] = new_tracks
        finally:
            self.state = MonitorState.READY
        return added

    def scan_playlist(self, playlist_id):
        """Add the new tracks of one sub-playlist to master and return them."""
        current_tracks = self.gateway.list_tracks(playlist_id)
        new_tracks = self.known_tracks.diff(playlist_id, current_tracks)

        if not new_tracks:
            log.debug(f"No new tracks found in playlist {playlist_id}")
            return []

        log.info(f"🎵 Found {len(new_tracks)} new tracks in playlist {playlist_id}")
        self.gateway.append_tracks(self.master_id, new_tracks)
        log.info(f"📤 Added {len(new_tracks)} tracks to master playlist {self.master_id}")

        if self.notifier is not None:
            self.notifier(playlist_id, new_tracks)
        return new_tracks

    def start(self, stop_event):
        """
        Initialize, then scan every `check_interval` seconds until `stop_event` is set.

        The stop event is only checked between scans, so a scan in progress always
        finishes. There is no timeout on remote calls; a hung request stalls the loop.
        """
        log.info(f"🎧 Starting playlist monitor (interval: {self.check_interval}s)")
        self.initialize()

        try:
            while not stop_event.wait(self.check_interval):
                try:
                    self.scan_all_playlists()
                except Exception:
                    log.exception("❌ Scan failed")
        finally:
            self.state = MonitorState.STOPPED
            log.info("🛑 Monitor stopped")
