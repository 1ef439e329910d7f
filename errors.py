class SyncError(Exception):
    """Base class for all playlist syncer errors."""


class ConfigError(SyncError):
    """Configuration files or options are missing or unusable."""


class MalformedReference(SyncError, ValueError):
    """A playlist reference could not be turned into a playlist ID."""

    def __init__(self, reference, reason="invalid playlist URL format"):
        self.reference = reference
        super().__init__(f"{reason}: {reference!r}")


class RemoteFetchError(SyncError):
    """Listing the items of a playlist failed."""

    def __init__(self, playlist_id, message="failed to fetch playlist tracks"):
        self.playlist_id = playlist_id
        super().__init__(f"{message} (playlist {playlist_id})")


class RemoteAppendError(SyncError):
    """Appending a batch of tracks failed. start/end are inclusive indexes."""

    def __init__(self, playlist_id, start, end):
        self.playlist_id = playlist_id
        self.start = start
        self.end = end
        super().__init__(f"failed adding tracks batch {start}-{end} to playlist {playlist_id}")


class UninitializedSource(SyncError):
    """A source playlist was scanned before its baseline was registered."""

    def __init__(self, source_id):
        self.source_id = source_id
        super().__init__(f"known tracks not initialized for playlist {source_id}")
