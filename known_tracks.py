from errors import UninitializedSource


class KnownTrackRegistry:
    """
    Track IDs already considered synced, per source playlist.

    Sets only ever grow while the process runs. Nothing is persisted, so
    memory use is proportional to the distinct tracks ever seen per source.
    """

    def __init__(self):
        self._known = {}

    def initialize_source(self, source_id, current_track_ids, master_track_ids):
        """Set the baseline of a source to its own tracks plus everything already in master."""
        known = set(current_track_ids)
        known.update(master_track_ids)
        self._known[source_id] = known

    def diff(self, source_id, current_track_ids):
        """
        Return tracks of `current_track_ids` not yet known for `source_id`, in input order.

        Returned tracks are marked known immediately, before the caller tries to
        add them to master. A failed add is not retried on the next cycle.
        """
        known = self._known.get(source_id)
        if known is None:
            raise UninitializedSource(source_id)

        new_tracks = []
        for track_id in current_track_ids:
            if track_id not in known:
                known.add(track_id)
                new_tracks.append(track_id)
        return new_tracks

    def is_initialized(self, source_id):
        return source_id in self._known

    def known_count(self, source_id):
        return len(self._known.get(source_id, ()))

    def sources(self):
        return list(self._known)
