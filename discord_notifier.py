import os
import logging
import requests
from datetime import datetime, timezone

log = logging.getLogger(__name__)

MAX_EMBED_FIELDS = 25


def playlist_url(playlist_id):
    return f"https://open.spotify.com/playlist/{playlist_id}"


def track_url(track_id):
    return f"https://open.spotify.com/track/{track_id}"


def send_sync_notification(source_playlist_id, track_ids):
    """
    Send a Discord webhook notification for tracks copied into the master playlist.

    Does nothing unless DISCORD_WEBHOOK_URL is set. Failures are logged, never raised.

    Returns:
        bool: True if notification sent successfully, False otherwise
    """
    webhook_url = os.environ.get('DISCORD_WEBHOOK_URL')

    if not webhook_url:
        log.debug("DISCORD_WEBHOOK_URL not set. Skipping Discord notification.")
        return False

    if not track_ids:
        return False

    track_count = len(track_ids)
    plural = 's' if track_count != 1 else ''

    embed = {
        "title": f"🎵 {track_count} New Track{plural} Added to Master Playlist!",
        "description": f"Picked up from [{source_playlist_id}]({playlist_url(source_playlist_id)}).",
        "color": 1947988,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "footer": {
            "text": "Spotify Playlist Syncer"
        },
        "fields": []
    }

    for idx, track_id in enumerate(track_ids[:MAX_EMBED_FIELDS], 1):
        embed['fields'].append({
            "name": f"{idx}. {track_id}",
            "value": track_url(track_id),
            "inline": False
        })

    if track_count > MAX_EMBED_FIELDS:
        embed['fields'].append({
            "name": "➕ More tracks",
            "value": f"...and {track_count - MAX_EMBED_FIELDS} more tracks!",
            "inline": False
        })

    payload = {
        "username": "Spotify Bot",
        "embeds": [embed]
    }

    try:
        response = requests.post(webhook_url, json=payload, timeout=10)
    except requests.exceptions.RequestException as e:
        log.error(f"❌ Failed to send Discord notification: {e}")
        return False

    if response.status_code in (200, 204):
        log.info(f"✅ Discord notification sent ({track_count} tracks)")
        return True

    log.error(f"❌ Discord webhook failed with status {response.status_code}: {response.text}")
    return False
