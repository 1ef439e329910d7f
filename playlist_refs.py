from urllib.parse import urlparse

from errors import MalformedReference


def extract_playlist_id(url):
    """
    Extract the playlist ID from a playlist URL.

    'https://open.spotify.com/playlist/47dNMRY60zT6RdqsIxjhLa?si=abc' -> '47dNMRY60zT6RdqsIxjhLa'

    Raises MalformedReference unless the URL path starts with 'playlist/<id>'.
    """
    try:
        path = urlparse(url).path
    except (TypeError, ValueError, AttributeError) as e:
        raise MalformedReference(url, reason=f"parsing URL failed ({e})") from e

    path_parts = path.strip('/').split('/')
    if len(path_parts) < 2 or path_parts[0] != 'playlist' or not path_parts[1]:
        raise MalformedReference(url)

    return path_parts[1]
