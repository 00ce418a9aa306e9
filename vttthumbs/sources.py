"""
Track sources - finding, fetching, and caching locations.
"""

import hashlib
import http.client
import logging
import tempfile
import urllib.request
from pathlib import Path
from typing import Optional

from .constants import FETCH_TIMEOUT, TRACK_EXTENSIONS

logger = logging.getLogger(__name__)


def find_track_file(path: Optional[str] = None) -> Path:
    """Find track file from path or first .vtt in current directory."""
    if path:
        p = Path(path)
        if p.exists():
            return p
        raise FileNotFoundError(f"Track file not found: {path}")

    for f in sorted(Path('.').iterdir()):
        if f.suffix in TRACK_EXTENSIONS:
            return f
    raise FileNotFoundError("No .vtt file found in current directory")


def cwd_page_location() -> str:
    """file:// location of the working directory, used as the outer base for local tracks."""
    return Path.cwd().absolute().as_uri() + '/'


def get_cache_dir(source: str) -> Path:
    """Get cache directory for files generated from a track source.

    Creates a unique folder based on hash(source) in system temp.
    """
    source_hash = hashlib.md5(source.encode()).hexdigest()[:12]
    stem = Path(source.split('?')[0].rstrip('/')).stem or 'track'

    cache_dir = Path(tempfile.gettempdir()) / "vttthumbs" / f"{stem}_{source_hash}"
    cache_dir.mkdir(parents=True, exist_ok=True)

    return cache_dir


def fetch_track_text(url: str, timeout: Optional[float] = None) -> Optional[str]:
    """Grab the contents of a track file.

    http(s):// and file:// URLs go through urllib, anything else is read as a
    local path. Returns None on any failure; a missing track just means no
    thumbnails.
    """
    if not url:
        return None

    try:
        if '://' in url:
            with urllib.request.urlopen(url, timeout=timeout or FETCH_TIMEOUT) as resp:
                charset = resp.headers.get_content_charset() or 'utf-8'
                return resp.read().decode(charset)
        return Path(url).read_text(encoding='utf-8')
    except (OSError, ValueError, LookupError, http.client.HTTPException) as e:
        logger.warning(f"Could not fetch track {url}: {e}")
        return None
