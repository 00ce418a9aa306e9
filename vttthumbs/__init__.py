"""
vttthumbs - Timeline hover thumbnails from WebVTT thumbnail tracks.

Parses a thumbnail track (cues whose payload is an image URL, optionally
with a `#xywh=` sprite crop) and resolves a media time to the image that
should be shown while the user hovers over or scrubs the timeline.
"""

from .constants import (
    FETCH_TIMEOUT,
    PAGE_LOCATION,
    TRACK_EXTENSIONS,
)
from .models import Crop, Cue, ImageDescriptor, Track
from .timestamps import parse_timestamp, format_timestamp
from .urls import resolve_url, directory_of, page_base_url, track_base_url
from .sources import find_track_file, fetch_track_text, get_cache_dir, cwd_page_location
from .track import parse_track, parse_image_spec, resolve_cue, ThumbnailTrack
from .style import css_for_image, time_at, holder_offset
from .preview import generate_preview

__version__ = "1.0.0"

__all__ = [
    # Constants
    "FETCH_TIMEOUT", "PAGE_LOCATION", "TRACK_EXTENSIONS",
    # Models
    "Crop", "Cue", "ImageDescriptor", "Track",
    # Timestamps
    "parse_timestamp", "format_timestamp",
    # URLs
    "resolve_url", "directory_of", "page_base_url", "track_base_url",
    # Sources
    "find_track_file", "fetch_track_text", "get_cache_dir", "cwd_page_location",
    # Track
    "parse_track", "parse_image_spec", "resolve_cue", "ThumbnailTrack",
    # Styling & Preview
    "css_for_image", "time_at", "holder_offset", "generate_preview",
]
