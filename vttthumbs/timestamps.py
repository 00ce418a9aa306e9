"""
WebVTT timecode parsing and formatting.
"""

import re

_LEADING_INT = re.compile(r'\s*([+-]?\d+)')


def _to_int(text: str) -> int:
    """Lenient integer read: leading digits only, anything else is 0."""
    match = _LEADING_INT.match(text or '')
    return int(match.group(1)) if match else 0


def parse_timestamp(text: str) -> float:
    """Convert `[[HH:]MM:]SS[.mmm]` into seconds.

    Components are taken from the right of the colon-separated part, so a
    missing hours or minutes field counts as 0. Garbage in any field also
    reads as 0; this function never raises.

    The fraction is an integer count of milliseconds divided by 1000, so
    "00:01.500" is 1.5 and "00:01.5" is 1.005.
    """
    if not isinstance(text, str):
        return 0.0

    whole, _, fraction = text.partition('.')
    parts = whole.split(':')

    seconds = _to_int(parts.pop()) if parts else 0
    minutes = _to_int(parts.pop()) if parts else 0
    hours = _to_int(parts.pop()) if parts else 0
    milliseconds = _to_int(fraction)

    return hours * 3600 + minutes * 60 + seconds + milliseconds / 1000


def format_timestamp(t: float) -> str:
    """Seconds -> "HH:MM:SS.mmm"."""
    ms = round(max(0.0, t) * 1000)
    hrs, ms = divmod(ms, 3600 * 1000)
    mins, ms = divmod(ms, 60 * 1000)
    secs, ms = divmod(ms, 1000)
    return f"{hrs:02d}:{mins:02d}:{secs:02d}.{ms:03d}"
