"""
Thumbnail track parsing and time lookup.

A thumbnail track is a WebVTT file whose cue payloads are image references,
optionally pointing into a sprite sheet with a `#xywh=x,y,w,h` fragment:

    WEBVTT

    00:00.000 --> 00:05.000
    sprite_0.jpg#xywh=0,0,160,90
"""

import logging
import re
from typing import Callable, List, Optional

from .constants import PAGE_LOCATION, XYWH_MARKER
from .models import Crop, Cue, ImageDescriptor, Track
from .sources import fetch_track_text
from .timestamps import parse_timestamp
from .urls import page_base_url, resolve_url, track_base_url

logger = logging.getLogger(__name__)

_TIMESTAMP = r'(?:(?:\d+:)?\d{2}:)?\d{2}(?:\.\d{3})?'
TIMING_LINE = re.compile(rf'^\s*({_TIMESTAMP})[ \t]*-->[ \t]*({_TIMESTAMP})(?:\s|$)')

_BLOCK_SEPARATOR = re.compile(r'\n[ \t]*\n')
_XYWH_SPLIT = re.compile(re.escape(XYWH_MARKER), re.IGNORECASE)


def parse_image_spec(payload: str, base_url: str) -> ImageDescriptor:
    """Qualify a cue payload and pull out its sprite crop, if any.

    Fewer than four numbers after the marker drops the crop but keeps the image.
    """
    qualified = resolve_url(payload.strip(), base_url)
    parts = _XYWH_SPLIT.split(qualified, maxsplit=1)
    if len(parts) == 1:
        return ImageDescriptor(url=qualified)

    url, coords = parts
    numbers = re.findall(r'[0-9]+', coords)
    if len(numbers) < 4:
        logger.debug(f"Ignoring malformed crop in {payload!r}")
        return ImageDescriptor(url=url)

    x, y, w, h = (int(n) for n in numbers[:4])
    return ImageDescriptor(url=url, crop=Crop(x=x, y=y, width=w, height=h))


def _parse_block(block: str, base_url: str) -> Optional[Cue]:
    lines = [line.strip() for line in block.split('\n')]
    while lines and not lines[0]:
        lines.pop(0)
    if not lines:
        return None

    # Timing line comes first, or second after a cue identifier
    for idx in (0, 1):
        if idx < len(lines) and TIMING_LINE.match(lines[idx]):
            break
    else:
        return None

    match = TIMING_LINE.match(lines[idx])
    payload = lines[idx + 1] if idx + 1 < len(lines) else ''
    if not payload:
        return None

    start = parse_timestamp(match.group(1))
    end = parse_timestamp(match.group(2))
    if end <= start:
        return None

    return Cue(start=start, end=end, image=parse_image_spec(payload, base_url))


def parse_track(raw_text: Optional[str], base_url: str = '') -> Track:
    """Parse cue-file text into cues, in file order.

    Blocks without a timing line (header, NOTE, STYLE...) are skipped, as are
    blocks without a payload or with an empty interval. Empty or missing text
    gives an empty track.
    """
    if not raw_text:
        return ()

    text = raw_text.lstrip('\ufeff').replace('\r\n', '\n').replace('\r', '\n')
    blocks = _BLOCK_SEPARATOR.split(text)

    cues: List[Cue] = []
    for block in blocks:
        cue = _parse_block(block, base_url)
        if cue is not None:
            cues.append(cue)

    logger.debug(f"Parsed {len(cues)} cues from {len(blocks)} blocks")
    return tuple(cues)


def resolve_cue(track: Track, time: float) -> Optional[ImageDescriptor]:
    """First cue with start <= time < end wins."""
    try:
        time = float(time)
    except (TypeError, ValueError):
        return None

    for cue in track:
        if cue.contains(time):
            return cue.image
    return None


class ThumbnailTrack:
    """Owns one parsed track and answers time queries against it.

    The cue tuple is only ever replaced whole: a new source is fetched and
    parsed completely before it is published, so a concurrent `resolve` sees
    either the old track or the new one.
    """

    def __init__(
        self,
        src: Optional[str] = None,
        page_location: Optional[str] = None,
        fetch: Callable[[str], Optional[str]] = fetch_track_text,
    ):
        self.page_location = page_location if page_location is not None else PAGE_LOCATION
        self._fetch = fetch
        self._src: Optional[str] = None
        self._base_url = ''
        self._cues: Track = ()

        if src:
            self.set_source(src)

    @property
    def src(self) -> Optional[str]:
        return self._src

    @property
    def base_url(self) -> str:
        """Base that cue image references were qualified against."""
        return self._base_url

    @property
    def cues(self) -> Track:
        return self._cues

    @property
    def duration(self) -> float:
        return max((cue.end for cue in self._cues), default=0.0)

    def __len__(self) -> int:
        return len(self._cues)

    def set_source(self, src: str) -> Track:
        """Fetch and parse a new track source, then publish it."""
        url = resolve_url(src, page_base_url(self.page_location))
        logger.info(f"Loading thumbnail track: {url}")
        raw_text = self._fetch(url)
        if raw_text is None:
            logger.warning(f"No thumbnails available from {url}")
        return self.load_text(raw_text, src)

    def load_text(self, raw_text: Optional[str], src: Optional[str] = None) -> Track:
        """Parse already-fetched track text and publish it."""
        base_url = track_base_url(src, self.page_location) if src else ''
        cues = parse_track(raw_text, base_url)

        self._src = src
        self._base_url = base_url
        self._cues = cues
        logger.info(f"Published {len(cues)} thumbnail cues")
        return cues

    def detach(self) -> None:
        self._cues = ()
        self._src = None
        self._base_url = ''

    def resolve(self, time: float) -> Optional[ImageDescriptor]:
        return resolve_cue(self._cues, time)
