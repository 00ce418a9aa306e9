"""
vttthumbs data models.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Crop:
    """Sprite-sheet region in pixels."""
    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class ImageDescriptor:
    """Resolved thumbnail image. No crop means the whole image is the thumbnail."""
    url: str
    crop: Optional[Crop] = None


@dataclass(frozen=True)
class Cue:
    """One time interval of validity, in seconds."""
    start: float
    end: float
    image: ImageDescriptor

    def contains(self, time: float) -> bool:
        return self.start <= time < self.end


Track = Tuple[Cue, ...]
