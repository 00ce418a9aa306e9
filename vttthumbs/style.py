"""
Background styling for a thumbnail holder element.
"""

from typing import Dict, Optional, Tuple

from .models import ImageDescriptor


def css_for_image(image: ImageDescriptor) -> Dict[str, str]:
    """CSS declarations that show `image` as a background, cropped for sprites."""
    if image.crop is None:
        return {'background': f'url("{image.url}")'}

    crop = image.crop
    return {
        'background': f'url("{image.url}") no-repeat -{crop.x}px -{crop.y}px',
        'width': f'{crop.width}px',
        'height': f'{crop.height}px',
    }


def time_at(percent: float, duration: float) -> float:
    """Media time under a pointer at `percent` (0-1) of the timeline."""
    return max(0.0, min(1.0, percent)) * duration


def holder_offset(percent: float, bar_width: float, css: Optional[Dict[str, str]]) -> Tuple[float, float]:
    """(translateX, margin-left) in px that center the holder over the pointer."""
    x_pos = percent * bar_width
    width = 0
    if css and 'width' in css:
        width = int(css['width'].rstrip('px') or 0)
    return x_pos, -width / 2
