"""
vttthumbs constants and configuration.
"""

import os

# Track sources
TRACK_EXTENSIONS = {'.vtt', '.VTT'}
FETCH_TIMEOUT = float(os.environ.get('VTTTHUMBS_FETCH_TIMEOUT', '10'))  # seconds

# Outer base for relative track sources (page/document location)
PAGE_LOCATION = os.environ.get('VTTTHUMBS_PAGE_LOCATION')

# Cue payload marker for sprite-sheet crops
XYWH_MARKER = '#xywh='

# UI
SLIDER_STEPS = 1000  # Slider positions across the whole track
PREVIEW_WIDTH = 640  # px, hover bar width in the HTML preview
