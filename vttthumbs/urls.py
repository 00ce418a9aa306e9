"""
URL qualification for track sources and cue image references.
"""

import re
import string
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

_TRIM_CHARS = string.whitespace + '\xa0\u200b\u3000/'


def _trim(value: str) -> str:
    return value.strip(_TRIM_CHARS)


def resolve_url(reference: str, base: str) -> str:
    """Qualify `reference` against `base`, or return it unchanged if that isn't possible."""
    if '//' in reference:
        # Already fully qualified
        return reference

    base = base or ''
    if base.startswith('//'):
        # Protocol-relative base, only drop one trailing slash
        return '/'.join([re.sub(r'/$', '', base), _trim(reference)])
    if '//' in base:
        return '/'.join([_trim(base), _trim(reference)])

    return reference


def directory_of(url: str) -> str:
    """Everything up to and including the last '/'."""
    return url[:url.rfind('/') + 1]


def page_base_url(location: Optional[str]) -> str:
    """Directory of a page location, without query string or fragment."""
    if not location:
        return ''
    parts = urlsplit(location)
    return directory_of(urlunsplit((parts.scheme, parts.netloc, parts.path, '', '')))


def track_base_url(src: str, page_location: Optional[str] = None) -> str:
    """Base for image references: the directory of the qualified track URL."""
    return directory_of(resolve_url(src, page_base_url(page_location)))
