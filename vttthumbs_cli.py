#!/usr/bin/env python3
"""
vttthumbs CLI - Inspect thumbnail tracks from the command line.

Usage:
    python vttthumbs_cli.py /cues [track]
    python vttthumbs_cli.py /resolve <track> <time> [time ...]
    python vttthumbs_cli.py /preview [track]

A track is a .vtt path or an http(s):// URL. Times are seconds (12.5) or
WebVTT timecodes (00:12.500).
"""

import sys

from vttthumbs import (
    PAGE_LOCATION,
    ThumbnailTrack,
    cwd_page_location,
    find_track_file,
    format_timestamp,
    generate_preview,
    parse_timestamp,
)


def resolve_source(arg):
    """URLs pass through; local tracks become file:// URLs."""
    if arg and '://' in arg:
        return arg
    return find_track_file(arg).absolute().as_uri()


def parse_time_arg(text: str) -> float:
    try:
        return float(text)
    except ValueError:
        return parse_timestamp(text)


def describe(image) -> str:
    if image is None:
        return "(no thumbnail)"
    if image.crop is None:
        return image.url
    c = image.crop
    return f"{image.url} [x={c.x} y={c.y} w={c.width} h={c.height}]"


def list_cues(source: str, page_location: str) -> int:
    track = ThumbnailTrack(source, page_location=page_location)
    for cue in track.cues:
        print(f"{format_timestamp(cue.start)} --> {format_timestamp(cue.end)}  {describe(cue.image)}")
    print(f"{len(track)} cues, {format_timestamp(track.duration)}")
    return 0


def resolve_times(source: str, times, page_location: str) -> int:
    track = ThumbnailTrack(source, page_location=page_location)
    for text in times:
        t = parse_time_arg(text)
        print(f"{format_timestamp(t)}  {describe(track.resolve(t))}")
    return 0


def main():
    if len(sys.argv) < 2 or sys.argv[1] in ('-h', '--help'):
        print(__doc__)
        print("Commands:")
        print("  /cues [track]                 - List parsed cues")
        print("  /resolve <track> <time>...    - Show the thumbnail for each time")
        print("  /preview [track]              - Generate HTML hover preview")
        return 0

    command = sys.argv[1].lower()
    track_arg = sys.argv[2] if len(sys.argv) > 2 else None
    page_location = PAGE_LOCATION or cwd_page_location()

    try:
        if command == '/cues':
            return list_cues(resolve_source(track_arg), page_location)
        elif command == '/resolve':
            if len(sys.argv) < 4:
                print("Usage: /resolve <track> <time> [time ...]", file=sys.stderr)
                return 1
            return resolve_times(resolve_source(track_arg), sys.argv[3:], page_location)
        elif command == '/preview':
            generate_preview(resolve_source(track_arg), page_location=page_location)
        else:
            print(f"Unknown command: {command}")
            return 1
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
