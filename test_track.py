"""
Tests for thumbnail track parsing and time resolution.

Run with:
    pytest test_track.py -v
"""

import threading

import pytest

from vttthumbs import (
    Crop,
    ImageDescriptor,
    ThumbnailTrack,
    parse_image_spec,
    parse_track,
    resolve_cue,
)

BASE = "https://cdn.example.com/thumbs/"

SPRITE_TRACK = """WEBVTT

00:00.000 --> 00:05.000
sprite_0.jpg#xywh=0,0,160,90

00:05.000 --> 00:10.000
sprite_0.jpg#xywh=160,0,160,90
"""


@pytest.fixture
def track():
    return parse_track(SPRITE_TRACK, BASE)


def test_image_spec_with_crop():
    image = parse_image_spec("img.jpg#xywh=10,20,30,40", BASE)
    assert image == ImageDescriptor(
        url="https://cdn.example.com/thumbs/img.jpg",
        crop=Crop(x=10, y=20, width=30, height=40),
    )


def test_image_spec_without_crop():
    image = parse_image_spec("poster.jpg", BASE)
    assert image.url == "https://cdn.example.com/thumbs/poster.jpg"
    assert image.crop is None


def test_image_spec_marker_is_case_insensitive():
    assert parse_image_spec("a.jpg#XYWH=1,2,3,4", BASE).crop == Crop(1, 2, 3, 4)


def test_image_spec_pixel_unit_prefix():
    """Numbers are found by digit runs, so a media-fragment unit is tolerated."""
    assert parse_image_spec("a.jpg#xywh=pixel:1,2,3,4", BASE).crop == Crop(1, 2, 3, 4)


def test_image_spec_malformed_crop_dropped():
    image = parse_image_spec("a.jpg#xywh=1,2", BASE)
    assert image == ImageDescriptor(url="https://cdn.example.com/thumbs/a.jpg")


def test_parse_sprite_track(track):
    assert len(track) == 2
    assert [(c.start, c.end) for c in track] == [(0, 5), (5, 10)]
    assert track[1].image.crop == Crop(160, 0, 160, 90)
    assert track[1].image.url == "https://cdn.example.com/thumbs/sprite_0.jpg"


def test_half_open_boundaries(track):
    assert resolve_cue(track, 5) == track[1].image
    assert resolve_cue(track, 4.999) == track[0].image
    assert resolve_cue(track, 0) == track[0].image
    assert resolve_cue(track, 10) is None
    assert resolve_cue(track, -1) is None


def test_resolve_non_numeric_time(track):
    assert resolve_cue(track, None) is None
    assert resolve_cue(track, "soon") is None
    assert resolve_cue(track, float("nan")) is None


@pytest.mark.parametrize("text", [
    "",
    None,
    "WEBVTT\n\nNOTE just a comment\n",
    "not a track at all",
    "WEBVTT\n\n00:00.000 --> 00:05.000\n",
])
def test_empty_tracks(text):
    track = parse_track(text, BASE)
    assert track == ()
    for t in (-1, 0, 2.5, 1e9):
        assert resolve_cue(track, t) is None


def test_cue_identifier_line_is_skipped():
    text = "WEBVTT\n\nthumb-1\n00:00:01.000 --> 00:00:02.000\na.jpg\n"
    track = parse_track(text, BASE)
    assert len(track) == 1
    assert track[0].start == 1
    assert track[0].image.url == BASE + "a.jpg"


def test_crlf_line_endings():
    text = SPRITE_TRACK.replace("\n", "\r\n")
    assert parse_track(text, BASE) == parse_track(SPRITE_TRACK, BASE)


def test_bom_and_cue_settings():
    text = "\ufeffWEBVTT\n\n00:00.000-->00:02.000 align:start\nb.png\n"
    track = parse_track(text, BASE)
    assert len(track) == 1
    assert track[0].end == 2


def test_malformed_block_does_not_stop_parsing():
    text = (
        "WEBVTT\n\n"
        "00:00.000 --> 00:02.000\na.jpg#xywh=1\n\n"
        "nonsense --> more nonsense\nb.jpg\n\n"
        "00:02.000 --> 00:04.000\nc.jpg#xywh=1,2,3,4\n"
    )
    track = parse_track(text, BASE)
    assert [c.image.url for c in track] == [BASE + "a.jpg", BASE + "c.jpg"]
    assert track[0].image.crop is None
    assert track[1].image.crop == Crop(1, 2, 3, 4)


def test_empty_interval_dropped():
    text = "00:05.000 --> 00:05.000\na.jpg\n\n00:06.000 --> 00:05.000\nb.jpg\n"
    assert parse_track(text, BASE) == ()


def test_overlapping_cues_first_match_wins():
    text = "00:00.000 --> 00:10.000\nfirst.jpg\n\n00:02.000 --> 00:04.000\nsecond.jpg\n"
    track = parse_track(text, BASE)
    assert resolve_cue(track, 3).url == BASE + "first.jpg"


def test_file_order_is_kept():
    text = "00:05.000 --> 00:10.000\nlate.jpg\n\n00:00.000 --> 00:05.000\nearly.jpg\n"
    track = parse_track(text, BASE)
    assert [c.image.url for c in track] == [BASE + "late.jpg", BASE + "early.jpg"]
    assert resolve_cue(track, 1).url == BASE + "early.jpg"


def test_parse_is_idempotent():
    assert parse_track(SPRITE_TRACK, BASE) == parse_track(SPRITE_TRACK, BASE)


# ThumbnailTrack

class FakeFetch:
    """Serves track text by URL and records what was requested."""

    def __init__(self, files):
        self.files = files
        self.requested = []

    def __call__(self, url):
        self.requested.append(url)
        return self.files.get(url)


def test_resolver_loads_on_construction():
    fetch = FakeFetch({"https://cdn.example.com/thumbs/track.vtt": SPRITE_TRACK})
    resolver = ThumbnailTrack("https://cdn.example.com/thumbs/track.vtt", fetch=fetch)

    assert len(resolver) == 2
    assert resolver.base_url == BASE
    assert resolver.duration == 10
    assert resolver.resolve(7).crop == Crop(160, 0, 160, 90)


def test_resolver_relative_src_two_step_qualification():
    """The track is qualified against the page, images against the track."""
    fetch = FakeFetch({"https://site.com/watch/vtt/track.vtt": "00:00.000 --> 00:01.000\nimg/a.jpg\n"})
    resolver = ThumbnailTrack("vtt/track.vtt", page_location="https://site.com/watch/index.html", fetch=fetch)

    assert fetch.requested == ["https://site.com/watch/vtt/track.vtt"]
    assert resolver.resolve(0.5).url == "https://site.com/watch/vtt/img/a.jpg"


def test_resolver_fetch_failure_means_no_thumbnails():
    resolver = ThumbnailTrack("https://cdn.example.com/missing.vtt", fetch=FakeFetch({}))
    assert len(resolver) == 0
    assert resolver.duration == 0
    assert resolver.resolve(1) is None


def test_resolver_without_source():
    resolver = ThumbnailTrack(fetch=FakeFetch({}))
    assert resolver.src is None
    assert resolver.resolve(0) is None


def test_resolver_resource_replaces_track():
    fetch = FakeFetch({
        "https://h/a.vtt": "00:00.000 --> 00:10.000\na.jpg\n",
        "https://h/b.vtt": "00:00.000 --> 00:10.000\nb.jpg\n",
    })
    resolver = ThumbnailTrack("https://h/a.vtt", fetch=fetch)
    assert resolver.resolve(1).url == "https://h/a.jpg"

    resolver.set_source("https://h/b.vtt")
    assert resolver.src == "https://h/b.vtt"
    assert resolver.resolve(1).url == "https://h/b.jpg"


def test_resolver_load_text():
    resolver = ThumbnailTrack(fetch=FakeFetch({}))
    resolver.load_text(SPRITE_TRACK, "https://cdn.example.com/thumbs/track.vtt")
    assert resolver.resolve(0).url == BASE + "sprite_0.jpg"


def test_resolver_detach():
    resolver = ThumbnailTrack(fetch=FakeFetch({}))
    resolver.load_text(SPRITE_TRACK, "https://cdn.example.com/thumbs/track.vtt")
    resolver.detach()
    assert resolver.cues == ()
    assert resolver.src is None
    assert resolver.resolve(1) is None


def test_queries_never_see_a_mixed_track():
    """While sources flip between A and B, every query answers from one of them."""
    def track_text(name):
        return "\n\n".join(
            f"00:{i:02d}.000 --> 00:{i + 1:02d}.000\n{name}.jpg" for i in range(50)
        )

    fetch = FakeFetch({"https://h/a.vtt": track_text("a"), "https://h/b.vtt": track_text("b")})
    resolver = ThumbnailTrack("https://h/a.vtt", fetch=fetch)
    stop = threading.Event()
    seen = []

    def query():
        while True:
            cues = resolver.cues
            seen.append({c.image.url for c in cues})
            if stop.is_set():
                break

    reader = threading.Thread(target=query)
    reader.start()
    for i in range(50):
        resolver.set_source("https://h/b.vtt" if i % 2 == 0 else "https://h/a.vtt")
    stop.set()
    reader.join()

    assert seen
    assert all(urls in ({"https://h/a.jpg"}, {"https://h/b.jpg"}) for urls in seen)
