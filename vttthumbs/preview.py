"""
Preview generation - HTML page with a hover bar showing track thumbnails.
"""

import html
import json
import webbrowser
from pathlib import Path
from typing import Optional

from .constants import PREVIEW_WIDTH
from .sources import get_cache_dir
from .style import css_for_image
from .timestamps import format_timestamp
from .track import ThumbnailTrack


def generate_preview(
    source: str,
    page_location: Optional[str] = None,
    output_path: Optional[Path] = None,
    open_browser: bool = True,
) -> Path:
    """Generate HTML preview for a thumbnail track."""
    track = ThumbnailTrack(source, page_location=page_location)
    print(f"Loaded {len(track)} cues from {source}")

    page = generate_preview_html(source, track)

    if output_path is None:
        output_path = get_cache_dir(source) / "preview.html"
    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(page)

    print(f"✅ Preview saved to: {output_path}")

    if open_browser:
        try:
            webbrowser.open(f"file://{Path(output_path).absolute()}")
            print("🌐 Opening in browser...")
        except Exception as e:
            print(f"ℹ️  Could not open browser: {e}")

    return Path(output_path)


def _script_safe(text: str) -> str:
    """Keep JSON from closing or confusing an inline <script> block."""
    return text.replace("&", "\\u0026").replace("<", "\\u003c").replace(">", "\\u003e")


def generate_preview_html(source: str, track: ThumbnailTrack) -> str:
    """Generate HTML preview with a hover bar + CSS background thumbnails."""
    cues_json = json.dumps([
        {'start': cue.start, 'end': cue.end, 'css': css_for_image(cue.image)}
        for cue in track.cues
    ])
    cues_json = _script_safe(cues_json)
    duration = track.duration
    name = html.escape(Path(source).name)
    source = html.escape(source)

    return f'''<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>Thumbnail Preview - {name}</title>
    <style>
        body {{ font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif; background: #1a1a2e; color: #eee; padding: 20px; }}
        .bar {{ position: relative; width: {PREVIEW_WIDTH}px; height: 12px; margin-top: 160px; background: #16213e; border-radius: 6px; cursor: pointer; }}
        .thumb {{ position: absolute; bottom: 20px; left: 0; width: 160px; height: 90px; opacity: 0; pointer-events: none; border: 2px solid #00ff88; transition: opacity 0.1s; }}
        .time-display {{ color: #00ff88; font-family: monospace; margin-top: 10px; }}
        .info p {{ margin: 5px 0; color: #aaa; }}
    </style>
</head>
<body>
    <h1>🎞️ Thumbnail Preview</h1>
    <div class="info">
        <p><strong>Track:</strong> {source}</p>
        <p><strong>Cues:</strong> {len(track)} ({format_timestamp(duration)})</p>
    </div>
    <div class="bar" id="bar"><div class="thumb" id="thumb"></div></div>
    <div class="time-display" id="timeDisplay">--:--:--.---</div>
    <script>
        const cues = {cues_json};
        const duration = {duration};
        const bar = document.getElementById('bar');
        const thumb = document.getElementById('thumb');
        const timeDisplay = document.getElementById('timeDisplay');
        let lastCss = null;

        function styleForTime(t) {{
            for (const cue of cues) if (t >= cue.start && t < cue.end) return cue.css;
            return null;
        }}

        bar.addEventListener('mousemove', e => {{
            const r = bar.getBoundingClientRect();
            const percent = Math.min(1, Math.max(0, (e.clientX - r.left) / r.width));
            const t = percent * duration;
            timeDisplay.textContent = t.toFixed(3) + 's';
            const css = styleForTime(t);
            if (!css) {{ thumb.style.opacity = '0'; return; }}
            thumb.style.opacity = '1';
            thumb.style.transform = 'translateX(' + (percent * r.width) + 'px)';
            thumb.style.marginLeft = '-' + (parseInt(css.width || '160', 10) / 2) + 'px';
            if (css === lastCss) return;
            lastCss = css;
            for (const k in css) thumb.style[k] = css[k];
        }});
        bar.addEventListener('mouseleave', () => {{ thumb.style.opacity = '0'; }});
    </script>
</body>
</html>'''
