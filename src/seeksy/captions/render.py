"""Render timeline builder for captioned clips.

Produces the JSON timeline accepted by the cloud video-render service:
a video track, a caption track (word-by-word HTML or per-segment titles),
an optional title card and an optional certification watermark.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Literal

from jinja2 import Environment, FileSystemLoader, select_autoescape
from pydantic import BaseModel, Field

from seeksy.captions.segmenter import CaptionSegment, Word

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"

_jinja_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html", "j2"]),
)

Orientation = Literal["vertical", "horizontal"]

RESOLUTIONS: dict[str, dict[str, int]] = {
    "vertical": {"width": 1080, "height": 1920},
    "horizontal": {"width": 1920, "height": 1080},
}
ASPECT_RATIOS = {"vertical": "9:16", "horizontal": "16:9"}

TITLE_CARD_SECONDS = 3.0
MIN_WORD_CLIP_SECONDS = 0.1
WORD_CLIP_TAIL_SECONDS = 0.05


# The highlight glow appends an alpha byte, so only #RRGGBB is accepted.
HEX_COLOR = r"^#[0-9A-Fa-f]{6}$"


class CaptionStyle(BaseModel):
    """Visual style for burned-in captions."""

    font_family: str = "Montserrat ExtraBold"
    font_size: int = Field(42, gt=0)
    font_color: str = Field("#FFFFFF", pattern=HEX_COLOR)
    highlight_color: str = Field("#FFFF00", pattern=HEX_COLOR)
    position: Literal["bottom", "center", "top"] = "bottom"
    animation: Literal["pop", "fade", "bounce", "none"] = "pop"


def render_caption_html(words: list[Word], current_index: int, style: CaptionStyle) -> str:
    """Render the HTML frame for one word of a segment.

    Words before *current_index* are shown, the current one is highlighted and
    the rest stay transparent so the line does not reflow as it fills in.
    """
    template = _jinja_env.get_template("caption.html.j2")
    return template.render(words=words, current_index=current_index, style=style)


def _video_track(video_url: str, duration: float) -> dict[str, Any]:
    return {
        "clips": [
            {
                "asset": {"type": "video", "src": video_url},
                "start": 0,
                "length": duration,
                "fit": "crop",
            }
        ]
    }


def _caption_clips(
    segments: list[CaptionSegment],
    style: CaptionStyle,
    use_html_captions: bool,
) -> list[dict[str, Any]]:
    clips: list[dict[str, Any]] = []
    for segment in segments:
        if use_html_captions and segment.words:
            for i, word in enumerate(segment.words):
                clips.append(
                    {
                        "asset": {
                            "type": "html",
                            "html": render_caption_html(segment.words, i, style),
                            "width": 1080,
                            "height": 200,
                            "background": "transparent",
                        },
                        "start": word.start,
                        "length": max(
                            MIN_WORD_CLIP_SECONDS,
                            word.end - word.start + WORD_CLIP_TAIL_SECONDS,
                        ),
                        "position": style.position,
                        "offset": {"x": 0, "y": -0.15 if style.position == "bottom" else 0},
                    }
                )
        else:
            clips.append(
                {
                    "asset": {
                        "type": "title",
                        "text": segment.text.upper(),
                        "style": "subtitle",
                        "size": "medium",
                        "position": style.position,
                        "color": style.font_color,
                        "background": "rgba(0,0,0,0.6)",
                    },
                    "start": segment.start,
                    "length": segment.end - segment.start,
                }
            )
    return clips


def build_render_payload(
    video_url: str,
    duration: float,
    segments: list[CaptionSegment],
    orientation: Orientation = "vertical",
    style: CaptionStyle | None = None,
    use_html_captions: bool | None = None,
    callback_url: str | None = None,
    title: str | None = None,
    watermark_url: str | None = None,
) -> dict[str, Any]:
    """Build the render timeline for a captioned clip.

    Args:
        video_url: Source video URL.
        duration: Clip length in seconds.
        segments: Caption segments to burn in.
        orientation: ``vertical`` (9:16) or ``horizontal`` (16:9).
        style: Caption style; defaults to :class:`CaptionStyle`.
        use_html_captions: Word-by-word HTML captions.  ``None`` enables them
            when the first segment carries word timings.
        callback_url: Webhook the render service calls on completion.
        title: Optional title card shown for the first seconds.
        watermark_url: Optional certification watermark image.

    Returns:
        The timeline/output payload as a plain dict.
    """
    if orientation not in RESOLUTIONS:
        raise ValueError(f"Unknown orientation: {orientation}")
    if duration <= 0:
        raise ValueError("duration must be positive")

    style = style or CaptionStyle()
    if use_html_captions is None:
        use_html_captions = bool(segments) and bool(segments[0].words)

    tracks: list[dict[str, Any]] = [_video_track(video_url, duration)]

    caption_clips = _caption_clips(segments, style, use_html_captions)
    if caption_clips:
        tracks.append({"clips": caption_clips})

    if title:
        tracks.append(
            {
                "clips": [
                    {
                        "asset": {
                            "type": "title",
                            "text": title,
                            "style": "chunk",
                            "size": "medium",
                            "position": "top",
                            "color": "#FFFFFF",
                            "background": "#8B5CF6",
                        },
                        "start": 0,
                        "length": min(TITLE_CARD_SECONDS, duration),
                        "transition": {"in": "fade", "out": "fade"},
                    }
                ]
            }
        )

    if watermark_url:
        tracks.append(
            {
                "clips": [
                    {
                        "asset": {"type": "image", "src": watermark_url},
                        "start": 0,
                        "length": duration,
                        "position": "bottomRight",
                        "offset": {"x": -0.02, "y": 0.02},
                        "scale": 0.15,
                        "opacity": 0.7,
                    }
                ]
            }
        )

    payload: dict[str, Any] = {
        "timeline": {"tracks": tracks, "background": "#000000"},
        "output": {
            "format": "mp4",
            "fps": 30,
            "size": dict(RESOLUTIONS[orientation]),
            "aspectRatio": ASPECT_RATIOS[orientation],
            "quality": "high",
        },
    }
    if callback_url:
        payload["callback"] = callback_url

    logger.info(
        "Built render payload: tracks=%d, caption_clips=%d, orientation=%s",
        len(tracks),
        len(caption_clips),
        orientation,
    )
    return payload
