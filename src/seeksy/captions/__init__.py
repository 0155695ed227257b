"""Caption segmentation and render timeline construction."""

from seeksy.captions.render import CaptionStyle, build_render_payload
from seeksy.captions.segmenter import (
    CaptionSegment,
    SegmentationOptions,
    Word,
    generate_simple_segments,
    segment_words,
    segments_to_srt,
    segments_to_vtt,
)

__all__ = [
    "CaptionSegment",
    "CaptionStyle",
    "SegmentationOptions",
    "Word",
    "build_render_payload",
    "generate_simple_segments",
    "segment_words",
    "segments_to_srt",
    "segments_to_vtt",
]
