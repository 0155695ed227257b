"""Caption segmentation - groups word-level timestamps into on-screen captions.

Speech-to-text returns one timestamp per word.  Showing them one at a time is
unreadable, showing whole sentences overflows the frame, so words are packed
greedily into short segments.  A segment is closed when the next word would
break one of the limits below, when the speaker pauses, or at a sentence /
clause boundary.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterable

from pydantic import BaseModel, Field

from seeksy.config import settings

logger = logging.getLogger(__name__)

# Sentence-terminal punctuation, optionally followed by closing quotes/brackets.
_SENTENCE_END = re.compile(r"[.!?…][\"'”’)\]]*$")
_CLAUSE_BREAK = re.compile(r"[,;:–—][\"'”’)\]]*$")


class Word(BaseModel):
    """A single transcribed word with its timing in seconds."""

    word: str
    start: float
    end: float


class CaptionSegment(BaseModel):
    """A run of consecutive words displayed together."""

    text: str
    words: list[Word]
    start: float
    end: float
    highlight_word: str | None = None


class SegmentationOptions(BaseModel):
    """Limits applied while packing words into a segment."""

    max_words: int = Field(default_factory=lambda: settings.caption_max_words, ge=1)
    max_duration: float = Field(default_factory=lambda: settings.caption_max_duration, gt=0)
    max_chars: int = Field(default_factory=lambda: settings.caption_max_chars, ge=1)
    pause_threshold: float = Field(
        default_factory=lambda: settings.caption_pause_threshold, ge=0
    )
    min_words_before_comma: int = Field(
        default_factory=lambda: settings.caption_min_words_before_comma, ge=1
    )


def ends_sentence(token: str) -> bool:
    return bool(_SENTENCE_END.search(token))


def ends_clause(token: str) -> bool:
    return bool(_CLAUSE_BREAK.search(token))


def pick_highlight(words: list[str]) -> str | None:
    """Return the word emphasised in a segment (middle word, 3+ words only)."""
    if len(words) > 2:
        return words[len(words) // 2]
    return None


def normalize_words(words: Iterable[Word | dict]) -> list[Word]:
    """Strip tokens, drop blanks, clamp inverted timings and sort by start."""
    cleaned: list[Word] = []
    for raw in words:
        w = raw if isinstance(raw, Word) else Word.model_validate(raw)
        token = w.word.strip()
        if not token:
            continue
        cleaned.append(Word(word=token, start=w.start, end=max(w.end, w.start)))
    # sorted() is stable, so words sharing a start time keep input order
    return sorted(cleaned, key=lambda w: w.start)


def _close(words: list[Word]) -> CaptionSegment:
    tokens = [w.word for w in words]
    return CaptionSegment(
        text=" ".join(tokens),
        words=list(words),
        start=words[0].start,
        end=words[-1].end,
        highlight_word=pick_highlight(tokens),
    )


def _should_break(current: list[Word], nxt: Word, opts: SegmentationOptions) -> bool:
    prev = current[-1]
    if len(current) >= opts.max_words:
        return True
    if nxt.end - current[0].start > opts.max_duration:
        return True
    text_len = sum(len(w.word) for w in current) + len(current) - 1
    if text_len + 1 + len(nxt.word) > opts.max_chars:
        return True
    if nxt.start - prev.end >= opts.pause_threshold:
        return True
    if ends_sentence(prev.word):
        return True
    if ends_clause(prev.word) and len(current) >= opts.min_words_before_comma:
        return True
    return False


def segment_words(
    words: Iterable[Word | dict],
    options: SegmentationOptions | None = None,
) -> list[CaptionSegment]:
    """Greedily group timestamped words into caption segments.

    Args:
        words: Word objects or ``{"word", "start", "end"}`` dicts.
        options: Segment limits; defaults come from settings.

    Returns:
        Segments in time order.  Every non-blank input word lands in exactly
        one segment.
    """
    opts = options or SegmentationOptions()
    ordered = normalize_words(words)
    if not ordered:
        return []

    segments: list[CaptionSegment] = []
    current: list[Word] = []
    for word in ordered:
        if current and _should_break(current, word, opts):
            segments.append(_close(current))
            current = []
        current.append(word)
    segments.append(_close(current))

    logger.debug("Segmented %d words into %d captions", len(ordered), len(segments))
    return segments


def generate_simple_segments(
    text: str,
    total_duration: float,
    words_per_segment: int = 4,
) -> list[CaptionSegment]:
    """Build evenly timed segments from plain text.

    Used when no word timestamps are available (e.g. transcription failed and
    only a title or an existing transcript is at hand).
    """
    if words_per_segment < 1:
        raise ValueError("words_per_segment must be >= 1")
    if total_duration < 0:
        raise ValueError("total_duration must be >= 0")

    tokens = text.split()
    if not tokens:
        return []

    segment_count = math.ceil(len(tokens) / words_per_segment)
    segment_duration = total_duration / segment_count

    segments: list[CaptionSegment] = []
    current_time = 0.0
    for i in range(0, len(tokens), words_per_segment):
        chunk = tokens[i : i + words_per_segment]
        start = current_time
        end = min(current_time + segment_duration, total_duration)
        word_duration = (end - start) / len(chunk)
        segments.append(
            CaptionSegment(
                text=" ".join(chunk),
                words=[
                    Word(
                        word=token,
                        start=start + idx * word_duration,
                        end=start + (idx + 1) * word_duration,
                    )
                    for idx, token in enumerate(chunk)
                ],
                start=start,
                end=end,
                highlight_word=pick_highlight(chunk),
            )
        )
        current_time = end

    return segments


# ── Caption file export ───────────────────────────────────────────────────────


def _timestamp(seconds: float, sep: str) -> str:
    millis = int(round(max(seconds, 0.0) * 1000))
    hours, millis = divmod(millis, 3_600_000)
    minutes, millis = divmod(millis, 60_000)
    secs, millis = divmod(millis, 1000)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}{sep}{millis:03d}"


def segments_to_srt(segments: Iterable[CaptionSegment]) -> str:
    """Render segments as a SubRip (.srt) document."""
    cues = [
        f"{i}\n{_timestamp(s.start, ',')} --> {_timestamp(s.end, ',')}\n{s.text}\n"
        for i, s in enumerate(segments, start=1)
    ]
    return "\n".join(cues)


def segments_to_vtt(segments: Iterable[CaptionSegment]) -> str:
    """Render segments as a WebVTT (.vtt) document."""
    cues = [
        f"{i}\n{_timestamp(s.start, '.')} --> {_timestamp(s.end, '.')}\n{s.text}\n"
        for i, s in enumerate(segments, start=1)
    ]
    return "WEBVTT\n\n" + "\n".join(cues)
