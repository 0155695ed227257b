"""Seeksy CLI - run caption and calculator tools without the API server.

Usage::

    # Segment a words JSON file ([{"word", "start", "end"}, ...]) into captions
    seeksy segment words.json --format srt

    # Evenly timed captions from plain text
    seeksy simple "Welcome back to the show" --duration 3

    # Build a render payload for a clip
    seeksy render-payload words.json --video-url https://cdn/clip.mp4 --duration 30

    # Run a benefits calculator
    seeksy calc fers_pension_estimator high3_salary=90000 years_of_service=25 \\
        retiring_at_62_plus_with_20=true
"""

from __future__ import annotations

import json
import sys

import click
from pydantic import ValidationError

from seeksy.config import settings


@click.group()
def cli():
    """Seeksy - caption segmentation and benefits calculators."""
    pass


def _load_words(path: str) -> list[dict]:
    with open(path, encoding="utf-8") as fh:
        data = json.load(fh)
    # Accept either a bare list or a transcription response with a words key
    if isinstance(data, dict):
        data = data.get("words", [])
    if not isinstance(data, list):
        raise click.BadParameter("expected a list of words", param_hint="FILE")
    return data


# ── captions ──────────────────────────────────────────────────────────


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["json", "srt", "vtt"]),
    default="json",
    show_default=True,
    help="Output format.",
)
@click.option("--max-words", type=int, default=None, help="Maximum words per caption.")
@click.option("--max-duration", type=float, default=None, help="Maximum seconds per caption.")
@click.option("--max-chars", type=int, default=None, help="Maximum characters per caption.")
def segment(
    file: str,
    fmt: str,
    max_words: int | None,
    max_duration: float | None,
    max_chars: int | None,
):
    """Group word timestamps from FILE into caption segments."""
    from seeksy.captions import (
        SegmentationOptions,
        segment_words,
        segments_to_srt,
        segments_to_vtt,
    )

    overrides = {
        k: v
        for k, v in {
            "max_words": max_words,
            "max_duration": max_duration,
            "max_chars": max_chars,
        }.items()
        if v is not None
    }
    try:
        segments = segment_words(_load_words(file), SegmentationOptions(**overrides))
    except ValidationError as exc:
        click.secho(f"Error: {exc}", fg="red", err=True)
        sys.exit(1)

    if fmt == "srt":
        click.echo(segments_to_srt(segments))
    elif fmt == "vtt":
        click.echo(segments_to_vtt(segments))
    else:
        click.echo(json.dumps([s.model_dump() for s in segments], indent=2))


@cli.command()
@click.argument("text")
@click.option("--duration", type=float, required=True, help="Clip length in seconds.")
@click.option("--words-per-segment", type=int, default=4, show_default=True)
def simple(text: str, duration: float, words_per_segment: int):
    """Split TEXT into evenly timed caption segments."""
    from seeksy.captions import generate_simple_segments

    try:
        segments = generate_simple_segments(text, duration, words_per_segment)
    except ValueError as exc:
        click.secho(f"Error: {exc}", fg="red", err=True)
        sys.exit(1)
    click.echo(json.dumps([s.model_dump() for s in segments], indent=2))


@cli.command("render-payload")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--video-url", required=True, help="Source video URL.")
@click.option("--duration", type=float, required=True, help="Clip length in seconds.")
@click.option(
    "--orientation",
    type=click.Choice(["vertical", "horizontal"]),
    default="vertical",
    show_default=True,
)
@click.option("--title", default=None, help="Optional title card text.")
@click.option("--certified", is_flag=True, default=False, help="Add the certification watermark.")
def render_payload(
    file: str,
    video_url: str,
    duration: float,
    orientation: str,
    title: str | None,
    certified: bool,
):
    """Print the render timeline for a clip captioned from words in FILE."""
    from seeksy.captions import build_render_payload, segment_words

    try:
        payload = build_render_payload(
            video_url=video_url,
            duration=duration,
            segments=segment_words(_load_words(file)),
            orientation=orientation,
            callback_url=settings.render_callback_url,
            title=title,
            watermark_url=settings.certified_watermark_url if certified else None,
        )
    except ValueError as exc:
        click.secho(f"Error: {exc}", fg="red", err=True)
        sys.exit(1)
    click.echo(json.dumps(payload, indent=2))


# ── calculators ───────────────────────────────────────────────────────


@cli.command()
@click.option("--category", default=None, help="Only list calculators in this category.")
def calculators(category: str | None):
    """List the available benefits calculators."""
    from seeksy.calculators import list_calculators

    for config in list_calculators(category):
        click.echo(f"{config.id:<28} {config.category:<14} {config.title}")


def _parse_value(raw: str):
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


@cli.command()
@click.argument("calculator_id")
@click.argument("params", nargs=-1)
def calc(calculator_id: str, params: tuple[str, ...]):
    """Run CALCULATOR_ID with key=value PARAMS and print the result."""
    from seeksy.calculators import run_calculator

    payload = {}
    for param in params:
        key, sep, value = param.partition("=")
        if not sep:
            raise click.BadParameter(f"expected key=value, got {param!r}", param_hint="PARAMS")
        payload[key] = _parse_value(value)

    try:
        result = run_calculator(calculator_id, payload)
    except KeyError:
        click.secho(f"Error: unknown calculator {calculator_id!r}", fg="red", err=True)
        sys.exit(1)
    except ValidationError as exc:
        click.secho(f"Error: {exc}", fg="red", err=True)
        sys.exit(1)
    click.echo(result.model_dump_json(indent=2))


@cli.command()
@click.option("--cash", type=float, required=True, help="Current cash on hand.")
@click.option("--burn", type=float, required=True, help="Monthly operating expenses.")
@click.option("--revenue", type=float, default=0.0, show_default=True, help="Current monthly revenue.")
@click.option(
    "--growth",
    type=float,
    default=0.0,
    show_default=True,
    help="Monthly revenue growth as a fraction (0.05 = 5%).",
)
@click.option("--months", type=int, default=36, show_default=True, help="Projection horizon.")
def runway(cash: float, burn: float, revenue: float, growth: float, months: int):
    """Project cash runway month by month."""
    from seeksy.finance import calculate_runway

    try:
        result = calculate_runway(cash, burn, revenue, growth, horizon_months=months)
    except ValueError as exc:
        click.secho(f"Error: {exc}", fg="red", err=True)
        sys.exit(1)

    if result.runway_months is None:
        click.echo(f"Runway: cash stays positive for all {months} months")
    else:
        click.echo(f"Runway: {result.runway_months} months")
    if result.break_even_month is None:
        click.echo("Break-even: not reached")
    else:
        click.echo(f"Break-even: month {result.break_even_month}")


# ── Entry point ───────────────────────────────────────────────────────


def main():
    cli()


if __name__ == "__main__":
    main()
