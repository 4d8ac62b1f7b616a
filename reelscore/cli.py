from __future__ import annotations

import json
import logging
import random
from dataclasses import asdict
from pathlib import Path
from time import perf_counter

import typer

from reelscore.analyzer import analyze_path
from reelscore.config import Settings, load_settings
from reelscore.feedback import top_issues
from reelscore.ingest.probe import probe_video
from reelscore.logging_config import configure_logging
from reelscore.models import SlideshowConfig, TransitionType

app = typer.Typer(help="Heuristic virality scoring for short vertical videos.")
config_app = typer.Typer(help="Configuration commands.")

app.add_typer(config_app, name="config")

logger = logging.getLogger(__name__)


def _bootstrap(config_path: Path) -> Settings:
    settings = load_settings(config_path)
    configure_logging(settings.logging)
    logger.debug("Loaded runtime settings from %s", config_path)
    return settings


@config_app.command("show")
def show_config(
    config_path: Path = typer.Option(
        Path("configs/default.yaml"),
        "--config",
        "-c",
        envvar="REELSCORE_CONFIG",
        help="Path to YAML configuration file.",
    )
) -> None:
    """Print resolved runtime configuration."""

    settings = _bootstrap(config_path)
    typer.echo(json.dumps(settings.model_dump(mode="json"), indent=2))


@app.command()
def probe(
    video_path: str,
    config_path: Path = typer.Option(
        Path("configs/default.yaml"),
        "--config",
        "-c",
        envvar="REELSCORE_CONFIG",
        help="Path to YAML configuration file.",
    ),
) -> None:
    """Print the metadata the scorer would use for a video."""

    _bootstrap(config_path)
    try:
        metadata = probe_video(video_path)
    except (RuntimeError, ValueError, FileNotFoundError) as exc:
        logger.error("Probe failed: %s", exc)
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(json.dumps({**asdict(metadata), "resolution": metadata.resolution}, indent=2))


@app.command()
def analyze(
    video_path: str,
    config_path: Path = typer.Option(
        Path("configs/default.yaml"),
        "--config",
        "-c",
        envvar="REELSCORE_CONFIG",
        help="Path to YAML configuration file.",
    ),
    images: int | None = typer.Option(None, help="Image count when the video is a rendered slideshow."),
    slide_duration: float = typer.Option(2.0, help="Seconds per slide (slideshows only)."),
    transition: TransitionType = typer.Option(TransitionType.FADE, help="Slide transition (slideshows only)."),
    seed: int | None = typer.Option(None, help="Seed for the score jitter; overrides the configured seed."),
    jitter: bool = typer.Option(True, help="Apply the small random score variance."),
    thumbnail_out: Path | None = typer.Option(None, help="Write the JPEG thumbnail to this path."),
) -> None:
    """Score a video and print the result with improvement feedback."""

    settings = _bootstrap(config_path)
    if not jitter:
        settings.scoring.jitter_enabled = False

    slideshow = None
    if images is not None:
        slideshow = SlideshowConfig(image_count=images, duration_per_slide=slide_duration, transition=transition)

    rng = random.Random(seed) if seed is not None else None

    started_at = perf_counter()
    try:
        result = analyze_path(video_path, slideshow, settings=settings, rng=rng)
    except (RuntimeError, ValueError, FileNotFoundError) as exc:
        logger.error("Analysis failed: %s", exc)
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(f"Analyzed {video_path} in {perf_counter() - started_at:.1f}s", err=True)

    payload = result.to_dict()
    if thumbnail_out is not None and result.thumbnail_jpeg is not None:
        thumbnail_out.parent.mkdir(parents=True, exist_ok=True)
        thumbnail_out.write_bytes(result.thumbnail_jpeg)
        payload["thumbnail_path"] = str(thumbnail_out)
    payload["top_issues"] = [asdict(issue) for issue in top_issues(result)]

    typer.echo(json.dumps(payload, indent=2))


if __name__ == "__main__":
    app()
