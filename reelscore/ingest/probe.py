from __future__ import annotations

import json
import logging
import subprocess
from pathlib import Path
from typing import Any

from reelscore.exceptions import AnalysisError, NoVideoTrackError
from reelscore.models import VideoMetadata

logger = logging.getLogger(__name__)


def probe_video(video_path: str | Path) -> VideoMetadata:
    """Read duration, display resolution, frame rate and file size for a video."""

    source_path = Path(video_path).expanduser().resolve()
    if not source_path.exists():
        raise FileNotFoundError(f"Video file not found: {source_path}")

    payload = _run_ffprobe(source_path)
    metadata = _metadata_from_probe(payload, file_size_bytes=_file_size(source_path))
    logger.debug("Probed %s: %s", source_path, metadata)
    return metadata


def _run_ffprobe(video_path: Path) -> dict[str, Any]:
    command = [
        "ffprobe",
        "-v",
        "error",
        "-print_format",
        "json",
        "-show_format",
        "-show_streams",
        str(video_path),
    ]

    try:
        completed = subprocess.run(
            command,
            check=True,
            capture_output=True,
            text=True,
        )
    except FileNotFoundError as exc:
        raise AnalysisError(
            "ffprobe executable was not found. Install FFmpeg so ffprobe is available on PATH."
        ) from exc
    except subprocess.CalledProcessError as exc:
        stderr = (exc.stderr or "").strip()
        details = f" ffprobe stderr: {stderr}" if stderr else ""
        raise AnalysisError(f"ffprobe failed to read media file: {video_path}.{details}") from exc

    try:
        return json.loads(completed.stdout)
    except json.JSONDecodeError as exc:
        raise AnalysisError("ffprobe returned invalid JSON output.") from exc


def _metadata_from_probe(payload: dict[str, Any], *, file_size_bytes: int) -> VideoMetadata:
    video_streams = [stream for stream in payload.get("streams", []) if stream.get("codec_type") == "video"]
    if not video_streams:
        raise NoVideoTrackError("No video stream found in media file.")

    stream = video_streams[0]
    format_entry = payload.get("format", {})

    try:
        width = _to_int(stream.get("width")) or 0
        height = _to_int(stream.get("height")) or 0
        if abs(_rotation_degrees(stream)) % 180 == 90:
            width, height = height, width

        duration = _to_float(format_entry.get("duration"))
        if duration is None:
            duration = _to_float(stream.get("duration")) or 0.0

        frame_rate = _parse_frame_rate(stream.get("avg_frame_rate")) or _parse_frame_rate(stream.get("r_frame_rate"))
    except (TypeError, ValueError) as exc:
        raise AnalysisError(f"ffprobe reported malformed stream metadata: {exc}") from exc

    return VideoMetadata(
        duration_seconds=duration,
        width=width,
        height=height,
        frame_rate=frame_rate,
        file_size_bytes=file_size_bytes,
    )


def _file_size(video_path: Path) -> int:
    try:
        return video_path.stat().st_size
    except OSError as exc:
        logger.warning("Could not read file size of %s (%s); assuming 0 bytes.", video_path, exc)
        return 0


def _rotation_degrees(stream: dict[str, Any]) -> int:
    rotate_tag = stream.get("tags", {}).get("rotate")
    if rotate_tag not in (None, ""):
        return int(float(rotate_tag))
    for side_data in stream.get("side_data_list", []):
        if "rotation" in side_data:
            return int(float(side_data["rotation"]))
    return 0


def _parse_frame_rate(raw_value: Any) -> float:
    if raw_value in (None, "N/A", "", "0/0"):
        return 0.0
    text = str(raw_value)
    if "/" in text:
        numerator, denominator = text.split("/", 1)
        if float(denominator) == 0:
            return 0.0
        return float(numerator) / float(denominator)
    return float(text)


def _to_float(raw_value: Any) -> float | None:
    if raw_value in (None, "N/A", ""):
        return None
    return float(raw_value)


def _to_int(raw_value: Any) -> int | None:
    if raw_value in (None, "N/A", ""):
        return None
    return int(raw_value)
