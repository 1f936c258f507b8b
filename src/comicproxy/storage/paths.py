"""Storage key layout for series assets.

Chapter pages live under ``series/{series_id}/chapters/{chapter}/``;
covers and banners sit directly under ``series/{series_id}/``.
"""

import re
import time
from typing import Optional


def _sanitize_extension(extension: str) -> str:
    ext = re.sub(r"[^a-z0-9]", "", extension.strip().lstrip(".").lower())
    return ext or "bin"


def _sanitize_segment(segment: str) -> str:
    """Remove path traversal and dangerous characters from one path segment."""
    safe = str(segment).replace("..", "").replace("/", "_").replace("\\", "_")
    safe = re.sub(r"[^a-zA-Z0-9._-]", "_", safe)
    return safe[:255]


def _format_number(value: float) -> str:
    # Chapter 12.0 is stored as "12", chapter 12.5 as "12.5"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def generate_file_path(
    folder: str,
    filename: str,
    prefix: Optional[str] = None,
    timestamp_ms: Optional[int] = None,
) -> str:
    """Build a unique, timestamped path for a generic upload.

    Example: ``generate_file_path("avatars", "me.PNG", "u1")`` gives
    ``avatars/u1/1700000000000.png``.
    """
    ext = filename.rsplit(".", 1)[-1] if "." in filename else ""
    stamp = int(time.time() * 1000) if timestamp_ms is None else timestamp_ms
    base = f"{folder.strip('/')}/{_sanitize_segment(prefix)}" if prefix else folder.strip("/")
    return f"{base}/{stamp}.{_sanitize_extension(ext)}"


def chapter_page_path(series_id: str, chapter_number: float, page_number: int, extension: str) -> str:
    return (
        f"series/{_sanitize_segment(series_id)}/chapters/{_format_number(chapter_number)}/"
        f"{page_number}.{_sanitize_extension(extension)}"
    )


def cover_path(series_id: str, extension: str) -> str:
    return f"series/{_sanitize_segment(series_id)}/cover.{_sanitize_extension(extension)}"


def banner_path(series_id: str, extension: str) -> str:
    return f"series/{_sanitize_segment(series_id)}/banner.{_sanitize_extension(extension)}"


def chapter_pdf_path(series_id: str, chapter_number: float) -> str:
    return f"series/{_sanitize_segment(series_id)}/chapters/{_format_number(chapter_number)}/chapter.pdf"
