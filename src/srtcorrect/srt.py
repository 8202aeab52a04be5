"""SRT subtitle file parsing and generation."""

import logging
import re
from pathlib import Path

from .models import SubtitleEntry

BLOCK_SEPARATOR = re.compile(r"\n\s*\n")
TIMESTAMP_LINE = re.compile(
    r"(\d{2}:\d{2}:\d{2},\d{3})\s*-->\s*(\d{2}:\d{2}:\d{2},\d{3})"
)
TIMESTAMP = re.compile(r"^(\d+):(\d+):(\d+),(\d+)$")

DEFAULT_FILE_NAME = "subtitles.srt"


def srt_time_to_seconds(timestamp: str) -> float:
    """Convert an SRT timestamp ("HH:MM:SS,mmm") to seconds.

    Malformed timestamps yield 0 rather than raising.
    """
    match = TIMESTAMP.match(timestamp.strip())
    if not match:
        return 0.0

    hours, minutes, seconds, millis = match.groups()
    return (
        int(hours) * 3600
        + int(minutes) * 60
        + int(seconds)
        + int(millis) / 1000
    )


def parse_srt(content: str) -> list[SubtitleEntry]:
    """Parse SRT content into SubtitleEntry objects.

    Malformed blocks are skipped, so the result may be empty.

    Args:
        content: Raw SRT file content

    Returns:
        List of SubtitleEntry objects in source order
    """
    entries = []
    content = content.replace("\r\n", "\n").replace("\r", "\n").strip()
    if not content:
        return entries

    for block in BLOCK_SEPARATOR.split(content):
        lines = block.split("\n")
        if len(lines) < 3:
            logging.debug(f"Skipping SRT block with too few lines: {block!r}")
            continue

        index_line = lines[0].strip()
        index = int(index_line) if index_line.isascii() and index_line.isdigit() else 0
        if index <= 0:
            logging.debug(f"Skipping SRT block with invalid index: {block!r}")
            continue

        match = TIMESTAMP_LINE.search(lines[1])
        if not match:
            logging.debug(f"Skipping SRT block with invalid timestamps: {block!r}")
            continue

        text = "\n".join(lines[2:])
        if not text:
            continue

        entries.append(
            SubtitleEntry(
                id=index,
                start_time=match.group(1),
                end_time=match.group(2),
                text=text,
            )
        )

    return entries


def subtitles_to_srt(entries: list[SubtitleEntry]) -> str:
    """Convert subtitle entries to an SRT format string.

    Blocks are separated by exactly one blank line with none at the end.
    """
    return "\n\n".join(entry.to_srt_block() for entry in entries)


def read_srt(path: str | Path) -> str:
    """Read the raw text of an SRT file.

    UTF-8 (with or without BOM) is tried first, then cp1252.
    """
    path = Path(path)
    try:
        return path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError:
        logging.warning(f"{path} is not valid UTF-8, falling back to cp1252")
        return path.read_text(encoding="cp1252")


def write_srt(entries: list[SubtitleEntry], path: str | Path) -> None:
    """Write subtitle entries to an SRT file.

    Args:
        entries: List of SubtitleEntry objects
        path: Output file path
    """
    path = Path(path)
    path.write_text(subtitles_to_srt(entries), encoding="utf-8")


def export_filename(file_name: str | None) -> str:
    """Name of the corrected export for a source file name."""
    return f"corrected_{Path(file_name).name if file_name else DEFAULT_FILE_NAME}"
