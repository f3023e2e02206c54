"""Utilities for day-directory date parsing and photo content hashing.

Centralizes the two formatting concerns the filesystem provider needs so that
the rest of the app depends on a single behavior. Unlike best-effort helpers,
these return `None` on bad input and let the caller decide how to fail.
"""

from __future__ import annotations

from datetime import date, datetime
import hashlib
from pathlib import Path

from loguru import logger

DAY_DIR_FMT = "%Y-%m-%d"
HASH_CHUNK_SIZE = 1024 * 1024


def parse_day(value: str | None, fmt: str = DAY_DIR_FMT) -> date | None:
    """Parse a day directory name using `fmt`; return None on failure."""
    if not value:
        return None
    try:
        return datetime.strptime(value.strip(), fmt).date()
    except (ValueError, TypeError):
        logger.debug("Not a day directory name: {}", value)
        return None


def format_day(day: date | None, fmt: str = DAY_DIR_FMT) -> str:
    """Format a day for display; empty string when None."""
    return day.strftime(fmt) if day else ""


def sha256_file(path: str | Path, chunk_size: int = HASH_CHUNK_SIZE) -> str:
    """Hex SHA-256 digest of the file at `path`, read in chunks.

    Raises:
        OSError: The file cannot be opened or read.
    """
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(chunk_size), b""):
            h.update(chunk)
    return h.hexdigest()


def normalize_extensions(extensions: list[str] | str | None) -> set[str]:
    """Lower-case extensions and make sure each starts with a dot.

    A single string is one extension, not a sequence of characters.

    Raises:
        ValueError: `extensions` is neither a string nor a list.
    """
    if isinstance(extensions, str):
        extensions = [extensions]
    elif extensions is not None and not isinstance(extensions, (list, tuple, set)):
        raise ValueError(f"extensions must be a list of strings, got {extensions!r}")
    result: set[str] = set()
    for ext in extensions or []:
        s = str(ext).strip().lower()
        if not s:
            continue
        result.add(s if s.startswith(".") else f".{s}")
    return result
