"""Core service interfaces and the shared error taxonomy.

The reconciliation services depend only on the protocols defined here, so
the filesystem provider and the diagnostic sink can be swapped for in-memory
fakes in tests.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Protocol

from core.models import DayCollections, PhotoCollection, Username


class ProviderError(Exception):
    """Failure raised while a provider enumerates days, users or photos.

    Attributes:
        path: Offending path, when one is known.
    """

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class CannotReadDirectoryError(ProviderError):
    """A day or user directory could not be listed."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Cannot read directory: {path}.", path)


class CannotReadFileError(ProviderError):
    """A photo file could not be read for hashing."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Cannot read file: {path}.", path)


class CannotGetDirEntryError(ProviderError):
    """A directory entry could not be inspected or its name decoded."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Cannot get dir entry: {path}.", path)


class DateParsingError(ProviderError):
    """A day directory name is not a valid date."""

    def __init__(self, path: Path, value: str) -> None:
        super().__init__(f"Cannot parse date: '{value}' ({path}).", path)
        self.value = value


class SyncError(Exception):
    """Raised by the sync use case when the photo provider fails."""


class PhotoProvider(Protocol):
    """Source of per-day, per-user photo collections."""

    def get_date_to_photo_collections(self) -> DayCollections:
        """Return day -> [(user, collection)] or raise `ProviderError`."""
        raise NotImplementedError


class MissingPhotosSink(Protocol):
    """Receives each non-empty missing set found during reconciliation."""

    def __call__(self, day: date | None, peer: Username, missing: PhotoCollection) -> None:
        raise NotImplementedError
