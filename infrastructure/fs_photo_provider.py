"""Filesystem photo provider.

Reads a tree laid out as ``<root>/<YYYY-MM-DD>/<user>/<photo files>`` and
identifies each photo by the SHA-256 digest of its bytes. Any failure is
raised as a `ProviderError` subclass naming the offending path.
"""

from __future__ import annotations

import os
from pathlib import Path

from loguru import logger

from core.models import DayCollections, PhotoCollection, PhotoId, Username
from core.services.interfaces import (
    CannotGetDirEntryError,
    CannotReadDirectoryError,
    CannotReadFileError,
    DateParsingError,
)
from infrastructure.utils import DAY_DIR_FMT, normalize_extensions, parse_day, sha256_file

DEFAULT_PHOTOS_ROOT = "./photo_example"


class FsPhotoProvider:
    """Enumerate day -> user -> photo collections from a directory tree."""

    def __init__(
        self,
        photos_root: str | Path = DEFAULT_PHOTOS_ROOT,
        date_format: str = DAY_DIR_FMT,
        ignore_hidden: bool = True,
        extensions: list[str] | str | None = None,
    ) -> None:
        """Create a provider.

        Args:
            photos_root: Directory holding one sub-directory per day.
            date_format: `strptime` format of day directory names.
            ignore_hidden: Skip entries whose name starts with a dot.
            extensions: Optional allow-list of photo extensions; empty means all.
        """
        self._root = Path(photos_root)
        self._date_format = date_format
        self._ignore_hidden = ignore_hidden
        self._extensions = normalize_extensions(extensions)

    @classmethod
    def from_settings(cls, photos_root: str | Path, settings) -> FsPhotoProvider:
        """Build a provider from the `provider.*` keys of a settings object."""
        return cls(
            photos_root,
            date_format=str(settings.get("provider.date_format", DAY_DIR_FMT) or DAY_DIR_FMT),
            ignore_hidden=bool(settings.get("provider.ignore_hidden", True)),
            extensions=settings.get("provider.extensions", []),
        )

    @property
    def photos_root(self) -> Path:
        return self._root

    def get_date_to_photo_collections(self) -> DayCollections:
        """Scan the whole tree.

        Raises:
            ProviderError: A directory, entry or file is unreadable, or a day
                directory name is not a date.
        """
        result: DayCollections = {}
        for day_entry in self._list_dir(self._root):
            if not self._is_dir(day_entry):
                logger.warning("Skipping non-directory at day level: {}", day_entry.path)
                continue

            day = parse_day(day_entry.name, self._date_format)
            if day is None:
                raise DateParsingError(Path(day_entry.path), day_entry.name)

            collections = result.setdefault(day, [])
            for user_entry in self._list_dir(Path(day_entry.path)):
                if not self._is_dir(user_entry):
                    logger.warning("Skipping non-directory at user level: {}", user_entry.path)
                    continue
                collection = self._read_collection(Path(user_entry.path))
                logger.debug(
                    "{} / {}: {} photo(s)", day_entry.name, user_entry.name, collection.size()
                )
                collections.append((Username(user_entry.name), collection))

        logger.info("Scanned {} day(s) under {}", len(result), self._root)
        return result

    def _read_collection(self, user_dir: Path) -> PhotoCollection:
        """Hash every photo directly inside `user_dir`."""
        collection = PhotoCollection()
        for entry in self._list_dir(user_dir):
            if self._is_dir(entry):
                continue
            path = Path(entry.path)
            if self._extensions and path.suffix.lower() not in self._extensions:
                continue
            try:
                digest = sha256_file(path)
            except OSError as ex:
                raise CannotReadFileError(path) from ex
            collection.insert(PhotoId(digest))
        return collection

    def _list_dir(self, path: Path) -> list[os.DirEntry]:
        """Sorted entries of `path`, minus hidden ones when configured."""
        try:
            with os.scandir(path) as it:
                entries = list(it)
        except OSError as ex:
            raise CannotReadDirectoryError(path) from ex
        if self._ignore_hidden:
            entries = [e for e in entries if not e.name.startswith(".")]
        return sorted(entries, key=lambda e: e.name)

    @staticmethod
    def _is_dir(entry: os.DirEntry) -> bool:
        try:
            return entry.is_dir()
        except OSError as ex:
            raise CannotGetDirEntryError(Path(entry.path)) from ex
