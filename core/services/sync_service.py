"""Multi-day sync use case.

Pulls every day's collections from a `PhotoProvider`, splits each day into
the owner and the peers, and runs `FindMissingPhotosService` per day. Days
are independent, so they can optionally be processed on a thread pool; the
result is always ordered by date.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import date

from loguru import logger

from core.models import (
    CollectionOfMissing,
    MissingPhotos,
    PeerCollections,
    PhotoCollection,
    Username,
)
from core.services.interfaces import PhotoProvider, ProviderError, SyncError
from core.services.missing_photos_service import FindMissingPhotosService


def split_owner_and_peers(
    owner: Username, user_collections: list[tuple[Username, PhotoCollection]]
) -> tuple[PhotoCollection, PeerCollections]:
    """Separate the owner's collection from everybody else's.

    A day without an owner entry yields an empty owner collection, so every
    peer photo of that day is reported as missing. Repeated labels are merged.
    """
    owner_collection = PhotoCollection()
    peers: PeerCollections = {}
    for username, collection in user_collections:
        if username == owner:
            target = owner_collection
        else:
            target = peers.setdefault(username, PhotoCollection())
        for photo in collection:
            target.insert(photo)
    return owner_collection, peers


class SyncAllPhotosService:
    """Reconciles the owner against every peer for every day."""

    def __init__(
        self,
        owner: str | Username,
        provider: PhotoProvider,
        finder: FindMissingPhotosService | None = None,
        max_workers: int = 1,
    ) -> None:
        """Create the service.

        Args:
            owner: Label of the owner's folder.
            provider: Source of day -> user -> collection data.
            finder: Per-day reconciler (defaults to `FindMissingPhotosService`).
            max_workers: Threads used for day-level reconciliation; 1 runs inline.
        """
        self._owner = owner if isinstance(owner, Username) else Username(owner)
        self._provider = provider
        self._finder = finder or FindMissingPhotosService()
        self._max_workers = max(1, int(max_workers or 1))

    @property
    def owner(self) -> Username:
        return self._owner

    def execute(self) -> CollectionOfMissing:
        """Return day -> peer -> missing photos, ordered by day.

        Raises:
            SyncError: The provider failed; no partial result is produced.
        """
        try:
            day_collections = self._provider.get_date_to_photo_collections()
        except ProviderError as ex:
            raise SyncError(f"Something went wrong with PhotoProvider: {ex}.") from ex

        days = sorted(day_collections)
        logger.info("Reconciling {} day(s) for owner '{}'", len(days), self._owner)

        if self._max_workers > 1 and len(days) > 1:
            with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
                futures = {
                    day: executor.submit(self._reconcile_day, day, day_collections[day])
                    for day in days
                }
                per_day = {day: future.result() for day, future in futures.items()}
        else:
            per_day = {day: self._reconcile_day(day, day_collections[day]) for day in days}

        missing_for_all_time: CollectionOfMissing = {}
        for day in days:
            missing_for_all_time[day] = per_day[day]
        return missing_for_all_time

    def _reconcile_day(
        self, day: date, user_collections: list[tuple[Username, PhotoCollection]]
    ) -> MissingPhotos:
        owner_collection, peers = split_owner_and_peers(self._owner, user_collections)
        if owner_collection.is_empty() and peers:
            logger.warning("No photos for owner '{}' on {}", self._owner, day)
        return self._finder.execute(owner_collection, peers, day)
