"""Per-day reconciliation of the owner's collection against every peer."""

from __future__ import annotations

from datetime import date

from loguru import logger

from core.models import MissingPhotos, PeerCollections, PhotoCollection, Username
from core.services.interfaces import MissingPhotosSink


def log_missing_photos(day: date | None, peer: Username, missing: PhotoCollection) -> None:
    """Default sink: report a missing set at DEBUG level."""
    logger.debug(
        "For day: '{}', you missing: [{}] - we can find it in '{}' collection.",
        day,
        ", ".join(str(p) for p in missing),
        peer,
    )


class FindMissingPhotosService:
    """Computes which photos each peer has that the owner lacks for one day."""

    def __init__(self, sink: MissingPhotosSink | None = None) -> None:
        self._sink = sink or log_missing_photos

    def execute(
        self,
        owner_collection: PhotoCollection,
        peer_collections: PeerCollections,
        day: date | None = None,
    ) -> MissingPhotos:
        """Return peer -> photos missing from `owner_collection`.

        Peers with an empty collection, or the same content as the owner,
        are skipped. Only non-empty differences are kept.

        Args:
            owner_collection: Baseline collection for the day.
            peer_collections: Collections of every other user that day.
            day: Used only when reporting to the sink.
        """
        missing_photos: MissingPhotos = {}

        for peer, peer_collection in peer_collections.items():
            if not peer_collection.is_reconciliation_needed_with(owner_collection):
                continue

            missing = peer_collection.difference(owner_collection)
            if missing.is_empty():
                continue

            missing_photos[peer] = missing
            try:
                self._sink(day, peer, missing)
            except Exception as ex:  # pylint: disable=broad-exception-caught
                logger.warning("Missing-photos sink failed for '{}' on {}: {}", peer, day, ex)

        return missing_photos
