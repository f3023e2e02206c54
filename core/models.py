"""Core domain models for photo identities, users and per-day collections."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import date
import hashlib

_FINGERPRINT_MOD = 1 << 64


@dataclass(frozen=True, order=True)
class PhotoId:
    """Content identity of a single photo (hex digest of its bytes)."""

    value: str

    def __str__(self) -> str:
        return self.value

    def digest64(self) -> int:
        """Stable 64-bit digest of the identity token."""
        raw = hashlib.blake2b(self.value.encode("utf-8"), digest_size=8).digest()
        return int.from_bytes(raw, "big")


@dataclass(frozen=True)
class Username:
    """Name of a person owning a folder for a given day."""

    name: str

    def __str__(self) -> str:
        return self.name


class PhotoCollection:
    """Distinct photos one user has on one day.

    Keeps an order-independent fingerprint over its members so two
    collections can be compared without a full set difference. The
    fingerprint is cached and dropped whenever a new member is inserted.
    """

    __slots__ = ("_items", "_fingerprint")

    def __init__(self, items: Iterable[PhotoId] | None = None) -> None:
        self._items: set[PhotoId] = set(items or ())
        self._fingerprint: int | None = None

    @classmethod
    def from_iterable(cls, values: Iterable[PhotoId | str]) -> PhotoCollection:
        """Build a collection from identities or raw hash strings."""
        return cls(v if isinstance(v, PhotoId) else PhotoId(str(v)) for v in values)

    def insert(self, identity: PhotoId) -> bool:
        """Add `identity`; return False when it was already present."""
        if identity in self._items:
            return False
        self._items.add(identity)
        self._fingerprint = None
        return True

    def is_empty(self) -> bool:
        return not self._items

    def size(self) -> int:
        return len(self._items)

    def difference(self, other: PhotoCollection) -> PhotoCollection:
        """Return identities present in this collection but absent from `other`."""
        return PhotoCollection(self._items - other._items)

    def fingerprint(self) -> int:
        """Order-independent summary: sum of member digests modulo 2**64."""
        if self._fingerprint is None:
            total = 0
            for item in self._items:
                total = (total + item.digest64()) % _FINGERPRINT_MOD
            self._fingerprint = total
        return self._fingerprint

    def is_reconciliation_needed_with(self, other: PhotoCollection) -> bool:
        """Cheap pre-check before computing a difference.

        False when this collection is empty or holds the same members as
        `other` (any insertion order). Skipping the check never changes the
        outcome of `difference`.
        """
        if self.is_empty():
            return False
        if self.size() != other.size():
            return True
        return self.fingerprint() != other.fingerprint()

    def __contains__(self, identity: object) -> bool:
        return identity in self._items

    def __iter__(self) -> Iterator[PhotoId]:
        return iter(sorted(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PhotoCollection):
            return NotImplemented
        return self._items == other._items

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PhotoCollection([{', '.join(str(p) for p in self)}])"


PeerCollections = dict[Username, PhotoCollection]
MissingPhotos = dict[Username, PhotoCollection]
CollectionOfMissing = dict[date, MissingPhotos]
DayCollections = dict[date, list[tuple[Username, PhotoCollection]]]
