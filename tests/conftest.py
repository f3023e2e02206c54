from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from core.models import DayCollections, PhotoCollection, Username
from core.services.interfaces import ProviderError


def collection(*ids: str) -> PhotoCollection:
    return PhotoCollection.from_iterable(ids)


class FakePhotoProvider:
    """In-memory provider returning canned data or raising a canned error."""

    def __init__(self, data: DayCollections | None = None, error: ProviderError | None = None):
        self.data = data or {}
        self.error = error
        self.calls = 0

    def get_date_to_photo_collections(self) -> DayCollections:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.data


@pytest.fixture
def day() -> date:
    return date(2024, 4, 15)


@pytest.fixture
def owner() -> Username:
    return Username("My")


@pytest.fixture
def photo_tree(tmp_path: Path) -> Path:
    """Two days; owner "My" misses photo "five" on the first day only."""
    layout = {
        "2024-04-15/My": {"a.jpg": b"one", "b.jpg": b"two"},
        "2024-04-15/Lev": {"x.jpg": b"one", "y.jpg": b"two"},
        "2024-04-15/Denis": {"c.jpg": b"one", "d.jpg": b"five"},
        "2024-04-16/My": {"a.jpg": b"one"},
        "2024-04-16/Denis": {"renamed.jpg": b"one"},
    }
    for rel, files in layout.items():
        folder = tmp_path / rel
        folder.mkdir(parents=True)
        for name, content in files.items():
            (folder / name).write_bytes(content)
    return tmp_path
