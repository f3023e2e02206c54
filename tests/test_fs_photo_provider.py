from __future__ import annotations

from datetime import date
import hashlib
import os
from pathlib import Path

import pytest

from core.models import PhotoId, Username
from core.services.interfaces import (
    CannotReadDirectoryError,
    CannotReadFileError,
    DateParsingError,
    ProviderError,
)
from infrastructure.fs_photo_provider import FsPhotoProvider
from infrastructure.settings import JsonSettings


def _sha(content: bytes) -> PhotoId:
    return PhotoId(hashlib.sha256(content).hexdigest())


def test_reads_days_users_and_content_hashes(photo_tree: Path) -> None:
    data = FsPhotoProvider(photo_tree).get_date_to_photo_collections()

    assert set(data) == {date(2024, 4, 15), date(2024, 4, 16)}
    first = dict(data[date(2024, 4, 15)])
    assert set(first) == {Username("My"), Username("Lev"), Username("Denis")}
    assert set(first[Username("My")]) == {_sha(b"one"), _sha(b"two")}
    assert set(first[Username("Denis")]) == {_sha(b"one"), _sha(b"five")}


def test_identity_ignores_file_name(photo_tree: Path) -> None:
    data = FsPhotoProvider(photo_tree).get_date_to_photo_collections()
    second = dict(data[date(2024, 4, 16)])

    assert second[Username("My")] == second[Username("Denis")]


def test_duplicate_content_collapses(tmp_path: Path) -> None:
    folder = tmp_path / "2024-04-15" / "My"
    folder.mkdir(parents=True)
    (folder / "a.jpg").write_bytes(b"same")
    (folder / "b.jpg").write_bytes(b"same")

    data = FsPhotoProvider(tmp_path).get_date_to_photo_collections()

    assert dict(data[date(2024, 4, 15)])[Username("My")].size() == 1


def test_empty_user_folder_gives_empty_collection(tmp_path: Path) -> None:
    (tmp_path / "2024-04-15" / "My").mkdir(parents=True)

    data = FsPhotoProvider(tmp_path).get_date_to_photo_collections()

    assert dict(data[date(2024, 4, 15)])[Username("My")].is_empty()


def test_hidden_entries_and_stray_files_are_skipped(tmp_path: Path) -> None:
    folder = tmp_path / "2024-04-15" / "My"
    folder.mkdir(parents=True)
    (folder / "a.jpg").write_bytes(b"a")
    (folder / ".DS_Store").write_bytes(b"junk")
    (tmp_path / ".hidden").mkdir()
    (tmp_path / "README.txt").write_text("not a day")
    (tmp_path / "2024-04-15" / "notes.txt").write_text("not a user")

    data = FsPhotoProvider(tmp_path).get_date_to_photo_collections()

    assert list(data) == [date(2024, 4, 15)]
    users = dict(data[date(2024, 4, 15)])
    assert list(users) == [Username("My")]
    assert set(users[Username("My")]) == {_sha(b"a")}


def test_extension_allow_list(tmp_path: Path) -> None:
    folder = tmp_path / "2024-04-15" / "My"
    folder.mkdir(parents=True)
    (folder / "a.JPG").write_bytes(b"a")
    (folder / "b.txt").write_bytes(b"b")

    data = FsPhotoProvider(tmp_path, extensions=["jpg"]).get_date_to_photo_collections()

    assert set(dict(data[date(2024, 4, 15)])[Username("My")]) == {_sha(b"a")}


def test_unparsable_day_directory(tmp_path: Path) -> None:
    (tmp_path / "holiday" / "My").mkdir(parents=True)

    with pytest.raises(DateParsingError) as exc_info:
        FsPhotoProvider(tmp_path).get_date_to_photo_collections()

    assert exc_info.value.value == "holiday"
    assert exc_info.value.path == tmp_path / "holiday"


def test_custom_date_format(tmp_path: Path) -> None:
    (tmp_path / "15.04.2024" / "My").mkdir(parents=True)

    data = FsPhotoProvider(tmp_path, date_format="%d.%m.%Y").get_date_to_photo_collections()

    assert list(data) == [date(2024, 4, 15)]


def test_missing_root_is_a_provider_error(tmp_path: Path) -> None:
    root = tmp_path / "nope"

    with pytest.raises(CannotReadDirectoryError) as exc_info:
        FsPhotoProvider(root).get_date_to_photo_collections()

    assert isinstance(exc_info.value, ProviderError)
    assert str(root) in str(exc_info.value)


@pytest.mark.skipif(
    os.name == "nt" or (hasattr(os, "geteuid") and os.geteuid() == 0),
    reason="permission bits are not enforced",
)
def test_unreadable_file_is_a_provider_error(tmp_path: Path) -> None:
    folder = tmp_path / "2024-04-15" / "My"
    folder.mkdir(parents=True)
    photo = folder / "a.jpg"
    photo.write_bytes(b"a")
    photo.chmod(0)
    try:
        with pytest.raises(CannotReadFileError):
            FsPhotoProvider(tmp_path).get_date_to_photo_collections()
    finally:
        photo.chmod(0o644)


def test_from_settings(tmp_path: Path) -> None:
    settings_file = tmp_path / "settings.json"
    settings_file.write_text('{"provider": {"date_format": "%Y%m%d", "extensions": [".png"]}}')
    folder = tmp_path / "photos" / "20240415" / "My"
    folder.mkdir(parents=True)
    (folder / "a.png").write_bytes(b"a")
    (folder / "b.jpg").write_bytes(b"b")

    provider = FsPhotoProvider.from_settings(tmp_path / "photos", JsonSettings(settings_file))
    data = provider.get_date_to_photo_collections()

    assert provider.photos_root == tmp_path / "photos"
    assert set(dict(data[date(2024, 4, 15)])[Username("My")]) == {_sha(b"a")}


def test_single_extension_string_in_settings(tmp_path: Path) -> None:
    settings_file = tmp_path / "settings.json"
    settings_file.write_text('{"provider": {"extensions": "jpg"}}')
    folder = tmp_path / "photos" / "2024-04-15" / "My"
    folder.mkdir(parents=True)
    (folder / "a.jpg").write_bytes(b"a")
    (folder / "b.png").write_bytes(b"b")

    provider = FsPhotoProvider.from_settings(tmp_path / "photos", JsonSettings(settings_file))
    data = provider.get_date_to_photo_collections()

    assert set(dict(data[date(2024, 4, 15)])[Username("My")]) == {_sha(b"a")}


def test_invalid_extensions_setting_is_rejected(tmp_path: Path) -> None:
    settings_file = tmp_path / "settings.json"
    settings_file.write_text('{"provider": {"extensions": 42}}')

    with pytest.raises(ValueError):
        FsPhotoProvider.from_settings(tmp_path, JsonSettings(settings_file))
