"""Mini README: Tests for the memory and file blob backends."""

from __future__ import annotations

from pathlib import Path

import pytest

from categorybook.storage import FileBlobStore, MemoryBlobStore


def test_memory_store_round_trips_and_deletes() -> None:
    store = MemoryBlobStore()

    assert store.read("categories") is None
    store.write("categories", b"[]")
    assert store.contains("categories")
    assert store.delete("categories") is True
    assert store.delete("categories") is False


def test_file_store_overwrites_without_leaving_temp_files(tmp_path: Path) -> None:
    store = FileBlobStore(tmp_path)

    store.write("categories", b"[1]")
    store.write("categories", b"[2]")

    assert store.read("categories") == b"[2]"
    assert sorted(path.name for path in tmp_path.iterdir()) == ["categories.json"]
    assert store.metadata()["directory"] == str(tmp_path)


def test_file_store_missing_key_reads_none(tmp_path: Path) -> None:
    assert FileBlobStore(tmp_path / "nested").read("categories") is None


@pytest.mark.parametrize("key", ["../escape", "a/b", "", ".."])
def test_file_store_rejects_path_like_keys(tmp_path: Path, key: str) -> None:
    with pytest.raises(ValueError):
        FileBlobStore(tmp_path).write(key, b"[]")
