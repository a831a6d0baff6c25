# tests/io/test_checkpoint.py
from __future__ import annotations

import logging
from pathlib import Path

import pytest

from acl_sweep.errors import CheckpointError
from acl_sweep.io.checkpoint import FileCheckpointStore, MemoryCheckpointStore


def test_missing_file_reads_none(tmp_path: Path):
    store = FileCheckpointStore(tmp_path / "state.txt")
    assert store.read() is None


def test_write_then_read(tmp_path: Path):
    path = tmp_path / "state.txt"
    store = FileCheckpointStore(path)

    store.write("photos/2021/img 001.jpg")

    assert path.read_text(encoding="utf-8") == "photos/2021/img 001.jpg"
    assert store.read() == "photos/2021/img 001.jpg"


def test_read_drops_trailing_newline_only(tmp_path: Path):
    path = tmp_path / "state.txt"
    path.write_text("some/key\n", encoding="utf-8")
    assert FileCheckpointStore(path).read() == "some/key"


def test_read_keeps_leading_and_inner_spaces(tmp_path: Path):
    path = tmp_path / "state.txt"
    store = FileCheckpointStore(path)

    store.write(" x")
    assert store.read() == " x"

    store.write("  padded key ")
    assert store.read() == "  padded key "


def test_blank_file_reads_none(tmp_path: Path):
    path = tmp_path / "state.txt"
    path.write_text("\n\n", encoding="utf-8")
    assert FileCheckpointStore(path).read() is None


def test_write_overwrites_wholesale(tmp_path: Path):
    path = tmp_path / "state.txt"
    store = FileCheckpointStore(path)

    store.write("a-much-longer-first-key")
    store.write("b")

    assert path.read_text(encoding="utf-8") == "b"


def test_write_creates_parent_dirs_and_leaves_no_temp_files(tmp_path: Path):
    path = tmp_path / "nested" / "dir" / "state.txt"
    FileCheckpointStore(path).write("k")

    assert path.exists()
    assert sorted(p.name for p in path.parent.iterdir()) == ["state.txt"]


def test_write_failure_raises_checkpoint_error(tmp_path: Path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x", encoding="utf-8")
    store = FileCheckpointStore(blocker / "state.txt")

    with pytest.raises(CheckpointError) as ei:
        store.write("k")
    assert isinstance(ei.value.__cause__, OSError)


def test_unreadable_checkpoint_is_logged_and_treated_as_missing(tmp_path: Path, caplog):
    # A directory at the checkpoint path cannot be read as text
    path = tmp_path / "state.txt"
    path.mkdir()

    caplog.set_level(logging.WARNING)
    assert FileCheckpointStore(path).read() is None
    assert any("Could not read checkpoint" in r.getMessage() for r in caplog.records)


def test_memory_store_tracks_writes():
    store = MemoryCheckpointStore(initial="a")
    assert store.read() == "a"

    store.write("b")
    store.write("c")

    assert store.read() == "c"
    assert store.writes == ["b", "c"]
