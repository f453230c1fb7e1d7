"""스냅샷 압축/저장 테스트."""

import gzip
import os

import pytest

from errors import GeometryMismatch, MissingSnapshot, SnapshotCorrupt
from framebuffer.snapshot import (
    compress,
    decompress,
    load_snapshot,
    save_snapshot,
    snapshot_path,
)


@pytest.mark.parametrize(
    "data",
    [b"", b"\x00", bytes(range(256)) * 40, os.urandom(5000), b"\xff" * 4_096_000],
)
def test_round_trip(data):
    assert decompress(compress(data)) == data


def test_compress_is_deterministic():
    assert compress(b"abc" * 100) == compress(b"abc" * 100)


def test_readable_by_gzip_tool_format():
    assert gzip.decompress(compress(b"frame")) == b"frame"


def test_corrupt_blob():
    with pytest.raises(SnapshotCorrupt):
        decompress(b"not a gzip stream")
    with pytest.raises(SnapshotCorrupt):
        decompress(compress(b"x" * 1000)[:-10])


def test_snapshot_path_uses_basename(tmp_path):
    assert snapshot_path(tmp_path, "/some/where/cat.png") == tmp_path / "cat.png.bin.gz"


def test_save_and_load(tmp_path):
    path = save_snapshot(tmp_path / "srv" / "cat.png.bin.gz", b"\x01\x02" * 50)
    assert path.exists()
    assert load_snapshot(path, expected_size=100) == b"\x01\x02" * 50
    assert [p.name for p in path.parent.iterdir()] == ["cat.png.bin.gz"]


def test_load_missing(tmp_path):
    with pytest.raises(MissingSnapshot):
        load_snapshot(tmp_path / "nope.bin.gz")


def test_load_rejects_wrong_length(tmp_path):
    path = save_snapshot(tmp_path / "short.bin.gz", b"\x00" * 4_095_996)
    with pytest.raises(GeometryMismatch):
        load_snapshot(path, expected_size=1280 * 800 * 4)


def test_failed_save_keeps_previous(tmp_path, monkeypatch):
    path = save_snapshot(tmp_path / "cat.png.bin.gz", b"old")

    def broken_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", broken_replace)
    with pytest.raises(OSError):
        save_snapshot(path, b"new")

    assert load_snapshot(path) == b"old"
    assert [p.name for p in tmp_path.iterdir()] == ["cat.png.bin.gz"]
