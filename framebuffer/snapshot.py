"""프레임버퍼 스냅샷 압축/저장 모듈.

스냅샷은 프레임버퍼 바이트를 그대로 gzip으로 압축한 파일이다
(`gzip -9`와 같은 형식, 별도 헤더 없음).
"""

import gzip
import logging
import os
import tempfile
import zlib
from pathlib import Path

from errors import GeometryMismatch, MissingSnapshot, SnapshotCorrupt

logger = logging.getLogger(__name__)

SNAPSHOT_SUFFIX = ".bin.gz"


def compress(data: bytes, level: int = 9) -> bytes:
    # mtime=0: 같은 입력이면 같은 출력
    return gzip.compress(data, compresslevel=level, mtime=0)


def decompress(blob: bytes) -> bytes:
    try:
        return gzip.decompress(blob)
    except (OSError, EOFError, zlib.error) as e:
        raise SnapshotCorrupt(f"스냅샷 압축 해제 실패: {e}") from e


def snapshot_path(directory: str | Path, source: str | Path) -> Path:
    """원본 이미지 이름으로 스냅샷 경로를 만든다: <dir>/<basename>.bin.gz"""
    return Path(directory) / (Path(source).name + SNAPSHOT_SUFFIX)


def save_snapshot(path: str | Path, frame: bytes, level: int = 9) -> Path:
    """프레임을 압축해 path에 원자적으로 저장한다.

    같은 디렉토리의 임시 파일에 먼저 쓴 뒤 os.replace로 교체하므로
    실패해도 기존 스냅샷은 그대로 남는다.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    blob = compress(frame, level)

    fd, tmp_name = tempfile.mkstemp(prefix=path.name + ".", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(blob)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.info("스냅샷 저장: %s (%d -> %d 바이트)", path, len(frame), len(blob))
    return path


def load_snapshot(path: str | Path, expected_size: int | None = None) -> bytes:
    """스냅샷을 읽어 압축을 푼다. expected_size와 길이가 다르면 거부한다."""
    path = Path(path)
    try:
        blob = path.read_bytes()
    except FileNotFoundError:
        raise MissingSnapshot(f"스냅샷 없음: {path}") from None

    frame = decompress(blob)
    if expected_size is not None and len(frame) != expected_size:
        raise GeometryMismatch(
            f"스냅샷 길이 {len(frame)} != 장치 크기 {expected_size} ({path})"
        )
    return frame
