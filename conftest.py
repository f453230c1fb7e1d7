"""pytest 공용 설정과 fixture."""

import json
import sys
from pathlib import Path

import pytest
from PIL import Image

PROJECT_ROOT = Path(__file__).parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from config import load_config  # noqa: E402
from framebuffer.device import FramebufferDevice  # noqa: E402
from framebuffer.snapshot import save_snapshot  # noqa: E402


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "hardware: 실제 프레임버퍼(/dev/fb0)가 필요한 테스트"
    )


def pytest_addoption(parser):
    parser.addoption(
        "--run-hardware",
        action="store_true",
        default=False,
        help="실제 장치가 필요한 테스트도 실행",
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--run-hardware"):
        return
    skip_hardware = pytest.mark.skip(reason="--run-hardware 옵션 필요")
    for item in items:
        if "hardware" in item.keywords:
            item.add_marker(skip_hardware)


# ── fixture ──

@pytest.fixture
def fb_path(tmp_path: Path) -> Path:
    """/dev/fb0 대신 쓰는 일반 파일 경로."""
    return tmp_path / "fb0"


@pytest.fixture
def small_device(fb_path: Path) -> FramebufferDevice:
    """8x4 BGRA 가짜 장치."""
    return FramebufferDevice(fb_path, width=8, height=4, bytes_per_pixel=4)


@pytest.fixture
def source_image(tmp_path: Path) -> Path:
    """100x100 RGB 원본 이미지 (좌우 두 색)."""
    img = Image.new("RGB", (100, 100), (200, 120, 40))
    img.paste((30, 60, 220), (50, 0, 100, 100))
    path = tmp_path / "cat.png"
    img.save(path)
    return path


@pytest.fixture
def make_config(tmp_path: Path, fb_path: Path):
    """tmp_path 아래에서 동작하는 설정을 만들어 JSON 파일로도 저장한다."""

    def _make(width: int = 300, height: int = 300, **sections) -> tuple[dict, Path]:
        override = {
            "framebuffer": {"device": str(fb_path), "width": width, "height": height},
            "capture": {
                "artifact_dir": str(tmp_path / "target"),
                "snapshot_dir": str(tmp_path / "srv"),
            },
            "display": {"method": "direct", "hold_sec": 0},
            "service": {
                "snapshot": str(tmp_path / "srv" / "default.png.bin.gz"),
                "viewer_command": [],
                "viewer_config": None,
                "stop_timeout_sec": 2,
            },
        }
        for name, values in sections.items():
            override[name].update(values)
        path = tmp_path / "config.json"
        path.write_text(json.dumps(override), encoding="utf-8")
        return load_config(path), path

    return _make


@pytest.fixture
def stored_frame(small_device: FramebufferDevice, tmp_path: Path) -> tuple[bytes, Path]:
    """small_device 크기의 스냅샷을 저장하고 (원본 바이트, 경로)를 반환한다."""
    frame = bytes((i * 7) % 256 for i in range(small_device.frame_size))
    path = save_snapshot(tmp_path / "srv" / "default.png.bin.gz", frame)
    return frame, path
