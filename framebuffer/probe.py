"""프레임버퍼 geometry 조회 모듈 (sysfs)."""

import logging
from dataclasses import dataclass
from pathlib import Path

from errors import GeometryMismatch

logger = logging.getLogger(__name__)

SYSFS_GRAPHICS = Path("/sys/class/graphics")


@dataclass(frozen=True)
class FramebufferGeometry:
    """프레임버퍼 크기와 픽셀당 바이트 수."""
    width: int
    height: int
    bytes_per_pixel: int

    @property
    def frame_size(self) -> int:
        return self.width * self.height * self.bytes_per_pixel


def probe_geometry(name: str = "fb0", sysfs_root: Path = SYSFS_GRAPHICS) -> FramebufferGeometry:
    """sysfs에서 프레임버퍼의 virtual_size와 bits_per_pixel을 읽는다."""
    fb_dir = Path(sysfs_root) / name
    try:
        width, height = (fb_dir / "virtual_size").read_text().strip().split(",")
        bpp = int((fb_dir / "bits_per_pixel").read_text().strip())
    except (OSError, ValueError) as e:
        raise GeometryMismatch(f"프레임버퍼 정보를 읽을 수 없음: {fb_dir} ({e})") from e

    if bpp % 8:
        raise GeometryMismatch(f"지원하지 않는 bits_per_pixel: {bpp}")

    geometry = FramebufferGeometry(int(width), int(height), bpp // 8)
    logger.info("프레임버퍼 %s: %dx%d, %dbpp", name, geometry.width, geometry.height, bpp)
    return geometry
