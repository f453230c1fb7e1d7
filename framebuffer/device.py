"""리눅스 프레임버퍼(/dev/fbN) 입출력 모듈.

장치는 고정 geometry의 바이트 배열로 다룬다. 동기화 기능이 없으므로
다른 프로세스와 동시에 쓰면 한 프레임이 찢어질 수 있다.
"""

import logging
import subprocess
import time
from pathlib import Path

from PIL import Image

from errors import ExternalToolFailure, GeometryMismatch, InvalidInput
from .probe import FramebufferGeometry, probe_geometry

logger = logging.getLogger(__name__)

DEFAULT_DEVICE = "/dev/fb0"
DEFAULT_DISPLAY_COMMAND = ["fbi", "-T", "3", "-d", "{device}", "--noverbose", "{image}"]

# 장치 픽셀 형식 → (Pillow 모드, 픽셀당 바이트)
PIXEL_FORMATS = {
    "BGRA": ("RGBA", 4),
    "RGBA": ("RGBA", 4),
    "ABGR": ("RGBA", 4),
    "BGRX": ("RGB", 4),
    "RGBX": ("RGB", 4),
    "BGR": ("RGB", 3),
    "RGB": ("RGB", 3),
}


class FramebufferDevice:
    """프레임버퍼 장치에 프레임을 쓰고 읽는 클래스."""

    def __init__(
        self,
        path: str | Path = DEFAULT_DEVICE,
        width: int = 1280,
        height: int = 800,
        bytes_per_pixel: int = 4,
        pixel_format: str = "BGRA",
        display_command: list[str] | None = None,
    ):
        self._path = Path(path)
        self._geometry = FramebufferGeometry(width, height, bytes_per_pixel)
        if pixel_format not in PIXEL_FORMATS:
            raise InvalidInput(f"알 수 없는 픽셀 형식: {pixel_format}")
        if PIXEL_FORMATS[pixel_format][1] != bytes_per_pixel:
            raise InvalidInput(f"픽셀 형식 {pixel_format}은 {bytes_per_pixel}바이트가 아님")
        self._pixel_format = pixel_format
        self._display_command = list(display_command or DEFAULT_DISPLAY_COMMAND)

    @classmethod
    def from_config(cls, section: dict, display: dict | None = None) -> "FramebufferDevice":
        """설정 섹션으로 장치를 만든다. width가 "auto"면 sysfs에서 읽는다."""
        path = section.get("device", DEFAULT_DEVICE)
        if section.get("width") == "auto":
            geometry = probe_geometry(Path(path).name)
        else:
            geometry = FramebufferGeometry(
                section.get("width", 1280),
                section.get("height", 800),
                section.get("bytes_per_pixel", 4),
            )
        return cls(
            path,
            width=geometry.width,
            height=geometry.height,
            bytes_per_pixel=geometry.bytes_per_pixel,
            pixel_format=section.get("pixel_format", "BGRA"),
            display_command=(display or {}).get("command"),
        )

    @property
    def path(self) -> Path:
        return self._path

    @property
    def geometry(self) -> FramebufferGeometry:
        return self._geometry

    @property
    def frame_size(self) -> int:
        return self._geometry.frame_size

    def write(self, data: bytes) -> None:
        """프레임 전체를 오프셋 0부터 쓴다. 길이가 정확히 맞아야 한다."""
        if len(data) != self.frame_size:
            raise GeometryMismatch(
                f"프레임 길이 {len(data)} != 장치 크기 {self.frame_size} ({self._path})"
            )
        # 장치 파일은 잘라내지 않도록 r+b로 연다
        mode = "r+b" if self._path.exists() else "wb"
        view = memoryview(data)
        with open(self._path, mode, buffering=0) as f:
            pos = 0
            while pos < len(view):
                pos += f.write(view[pos:])
        logger.debug("프레임 쓰기 완료: %s (%d 바이트)", self._path, len(data))

    def read(self) -> bytes:
        """현재 화면 내용을 정확히 frame_size 바이트로 읽는다."""
        chunks = []
        remaining = self.frame_size
        with open(self._path, "rb", buffering=0) as f:
            while remaining:
                chunk = f.read(remaining)
                if not chunk:
                    break
                chunks.append(chunk)
                remaining -= len(chunk)
        data = b"".join(chunks)
        if len(data) != self.frame_size:
            raise GeometryMismatch(
                f"읽은 길이 {len(data)} != 장치 크기 {self.frame_size} ({self._path})"
            )
        logger.debug("프레임 읽기 완료: %s (%d 바이트)", self._path, len(data))
        return data

    # ── 화면 표시 ──

    def encode(self, image: Image.Image) -> bytes:
        """이미지를 장치 고유 픽셀 형식의 바이트로 변환한다."""
        size = (self._geometry.width, self._geometry.height)
        if image.size != size:
            raise GeometryMismatch(
                f"이미지 {image.width}x{image.height} != 장치 {size[0]}x{size[1]}"
            )
        mode, _ = PIXEL_FORMATS[self._pixel_format]
        return image.convert(mode).tobytes("raw", self._pixel_format)

    def show(self, image: Image.Image, duration: float = 0) -> None:
        """외부 도구 없이 이미지를 장치에 직접 쓰고 duration초 유지한다."""
        self.write(self.encode(image))
        logger.info("이미지 직접 표시: %dx%d (%s)", image.width, image.height, self._pixel_format)
        if duration > 0:
            time.sleep(duration)

    def display(self, image_path: str | Path, duration: float = 3) -> None:
        """외부 표시 도구(fbi)로 이미지를 전체 화면에 띄우고 duration초 기다린다."""
        cmd = [
            arg.format(device=self._path, image=image_path)
            for arg in self._display_command
        ]
        logger.info("외부 표시 도구 실행: %s", " ".join(cmd))
        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except OSError as e:
            raise ExternalToolFailure(f"표시 도구 실행 실패: {cmd[0]} ({e})") from e
        if result.returncode != 0:
            raise ExternalToolFailure(
                f"표시 도구 실패 (exit {result.returncode}): {result.stderr.strip()}"
            )
        if duration > 0:
            time.sleep(duration)
