"""캡처 도구 — 이미지를 비네트 프레임으로 합성해 화면에 띄우고 스냅샷으로 저장한다.

사용법: python capture.py <image> [--config config.json]
"""

import argparse
import logging
import shutil
import sys
import tempfile
from pathlib import Path

from PIL import Image

from config import load_config
from errors import ArtifactWriteFailure, FrameError, InvalidInput
from framebuffer.device import FramebufferDevice
from framebuffer.snapshot import save_snapshot, snapshot_path
from renderer.canvas import letterbox
from renderer.mask import mask_to_image
from renderer.vignette import VignetteCompositor

logger = logging.getLogger("capture")

MASK_ARTIFACT = "black_mask.png"
INTERMEDIATE_ARTIFACT = "intermediate.png"


def _load_source(path: Path) -> Image.Image:
    try:
        with Image.open(path) as img:
            img.load()
            return img.copy()
    except OSError as e:
        raise InvalidInput(f"원본 이미지를 열 수 없음: {path} ({e})") from e


def run_capture(source: str | Path, config: dict, device: FramebufferDevice | None = None) -> Path:
    """캡처 파이프라인 전체를 실행하고 저장된 스냅샷 경로를 반환한다.

    중간 결과는 이 호출 전용 임시 디렉토리에만 쓰고, 모든 단계가 성공한
    뒤에야 스냅샷과 산출물을 최종 위치로 옮긴다.
    """
    source = Path(source)
    capture_cfg = config["capture"]
    display_cfg = config["display"]

    src = _load_source(source)
    logger.info("원본 로드: %s (%dx%d)", source, src.width, src.height)

    frame = VignetteCompositor.from_config(capture_cfg).compose(src)

    if device is None:
        device = FramebufferDevice.from_config(config["framebuffer"], display_cfg)

    method = display_cfg.get("method", "fbi")
    hold = display_cfg.get("hold_sec", 3)

    with tempfile.TemporaryDirectory(prefix="capture-") as staging_dir:
        staging = Path(staging_dir)
        mask_file = staging / MASK_ARTIFACT
        intermediate_file = staging / INTERMEDIATE_ARTIFACT
        mask_to_image(frame.mask).save(mask_file)
        frame.flat.save(intermediate_file)

        # 화면 표시
        if method == "fbi":
            device.display(intermediate_file, hold)
        elif method == "direct":
            screen = (device.geometry.width, device.geometry.height)
            background = capture_cfg.get("background", (0, 0, 0))
            device.show(letterbox(frame.flat, screen, background), hold)
        else:
            raise InvalidInput(f"알 수 없는 표시 방식: {method}")

        # 장치 내용 캡처 후 저장
        captured = device.read()
        logger.info("화면 캡처: %d 바이트", len(captured))

        artifact_dir = Path(capture_cfg["artifact_dir"])
        try:
            artifact_dir.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(mask_file, artifact_dir / MASK_ARTIFACT)
            shutil.copyfile(intermediate_file, artifact_dir / INTERMEDIATE_ARTIFACT)
        except OSError as e:
            raise ArtifactWriteFailure(f"산출물 저장 실패: {artifact_dir} ({e})") from e

        # 스냅샷 교체는 항상 마지막 단계
        target = save_snapshot(snapshot_path(capture_cfg["snapshot_dir"], source), captured)

    return target


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="capture.py",
        description="이미지를 비네트 프레임으로 합성해 프레임버퍼 스냅샷으로 저장한다.",
    )
    parser.add_argument("image", nargs="?", help="원본 이미지 경로")
    parser.add_argument("--config", type=Path, default=None, help="설정 파일 (JSON)")
    parser.add_argument("-v", "--verbose", action="store_true", help="디버그 로그 출력")
    args = parser.parse_args(argv)

    if args.image is None:
        parser.print_usage(sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(name)s] %(message)s",
    )

    try:
        target = run_capture(args.image, load_config(args.config))
    except (FrameError, OSError) as e:
        logger.error("캡처 실패: %s", e)
        return 1

    logger.info("이미지 캡처 완료: %s", target)
    return 0


if __name__ == "__main__":
    sys.exit(main())
