"""원본 이미지 확대 모듈."""

import logging

from PIL import Image

from errors import InvalidInput

logger = logging.getLogger(__name__)

RESAMPLE_FILTERS = {
    "nearest": Image.Resampling.NEAREST,
    "box": Image.Resampling.BOX,
    "bilinear": Image.Resampling.BILINEAR,
    "bicubic": Image.Resampling.BICUBIC,
    "lanczos": Image.Resampling.LANCZOS,
}


def resample_filter(name: str) -> Image.Resampling:
    """설정 문자열을 Pillow 리샘플링 필터로 바꾼다."""
    try:
        return RESAMPLE_FILTERS[name.lower()]
    except KeyError:
        raise InvalidInput(f"알 수 없는 리샘플링 필터: {name}") from None


def scaled_size(width: int, height: int, factor: float) -> tuple[int, int]:
    """배율 적용 후 크기: round(width*factor) x round(height*factor)."""
    if width <= 0 or height <= 0:
        raise InvalidInput(f"크기가 0인 이미지: {width}x{height}")
    if factor <= 0:
        raise InvalidInput(f"배율은 양수여야 함: {factor}")
    size = (int(round(width * factor)), int(round(height * factor)))
    if size[0] == 0 or size[1] == 0:
        raise InvalidInput(f"배율 {factor} 적용 시 크기가 0이 됨: {width}x{height}")
    return size


def scale_image(
    image: Image.Image,
    factor: float = 3.0,
    resample: Image.Resampling = Image.Resampling.LANCZOS,
) -> Image.Image:
    """이미지를 고정 배율로 확대/축소한다."""
    size = scaled_size(image.width, image.height, factor)
    if image.mode not in ("RGB", "RGBA"):
        image = image.convert("RGBA")
    logger.debug("이미지 확대: %dx%d -> %dx%d", image.width, image.height, *size)
    return image.resize(size, resample)
