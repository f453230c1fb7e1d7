"""둥근 모서리 비네트 마스크 생성 모듈.

세 단계의 알파 띠를 가진 단일 채널 마스크를 만든다:
  - 바깥 모서리: 0 (잘려 나감)
  - 테두리 링: border_opacity (반투명)
  - 안쪽: 255 (불투명)
마지막에 알파 채널만 가우시안 블러로 부드럽게 한다.
"""

import logging

from PIL import Image, ImageFilter

from errors import InvalidInput
from .canvas import RoundedRectSpec, rounded_layer
from .layers import over_blend, replace_alpha

logger = logging.getLogger(__name__)


def build_rounded_mask(
    width: int,
    height: int,
    outer_radius: int = 15,
    inner_margin: int = 10,
    border_opacity: float = 0.5,
    blur_radius: float = 10,
) -> Image.Image:
    """width x height 크기의 비네트 알파 마스크("L")를 만든다.

    Args:
        outer_radius: 바깥/안쪽 둥근 사각형의 모서리 반지름
        inner_margin: 테두리 링 두께 (안쪽 사각형의 시작 좌표)
        border_opacity: 테두리 링의 불투명도 (0~1)
        blur_radius: 알파 채널 가우시안 블러 반지름 (0이면 생략)
    """
    if width <= 0 or height <= 0:
        raise InvalidInput(f"마스크 크기가 0임: {width}x{height}")
    if outer_radius < 0 or inner_margin < 0:
        raise InvalidInput("반지름과 여백은 음수일 수 없음")
    if not 0.0 <= border_opacity <= 1.0:
        raise InvalidInput(f"테두리 불투명도 범위 초과: {border_opacity}")
    if inner_margin * 2 >= min(width, height):
        raise InvalidInput(f"여백 {inner_margin}이 {width}x{height}에 비해 너무 큼")

    size = (width, height)

    # 1) 불투명 검정 캔버스
    canvas = Image.new("RGBA", size, (0, 0, 0, 255))

    # 2~3) 바깥 둥근 사각형 안쪽만 border_opacity, 모서리는 0
    border_alpha = int(round(border_opacity * 255))
    outer = rounded_layer(size, RoundedRectSpec(0, 0, width, height, outer_radius), (0, 0, 0, border_alpha))
    canvas = replace_alpha(canvas, outer)

    # 4~5) 안쪽 불투명 둥근 사각형. 오버레이 캔버스가 여백만큼 작아서
    # 오른쪽/아래 모서리가 잘린다 (원점 기준 고정 오프셋)
    inner_size = (width - inner_margin, height - inner_margin)
    inner_rect = RoundedRectSpec(
        inner_margin, inner_margin, width - inner_margin, height - inner_margin, outer_radius,
    )
    inner = rounded_layer(inner_size, inner_rect, (0, 0, 0, 255))
    canvas = over_blend(canvas, inner, 0, 0)

    # 6) 알파 채널만 블러
    alpha = canvas.getchannel("A")
    if blur_radius > 0:
        alpha = alpha.filter(ImageFilter.GaussianBlur(blur_radius))

    logger.debug(
        "마스크 생성: %dx%d (radius=%d, margin=%d, opacity=%.2f, blur=%s)",
        width, height, outer_radius, inner_margin, border_opacity, blur_radius,
    )
    return alpha


def mask_to_image(mask: Image.Image) -> Image.Image:
    """마스크를 검정 RGBA 이미지로 바꾼다 (black_mask.png 저장용)."""
    image = Image.new("RGBA", mask.size, (0, 0, 0, 255))
    image.putalpha(mask)
    return image
