"""레이어 합성 모듈 — 알파 교체, 오버 블렌드, 투명도 평탄화."""

from PIL import Image

from errors import GeometryMismatch
from .canvas import check_fit, place


def replace_alpha(target: Image.Image, mask: Image.Image) -> Image.Image:
    """target의 알파 채널을 mask로 교체한 RGBA 사본을 반환한다. 색상은 그대로.

    mask는 "L" 이미지이거나 알파 채널을 가진 이미지(그 알파를 사용)다.
    """
    if mask.size != target.size:
        raise GeometryMismatch(
            f"마스크 {mask.size[0]}x{mask.size[1]} != 대상 {target.size[0]}x{target.size[1]}"
        )
    if mask.mode != "L":
        mask = mask.getchannel("A")
    result = target.convert("RGBA") if target.mode != "RGBA" else target.copy()
    result.putalpha(mask)
    return result


def over_blend(base: Image.Image, overlay: Image.Image, x: int = 0, y: int = 0) -> Image.Image:
    """overlay를 (x, y)에 놓고 base 위에 알파 합성한다.

    overlay의 알파가 0인 픽셀 아래의 base는 바이트 단위로 그대로 남는다.
    """
    check_fit(base.size, overlay.size, (x, y))
    if base.mode != "RGBA":
        base = base.convert("RGBA")
    placed = place(overlay, base.size, (x, y))
    composed = Image.alpha_composite(base, placed)
    footprint = placed.getchannel("A").point(lambda a: 255 if a else 0)
    return Image.composite(composed, base, footprint)


def flatten(image: Image.Image, background: tuple = (0, 0, 0)) -> Image.Image:
    """반투명 이미지를 배경색 위에 합성해 불투명 RGB 이미지로 만든다."""
    if image.mode == "RGB":
        return image.copy()
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    bg = Image.new("RGBA", image.size, tuple(background[:3]) + (255,))
    return Image.alpha_composite(bg, image).convert("RGB")
