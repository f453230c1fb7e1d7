"""캔버스 도우미 모듈 — 둥근 사각형 영역과 레이어 배치."""

from dataclasses import dataclass

from PIL import Image, ImageDraw

from errors import OutOfBounds


@dataclass(frozen=True)
class RoundedRectSpec:
    """둥근 사각형 영역. width/height는 크기가 아니라 오른쪽/아래 좌표다."""
    x: int
    y: int
    width: int
    height: int
    corner_radius: int

    @property
    def box(self) -> list[int]:
        return [self.x, self.y, self.width, self.height]


def transparent(size: tuple[int, int]) -> Image.Image:
    """완전히 투명한 RGBA 캔버스를 만든다."""
    return Image.new("RGBA", size, (0, 0, 0, 0))


def rounded_layer(size: tuple[int, int], rect: RoundedRectSpec, fill: tuple) -> Image.Image:
    """투명 캔버스에 둥근 사각형 하나만 채운 레이어를 만든다."""
    layer = transparent(size)
    draw = ImageDraw.Draw(layer)
    # 좌표가 뒤집히면 Pillow가 예외를 던지므로 그리지 않는다
    if rect.width >= rect.x and rect.height >= rect.y:
        draw.rounded_rectangle(rect.box, radius=rect.corner_radius, fill=fill)
    return layer


def check_fit(base_size: tuple[int, int], layer_size: tuple[int, int], position: tuple[int, int]) -> None:
    """레이어가 position에서 base 범위 안에 들어가는지 확인한다."""
    x, y = position
    w, h = layer_size
    bw, bh = base_size
    if x < 0 or y < 0 or x + w > bw or y + h > bh:
        raise OutOfBounds(
            f"레이어 {w}x{h} @ ({x}, {y})가 캔버스 {bw}x{bh}를 벗어남"
        )


def letterbox(image: Image.Image, size: tuple[int, int], background: tuple = (0, 0, 0)) -> Image.Image:
    """이미지를 size 크기의 배경색 캔버스 중앙에 배치한다 (넘치면 잘림)."""
    if image.size == size:
        return image
    result = Image.new(image.mode, size, tuple(background[:3]) + ((255,) if image.mode == "RGBA" else ()))
    x = (size[0] - image.width) // 2
    y = (size[1] - image.height) // 2
    result.paste(image, (x, y))
    return result


def place(layer: Image.Image, size: tuple[int, int], position: tuple[int, int]) -> Image.Image:
    """레이어를 size 크기의 투명 캔버스에 지정 위치로 배치한다."""
    if layer.mode != "RGBA":
        layer = layer.convert("RGBA")
    if layer.size == size and position == (0, 0):
        return layer
    result = transparent(size)
    result.paste(layer, position)
    return result
