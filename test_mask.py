"""비네트 마스크 테스트."""

import pytest

from errors import InvalidInput
from renderer.mask import build_rounded_mask, mask_to_image

BORDER = round(0.5 * 255)


@pytest.fixture
def sharp_mask():
    return build_rounded_mask(300, 300, 15, 10, 0.5, blur_radius=0)


def test_three_alpha_bands(sharp_mask):
    assert sharp_mask.mode == "L"
    assert sharp_mask.size == (300, 300)
    assert sharp_mask.getpixel((0, 0)) == 0             # 잘린 모서리
    assert sharp_mask.getpixel((5, 150)) == BORDER      # 테두리 링
    assert sharp_mask.getpixel((150, 5)) == BORDER
    assert sharp_mask.getpixel((150, 150)) == 255       # 안쪽


def test_ring_edges_follow_margin(sharp_mask):
    assert sharp_mask.getpixel((9, 150)) == BORDER
    assert sharp_mask.getpixel((10, 150)) == 255
    assert sharp_mask.getpixel((289, 150)) == 255
    assert sharp_mask.getpixel((290, 150)) == BORDER
    assert sharp_mask.getpixel((299, 150)) == BORDER


def test_all_corners_cut(sharp_mask):
    for xy in [(0, 0), (299, 0), (0, 299), (299, 299)]:
        assert sharp_mask.getpixel(xy) == 0


@pytest.mark.parametrize("size", [(40, 40), (120, 60), (61, 203)])
def test_corner_and_center_for_other_sizes(size):
    mask = build_rounded_mask(*size, outer_radius=8, inner_margin=4, blur_radius=0)
    assert mask.size == size
    assert mask.getpixel((0, 0)) == 0
    assert mask.getpixel((size[0] // 2, size[1] // 2)) == 255


def test_blurred_scenario():
    mask = build_rounded_mask(300, 300, 15, 10, 0.5, 10)
    assert mask.size == (300, 300)
    corner = mask.getpixel((0, 0))
    edge = mask.getpixel((150, 0))
    assert mask.getpixel((150, 150)) > 240
    # 블러가 가장자리 픽셀을 복제하므로 50% 테두리 링이 모서리로 번진다.
    # 0까지는 내려가지 않으니 링 값(128)보다 확실히 낮은 80을 상한으로 둔다
    assert corner < 80
    assert corner < edge


def test_border_opacity_extremes():
    opaque = build_rounded_mask(50, 50, 5, 5, 1.0, blur_radius=0)
    clear = build_rounded_mask(50, 50, 5, 5, 0.0, blur_radius=0)
    assert opaque.getpixel((2, 25)) == 255
    assert clear.getpixel((2, 25)) == 0
    assert clear.getpixel((25, 25)) == 255


def test_mask_to_image_is_black_with_alpha(sharp_mask):
    img = mask_to_image(sharp_mask)
    assert img.mode == "RGBA"
    assert img.getpixel((5, 150)) == (0, 0, 0, BORDER)
    assert img.getpixel((0, 0)) == (0, 0, 0, 0)


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(width=0, height=10),
        dict(width=100, height=100, border_opacity=1.5),
        dict(width=100, height=100, outer_radius=-1),
        dict(width=20, height=20, inner_margin=10),
    ],
)
def test_invalid_parameters(kwargs):
    with pytest.raises(InvalidInput):
        build_rounded_mask(**kwargs)
