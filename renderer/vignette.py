"""비네트 합성 모듈 — 확대 + 마스크 + 알파 교체 + 평탄화."""

import logging
from dataclasses import dataclass

from PIL import Image

from .layers import flatten, replace_alpha
from .mask import build_rounded_mask
from .scaler import resample_filter, scale_image

logger = logging.getLogger(__name__)


@dataclass
class VignetteFrame:
    """한 번의 합성 결과."""
    mask: Image.Image     # "L" 알파 마스크
    framed: Image.Image   # 마스크가 적용된 RGBA 이미지
    flat: Image.Image     # 배경색으로 평탄화된 RGB 이미지


class VignetteCompositor:
    """원본 이미지를 둥근 모서리 비네트 프레임으로 합성한다."""

    def __init__(
        self,
        scale_factor: float = 3.0,
        resample: str = "lanczos",
        corner_radius: int = 15,
        inner_margin: int = 10,
        border_opacity: float = 0.5,
        blur_radius: float = 10,
        background: tuple = (0, 0, 0),
    ):
        self._scale_factor = scale_factor
        self._resample = resample_filter(resample)
        self._corner_radius = corner_radius
        self._inner_margin = inner_margin
        self._border_opacity = border_opacity
        self._blur_radius = blur_radius
        self._background = tuple(background)

    @classmethod
    def from_config(cls, section: dict) -> "VignetteCompositor":
        return cls(
            scale_factor=section.get("scale_factor", 3.0),
            resample=section.get("resample", "lanczos"),
            corner_radius=section.get("corner_radius", 15),
            inner_margin=section.get("inner_margin", 10),
            border_opacity=section.get("border_opacity", 0.5),
            blur_radius=section.get("blur_radius", 10),
            background=section.get("background", (0, 0, 0)),
        )

    def compose(self, source: Image.Image) -> VignetteFrame:
        """원본 이미지를 확대하고 비네트 마스크를 씌워 평탄화한다."""
        scaled = scale_image(source, self._scale_factor, self._resample)
        mask = build_rounded_mask(
            scaled.width,
            scaled.height,
            outer_radius=self._corner_radius,
            inner_margin=self._inner_margin,
            border_opacity=self._border_opacity,
            blur_radius=self._blur_radius,
        )
        framed = replace_alpha(scaled, mask)
        flat = flatten(framed, self._background)
        logger.info("비네트 합성 완료: %dx%d", flat.width, flat.height)
        return VignetteFrame(mask=mask, framed=framed, flat=flat)
