"""
Image processor — resize with a fit policy, keep the source format.

Uses Pillow for image manipulation.  Requested dimensions are an upper
bound: each axis is clamped to the source size first, so a variant is never
larger than its original.

Fit modes (after clamping to the box):
  cover    scale to cover the box, centre crop to exactly the box
  contain  scale to fit inside the box, letterbox to exactly the box
  fill     stretch to exactly the box
  inside   scale to fit inside the box, no letterbox
  outside  scale until both sides reach the box, no crop

With one ``auto`` axis the image is scaled proportionally from the other
axis and the fit mode has no effect.
"""
from __future__ import annotations

import io
import logging
from typing import Protocol

from PIL import Image, ImageOps

from resizer.constants import FitMode
from resizer.options import ResizeSpec

logger = logging.getLogger(__name__)

RESAMPLE = Image.LANCZOS

# Letterbox colour per working mode: transparent when possible, else black
_BACKGROUND: dict[str, int | tuple[int, ...]] = {
    "RGBA": (0, 0, 0, 0),
    "RGB": (0, 0, 0),
    "L": 0,
    "CMYK": (0, 0, 0, 255),
}


class ImageTransformer(Protocol):
    def transform(self, data: bytes, spec: ResizeSpec) -> bytes: ...


class PillowTransformer:
    """Decode, auto-rotate, resize and re-encode a single image."""

    def __init__(self, jpeg_quality: int = 80) -> None:
        self._jpeg_quality = jpeg_quality

    def transform(self, data: bytes, spec: ResizeSpec) -> bytes:
        with Image.open(io.BytesIO(data)) as source:
            fmt = source.format
            if fmt is None:
                raise ValueError("Could not determine the source image format")
            # Orientation is applied before sizing, so the box refers to the
            # image as it is displayed
            image = ImageOps.exif_transpose(source)

        resized = self._resize(image, spec)
        logger.debug(
            "Resized %s %sx%s -> %sx%s (%s)",
            fmt, image.width, image.height, resized.width, resized.height, spec.fit.value,
        )
        return self._encode(resized, fmt)

    def _resize(self, image: Image.Image, spec: ResizeSpec) -> Image.Image:
        width, height = spec.width_px, spec.height_px
        if width is None and height is None:
            return image

        image = _working_mode(image)
        src_w, src_h = image.size

        if width is None or height is None:
            if width is not None:
                scale = min(width, src_w) / src_w
            else:
                scale = min(height, src_h) / src_h
            return image.resize(_scaled(image.size, scale), RESAMPLE)

        box = (min(width, src_w), min(height, src_h))

        if spec.fit is FitMode.FILL:
            return image.resize(box, RESAMPLE)
        if spec.fit is FitMode.COVER:
            return ImageOps.fit(image, box, method=RESAMPLE)
        if spec.fit is FitMode.CONTAIN:
            return ImageOps.pad(image, box, method=RESAMPLE, color=_BACKGROUND[image.mode])
        if spec.fit is FitMode.INSIDE:
            return ImageOps.contain(image, box, method=RESAMPLE)

        # OUTSIDE
        scale = max(box[0] / src_w, box[1] / src_h)
        return image.resize(_scaled(image.size, scale), RESAMPLE)

    def _encode(self, image: Image.Image, fmt: str) -> bytes:
        params: dict[str, int] = {}
        if fmt == "JPEG":
            if image.mode not in ("RGB", "L", "CMYK"):
                image = image.convert("RGB")
            params["quality"] = self._jpeg_quality

        buf = io.BytesIO()
        image.save(buf, format=fmt, **params)
        return buf.getvalue()


def _working_mode(image: Image.Image) -> Image.Image:
    """Convert palette and exotic modes so resampling is not nearest-neighbour."""
    if image.mode in _BACKGROUND:
        return image
    has_alpha = image.mode in ("LA", "La", "PA", "RGBa") or "transparency" in image.info
    return image.convert("RGBA" if has_alpha else "RGB")


def _scaled(size: tuple[int, int], scale: float) -> tuple[int, int]:
    width, height = size
    return max(1, round(width * scale)), max(1, round(height * scale))
