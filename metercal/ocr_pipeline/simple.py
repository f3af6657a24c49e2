"""Pillow-only building blocks for the OCR text sources.

The display classifier and preprocessors need no ML models, so the
recognition path can run anywhere Pillow and Tesseract are installed.
"""
from __future__ import annotations

from typing import Callable, Dict, Sequence

from PIL import Image, ImageFilter, ImageOps, ImageStat

from .interfaces import DisplayClassifier
from .models import DisplayKind

Preprocessor = Callable[[Image.Image], Image.Image]


def _require_image(image: object, owner: str) -> Image.Image:
    if not isinstance(image, Image.Image):
        raise TypeError(f"{owner} expects a PIL.Image instance")
    width, height = image.size
    if width <= 0 or height <= 0:
        raise ValueError("Image must have positive dimensions")
    return image


def mean_brightness(image: Image.Image) -> float:
    """Average luminance in ``[0, 1]``."""

    stat = ImageStat.Stat(image.convert("L"))
    return stat.mean[0] / 255.0


class AspectRatioDisplayClassifier(DisplayClassifier):
    """Classify a meter face using geometry and brightness only.

    * Wide images are treated as digital (LCD) registers
    * Near-square, darker images are treated as analog dials
    * Everything else is unknown
    """

    def __init__(
        self,
        digital_aspect_ratio: float = 1.2,
        square_low: float = 0.8,
        analog_max_brightness: float = 0.6,
    ) -> None:
        self.digital_aspect_ratio = digital_aspect_ratio
        self.square_low = square_low
        self.analog_max_brightness = analog_max_brightness

    def classify(self, image: object) -> DisplayKind:
        image = _require_image(image, "AspectRatioDisplayClassifier")
        width, height = image.size
        ratio = width / height

        if self.square_low < ratio < self.digital_aspect_ratio and mean_brightness(image) < self.analog_max_brightness:
            return DisplayKind.ANALOG
        if ratio >= self.digital_aspect_ratio:
            return DisplayKind.DIGITAL
        return DisplayKind.UNKNOWN


def grayscale_autocontrast(image: Image.Image) -> Image.Image:
    return ImageOps.autocontrast(ImageOps.grayscale(image))


def binarize(image: Image.Image, threshold: int = 128) -> Image.Image:
    gray = grayscale_autocontrast(image)
    return gray.point(lambda value: 255 if value >= threshold else 0)


def sharpen(image: Image.Image) -> Image.Image:
    return grayscale_autocontrast(image).filter(ImageFilter.SHARPEN)


def analog_enhance(image: Image.Image) -> Image.Image:
    gray = ImageOps.exif_transpose(image).convert("L")
    return ImageOps.equalize(gray).filter(ImageFilter.MedianFilter(size=3))


DIGITAL_PREPROCESSORS: Sequence[Preprocessor] = (binarize, grayscale_autocontrast, sharpen)

DEFAULT_PREPROCESSORS: Dict[DisplayKind, Sequence[Preprocessor]] = {
    DisplayKind.DIGITAL: DIGITAL_PREPROCESSORS,
    DisplayKind.ANALOG: (analog_enhance,),
    DisplayKind.UNKNOWN: (grayscale_autocontrast,),
}
