import io

import pytest
from PIL import Image, UnidentifiedImageError

from resizer.constants import FitMode
from resizer.options import Auto, Fixed, ResizeSpec
from resizer.processor import PillowTransformer
from tests.conftest import image_format, image_size, make_image

SOURCE = make_image(800, 600)


def _spec(width: int | None, height: int | None, fit: FitMode = FitMode.COVER) -> ResizeSpec:
    return ResizeSpec(
        Fixed(width) if width else Auto(),
        Fixed(height) if height else Auto(),
        fit,
    )


@pytest.mark.parametrize(
    ("width", "height", "fit", "expected"),
    [
        (200, 200, FitMode.COVER, (200, 200)),
        (200, 200, FitMode.CONTAIN, (200, 200)),
        (200, 200, FitMode.FILL, (200, 200)),
        (200, 200, FitMode.INSIDE, (200, 150)),
        (100, 100, FitMode.OUTSIDE, (133, 100)),
        (400, None, FitMode.COVER, (400, 300)),
        (None, 300, FitMode.FILL, (400, 300)),
        (None, None, FitMode.COVER, (800, 600)),
    ],
)
def test_fit_modes(
    transformer: PillowTransformer,
    width: int | None,
    height: int | None,
    fit: FitMode,
    expected: tuple[int, int],
) -> None:
    result = transformer.transform(SOURCE, _spec(width, height, fit))
    assert image_size(result) == expected


@pytest.mark.parametrize("fit", list(FitMode))
def test_never_enlarges(transformer: PillowTransformer, fit: FitMode) -> None:
    result = transformer.transform(SOURCE, _spec(2000, 1500, fit))
    width, height = image_size(result)
    assert width <= 800
    assert height <= 600


def test_requested_box_is_clamped_per_axis(transformer: PillowTransformer) -> None:
    result = transformer.transform(SOURCE, _spec(1000, 300, FitMode.COVER))
    assert image_size(result) == (800, 300)


def test_single_axis_larger_than_source_keeps_size(transformer: PillowTransformer) -> None:
    result = transformer.transform(SOURCE, _spec(2000, None))
    assert image_size(result) == (800, 600)


def test_output_keeps_source_format(transformer: PillowTransformer) -> None:
    assert image_format(transformer.transform(SOURCE, _spec(50, 50))) == "JPEG"

    gif = make_image(100, 100, fmt="GIF", mode="P", color=1)
    assert image_format(transformer.transform(gif, _spec(50, 50))) == "GIF"

    tiff = make_image(100, 100, fmt="TIFF")
    assert image_format(transformer.transform(tiff, _spec(50, 50))) == "TIFF"


def test_contain_letterboxes_with_transparency(transformer: PillowTransformer) -> None:
    banner = make_image(300, 100, fmt="PNG", mode="RGBA", color=(0, 0, 255, 255))
    result = transformer.transform(banner, _spec(100, 100, FitMode.CONTAIN))

    with Image.open(io.BytesIO(result)) as image:
        assert image.format == "PNG"
        assert image.size == (100, 100)
        assert image.getpixel((0, 0))[3] == 0
        red, green, blue, alpha = image.getpixel((50, 50))
        assert alpha == 255
        assert blue > 240 and red < 15 and green < 15


def test_exif_orientation_is_applied(transformer: PillowTransformer) -> None:
    exif = Image.Exif()
    exif[0x0112] = 6  # rotate 90 degrees clockwise on display
    rotated = make_image(80, 40, exif=exif)

    result = transformer.transform(rotated, _spec(None, None))
    assert image_size(result) == (40, 80)

    resized = transformer.transform(rotated, _spec(20, None))
    assert image_size(resized) == (20, 40)


def test_undecodable_bytes_raise(transformer: PillowTransformer) -> None:
    with pytest.raises(UnidentifiedImageError):
        transformer.transform(b"not an image", _spec(10, 10))
