import io
from collections.abc import Generator

import pytest
from PIL import Image

from resizer.config import Settings
from resizer.processor import PillowTransformer
from resizer.storage import Blob


class FakeObjectStore:
    """In-memory stand-in for S3 that records every call."""

    def __init__(self) -> None:
        self.objects: dict[str, Blob] = {}
        self.gets: list[str] = []
        self.puts: list[str] = []

    def get(self, key: str) -> Blob | None:
        self.gets.append(key)
        return self.objects.get(key)

    def put(self, key: str, blob: Blob) -> None:
        self.puts.append(key)
        self.objects[key] = blob


class ExplodingTransformer:
    def transform(self, data: bytes, spec: object) -> bytes:
        raise RuntimeError("decoder crashed")


def make_image(
    width: int,
    height: int,
    fmt: str = "JPEG",
    mode: str = "RGB",
    color: object = (200, 30, 30),
    exif: Image.Exif | None = None,
) -> bytes:
    buf = io.BytesIO()
    image = Image.new(mode, (width, height), color)
    params = {"exif": exif} if exif is not None else {}
    image.save(buf, format=fmt, **params)
    return buf.getvalue()


def image_size(data: bytes) -> tuple[int, int]:
    with Image.open(io.BytesIO(data)) as image:
        return image.size


def image_format(data: bytes) -> str | None:
    with Image.open(io.BytesIO(data)) as image:
        return image.format


@pytest.fixture
def settings() -> Settings:
    return Settings(s3_bucket="test-bucket")


@pytest.fixture
def transformer() -> PillowTransformer:
    return PillowTransformer()


@pytest.fixture
def cat_jpeg() -> bytes:
    return make_image(800, 600)


@pytest.fixture
def store(cat_jpeg: bytes) -> Generator[FakeObjectStore, None, None]:
    fake = FakeObjectStore()
    fake.objects["photos/cat.jpg"] = Blob(cat_jpeg, "image/jpeg")
    fake.objects["photos/logo.bmp"] = Blob(make_image(64, 48, fmt="BMP"), "image/bmp")
    fake.objects["docs/readme.txt"] = Blob(b"hello", "text/plain")
    fake.objects["banner.png"] = Blob(
        make_image(300, 100, fmt="PNG", mode="RGBA", color=(0, 0, 255, 128)), "image/png"
    )
    yield fake
