"""Pytest configuration and fixtures."""

import io
import os

import pytest
from PIL import Image, ImageDraw

from brand_engine.config import get_settings


@pytest.fixture(scope="session", autouse=True)
def setup_test_env():
    """Set up test environment variables."""
    os.environ["BRAND_ENGINE_ENV"] = "test"
    get_settings.cache_clear()


def png_bytes(img: Image.Image) -> bytes:
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def branded_screenshot() -> bytes:
    """White page with a large blue block and a small orange call-to-action."""
    img = Image.new("RGB", (400, 300), (255, 255, 255))
    draw = ImageDraw.Draw(img)
    draw.rectangle([20, 100, 299, 249], fill=(0, 102, 255))
    draw.rectangle([20, 260, 199, 289], fill=(255, 140, 0))
    return png_bytes(img)


@pytest.fixture
def dark_screenshot() -> bytes:
    img = Image.new("RGB", (400, 300), (20, 20, 24))
    draw = ImageDraw.Draw(img)
    draw.rectangle([40, 120, 360, 220], fill=(220, 40, 60))
    return png_bytes(img)


@pytest.fixture
def blank_screenshot() -> bytes:
    return png_bytes(Image.new("RGB", (200, 100), (255, 255, 255)))


@pytest.fixture
def blue_band_screenshot() -> bytes:
    """Two pixels, default brand blue and white; the blue one decides the background."""
    img = Image.new("RGB", (2, 1), (255, 255, 255))
    img.putpixel((0, 0), (0, 102, 255))
    return png_bytes(img)
