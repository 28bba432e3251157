"""Tests for the HTTP service."""

from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from brand_engine.branding import BrandingExtractor
from brand_engine.main import app
from brand_engine.models import CssSignals, LogoQuality, LogoResult, RenderedPage

client = TestClient(app)


class StaticRenderer:
    def __init__(self, page):
        self.page = page

    async def render(self, url, warnings):
        return self.page


def _extractor(page):
    resolver = AsyncMock()
    resolver.resolve.return_value = LogoResult(
        url="https://logo.clearbit.com/example.com", quality=LogoQuality.HIGH
    )
    return BrandingExtractor(renderer=StaticRenderer(page), resolver=resolver)


def test_extract_branding(branded_screenshot):
    page = RenderedPage(
        screenshot=branded_screenshot,
        css=CssSignals(primary="rgb(10, 20, 30)"),
        title="Acme Docs",
        description="Developer documentation for the Acme API",
    )
    with patch("brand_engine.main.extractor", _extractor(page)):
        r = client.post("/api/extract-branding", json={"url": "https://www.example.com/docs"})

    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "ok"
    report = body["report"]
    assert report["domain"] == "example.com"
    assert report["industry"] == "tech"
    assert report["branding"]["colors"]["primary"] == "#0a141e"
    assert report["branding"]["theme"] == "light"
    assert report["branding"]["logo"]["quality"] == "high"
    assert report["warnings"] == []


def test_extract_branding_unexpected_error():
    broken = AsyncMock()
    broken.extract_page_brand.side_effect = RuntimeError("kaboom")
    with patch("brand_engine.main.extractor", broken):
        r = client.post("/api/extract-branding", json={"url": "https://example.com"})

    assert r.status_code == 500
    assert r.json() == {"status": "error", "message": "kaboom"}


def test_extract_branding_requires_url():
    r = client.post("/api/extract-branding", json={})
    assert r.status_code == 422


def test_extract_palette_upload(branded_screenshot):
    files = {"file": ("shot.png", branded_screenshot, "image/png")}
    r = client.post("/api/extract-palette", files=files)

    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "ok"
    assert set(body["colors"]) == {"primary", "secondary", "accent", "background"}
    assert body["theme"] == "light"
    assert body["warnings"] == []


def test_extract_palette_garbage_upload_degrades():
    files = {"file": ("shot.png", b"not an image", "image/png")}
    r = client.post("/api/extract-palette", files=files)

    body = r.json()
    assert r.status_code == 200
    assert body["colors"]["primary"] == "#0066FF"
    assert len(body["warnings"]) == 1


def test_extract_palette_oversized_upload_degrades(branded_screenshot, monkeypatch):
    from PIL import Image

    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 10000)
    files = {"file": ("shot.png", branded_screenshot, "image/png")}
    r = client.post("/api/extract-palette", files=files)

    body = r.json()
    assert r.status_code == 200
    assert body["colors"]["primary"] == "#0066FF"
    assert "could not be decoded" in body["warnings"][0]


def test_infer_industry():
    r = client.post(
        "/api/infer-industry",
        json={"title": "Best Online Store", "description": "Buy products in our marketplace"},
    )
    assert r.json() == {"status": "ok", "industry": "ecommerce"}
