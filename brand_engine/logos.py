"""
Logo resolution.

Tiers are tried strictly in priority order and the first hit wins:
  1. brand-logo API by domain           -> high
  2. conventional asset paths on origin -> medium
  3. favicon service (always answers)   -> favicon
"""

import asyncio
import re
from pathlib import Path
from typing import Optional
from urllib.parse import urlsplit

import httpx

from .config import Settings, get_settings
from .logging import get_logger
from .models import LogoQuality, LogoResult
from .probe import HttpProbe

logger = get_logger(__name__)

COMMON_LOGO_PATHS = (
    "/logo.svg",
    "/logo.png",
    "/assets/logo.svg",
    "/assets/logo.png",
    "/images/logo.svg",
    "/images/logo.png",
)


def page_origin(page_url: str) -> Optional[str]:
    parts = urlsplit(page_url or "")
    if not parts.scheme or not parts.netloc:
        return None
    return f"{parts.scheme}://{parts.netloc}"


def favicon_url(domain: str, settings: Optional[Settings] = None) -> str:
    settings = settings or get_settings()
    base = settings.FAVICON_SERVICE_URL.rstrip("/")
    return f"{base}/s2/favicons?domain={domain}&sz={settings.FAVICON_SIZE}"


class LogoResolver:
    """Resolve the best available logo URL for a domain; never fails."""

    def __init__(self, probe: Optional[HttpProbe] = None, settings: Optional[Settings] = None):
        self.probe = probe or HttpProbe()
        self.settings = settings or get_settings()

    async def resolve(self, domain: str, page_url: str, warnings) -> LogoResult:
        logger.info(f"Extracting logo for: {domain}")

        for tier in (self._brand_api_tier, self._common_path_tier):
            result = await tier(domain, page_url)
            if result is not None:
                return result

        return self._favicon_tier(domain, warnings)

    async def _brand_api_tier(self, domain: str, page_url: str) -> Optional[LogoResult]:
        url = f"{self.settings.LOGO_SERVICE_URL.rstrip('/')}/{domain}"
        probe = await self.probe.check(url, self.settings.BRAND_API_TIMEOUT)
        if probe.ok:
            logger.info(f"Logo found via brand API: {url}")
            return LogoResult(url=url, quality=LogoQuality.HIGH)
        logger.debug(f"Brand API miss ({probe.status_code or probe.error}), trying common paths")
        return None

    async def _common_path_tier(self, domain: str, page_url: str) -> Optional[LogoResult]:
        origin = page_origin(page_url)
        if origin is None:
            return None

        candidates = [f"{origin}{path}" for path in COMMON_LOGO_PATHS]
        probes = await asyncio.gather(
            *(self.probe.check(url, self.settings.COMMON_PATH_TIMEOUT) for url in candidates)
        )
        # gather keeps argument order, so the earliest listed hit wins
        for probe in probes:
            if probe.ok:
                logger.info(f"Logo found at: {probe.url}")
                return LogoResult(url=probe.url, quality=LogoQuality.MEDIUM)
        return None

    def _favicon_tier(self, domain: str, warnings) -> LogoResult:
        url = favicon_url(domain, self.settings)
        logger.info("Using favicon service as logo fallback")
        warnings.append(
            f"No high-quality logo found for {domain}. "
            f"Using Google favicon ({self.settings.FAVICON_SIZE}px)."
        )
        return LogoResult(url=url, quality=LogoQuality.FAVICON)


def _logo_extension(logo_url: str, content_type: str) -> str:
    content_type = (content_type or "").lower()
    path = urlsplit(logo_url).path.lower()
    if "svg" in content_type:
        return "svg"
    if "jpeg" in content_type or "jpg" in content_type:
        return "jpg"
    if path.endswith(".svg"):
        return "svg"
    if path.endswith(".jpg") or path.endswith(".jpeg"):
        return "jpg"
    return "png"


async def download_logo(
    logo_url: str,
    domain: str,
    output_dir,
    client: Optional[httpx.AsyncClient] = None,
    timeout: Optional[float] = None,
) -> str:
    """
    Save a logo locally as logo-<domain>.<ext>.

    Returns:
        "images/<file>" static path, or "" if the download failed
    """
    if not logo_url:
        return ""

    timeout = timeout or get_settings().LOGO_DOWNLOAD_TIMEOUT
    try:
        if client is not None:
            response = await client.get(logo_url, timeout=timeout, follow_redirects=True)
        else:
            async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as own_client:
                response = await own_client.get(logo_url)
        response.raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.warning(f"Failed to download logo {logo_url}: {e}")
        return ""

    ext = _logo_extension(logo_url, response.headers.get("content-type", ""))
    clean_domain = re.sub(r"[^a-z0-9.-]", "", domain.lower().removeprefix("www."))
    file_name = f"logo-{clean_domain}.{ext}"

    try:
        out_dir = Path(output_dir)
        out_dir.mkdir(parents=True, exist_ok=True)
        (out_dir / file_name).write_bytes(response.content)
    except OSError as e:
        logger.warning(f"Failed to write logo {file_name}: {e}")
        return ""

    logger.info(f"Downloaded logo to: {out_dir / file_name} (staticPath: images/{file_name})")
    return f"images/{file_name}"
