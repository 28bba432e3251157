"""
Branding orchestration.

Composes logo resolution, screenshot palette extraction, CSS-signal
refinement and theme classification into a BrandingResult. Every step has a
documented default; failures become warnings, never exceptions.
"""

import asyncio
import dataclasses
import logging
from typing import Optional
from urllib.parse import urlsplit

from .analyzers import SECONDARY_DARKEN_FACTOR, classify_theme, extract_palette, infer_industry
from .colors import DEFAULT_COLOR, darken, normalize
from .config import get_settings
from .logging import get_logger, log_with_context
from .logos import LogoResolver, download_logo, favicon_url
from .models import (
    DEFAULT_BRAND_COLORS,
    SYSTEM_FONT_STACK,
    BrandColors,
    BrandingResult,
    CssSignals,
    LogoQuality,
    LogoResult,
    PageBrandReport,
    RenderedPage,
    WarningLog,
)
from .renderer import PageRenderer, PlaywrightRenderer

logger = get_logger(__name__)

_TRANSPARENT = {"transparent", "rgba(0, 0, 0, 0)", "rgba(0,0,0,0)"}
_WHITE = "#ffffff"
_BLACK = "#000000"


def derive_domain(page_url: str) -> str:
    host = urlsplit(page_url or "").hostname or ""
    return host.removeprefix("www.")


def _css_value(name: str, value: str, warnings) -> str:
    """Normalize a CSS signal, noting when it could not be parsed."""
    color = normalize(value)
    if color == DEFAULT_COLOR and value.strip().upper() != DEFAULT_COLOR:
        if warnings is not None:
            warnings.append(f"Unsupported CSS color for {name} ({value!r}); using default {DEFAULT_COLOR}.")
    return color


def _button_signal(value) -> Optional[str]:
    if not value or value.strip().lower() in _TRANSPARENT:
        return None
    return None if normalize(value).lower() == _WHITE else value

def _link_signal(value) -> Optional[str]:
    if not value:
        return None
    return None if normalize(value).lower() in (_WHITE, _BLACK) else value


def refine_palette(baseline: BrandColors, css: CssSignals, warnings=None) -> BrandColors:
    """
    Overlay CSS-derived colors on the screenshot palette.

    Primary priority: CSS variable > button background > link color > baseline.
    Secondary is always darken(primary, 0.6); background is never touched.
    """
    primary = baseline.primary
    accent = baseline.accent

    if css.primary:
        primary = _css_value("primary", css.primary, warnings)
    elif _button_signal(css.button_bg):
        primary = _css_value("button background", css.button_bg, warnings)
    elif _link_signal(css.link_color):
        primary = _css_value("link color", css.link_color, warnings)

    if css.accent:
        accent = _css_value("accent", css.accent, warnings)

    if primary != baseline.primary:
        logger.info(f"Colors improved via CSS: {baseline.primary} -> {primary}")

    return dataclasses.replace(
        baseline,
        primary=primary,
        secondary=darken(primary, SECONDARY_DARKEN_FACTOR),
        accent=accent,
    )


class BrandingExtractor:
    """Entry point of the branding pipeline for a single page URL."""

    def __init__(self, renderer: Optional[PageRenderer] = None, resolver: Optional[LogoResolver] = None):
        self.renderer = renderer or PlaywrightRenderer()
        self.resolver = resolver or LogoResolver()

    async def extract_branding(self, page_url: str, warnings) -> BrandingResult:
        branding, _ = await self._extract(page_url, warnings)
        return branding

    async def extract_page_brand(self, page_url: str, download_dir=None) -> PageBrandReport:
        """
        Run one full extraction request.

        Warnings are collected in a request-scoped log and returned together
        on the report.
        """
        warnings = WarningLog()
        branding, page = await self._extract(page_url, warnings)
        domain = derive_domain(page_url)

        industry = infer_industry(page.title, page.description)

        if download_dir is not None:
            static_path = await download_logo(branding.logo.url, domain or page_url, download_dir)
            if static_path:
                branding = dataclasses.replace(
                    branding, logo=dataclasses.replace(branding.logo, static_path=static_path)
                )
            else:
                warnings.append("Logo download failed. Use branding.logo.url as fallback.")

        log_with_context(
            logger, logging.INFO, "Branding extracted",
            url=page_url, theme=branding.theme.value, logo=branding.logo.quality.value,
            warnings=len(warnings),
        )
        return PageBrandReport(
            url=page_url,
            domain=domain,
            branding=branding,
            industry=industry,
            warnings=warnings.as_list(),
        )

    async def _extract(self, page_url: str, warnings):
        # 1. domain
        domain = derive_domain(page_url)
        if not domain:
            warnings.append(f"Could not determine a domain from {page_url!r}.")
            domain = (page_url or "").strip()

        # 2. logo
        try:
            logo = await self.resolver.resolve(domain, page_url, warnings)
        except Exception as e:
            logger.exception("Logo resolution failed")
            warnings.append(f"Logo resolution failed: {e}. Using favicon service.")
            logo = LogoResult(url=favicon_url(domain), quality=LogoQuality.FAVICON)

        # 3. screenshot + CSS signals from a single rendering session
        try:
            page = await self.renderer.render(page_url, warnings)
        except Exception as e:
            logger.exception("Page rendering failed")
            warnings.append(f"Page rendering failed: {e}")
            page = RenderedPage()

        # 4. baseline palette
        try:
            colors = await asyncio.to_thread(extract_palette, page.screenshot, warnings)
        except Exception as e:
            logger.exception("Palette extraction failed")
            warnings.append(f"Color extraction failed: {e}. Using default brand palette.")
            colors = DEFAULT_BRAND_COLORS

        # 5. CSS refinement
        try:
            colors = refine_palette(colors, page.css, warnings)
        except Exception as e:
            logger.exception("CSS color refinement failed")
            warnings.append(f"CSS color refinement failed: {e}")
            colors = dataclasses.replace(
                colors, secondary=darken(colors.primary, SECONDARY_DARKEN_FACTOR)
            )

        # 6. theme
        theme = classify_theme(colors)

        # 7. result
        branding = BrandingResult(logo=logo, colors=colors, font=SYSTEM_FONT_STACK, theme=theme)
        return branding, page


async def extract_page_brand(page_url: str, download_logo_to=None) -> PageBrandReport:
    """Module-level convenience wrapper using the default collaborators."""
    if download_logo_to is True:
        download_logo_to = get_settings().LOGO_OUTPUT_DIR
    return await BrandingExtractor().extract_page_brand(page_url, download_dir=download_logo_to or None)
