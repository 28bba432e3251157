"""
Page rendering collaborator.

One browser session per page gathers everything the branding pipeline needs
from the live DOM (viewport screenshot, CSS color signals, title and
description) so the page is only loaded once.
"""

from typing import Optional, Protocol

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from .config import Settings, get_settings
from .logging import get_logger
from .models import CssSignals, RenderedPage

logger = get_logger(__name__)

PRIMARY_PROPS = [
    "--primary", "--primary-color", "--brand-color", "--color-primary",
    "--theme-primary", "--main-color", "--docs-color-primary",
]
ACCENT_PROPS = [
    "--accent", "--accent-color", "--color-accent", "--secondary",
    "--secondary-color", "--theme-accent", "--docs-color-secondary",
]

EXTRACT_CSS_SIGNALS_JS = """
([primaryProps, accentProps]) => {
    const styles = getComputedStyle(document.documentElement);
    const tryProps = (names) => {
        for (const name of names) {
            const val = styles.getPropertyValue(name).trim();
            if (val) return val;
        }
        return null;
    };

    let buttonBg = null;
    const buttons = document.querySelectorAll('button, a.btn, [class*="button"], [class*="btn"], [class*="cta"]');
    for (const btn of Array.from(buttons).slice(0, 10)) {
        const bg = getComputedStyle(btn).backgroundColor;
        if (bg && bg !== 'rgba(0, 0, 0, 0)' && bg !== 'transparent' && bg !== 'rgb(255, 255, 255)') {
            buttonBg = bg;
            break;
        }
    }

    let linkColor = null;
    for (const link of Array.from(document.querySelectorAll('a')).slice(0, 10)) {
        const color = getComputedStyle(link).color;
        if (color && color !== 'rgb(0, 0, 0)' && color !== 'rgb(255, 255, 255)') {
            linkColor = color;
            break;
        }
    }

    return {
        primary: tryProps(primaryProps),
        accent: tryProps(accentProps),
        buttonBg,
        linkColor,
    };
}
"""

EXTRACT_TEXT_JS = """
() => {
    const meta = (sel) => {
        const el = document.querySelector(sel);
        return el ? (el.getAttribute('content') || '') : '';
    };
    const h1 = document.querySelector('h1');
    return {
        title: (h1 && h1.textContent ? h1.textContent.trim() : '') || document.title || '',
        description: meta('meta[name="description"]') || meta('meta[property="og:description"]'),
    };
}
"""


class PageRenderer(Protocol):
    async def render(self, url: str, warnings) -> RenderedPage:
        ...


class PlaywrightRenderer:
    """Headless Chromium renderer. Returns partial or empty data instead of raising."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    async def render(self, url: str, warnings) -> RenderedPage:
        logger.info(f"Rendering page: {url}")
        try:
            async with async_playwright() as p:
                browser = await p.chromium.launch(headless=True)
                try:
                    page = await browser.new_page(
                        viewport={
                            "width": self.settings.VIEWPORT_WIDTH,
                            "height": self.settings.VIEWPORT_HEIGHT,
                        }
                    )
                    return await self._collect(page, url, warnings)
                finally:
                    await browser.close()
        except PlaywrightError as e:
            logger.warning(f"Playwright rendering failed for {url}: {e}")
            warnings.append(f"Page rendering failed: {e}")
            return RenderedPage()

    async def _collect(self, page, url: str, warnings) -> RenderedPage:
        try:
            await page.goto(
                url,
                wait_until="domcontentloaded",
                timeout=self.settings.NAVIGATION_TIMEOUT_MS,
            )
        except PlaywrightTimeoutError:
            # keep whatever has rendered so far
            warnings.append(f"Page load timed out for {url}; using partially rendered page.")
        await page.wait_for_timeout(self.settings.SETTLE_DELAY_MS)

        rendered = RenderedPage()
        try:
            rendered.screenshot = await page.screenshot(full_page=False, type="png")
            logger.debug("Screenshot captured")
        except PlaywrightError as e:
            warnings.append(f"Screenshot capture failed: {e}")

        try:
            raw = await page.evaluate(EXTRACT_CSS_SIGNALS_JS, [PRIMARY_PROPS, ACCENT_PROPS])
            rendered.css = CssSignals(
                primary=raw.get("primary"),
                accent=raw.get("accent"),
                button_bg=raw.get("buttonBg"),
                link_color=raw.get("linkColor"),
            )
        except PlaywrightError as e:
            logger.debug(f"CSS signal extraction failed: {e}")

        try:
            text = await page.evaluate(EXTRACT_TEXT_JS)
            rendered.title = text.get("title") or ""
            rendered.description = text.get("description") or ""
        except PlaywrightError as e:
            logger.debug(f"Title/description extraction failed: {e}")

        return rendered
