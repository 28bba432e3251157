# brand_engine/analyzers.py
"""
Brand analyzers module

Features:
- Screenshot palette extraction (top-band background + kmeans in LAB)
- Brand-candidate scoring (saturation weighted by cluster share)
- Light/dark theme classification from background luminance
- Keyword industry inference from page title/description

Every analyzer degrades to a documented default instead of raising.
"""

import colorsys
import io
import math

import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError
from sklearn.cluster import KMeans

from .colors import blend, darken, hex_to_rgb, normalize, rgb_to_hex
from .config import get_settings
from .logging import get_logger
from .models import DEFAULT_BRAND_COLORS, BrandColors, Industry, Theme

logger = get_logger(__name__)

# ---------- Constants / Defaults ----------
TOP_BAND_RATIO = 0.15        # rows treated as the page "chrome"/background band
BAND_QUANT_SHIFT = 4         # 16 levels per channel when voting for the background
MIN_BRAND_SATURATION = 0.25
MIN_BRAND_VALUE = 0.20
MIN_BACKGROUND_DISTANCE = 40.0
MIN_ACCENT_HUE_DISTANCE = 30.0  # degrees
SECONDARY_DARKEN_FACTOR = 0.6
ACCENT_LIGHTEN_AMOUNT = 0.4

# Declaration order is the tie-break: first set with any hit wins.
INDUSTRY_KEYWORDS = {
    Industry.TECH: ["software", "app", "platform", "cloud", "saas", "api", "developer",
                    "documentation", "framework", "library", "tutorial"],
    Industry.FINANCE: ["bank", "payment", "finance", "invest", "trading", "crypto"],
    Industry.HEALTHCARE: ["health", "medical", "doctor", "patient", "clinic", "hospital"],
    Industry.ECOMMERCE: ["shop", "store", "buy", "product", "marketplace", "retail"],
    Industry.EDUCATION: ["learn", "course", "education", "student", "training", "teach"],
    Industry.MARKETING: ["marketing", "advertising", "campaign", "brand", "social media"],
    Industry.GAMING: ["game", "play", "gaming", "esports", "player"],
}


# ---------- Preprocessing ----------
def load_image_bytes(image_bytes: bytes) -> Image.Image:
    img = Image.open(io.BytesIO(image_bytes)).convert("RGB")
    return img

def preprocess_image_to_pil(img: Image.Image, max_size=400):
    img_copy = img.copy()
    img_copy.thumbnail((max_size, max_size), Image.LANCZOS)
    arr = np.asarray(img_copy).astype(np.uint8)
    return img_copy, arr


# ---------- Palette extraction (KMeans in LAB) ----------
def extract_palette_kmeans(img: Image.Image, n_colors=6, sample_pixels=15000):
    """
    Cluster pixels in LAB space and return [(hex, share), ...] sorted by share.
    Sampling uses a fixed seed so the same screenshot always gives the same palette.
    """
    arr = np.asarray(img).astype(np.uint8)
    pixels = arr.reshape(-1, 3)
    if pixels.shape[0] > sample_pixels:
        rng = np.random.default_rng(42)
        idx = rng.choice(pixels.shape[0], sample_pixels, replace=False)
        pixels_sample = pixels[idx]
    else:
        pixels_sample = pixels

    n_distinct = len(np.unique(pixels_sample, axis=0))
    n_colors = max(1, min(n_colors, n_distinct))

    # convert to LAB using OpenCV
    pixels_lab = cv2.cvtColor(pixels_sample.reshape(-1, 1, 3), cv2.COLOR_RGB2LAB)
    pixels_lab = pixels_lab.reshape(-1, 3).astype(np.float32)

    kmeans = KMeans(n_clusters=n_colors, random_state=42, n_init=4).fit(pixels_lab)
    centers_lab = np.clip(np.rint(kmeans.cluster_centers_), 0, 255)
    counts = np.bincount(kmeans.labels_, minlength=n_colors)

    clusters = []
    for lab, count in zip(centers_lab, counts):
        lab_pixel = np.uint8([[lab]])
        rgb_pixel = cv2.cvtColor(lab_pixel, cv2.COLOR_LAB2RGB)[0, 0]
        clusters.append((rgb_to_hex(int(x) for x in rgb_pixel), count / float(len(pixels_sample))))

    clusters.sort(key=lambda c: c[1], reverse=True)
    return clusters

def dominant_band_color(arr: np.ndarray, band_ratio=TOP_BAND_RATIO) -> str:
    """Most common (quantized) color of the top band, averaged within its bin."""
    h = arr.shape[0]
    band = arr[: max(1, int(round(h * band_ratio)))].reshape(-1, 3)
    quantized = band >> BAND_QUANT_SHIFT
    keys = (quantized[:, 0].astype(np.int32) << 8) | (quantized[:, 1].astype(np.int32) << 4) | quantized[:, 2]
    winner = np.bincount(keys).argmax()
    members = band[keys == winner]
    mean = members.mean(axis=0)
    return rgb_to_hex(int(round(c)) for c in mean)


# ---------- Brand candidate scoring ----------
def _hsv(color: str):
    r, g, b = hex_to_rgb(color)
    return colorsys.rgb_to_hsv(r / 255.0, g / 255.0, b / 255.0)

def _rgb_distance(a: str, b: str) -> float:
    return math.dist(hex_to_rgb(a), hex_to_rgb(b))

def _hue_distance(a: str, b: str) -> float:
    diff = abs(_hsv(a)[0] - _hsv(b)[0]) * 360
    return min(diff, 360 - diff)

def brand_candidates(clusters, background: str):
    """Clusters that look like brand colors, best first."""
    scored = []
    for color, share in clusters:
        _, s, v = _hsv(color)
        if s < MIN_BRAND_SATURATION or v < MIN_BRAND_VALUE:
            continue
        if _rgb_distance(color, background) < MIN_BACKGROUND_DISTANCE:
            continue
        scored.append((s * math.sqrt(share), color))
    scored.sort(key=lambda x: x[0], reverse=True)
    return [color for _, color in scored]


def extract_palette(screenshot_bytes, warnings=None) -> BrandColors:
    """
    Baseline 4-color palette from a screenshot.

    Blank, single-color or unreadable images give DEFAULT_BRAND_COLORS.
    """
    def fallback(reason):
        logger.info(f"Palette fallback: {reason}")
        if warnings is not None:
            warnings.append(f"{reason}. Using default brand palette.")
        return DEFAULT_BRAND_COLORS

    if not screenshot_bytes:
        return fallback("No screenshot available for color extraction")

    settings = get_settings()
    try:
        img = load_image_bytes(screenshot_bytes)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        return fallback(f"Screenshot could not be decoded ({e})")

    img_small, arr = preprocess_image_to_pil(img, max_size=settings.PALETTE_MAX_SIZE)
    if arr.size == 0 or len(np.unique(arr.reshape(-1, 3), axis=0)) < 2:
        return fallback("Screenshot is blank or a single color")

    background = dominant_band_color(arr)
    clusters = extract_palette_kmeans(
        img_small,
        n_colors=settings.PALETTE_CLUSTERS,
        sample_pixels=settings.PALETTE_SAMPLE_PIXELS,
    )
    candidates = brand_candidates(clusters, background)

    if not candidates:
        logger.debug("No saturated clusters found, keeping default primary/accent")
        primary = DEFAULT_BRAND_COLORS.primary
        accent = DEFAULT_BRAND_COLORS.accent
        if _rgb_distance(primary, background) < MIN_BACKGROUND_DISTANCE:
            # page background is the default brand blue
            primary = darken(primary, SECONDARY_DARKEN_FACTOR)
    else:
        primary = candidates[0]
        others = [c for c in candidates[1:] if _hue_distance(c, primary) >= MIN_ACCENT_HUE_DISTANCE]
        accent = others[0] if others else blend(primary, "#ffffff", ACCENT_LIGHTEN_AMOUNT)

    primary = normalize(primary)
    colors = BrandColors(
        primary=primary,
        secondary=darken(primary, SECONDARY_DARKEN_FACTOR),
        accent=normalize(accent),
        background=normalize(background),
    )
    logger.debug(f"Screenshot palette: {colors}")
    return colors


# ---------- Theme classifier ----------
def background_luminance(colors: BrandColors):
    rgb = hex_to_rgb(colors.background)
    if rgb is None:
        return None
    r, g, b = rgb
    return 0.299 * r + 0.587 * g + 0.114 * b

def classify_theme(colors: BrandColors) -> Theme:
    luminance = background_luminance(colors)
    if luminance is None:
        return Theme.LIGHT
    return Theme.LIGHT if luminance > 128 else Theme.DARK


# ---------- Industry classifier ----------
def infer_industry(title, description) -> Industry:
    text = f"{title or ''} {description or ''}".lower()
    for industry, keywords in INDUSTRY_KEYWORDS.items():
        if any(keyword in text for keyword in keywords):
            return industry
    return Industry.GENERAL
