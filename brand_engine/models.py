import threading
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

Color = str  # canonical "#RRGGBB", never carries alpha

SYSTEM_FONT_STACK = "system-ui, -apple-system, sans-serif"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class Industry(str, Enum):
    TECH = "tech"
    FINANCE = "finance"
    HEALTHCARE = "healthcare"
    ECOMMERCE = "ecommerce"
    EDUCATION = "education"
    MARKETING = "marketing"
    GAMING = "gaming"
    GENERAL = "general"


class LogoQuality(str, Enum):
    """Confidence of a resolved logo source; high > medium > favicon."""

    HIGH = "high"
    MEDIUM = "medium"
    FAVICON = "favicon"

    @property
    def rank(self) -> int:
        return _QUALITY_RANK[self.value]

    # str supplies all four operators, so each one is overridden here
    def __lt__(self, other):
        if not isinstance(other, LogoQuality):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, LogoQuality):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, LogoQuality):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, LogoQuality):
            return NotImplemented
        return self.rank >= other.rank


_QUALITY_RANK = {"high": 3, "medium": 2, "favicon": 1}


@dataclass(frozen=True)
class BrandColors:
    primary: Color
    secondary: Color              # always darken(primary, 0.6)
    accent: Color
    background: Color             # screenshot-derived only

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


DEFAULT_BRAND_COLORS = BrandColors(
    primary="#0066FF",
    secondary="#003D99",
    accent="#66B3FF",
    background="#FFFFFF",
)


@dataclass(frozen=True)
class LogoResult:
    url: str
    quality: LogoQuality
    static_path: Optional[str] = None   # local copy, e.g. "images/logo-example.com.png"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"url": self.url, "quality": self.quality.value}
        if self.static_path:
            data["staticPath"] = self.static_path
        return data


@dataclass(frozen=True)
class CssSignals:
    primary: Optional[str] = None       # --primary style custom property
    accent: Optional[str] = None        # --accent style custom property
    button_bg: Optional[str] = None     # computed background of first styled button
    link_color: Optional[str] = None    # computed color of first colored link


@dataclass
class RenderedPage:
    screenshot: Optional[bytes] = None  # viewport PNG
    css: CssSignals = field(default_factory=CssSignals)
    title: str = ""
    description: str = ""


@dataclass(frozen=True)
class BrandingResult:
    logo: LogoResult
    colors: BrandColors
    font: str
    theme: Theme

    def to_dict(self) -> Dict[str, Any]:
        return {
            "logo": self.logo.to_dict(),
            "colors": self.colors.to_dict(),
            "font": self.font,
            "theme": self.theme.value,
        }


@dataclass
class PageBrandReport:
    url: str
    domain: str
    branding: BrandingResult
    industry: Industry
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "domain": self.domain,
            "branding": self.branding.to_dict(),
            "industry": self.industry.value,
            "warnings": list(self.warnings),
        }


class WarningLog:
    """Ordered, append-only warnings for a single extraction request."""

    def __init__(self) -> None:
        self._items: List[str] = []
        self._lock = threading.Lock()

    def append(self, message: str) -> None:
        with self._lock:
            self._items.append(message)

    def as_list(self) -> List[str]:
        with self._lock:
            return list(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(self.as_list())

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __repr__(self) -> str:
        return f"WarningLog({self.as_list()!r})"
