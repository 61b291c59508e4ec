from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from year_wallpaper.services.calendar_service import ClassificationMode
from year_wallpaper.services.calendar_service import DayState
from year_wallpaper.services.geometry_service import GeometryStrategy


# Placeholder in a color map for the per-request accent color.
ACCENT = "accent"


@dataclass(frozen=True)
class Padding:
    """Padding as fractions of canvas height (top, bottom) and width (sides)."""

    top: float
    right: float
    bottom: float
    left: float


@dataclass(frozen=True)
class StyleConfig:
    """Presentation settings for one wallpaper style."""

    name: str
    background: str
    mode: ClassificationMode
    color_map: Mapping[DayState, str]
    strategy: GeometryStrategy
    dots_per_row: int
    padding: Padding
    default_color: str
    header_enabled: bool = False
    gap_ratio: float = 0.4
    gap_divisor: int = 3
    header_font_scale: float = 0.08
    header_margin_scale: float = 0.05

    @property
    def content_fraction(self) -> float:
        return 1 - self.padding.left - self.padding.right

    def color_for(self, state: DayState, accent_color: str) -> str:
        color = self.color_map[state]
        return accent_color if color == ACCENT else color


LIGHT = StyleConfig(
    name="light",
    background="#ffffff",
    mode=ClassificationMode.BINARY,
    color_map=MappingProxyType(
        {DayState.FILLED: ACCENT, DayState.UNFILLED: "#e5e7eb"}
    ),
    strategy=GeometryStrategy.SIZE_FIRST,
    dots_per_row=22,
    padding=Padding(top=0.15, right=0.1, bottom=0.15, left=0.1),
    default_color="#000000",
    header_enabled=True,
)

_DARK_COLORS = MappingProxyType(
    {
        DayState.PAST: "#ffffff",
        DayState.CURRENT: ACCENT,
        DayState.FUTURE: "#3a3a3c",
    }
)

DARK_GRID = StyleConfig(
    name="dark-grid",
    background="#000000",
    mode=ClassificationMode.TRI_STATE,
    color_map=_DARK_COLORS,
    strategy=GeometryStrategy.COLUMN_FIRST,
    dots_per_row=13,
    padding=Padding(top=0.3, right=0.075, bottom=0.1, left=0.075),
    default_color="#ff9f0a",
)

DARK_FLOW = StyleConfig(
    name="dark-flow",
    background="#000000",
    mode=ClassificationMode.TRI_STATE,
    color_map=_DARK_COLORS,
    strategy=GeometryStrategy.SIZE_FIRST,
    dots_per_row=22,
    padding=Padding(top=0.3, right=0.1, bottom=0.1, left=0.1),
    default_color="#ff9f0a",
)

STYLES: Mapping[str, StyleConfig] = MappingProxyType(
    {style.name: style for style in (LIGHT, DARK_GRID, DARK_FLOW)}
)


def get_style(name: str | None, default: str = LIGHT.name) -> StyleConfig:
    """Look up a style by name, falling back to `default` then `light`."""

    if name and name in STYLES:
        return STYLES[name]
    return STYLES.get(default, LIGHT)
