from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from year_wallpaper.services.calendar_service import DayCell
from year_wallpaper.services.geometry_service import GridGeometry
from year_wallpaper.styles import StyleConfig


class NodeKind(str, Enum):
    FRAME = "frame"
    TEXT = "text"
    GRID = "grid"
    DOT = "dot"


@dataclass(frozen=True)
class LayoutNode:
    """Declarative layout element handed to the renderer.

    FRAME stacks its children top to bottom inside its padding, GRID wraps
    its children into centered rows, TEXT is a centered single line and DOT
    is a filled circle of `width` x `height`.
    """

    kind: NodeKind
    width: float | None = None
    height: float | None = None
    background: str | None = None
    padding: tuple[float, float, float, float] = (0, 0, 0, 0)
    gap: int = 0
    margin_bottom: float = 0
    text: str | None = None
    font_size: int = 0
    color: str | None = None
    children: tuple["LayoutNode", ...] = ()


def header_text(percent: int) -> str:
    return f"{percent}% Completed"


def build_dot(cell: DayCell, geometry: GridGeometry, color: str) -> LayoutNode:
    return LayoutNode(
        kind=NodeKind.DOT,
        width=geometry.dot_diameter,
        height=geometry.dot_diameter,
        background=color,
    )


def build_tree(
    cells: Sequence[DayCell],
    geometry: GridGeometry,
    style: StyleConfig,
    width: int,
    height: int,
    accent_color: str,
    header: str | None = None,
) -> LayoutNode:
    """Compose classified days and grid geometry into a layout tree."""

    children: list[LayoutNode] = []

    if style.header_enabled and header:
        children.append(
            LayoutNode(
                kind=NodeKind.TEXT,
                text=header,
                font_size=max(1, round(width * style.header_font_scale)),
                color=accent_color,
                margin_bottom=height * style.header_margin_scale,
            )
        )

    dots = tuple(
        build_dot(cell, geometry, style.color_for(cell.state, accent_color))
        for cell in cells
    )
    children.append(
        LayoutNode(
            kind=NodeKind.GRID,
            width=geometry.content_width,
            gap=geometry.gap,
            children=dots,
        )
    )

    padding = style.padding
    return LayoutNode(
        kind=NodeKind.FRAME,
        width=width,
        height=height,
        background=style.background,
        padding=(
            height * padding.top,
            width * padding.right,
            height * padding.bottom,
            width * padding.left,
        ),
        children=tuple(children),
    )
