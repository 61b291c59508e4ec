import math
from dataclasses import dataclass
from enum import Enum


MIN_DOT_DIAMETER = 1


class GeometryStrategy(str, Enum):
    """Which grid parameter is fixed: the dot size or the column count."""

    SIZE_FIRST = "size-first"
    COLUMN_FIRST = "column-first"


@dataclass(frozen=True)
class GridGeometry:
    dot_diameter: int
    gap: int
    content_width: float
    columns: int | None = None


def compute_geometry(
    canvas_width: int,
    content_fraction: float,
    dots_per_row: int,
    strategy: GeometryStrategy = GeometryStrategy.SIZE_FIRST,
    gap_ratio: float = 0.4,
    gap_divisor: int = 3,
) -> GridGeometry:
    """Size dots and gaps so the grid fits the content area of the canvas.

    Size-first derives the dot from `dots_per_row` and lets rows wrap.
    Column-first fits exactly `dots_per_row` columns into the content width.
    The dot diameter never drops below `MIN_DOT_DIAMETER`.
    """

    if dots_per_row <= 0:
        raise ValueError("dots_per_row must be positive")

    content_width = canvas_width * content_fraction

    if strategy is GeometryStrategy.COLUMN_FIRST:
        columns = dots_per_row
        gap = math.floor(content_width / (columns * gap_divisor))
        dot_diameter = math.floor((content_width - gap * (columns - 1)) / columns)
    else:
        columns = None
        dot_diameter = math.floor(content_width / dots_per_row)
        gap = math.floor(dot_diameter * gap_ratio)

    return GridGeometry(
        dot_diameter=max(MIN_DOT_DIAMETER, dot_diameter),
        gap=max(0, gap),
        content_width=content_width,
        columns=columns,
    )
