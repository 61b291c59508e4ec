import io
import math
from functools import lru_cache

from PIL import Image
from PIL import ImageDraw
from PIL import ImageFont

from year_wallpaper.services.layout_tree import LayoutNode
from year_wallpaper.services.layout_tree import NodeKind


class RenderError(Exception):
    """Raised when a layout tree cannot be rasterized."""


@lru_cache(maxsize=32)
def load_font(size: int, font_path: str | None = None) -> ImageFont.FreeTypeFont:
    """Load a TrueType font, or Pillow's bundled default at `size`."""

    if font_path:
        return ImageFont.truetype(font_path, size)
    return ImageFont.load_default(size=size)


def wrap_rows(count: int, item_size: float, gap: float, row_width: float) -> list[int]:
    """Split `count` items into flex-wrap rows; returns items per row."""

    per_row = max(1, math.floor((row_width + gap) / (item_size + gap) + 1e-9))
    rows = [per_row] * (count // per_row)
    if count % per_row:
        rows.append(count % per_row)
    return rows


def _draw_text(
    draw: ImageDraw.ImageDraw,
    node: LayoutNode,
    left: float,
    width: float,
    top: float,
    font_path: str | None,
) -> float:
    font = load_font(node.font_size, font_path)
    ascent, descent = font.getmetrics()
    text_width = draw.textlength(node.text or "", font=font)
    x = left + (width - text_width) / 2
    draw.text((x, top), node.text or "", fill=node.color, font=font)
    return top + ascent + descent + node.margin_bottom


def _draw_grid(
    draw: ImageDraw.ImageDraw,
    node: LayoutNode,
    left: float,
    width: float,
    top: float,
) -> float:
    if not node.children:
        return top

    grid_width = node.width if node.width is not None else width
    grid_left = left + (width - grid_width) / 2
    size = node.children[0].width or 1
    gap = node.gap

    index = 0
    y = top
    for row_count in wrap_rows(len(node.children), size, gap, grid_width):
        row_width = row_count * size + (row_count - 1) * gap
        x = grid_left + (grid_width - row_width) / 2
        for dot in node.children[index : index + row_count]:
            x0, y0 = round(x), round(y)
            diameter = dot.width or size
            draw.ellipse(
                (x0, y0, x0 + diameter - 1, y0 + diameter - 1),
                fill=dot.background,
            )
            x += size + gap
        index += row_count
        y += size + gap

    return y - gap + node.margin_bottom


def render_image(tree: LayoutNode, font_path: str | None = None) -> Image.Image:
    """Rasterize a FRAME layout tree into an RGB image of the frame size."""

    if tree.kind is not NodeKind.FRAME or not tree.width or not tree.height:
        raise RenderError("layout root must be a sized frame")

    width, height = int(tree.width), int(tree.height)
    image = Image.new("RGB", (width, height), tree.background or "#ffffff")
    draw = ImageDraw.Draw(image)

    top, right, _bottom, left = tree.padding
    inner_width = width - left - right
    cursor = top
    for child in tree.children:
        if child.kind is NodeKind.TEXT:
            cursor = _draw_text(draw, child, left, inner_width, cursor, font_path)
        elif child.kind is NodeKind.GRID:
            cursor = _draw_grid(draw, child, left, inner_width, cursor)
        else:
            raise RenderError(f"unsupported frame child: {child.kind.value}")

    return image


def render_png(tree: LayoutNode, font_path: str | None = None) -> bytes:
    """Rasterize a layout tree and encode it as PNG."""

    buffer = io.BytesIO()
    render_image(tree, font_path).save(buffer, format="PNG")
    return buffer.getvalue()
