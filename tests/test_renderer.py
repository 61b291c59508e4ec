import io
from datetime import date

import pytest
from PIL import Image

from year_wallpaper.api.schemas.wallpaper import RenderRequest
from year_wallpaper.services.layout_tree import LayoutNode
from year_wallpaper.services.layout_tree import NodeKind
from year_wallpaper.services.renderer import RenderError
from year_wallpaper.services.renderer import render_image
from year_wallpaper.services.renderer import render_png
from year_wallpaper.services.renderer import wrap_rows
from year_wallpaper.services.wallpaper_service import build_wallpaper_tree


def test_wrap_rows_splits_items_into_full_rows_and_remainder() -> None:
    assert wrap_rows(366, 42, 16, 943.2) == [16] * 22 + [14]


def test_wrap_rows_keeps_at_least_one_item_per_row() -> None:
    assert wrap_rows(3, 50, 10, 20) == [1, 1, 1]


def test_dark_flow_dots_are_drawn_in_state_colors() -> None:
    request = RenderRequest(
        width=1179,
        height=2556,
        color="#ff0000",
        style="dark-flow",
        date=date(2024, 3, 1),
    )
    tree, _ = build_wallpaper_tree(request)

    image = render_image(tree)

    assert image.size == (1179, 2556)
    assert image.getpixel((5, 5)) == (0, 0, 0)
    # First dot of the first row, a past day.
    assert image.getpixel((155, 788)) == (255, 255, 255)
    # Day 61 sits in row 3, column 12.
    assert image.getpixel((851, 962)) == (255, 0, 0)


@pytest.mark.parametrize("style", ["light", "dark-grid", "dark-flow"])
def test_render_png_matches_requested_size(style: str) -> None:
    request = RenderRequest(width=100, height=200, color="#00ff00", style=style)
    tree, _ = build_wallpaper_tree(request)

    payload = render_png(tree)

    with Image.open(io.BytesIO(payload)) as image:
        assert image.format == "PNG"
        assert image.size == (100, 200)


def test_render_rejects_non_frame_root() -> None:
    with pytest.raises(RenderError):
        render_image(LayoutNode(kind=NodeKind.DOT, width=10, height=10))
