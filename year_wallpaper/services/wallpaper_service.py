from year_wallpaper.api.schemas.wallpaper import RenderRequest
from year_wallpaper.services.calendar_service import ZonedContext
from year_wallpaper.services.calendar_service import classify_days
from year_wallpaper.services.calendar_service import compute_zoned_context
from year_wallpaper.services.geometry_service import compute_geometry
from year_wallpaper.services.layout_tree import LayoutNode
from year_wallpaper.services.layout_tree import build_tree
from year_wallpaper.services.layout_tree import header_text
from year_wallpaper.styles import get_style


def build_wallpaper_tree(request: RenderRequest) -> tuple[LayoutNode, ZonedContext]:
    """Run the calculator, geometry and tree builder for one request."""

    style = get_style(request.style)
    context = compute_zoned_context(request.date, request.timezone)
    cells = classify_days(context.days_in_year, context.day_index, style.mode)
    geometry = compute_geometry(
        canvas_width=request.width,
        content_fraction=style.content_fraction,
        dots_per_row=style.dots_per_row,
        strategy=style.strategy,
        gap_ratio=style.gap_ratio,
        gap_divisor=style.gap_divisor,
    )
    tree = build_tree(
        cells,
        geometry,
        style,
        width=request.width,
        height=request.height,
        accent_color=request.color,
        header=header_text(context.percent),
    )
    return tree, context
