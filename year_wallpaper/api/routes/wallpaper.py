from fastapi import APIRouter
from fastapi import Depends
from fastapi import Query
from fastapi import Response
from starlette.concurrency import run_in_threadpool

from year_wallpaper.api.params import parse_moment
from year_wallpaper.api.params import parse_render_request
from year_wallpaper.api.schemas.wallpaper import ProgressResponse
from year_wallpaper.core.dependencies import get_settings
from year_wallpaper.services.calendar_service import compute_zoned_context
from year_wallpaper.services.renderer import render_png
from year_wallpaper.services.wallpaper_service import build_wallpaper_tree
from year_wallpaper.settings import Settings


NO_STORE_HEADERS = {"Cache-Control": "no-store, no-cache, must-revalidate"}

router = APIRouter()


@router.get("/")
async def root() -> dict[str, str]:
    """Return a basic service greeting."""

    return {"message": "Hello World"}


@router.get("/health/live")
def health_live() -> dict[str, str]:
    """Return liveness probe response for health checks."""

    return {"status": "ok"}


@router.get("/api/wallpaper", response_class=Response)
async def get_wallpaper(
    width: str | None = None,
    height: str | None = None,
    color: str | None = None,
    tz: str | None = None,
    date: str | None = None,
    style: str | None = None,
    settings: Settings = Depends(get_settings),
) -> Response:
    """Render the year progress wallpaper as a PNG image."""

    render_request = parse_render_request(
        settings,
        width=width,
        height=height,
        color=color,
        tz=tz,
        date_value=date,
        style=style,
    )
    tree, _context = build_wallpaper_tree(render_request)
    image = await run_in_threadpool(render_png, tree, settings.font_path)
    return Response(content=image, media_type="image/png", headers=NO_STORE_HEADERS)


@router.get("/api/wallpaper/progress", response_model=ProgressResponse)
def get_progress(
    response: Response,
    tz: str | None = Query(default=None),
    date: str | None = Query(default=None),
    settings: Settings = Depends(get_settings),
) -> ProgressResponse:
    """Return the year position used to color the wallpaper."""

    timezone = (tz or "").strip() or settings.default_timezone
    context = compute_zoned_context(parse_moment(date), timezone)
    response.headers.update(NO_STORE_HEADERS)
    return ProgressResponse(
        date=context.zoned_date,
        timezone=timezone,
        timezone_applied=context.timezone_applied,
        year=context.year,
        days_in_year=context.days_in_year,
        day_index=context.day_index,
        days_left=context.days_left,
        percent=context.percent,
    )
