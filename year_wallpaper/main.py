from fastapi import FastAPI

from year_wallpaper.api.routes.wallpaper import router
from year_wallpaper.core.middleware import WallpaperRateLimitMiddleware
from year_wallpaper.core.observability import configure_logging
from year_wallpaper.core.observability import init_sentry
from year_wallpaper.settings import Settings


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application with observability and rate limiting."""

    app_settings = app_settings or Settings()
    configure_logging(app_settings)
    init_sentry(app_settings)

    application = FastAPI(title="Year Progress Wallpaper")
    application.state.settings = app_settings
    application.add_middleware(
        WallpaperRateLimitMiddleware,
        requests_per_window=app_settings.rate_limit_per_minute,
        window_seconds=app_settings.rate_limit_window_seconds,
    )
    application.include_router(router)
    return application


app = create_app()
