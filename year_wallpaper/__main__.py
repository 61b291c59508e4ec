import uvicorn

from year_wallpaper.settings import Settings


def main() -> None:
    """Serve the wallpaper API with uvicorn."""

    settings = Settings()
    uvicorn.run(
        "year_wallpaper.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
