from fastapi import Request

from year_wallpaper.settings import Settings


def get_settings(request: Request) -> Settings:
    """Return the settings the running application was created with."""

    return request.app.state.settings
