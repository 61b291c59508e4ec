import logging
import re
from datetime import date
from datetime import datetime

from PIL import ImageColor

from year_wallpaper.api.schemas.wallpaper import DEFAULT_HEIGHT
from year_wallpaper.api.schemas.wallpaper import DEFAULT_WIDTH
from year_wallpaper.api.schemas.wallpaper import RenderRequest
from year_wallpaper.settings import Settings
from year_wallpaper.styles import get_style


logger = logging.getLogger(__name__)

_BARE_HEX = re.compile(r"^(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


def parse_dimension(raw_value: str | None, default: int, maximum: int) -> int:
    """Parse a pixel size, falling back to `default` on any violation."""

    if raw_value is None or not raw_value.strip():
        return default

    try:
        value = int(raw_value.strip())
    except ValueError:
        logger.info("Ignoring non-numeric dimension %r", raw_value)
        return default

    if not 1 <= value <= maximum:
        logger.info("Ignoring out-of-range dimension %d", value)
        return default

    return value


def parse_color(raw_value: str | None, default: str) -> str:
    """Return a color Pillow understands, accepting hex without `#`."""

    if raw_value is None or not raw_value.strip():
        return default

    candidate = raw_value.strip()
    if _BARE_HEX.match(candidate):
        candidate = f"#{candidate}"

    try:
        ImageColor.getrgb(candidate)
    except ValueError:
        logger.info("Ignoring invalid color %r", raw_value)
        return default

    return candidate


def parse_moment(raw_value: str | None) -> date | datetime | None:
    """Parse an ISO 8601 date or datetime; None means "now"."""

    if raw_value is None or not raw_value.strip():
        return None

    candidate = raw_value.strip()
    try:
        return date.fromisoformat(candidate)
    except ValueError:
        pass

    try:
        return datetime.fromisoformat(candidate.replace("Z", "+00:00"))
    except ValueError:
        logger.warning("Invalid date %r, using the current instant", raw_value)
        return None


def parse_render_request(
    settings: Settings,
    width: str | None = None,
    height: str | None = None,
    color: str | None = None,
    tz: str | None = None,
    date_value: str | None = None,
    style: str | None = None,
) -> RenderRequest:
    """Build a validated render request from raw query values.

    Every malformed value degrades to its default instead of failing.
    """

    requested_style = style or settings.default_style
    style_config = get_style(style, settings.default_style)
    if requested_style != style_config.name:
        logger.info("Unknown style %r, using %r", requested_style, style_config.name)

    return RenderRequest(
        width=parse_dimension(width, DEFAULT_WIDTH, settings.max_dimension),
        height=parse_dimension(height, DEFAULT_HEIGHT, settings.max_dimension),
        color=parse_color(color, style_config.default_color),
        style=style_config.name,
        date=parse_moment(date_value),
        timezone=(tz or "").strip() or settings.default_timezone,
    )
