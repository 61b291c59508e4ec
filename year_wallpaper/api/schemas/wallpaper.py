from datetime import date as Date
from datetime import datetime

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


DEFAULT_WIDTH = 1179
DEFAULT_HEIGHT = 2556


class RenderRequest(BaseModel):
    """Validated wallpaper parameters after defaults are applied."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(default=DEFAULT_WIDTH, gt=0)
    height: int = Field(default=DEFAULT_HEIGHT, gt=0)
    color: str
    style: str
    date: datetime | Date | None = None
    timezone: str = "UTC"


class ProgressResponse(BaseModel):
    """Year progress of a date in a timezone."""

    date: Date
    timezone: str
    timezone_applied: bool
    year: int
    days_in_year: int
    day_index: int
    days_left: int
    percent: int
