import calendar
import logging
from dataclasses import dataclass
from datetime import UTC
from datetime import date
from datetime import datetime
from enum import Enum
from zoneinfo import ZoneInfo
from zoneinfo import ZoneInfoNotFoundError


logger = logging.getLogger(__name__)


class DayState(str, Enum):
    """Visual state of a single day dot."""

    PAST = "past"
    CURRENT = "current"
    FUTURE = "future"
    FILLED = "filled"
    UNFILLED = "unfilled"


class ClassificationMode(str, Enum):
    TRI_STATE = "tri-state"
    BINARY = "binary"


@dataclass(frozen=True)
class ZonedContext:
    """Year position of a date as seen on the wall clock of a timezone."""

    zoned_date: date
    days_in_year: int
    day_index: int
    timezone_applied: bool = True

    @property
    def year(self) -> int:
        return self.zoned_date.year

    @property
    def days_left(self) -> int:
        return self.days_in_year - self.day_index

    @property
    def percent(self) -> int:
        """Share of the year reached, rounded half up to a whole percent."""

        return (self.day_index * 200 + self.days_in_year) // (2 * self.days_in_year)


@dataclass(frozen=True)
class DayCell:
    ordinal: int
    state: DayState


def days_in_year(year: int) -> int:
    return 366 if calendar.isleap(year) else 365


def to_zoned_date(moment: date | datetime | None, timezone: str) -> tuple[date, bool]:
    """Resolve the wall-clock date of `moment` in `timezone`.

    A plain `date` is already a wall-clock date and is returned as is once
    the timezone has been checked. Naive datetimes are read as UTC. When the
    timezone cannot be loaded, or the instant cannot be shifted into it, the
    instant is used unconverted and the second item of the result is False.
    """

    if moment is None:
        moment = datetime.now(UTC)

    try:
        zone = ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        logger.warning("Invalid timezone %r, using unconverted instant: %s", timezone, exc)
        return _wall_date(moment), False

    if not isinstance(moment, datetime):
        return moment, True

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)

    try:
        return moment.astimezone(zone).date(), True
    except OverflowError:
        logger.warning(
            "Instant %s is out of range in %r, using it unconverted", moment, timezone
        )
        return moment.date(), False


def _wall_date(moment: date | datetime) -> date:
    return moment.date() if isinstance(moment, datetime) else moment


def compute_zoned_context(
    moment: date | datetime | None, timezone: str = "UTC"
) -> ZonedContext:
    """Compute year length and 1-based day ordinal for a zoned date."""

    zoned_date, applied = to_zoned_date(moment, timezone)
    return ZonedContext(
        zoned_date=zoned_date,
        days_in_year=days_in_year(zoned_date.year),
        day_index=zoned_date.timetuple().tm_yday,
        timezone_applied=applied,
    )


def classify_day(ordinal: int, day_index: int, mode: ClassificationMode) -> DayState:
    if mode is ClassificationMode.BINARY:
        return DayState.FILLED if ordinal <= day_index else DayState.UNFILLED

    if ordinal < day_index:
        return DayState.PAST
    if ordinal == day_index:
        return DayState.CURRENT
    return DayState.FUTURE


def classify_days(
    total_days: int,
    day_index: int,
    mode: ClassificationMode = ClassificationMode.TRI_STATE,
) -> tuple[DayCell, ...]:
    """Classify every day of the year relative to `day_index`.

    Raises:
        ValueError: If `day_index` is outside `1..total_days`.
    """

    if not 1 <= day_index <= total_days:
        raise ValueError(f"day_index {day_index} is outside 1..{total_days}")

    return tuple(
        DayCell(ordinal=ordinal, state=classify_day(ordinal, day_index, mode))
        for ordinal in range(1, total_days + 1)
    )
