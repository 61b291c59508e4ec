import logging
from datetime import UTC
from datetime import date
from datetime import datetime

import pytest

from year_wallpaper.api.params import parse_color
from year_wallpaper.api.params import parse_dimension
from year_wallpaper.api.params import parse_moment
from year_wallpaper.api.params import parse_render_request
from year_wallpaper.settings import Settings


@pytest.mark.parametrize("raw_value", [None, "", "abc", "12.5", "0", "-5", "99999"])
def test_parse_dimension_falls_back_to_default(raw_value: str | None) -> None:
    assert parse_dimension(raw_value, 1179, 4096) == 1179


def test_parse_dimension_accepts_valid_integer() -> None:
    assert parse_dimension(" 828 ", 1179, 4096) == 828


@pytest.mark.parametrize(
    ("raw_value", "expected"),
    [("#ff0000", "#ff0000"), ("ff0000", "#ff0000"), ("red", "red"), ("not-a-color", "#000000")],
)
def test_parse_color(raw_value: str, expected: str) -> None:
    assert parse_color(raw_value, "#000000") == expected


def test_parse_moment_accepts_date_and_datetime() -> None:
    assert parse_moment("2024-03-01") == date(2024, 3, 1)
    assert parse_moment("2024-03-01T10:00:00Z") == datetime(2024, 3, 1, 10, tzinfo=UTC)


def test_parse_moment_logs_and_ignores_invalid_value(caplog) -> None:
    with caplog.at_level(logging.WARNING):
        assert parse_moment("yesterday") is None

    assert "yesterday" in caplog.text


def test_parse_render_request_applies_defaults() -> None:
    request = parse_render_request(Settings())

    assert request.width == 1179
    assert request.height == 2556
    assert request.style == "light"
    assert request.color == "#000000"
    assert request.timezone == "UTC"
    assert request.date is None


def test_parse_render_request_uses_style_default_color_and_settings() -> None:
    settings = Settings(default_style="dark-grid", default_timezone="Europe/Warsaw")

    request = parse_render_request(settings, width="abc", style="unknown")

    assert request.width == 1179
    assert request.style == "dark-grid"
    assert request.color == "#ff9f0a"
    assert request.timezone == "Europe/Warsaw"


def test_parse_render_request_respects_max_dimension() -> None:
    settings = Settings(max_dimension=2000)

    request = parse_render_request(settings, width="1500", height="2400")

    assert request.width == 1500
    assert request.height == 2556


def test_parse_moment_accepts_naive_datetime_and_compact_date() -> None:
    assert parse_moment("2024-03-01T10:00") == datetime(2024, 3, 1, 10)
    assert parse_moment("20240301") == date(2024, 3, 1)


def test_unknown_default_style_logs_the_style_actually_used(caplog) -> None:
    settings = Settings(default_style="neon")

    with caplog.at_level(logging.INFO, logger="year_wallpaper"):
        request = parse_render_request(settings)

    assert request.style == "light"
    assert "'neon'" in caplog.text
    assert "using 'light'" in caplog.text
