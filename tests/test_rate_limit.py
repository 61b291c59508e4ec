from fastapi.testclient import TestClient

from year_wallpaper.core.middleware import SlidingWindowLimiter
from year_wallpaper.main import create_app


def test_wallpaper_endpoint_rate_limited_after_threshold(monkeypatch) -> None:
    """Rate limiter blocks repeated requests to /api/wallpaper."""

    monkeypatch.setenv("RATE_LIMIT_PER_MINUTE", "1")
    monkeypatch.setenv("RATE_LIMIT_WINDOW_SECONDS", "60")
    app = create_app()
    client = TestClient(app)

    headers = {"X-Forwarded-For": "203.0.113.10"}
    params = {"width": 50, "height": 50}

    first = client.get("/api/wallpaper", params=params, headers=headers)
    second = client.get("/api/wallpaper", params=params, headers=headers)

    assert first.status_code == 200
    assert second.status_code == 429
    assert second.headers["Retry-After"]


def test_clients_are_limited_independently(monkeypatch) -> None:
    """Each forwarded client address gets its own window."""

    monkeypatch.setenv("RATE_LIMIT_PER_MINUTE", "1")
    app = create_app()
    client = TestClient(app)
    params = {"width": 50, "height": 50}

    first = client.get(
        "/api/wallpaper", params=params, headers={"X-Forwarded-For": "203.0.113.10"}
    )
    second = client.get(
        "/api/wallpaper", params=params, headers={"X-Forwarded-For": "203.0.113.11"}
    )

    assert first.status_code == 200
    assert second.status_code == 200


def test_non_wallpaper_routes_not_rate_limited(monkeypatch) -> None:
    """Rate limiter does not affect routes other than /api/wallpaper."""

    monkeypatch.setenv("RATE_LIMIT_PER_MINUTE", "1")
    monkeypatch.setenv("RATE_LIMIT_WINDOW_SECONDS", "60")
    app = create_app()
    client = TestClient(app)

    first = client.get("/api/wallpaper/progress")
    second = client.get("/api/wallpaper/progress")

    assert first.status_code == 200
    assert second.status_code == 200


def test_limiter_forgets_clients_after_the_window() -> None:
    """Stale client keys are swept once their window has passed."""

    now = [0.0]
    limiter = SlidingWindowLimiter(2, 60, clock=lambda: now[0])

    for index in range(50):
        assert limiter.hit(f"198.51.100.{index}") is None
    assert len(limiter) == 50

    now[0] = 61.0
    assert limiter.hit("198.51.100.200") is None

    assert len(limiter) == 1


def test_limiter_reports_seconds_until_retry() -> None:
    now = [0.0]
    limiter = SlidingWindowLimiter(1, 60, clock=lambda: now[0])

    assert limiter.hit("203.0.113.10") is None
    now[0] = 15.0

    assert limiter.hit("203.0.113.10") == 45

    now[0] = 60.0
    assert limiter.hit("203.0.113.10") is None
