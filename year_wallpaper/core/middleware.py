from collections import deque
from collections.abc import Awaitable
from collections.abc import Callable
from threading import RLock
from time import monotonic

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response


WALLPAPER_PATH = "/api/wallpaper"


class SlidingWindowLimiter:
    """Per-client request counter over a sliding time window.

    Clients with no request inside the window are forgotten, so the number
    of tracked keys is bounded by the clients seen in the last window.
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = monotonic,
    ) -> None:
        self.max_requests = max(1, max_requests)
        self.window_seconds = max(1, window_seconds)
        self._clock = clock
        self._buckets: dict[str, deque[float]] = {}
        self._last_sweep = clock()
        self._lock = RLock()

    def __len__(self) -> int:
        return len(self._buckets)

    def hit(self, key: str) -> int | None:
        """Record a request for `key`.

        Returns None when the request is allowed, otherwise the number of
        seconds the client should wait before retrying.
        """

        now = self._clock()
        cutoff = now - self.window_seconds

        with self._lock:
            if now - self._last_sweep >= self.window_seconds:
                self._sweep(cutoff)
                self._last_sweep = now

            bucket = self._buckets.get(key)
            if bucket is not None:
                while bucket and bucket[0] <= cutoff:
                    bucket.popleft()
            else:
                bucket = self._buckets[key] = deque()

            if len(bucket) >= self.max_requests:
                return max(1, int(self.window_seconds - (now - bucket[0])))

            bucket.append(now)
            return None

    def _sweep(self, cutoff: float) -> None:
        stale = [key for key, bucket in self._buckets.items() if bucket[-1] <= cutoff]
        for key in stale:
            del self._buckets[key]


class WallpaperRateLimitMiddleware(BaseHTTPMiddleware):
    """Throttle GET /api/wallpaper per client, since every hit renders a PNG."""

    def __init__(
        self, app, requests_per_window: int = 120, window_seconds: int = 60
    ) -> None:
        super().__init__(app)
        self.limiter = SlidingWindowLimiter(requests_per_window, window_seconds)

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if request.method != "GET" or request.url.path != WALLPAPER_PATH:
            return await call_next(request)

        retry_after = self.limiter.hit(self._client_ip(request))
        if retry_after is not None:
            return JSONResponse(
                status_code=429,
                content={"detail": "Too Many Requests"},
                headers={"Retry-After": str(retry_after)},
            )

        return await call_next(request)

    @staticmethod
    def _client_ip(request: Request) -> str:
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip() or "unknown"

        if request.client and request.client.host:
            return request.client.host

        return "unknown"
