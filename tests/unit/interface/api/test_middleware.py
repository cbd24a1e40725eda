"""Unit tests for the HTTP middleware."""

from fastapi import FastAPI
from fastapi.testclient import TestClient

from outpost.interface.api.middleware import (
    RATE_LIMIT_MESSAGE,
    RateLimitMiddleware,
    SecurityHeadersMiddleware,
)


class FakeClock:
    """Settable clock for the rate limiter."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def make_app(clock: FakeClock, max_requests: int = 2) -> FastAPI:
    app = FastAPI()

    @app.get("/api/ping")
    async def api_ping():
        return {"pong": True}

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    app.add_middleware(
        RateLimitMiddleware,
        max_requests=max_requests,
        window_seconds=60,
        clock=clock,
    )
    app.add_middleware(SecurityHeadersMiddleware)
    return app


class TestRateLimitMiddleware:
    """Tests for the fixed-window rate limiter."""

    def test_requests_within_limit_carry_headers(self):
        # Arrange
        client = TestClient(make_app(FakeClock(1000.0)))

        # Act
        first = client.get("/api/ping")
        second = client.get("/api/ping")

        # Assert
        assert first.status_code == 200
        assert first.headers["RateLimit-Limit"] == "2"
        assert first.headers["RateLimit-Remaining"] == "1"
        assert first.headers["RateLimit-Reset"] == "20"
        assert second.status_code == 200
        assert second.headers["RateLimit-Remaining"] == "0"

    def test_request_over_limit_is_rejected(self):
        # Arrange
        client = TestClient(make_app(FakeClock(1000.0)))
        client.get("/api/ping")
        client.get("/api/ping")

        # Act
        response = client.get("/api/ping")

        # Assert
        assert response.status_code == 429
        assert response.json() == {"error": RATE_LIMIT_MESSAGE}
        assert response.headers["Retry-After"] == "20"

    def test_paths_outside_api_are_not_counted(self):
        # Arrange
        client = TestClient(make_app(FakeClock(1000.0), max_requests=1))

        # Act
        for _ in range(5):
            assert client.get("/health").status_code == 200
        response = client.get("/api/ping")

        # Assert
        assert response.status_code == 200
        assert "RateLimit-Limit" not in client.get("/health").headers

    def test_new_window_resets_counts(self):
        # Arrange
        clock = FakeClock(1000.0)
        client = TestClient(make_app(clock, max_requests=1))
        client.get("/api/ping")
        assert client.get("/api/ping").status_code == 429

        # Act
        clock.now = 1020.0
        response = client.get("/api/ping")

        # Assert
        assert response.status_code == 200
        assert response.headers["RateLimit-Reset"] == "60"


class TestSecurityHeadersMiddleware:
    """Tests for security response headers."""

    def test_adds_security_headers(self):
        # Arrange
        client = TestClient(make_app(FakeClock()))

        # Act
        response = client.get("/health")

        # Assert
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "SAMEORIGIN"
        assert response.headers["Referrer-Policy"] == "no-referrer"

    def test_hsts_only_over_https(self):
        # Arrange
        plain = TestClient(make_app(FakeClock()))
        secure = TestClient(make_app(FakeClock()), base_url="https://testserver")

        # Act
        plain_response = plain.get("/health")
        secure_response = secure.get("/health")

        # Assert
        assert "Strict-Transport-Security" not in plain_response.headers
        assert secure_response.headers["Strict-Transport-Security"].startswith(
            "max-age="
        )
