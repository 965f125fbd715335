from fastapi.testclient import TestClient

from combined_heatmap.main import create_app


def test_combined_endpoint_rate_limited_after_threshold(monkeypatch) -> None:
    """Rate limiter blocks repeated requests to the aggregation endpoints."""

    monkeypatch.setenv("RATE_LIMIT_PER_MINUTE", "1")
    monkeypatch.setenv("RATE_LIMIT_WINDOW_SECONDS", "60")
    app = create_app()
    client = TestClient(app)

    headers = {"X-Forwarded-For": "203.0.113.10"}

    first = client.get("/api/combined", headers=headers)
    second = client.get("/api/combined.svg", headers=headers)

    assert first.status_code == 400
    assert second.status_code == 429
    assert second.headers["Retry-After"]


def test_rate_limit_is_tracked_per_client(monkeypatch) -> None:
    """Each forwarded client address gets its own request budget."""

    monkeypatch.setenv("RATE_LIMIT_PER_MINUTE", "1")
    app = create_app()
    client = TestClient(app)

    first = client.get("/api/combined", headers={"X-Forwarded-For": "203.0.113.10"})
    second = client.get("/api/combined", headers={"X-Forwarded-For": "203.0.113.11"})

    assert first.status_code == 400
    assert second.status_code == 400


def test_non_aggregation_routes_not_rate_limited(monkeypatch) -> None:
    """Rate limiter does not affect routes other than the aggregation endpoints."""

    monkeypatch.setenv("RATE_LIMIT_PER_MINUTE", "1")
    monkeypatch.setenv("RATE_LIMIT_WINDOW_SECONDS", "60")
    app = create_app()
    client = TestClient(app)

    first = client.get("/health/live")
    second = client.get("/health/live")

    assert first.status_code == 200
    assert second.status_code == 200
