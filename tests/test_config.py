"""
Tests for settings loaded from the environment.
"""
from fastapi.testclient import TestClient

from medapp.config import Settings
from medapp.main import create_app


def test_cors_origins_read_as_comma_separated_list(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "http://localhost:3000, https://med.example.com,")

    settings = Settings()

    assert settings.cors_origin_list == ["http://localhost:3000", "https://med.example.com"]


def test_single_cors_origin(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "http://localhost:3000")
    assert Settings().cors_origin_list == ["http://localhost:3000"]


def test_configured_origin_is_allowed(db):
    settings = Settings(
        database_url="sqlite://",
        create_tables=False,
        cors_origins="http://localhost:3000,https://med.example.com",
    )
    with TestClient(create_app(settings=settings, database=db)) as client:
        response = client.get("/", headers={"Origin": "https://med.example.com"})

    assert response.headers["access-control-allow-origin"] == "https://med.example.com"
