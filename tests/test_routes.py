"""Tests for FastAPI route handlers."""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from recipe_importer.config import Settings
from recipe_importer.main import app
from recipe_importer.models import FetchError, Ingredient, Recipe, Step


@pytest.fixture()
def client():
    return TestClient(app)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("ALLOW_RENDER", "SPARSE_POLICY", "FETCH_TIMEOUT", "RENDER_TIMEOUT"):
        monkeypatch.delenv(f"RECIPE_IMPORTER_{name}", raising=False)


SAMPLE_RECIPE = Recipe(
    title="Test Soup",
    servings=2,
    prep_time_minutes=5,
    ingredients=[Ingredient(name="water"), Ingredient(name="salt")],
    steps=[Step(instruction="Boil water."), Step(instruction="Add salt.")],
)


# -- Import route: success --


@patch("recipe_importer.main.import_recipe", new_callable=AsyncMock)
def test_import_success(mock_import, client):
    mock_import.return_value = SAMPLE_RECIPE
    resp = client.get("/api/import", params={"url": "https://example.com/soup"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["title"] == "Test Soup"
    assert body["servings"] == 2
    assert body["prepTimeMinutes"] == 5
    assert body["cookTimeMinutes"] == 0
    assert body["ingredients"] == [
        {"amount": "", "name": "water"},
        {"amount": "", "name": "salt"},
    ]
    assert body["steps"][0] == {"shortTitle": "", "instruction": "Boil water."}
    assert "subtitle" not in body
    mock_import.assert_awaited_once_with("https://example.com/soup", settings=Settings())


# -- Import route: errors --


@patch("recipe_importer.main.import_recipe", new_callable=AsyncMock)
def test_import_fetch_error(mock_import, client):
    mock_import.side_effect = FetchError("http", "Page not found.")
    resp = client.get("/api/import", params={"url": "https://example.com/missing"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Page not found."}


@patch("recipe_importer.main.import_recipe", new_callable=AsyncMock)
def test_import_missing_url(mock_import, client):
    resp = client.get("/api/import")
    assert resp.status_code == 400
    assert "error" in resp.json()
    mock_import.assert_not_awaited()


@patch("recipe_importer.main.import_recipe", new_callable=AsyncMock)
def test_import_blank_url(mock_import, client):
    resp = client.get("/api/import", params={"url": "   "})
    assert resp.status_code == 400
    mock_import.assert_not_awaited()


def test_import_malformed_url_gives_json_error(client):
    resp = client.get("/api/import", params={"url": "http://[bad"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Invalid URL."}


@patch("recipe_importer.main.import_recipe", new_callable=AsyncMock)
def test_import_bad_config_gives_json_error(mock_import, client, monkeypatch):
    monkeypatch.setenv("RECIPE_IMPORTER_SPARSE_POLICY", "aggressive")
    resp = client.get("/api/import", params={"url": "https://example.com/soup"})
    assert resp.status_code == 500
    assert "RECIPE_IMPORTER_SPARSE_POLICY" in resp.json()["error"]
    mock_import.assert_not_awaited()


# -- Security headers --


@patch("recipe_importer.main.import_recipe", new_callable=AsyncMock)
def test_security_headers(mock_import, client):
    mock_import.return_value = SAMPLE_RECIPE
    resp = client.get("/api/import", params={"url": "https://example.com/soup"})
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
    assert resp.headers["X-Frame-Options"] == "DENY"
    assert resp.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"
