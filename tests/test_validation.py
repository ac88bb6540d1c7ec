"""Tests for URL validation and SSRF protection."""

import socket
from unittest.mock import AsyncMock, patch

import pytest

from recipe_importer.config import Settings
from recipe_importer.models import FetchError
from recipe_importer.parser.fetch import validate_url
from recipe_importer.parser.pipeline import import_recipe

# -- Blocked schemes --


def test_rejects_file_scheme():
    with pytest.raises(FetchError, match="Only http and https"):
        validate_url("file:///etc/passwd")


def test_rejects_ftp_scheme():
    with pytest.raises(FetchError, match="Only http and https"):
        validate_url("ftp://example.com/file.txt")


def test_rejects_no_scheme():
    with pytest.raises(FetchError, match="Only http and https"):
        validate_url("example.com/recipe")


# -- Blocked private/internal IPs --


def test_rejects_localhost():
    with pytest.raises(FetchError, match="private or internal"):
        validate_url("http://127.0.0.1/")


def test_rejects_localhost_name():
    with pytest.raises(FetchError, match="private or internal"):
        validate_url("http://localhost/")


def test_rejects_class_a_private():
    with pytest.raises(FetchError, match="private or internal"):
        validate_url("http://10.0.0.1/")


def test_rejects_class_b_private():
    with pytest.raises(FetchError, match="private or internal"):
        validate_url("http://172.16.0.1/")


def test_rejects_class_c_private():
    with pytest.raises(FetchError, match="private or internal"):
        validate_url("http://192.168.1.1/")


def test_rejects_link_local_metadata():
    with pytest.raises(FetchError, match="private or internal"):
        validate_url("http://169.254.169.254/latest/meta-data/")


# -- Invalid URLs --


def test_rejects_empty_string():
    with pytest.raises(FetchError):
        validate_url("")


def test_rejects_garbage():
    with pytest.raises(FetchError):
        validate_url("not-a-url-at-all")


# -- DNS --


def _resolve_to(ip: str):
    def fake_getaddrinfo(host, port, *args, **kwargs):
        return [(None, None, None, "", (ip, 0))]

    return fake_getaddrinfo


def test_rejects_hostname_resolving_to_private_ip(monkeypatch):
    monkeypatch.setattr(
        "recipe_importer.parser.fetch.socket.getaddrinfo", _resolve_to("10.1.2.3")
    )
    with pytest.raises(FetchError, match="private or internal"):
        validate_url("https://sneaky.example.com/recipe")


def test_rejects_unresolvable_hostname(monkeypatch):
    def fail(*args, **kwargs):
        raise socket.gaierror("no such host")

    monkeypatch.setattr("recipe_importer.parser.fetch.socket.getaddrinfo", fail)
    with pytest.raises(FetchError, match="Couldn't find that website") as exc_info:
        validate_url("https://no-such-host.invalid/")
    assert exc_info.value.error_type == "network"


# -- Valid URLs --


def test_accepts_http(monkeypatch):
    monkeypatch.setattr(
        "recipe_importer.parser.fetch.socket.getaddrinfo", _resolve_to("93.184.216.34")
    )
    validate_url("http://example.com/recipe")


def test_accepts_https(monkeypatch):
    monkeypatch.setattr(
        "recipe_importer.parser.fetch.socket.getaddrinfo", _resolve_to("93.184.216.34")
    )
    validate_url("https://www.allrecipes.com/recipe/12345")


# -- Malformed URLs --


@pytest.mark.parametrize("url", ["http://[bad", "https://[::1/recipe"])
def test_rejects_malformed_url(url):
    with pytest.raises(FetchError, match="Invalid URL") as exc_info:
        validate_url(url)
    assert exc_info.value.error_type == "validation"


@pytest.mark.anyio
@patch("recipe_importer.parser.pipeline.render_html", new_callable=AsyncMock)
@patch("recipe_importer.parser.pipeline.fetch_html", new_callable=AsyncMock)
async def test_import_of_malformed_url_raises_fetch_error(mock_fetch, mock_render):
    with pytest.raises(FetchError, match="Invalid URL"):
        await import_recipe("http://[bad", allow_render=True, settings=Settings())
    mock_fetch.assert_not_awaited()
    mock_render.assert_not_awaited()
