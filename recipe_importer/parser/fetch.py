"""Page acquisition: plain HTTP fetch and headless-browser render."""

import ipaddress
import logging
import socket
from urllib.parse import urlparse

import httpx
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from recipe_importer.config import USER_AGENT
from recipe_importer.models import FetchError, RenderError

logger = logging.getLogger(__name__)

# Loopback, RFC 1918, link-local (cloud metadata) and unique-local ranges
_INTERNAL_NETWORKS = tuple(
    ipaddress.ip_network(cidr)
    for cidr in (
        "127.0.0.0/8",
        "10.0.0.0/8",
        "172.16.0.0/12",
        "192.168.0.0/16",
        "169.254.0.0/16",
        "::1/128",
        "fc00::/7",
    )
)

_BROWSER_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]

_UNREACHABLE = "Couldn't reach that website. It may be down or the URL may be wrong."


def _host_of(url: str) -> str:
    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
    except ValueError:
        logger.warning("Rejected malformed URL: %s", url)
        raise FetchError("validation", "Invalid URL.")

    if parsed.scheme not in ("http", "https"):
        logger.warning("Rejected URL with scheme %r: %s", parsed.scheme, url)
        raise FetchError("validation", "Only http and https URLs are supported.")
    if not hostname:
        logger.warning("Rejected URL with no hostname: %s", url)
        raise FetchError("validation", "Invalid URL.")
    return hostname


def _is_internal(address: str) -> bool:
    ip = ipaddress.ip_address(address)
    return any(ip in network for network in _INTERNAL_NETWORKS)


def validate_url(url: str) -> None:
    """Only http(s) URLs whose host resolves to public addresses get through."""
    hostname = _host_of(url)

    try:
        addrinfos = socket.getaddrinfo(hostname, None)
    except socket.gaierror:
        logger.warning("DNS lookup failed for %s", hostname)
        raise FetchError(
            "network", "Couldn't find that website. Check the URL for typos."
        )

    blocked = [info[4][0] for info in addrinfos if _is_internal(info[4][0])]
    if blocked:
        logger.warning("Host %s resolves to internal address %s", hostname, blocked[0])
        raise FetchError(
            "validation", "Requests to private or internal addresses are not allowed."
        )


def status_message(status: int) -> str:
    """User-facing wording for an HTTP error status."""
    if status in (401, 403):
        return "This site blocked the request. It may require a login or restrict automated access."
    if status == 404:
        return "Page not found. Double-check the URL and make sure it points to a recipe page."
    if status >= 500:
        return "The recipe site is having server issues. Try again in a few minutes."
    return f"The site returned an error (HTTP {status})."


async def fetch_html(url: str, timeout: float = 10.0) -> str:
    """GET the page with a plain HTTP client. Raises FetchError on any failure."""
    try:
        async with httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            headers={"User-Agent": USER_AGENT},
        ) as client:
            response = await client.get(url)
            response.raise_for_status()
    except httpx.TimeoutException:
        logger.warning("Timeout fetching %s after %.0fs", url, timeout)
        raise FetchError("network", "Request timed out. The site may be slow or down.")
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        logger.warning("HTTP %d from %s", status, url)
        raise FetchError("http", status_message(status))
    except (httpx.RequestError, httpx.InvalidURL) as e:
        logger.warning("%s fetching %s: %s", type(e).__name__, url, e)
        raise FetchError("network", _UNREACHABLE)

    logger.info(
        "Fetched %s (HTTP %d, %d bytes)", url, response.status_code, len(response.text)
    )
    return response.text


async def render_html(url: str, timeout: float = 30.0) -> str:
    """Load the page in headless Chromium and return the rendered document HTML.

    A fresh browser is launched for every call and closed on every exit path,
    including navigation timeouts. Raises RenderError on any browser failure.
    """
    logger.info("Rendering %s in headless browser", url)
    try:
        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=True, args=_BROWSER_ARGS)
            try:
                page = await browser.new_page(user_agent=USER_AGENT)
                await page.goto(url, wait_until="networkidle", timeout=timeout * 1000)
                html = await page.evaluate("() => document.documentElement.outerHTML")
            finally:
                await browser.close()
    except PlaywrightTimeoutError:
        logger.warning("Timed out rendering %s after %.0fs", url, timeout)
        raise RenderError("timeout", f"Timed out rendering the page after {timeout:.0f}s.")
    except PlaywrightError as e:
        logger.warning("Browser error rendering %s: %s", url, e)
        raise RenderError("render", "The headless browser could not load the page.")

    logger.info("Rendered %s (%d bytes)", url, len(html))
    return html
