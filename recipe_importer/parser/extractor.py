"""Selector-chain extraction of a Recipe from arbitrary recipe-page HTML."""

import logging
import re
from urllib.parse import urlparse

from bs4 import BeautifulSoup, Tag

from recipe_importer.models import Ingredient, Recipe, Step
from recipe_importer.parser import selectors
from recipe_importer.parser.durations import parse_minutes
from recipe_importer.parser.structured import (
    find_structured_recipe,
    structured_ingredients,
    structured_steps,
    structured_time,
    structured_yield,
)

logger = logging.getLogger(__name__)

_INTEGER_RE = re.compile(r"\d+")


def extract_recipe(html: str, url: str) -> Recipe:
    """Build a Recipe from page HTML. Never raises on malformed or empty markup.

    Each list field takes the items of the first selector in its chain that
    yields any non-blank text; later, more generic selectors are not
    consulted. Embedded JSON-LD is used only after a whole chain comes up
    empty.
    """
    html = html or ""
    soup = BeautifulSoup(html, "html.parser")
    structured = find_structured_recipe(html, url)

    ingredients = _first_match(soup, selectors.INGREDIENT_SELECTORS)
    if not ingredients and structured:
        ingredients = structured_ingredients(structured)
        logger.debug("Ingredients taken from structured data: %d", len(ingredients))

    steps = _first_match(soup, selectors.STEP_SELECTORS)
    if not steps and structured:
        steps = structured_steps(structured)
        logger.debug("Steps taken from structured data: %d", len(steps))
    if not steps:
        steps = _texts(soup.select(selectors.ARTICLE_PARAGRAPHS))
        steps = steps[: selectors.MAX_ARTICLE_PARAGRAPHS]

    logger.debug(
        "Extracted %d ingredients, %d steps from %s", len(ingredients), len(steps), url
    )

    return Recipe(
        title=_extract_title(soup) or f"Recipe from {_hostname(url)}",
        servings=_extract_servings(soup, structured),
        prep_time_minutes=_extract_minutes(
            soup, selectors.PREP_TIME_SELECTORS, structured, "prepTime"
        ),
        cook_time_minutes=_extract_minutes(
            soup, selectors.COOK_TIME_SELECTORS, structured, "cookTime"
        ),
        ingredients=[Ingredient(name=name) for name in ingredients],
        equipment=_collect_under(soup, selectors.EQUIPMENT_CONTAINER),
        steps=[Step(instruction=text) for text in steps],
        tips=_collect_under(soup, selectors.TIPS_CONTAINER),
    )


def _text(el: Tag) -> str:
    """Element text with whitespace runs collapsed to single spaces."""
    return " ".join(el.get_text().split())


def _texts(elements: list[Tag]) -> list[str]:
    return [t for t in (_text(el) for el in elements) if t]


def _first_match(soup: BeautifulSoup, chain: list[str]) -> list[str]:
    # Blank matches don't count; the chain moves on to the next selector
    for selector in chain:
        texts = _texts(soup.select(selector))
        if texts:
            logger.debug("Selector %r matched %d items", selector, len(texts))
            return texts
    return []


def _extract_title(soup: BeautifulSoup) -> str:
    """First <h1>, then og:title, then <title>. Empty if none has text."""
    h1 = soup.find("h1")
    if h1 and _text(h1):
        return _text(h1)

    og = soup.find("meta", property="og:title")
    if og and og.get("content", "").strip():
        return " ".join(og["content"].split())

    title_tag = soup.find("title")
    if title_tag:
        return _text(title_tag)

    return ""


def _hostname(url: str) -> str:
    try:
        hostname = urlparse(url).hostname or ""
    except ValueError:
        hostname = ""
    if hostname.startswith("www."):
        hostname = hostname[4:]
    return hostname or "unknown site"


def _value(el: Tag | None) -> str:
    """Text of an element, or its content attribute for <meta> microdata."""
    if el is None:
        return ""
    return _text(el) or el.get("content", "").strip()


def _extract_servings(soup: BeautifulSoup, structured: dict | None) -> int:
    candidates = [_value(soup.select_one(sel)) for sel in selectors.YIELD_SELECTORS]
    if structured:
        candidates.append(structured_yield(structured) or "")

    for text in candidates:
        match = _INTEGER_RE.search(text)
        if match:
            return max(int(match.group()), 1)
    return 1


def _extract_minutes(
    soup: BeautifulSoup,
    chain: tuple[str, str],
    structured: dict | None,
    structured_key: str,
) -> int:
    itemprop_sel, class_sel = chain
    itemprop = soup.select_one(itemprop_sel)
    text = ""
    if itemprop is not None:
        text = itemprop.get("datetime", "").strip() or _value(itemprop)
    if not text:
        text = _value(soup.select_one(class_sel))

    minutes = parse_minutes(text)
    if not minutes and structured:
        minutes = parse_minutes(structured_time(structured, structured_key))
    return minutes


def _collect_under(soup: BeautifulSoup, container: str) -> list[str]:
    """List items and paragraphs inside matching containers, outermost only."""
    elements = soup.select(f"{container} li, {container} p")
    seen = {id(el) for el in elements}
    # A <p> inside a matched <li> would repeat the item's text
    outermost = [
        el for el in elements if not any(id(parent) in seen for parent in el.parents)
    ]
    return _texts(outermost)
