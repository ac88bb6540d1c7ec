"""Schema.org Recipe data embedded as JSON-LD, read via extruct.

Used by the extractor only as the last link of each selector chain.
"""

import html
import logging

import extruct

logger = logging.getLogger(__name__)


def find_structured_recipe(html: str, url: str) -> dict | None:
    """Return the first schema.org Recipe object found in the page's JSON-LD."""
    if not html or not html.strip():
        return None
    try:
        data = extruct.extract(html, base_url=url, syntaxes=["json-ld"])
    except Exception:
        logger.debug("Structured data extraction failed for %s", url, exc_info=True)
        return None

    recipe_obj = _find_recipe_objects(data.get("json-ld", []))
    if recipe_obj is None:
        logger.debug("No structured recipe data found for %s", url)
    return recipe_obj


def structured_ingredients(recipe_obj: dict) -> list[str]:
    raw = recipe_obj.get("recipeIngredient") or recipe_obj.get("ingredients") or []
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list):
        return []
    return [_clean(s) for s in raw if isinstance(s, str) and _clean(s)]


def structured_steps(recipe_obj: dict) -> list[str]:
    return _normalize_instructions(recipe_obj.get("recipeInstructions", []))


def structured_yield(recipe_obj: dict) -> str | None:
    """Handle yield given as a number, a string, or a list of either."""
    servings = recipe_obj.get("recipeYield")
    if isinstance(servings, list):
        servings = servings[0] if servings else None
    if servings is None or isinstance(servings, (dict, bool)):
        return None
    return str(servings)


def structured_time(recipe_obj: dict, key: str) -> str | None:
    value = recipe_obj.get(key)
    return value if isinstance(value, str) else None


def _find_recipe_objects(data: list) -> dict | None:
    """Find a Recipe object in a list of JSON-LD items."""
    for item in data:
        if not isinstance(item, dict):
            continue
        if _is_recipe(item):
            return item

        # Check inside @graph arrays
        for node in item.get("@graph", []):
            if isinstance(node, dict) and _is_recipe(node):
                return node

    return None


def _is_recipe(node: dict) -> bool:
    node_type = node.get("@type", "")
    if isinstance(node_type, list):
        node_type = " ".join(str(t) for t in node_type)
    return "Recipe" in str(node_type)


def _normalize_instructions(raw) -> list[str]:
    """Normalize recipeInstructions into a flat list of step strings."""
    if isinstance(raw, str):
        # Single text block — split on newlines
        return [_clean(s) for s in raw.split("\n") if _clean(s)]

    if isinstance(raw, list):
        steps = []
        for item in raw:
            if isinstance(item, str):
                steps.append(item)
            elif isinstance(item, dict):
                # HowToStep or HowToSection
                if item.get("@type") == "HowToSection":
                    for sub in item.get("itemListElement", []):
                        if isinstance(sub, dict):
                            steps.append(sub.get("text", ""))
                        elif isinstance(sub, str):
                            steps.append(sub)
                else:
                    steps.append(item.get("text", ""))
        return [_clean(s) for s in steps if isinstance(s, str) and _clean(s)]

    return []


def _clean(text: str) -> str:
    """Decode HTML entities and collapse whitespace."""
    return " ".join(html.unescape(text).split())
