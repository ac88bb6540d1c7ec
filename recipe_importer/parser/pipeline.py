"""Orchestrator: plain fetch first, headless render only when needed."""

import logging

from recipe_importer.config import Settings, SparsePolicy
from recipe_importer.models import (
    PLACEHOLDER_INSTRUCTION,
    FetchError,
    Recipe,
    RenderError,
)
from recipe_importer.parser.extractor import extract_recipe
from recipe_importer.parser.fetch import fetch_html, render_html, validate_url

logger = logging.getLogger(__name__)


def is_sparse(recipe: Recipe, policy: SparsePolicy = SparsePolicy.FEW_ITEMS) -> bool:
    """Whether a plain-fetch result is too thin to keep without rendering."""
    if policy is SparsePolicy.PLACEHOLDER_ONLY:
        return (
            not recipe.ingredients
            and len(recipe.steps) == 1
            and recipe.steps[0].instruction == PLACEHOLDER_INSTRUCTION
        )
    return len(recipe.ingredients) <= 1 or len(recipe.steps) <= 1


async def import_recipe(
    url: str,
    allow_render: bool | None = None,
    sparse_policy: SparsePolicy | None = None,
    settings: Settings | None = None,
) -> Recipe:
    """Fetch a URL and extract a recipe from it.

    The page is fetched with a plain HTTP GET first. A headless-browser
    render is attempted at most once: when the plain fetch fails, or when
    its result is sparse. Render failures are logged and the earlier result
    is returned instead. Only FetchError is raised.

    Callers at the process boundary pass ``settings`` read once from the
    environment; when omitted they are read here, and an invalid environment
    surfaces as ConfigurationError.
    """
    if settings is None:
        settings = Settings.from_env()
    if allow_render is None:
        allow_render = settings.allow_render
    if sparse_policy is None:
        sparse_policy = settings.sparse_policy

    logger.info("Importing recipe from %s (render %s)", url, "on" if allow_render else "off")
    validate_url(url)

    try:
        html = await fetch_html(url, timeout=settings.fetch_timeout)
    except FetchError as e:
        if not allow_render:
            raise
        logger.warning("Plain fetch failed for %s (%s), trying render", url, e.message)
        try:
            rendered = await render_html(url, timeout=settings.render_timeout)
        except RenderError as render_err:
            logger.warning("Render fallback failed for %s: %s", url, render_err.message)
            raise e
        return extract_recipe(rendered, url)

    recipe = extract_recipe(html, url)
    if not is_sparse(recipe, sparse_policy):
        logger.info("Plain fetch succeeded for %s", url)
        return recipe

    if not allow_render:
        logger.info("Sparse result for %s, render disabled; keeping it", url)
        return recipe

    logger.info(
        "Sparse result for %s (%d ingredients, %d steps), trying render",
        url,
        len(recipe.ingredients),
        len(recipe.steps),
    )
    try:
        rendered = await render_html(url, timeout=settings.render_timeout)
    except RenderError as e:
        logger.warning("Render fallback failed for %s: %s", url, e.message)
        return recipe

    logger.info("Render succeeded for %s", url)
    return extract_recipe(rendered, url)
