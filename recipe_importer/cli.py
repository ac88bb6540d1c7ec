"""Command-line importer: ``importer <url>`` prints the recipe as JSON."""

import argparse
import asyncio
import logging
import sys

from recipe_importer.config import Settings
from recipe_importer.models import RecipeImportError
from recipe_importer.parser.pipeline import import_recipe

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="importer",
        description="Import a recipe from a cooking website and print it as JSON.",
    )
    parser.add_argument("url", help="recipe page URL")
    parser.add_argument(
        "--no-render",
        action="store_true",
        help="never fall back to a headless-browser render",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if not args.url.strip():
        parser.error("a recipe URL is required")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)-8s %(name)s — %(message)s",
        stream=sys.stderr,
    )

    allow_render = False if args.no_render else None
    try:
        settings = Settings.from_env()
        recipe = asyncio.run(
            import_recipe(args.url.strip(), allow_render=allow_render, settings=settings)
        )
    except RecipeImportError as e:
        print(f"Error importing: {e.message}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.debug("Unexpected failure importing %s", args.url, exc_info=True)
        print(f"Error importing: {e}", file=sys.stderr)
        return 1

    print(recipe.model_dump_json(by_alias=True, exclude_none=True, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
