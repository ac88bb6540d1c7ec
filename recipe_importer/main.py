"""FastAPI application exposing the recipe importer."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.middleware.base import BaseHTTPMiddleware

from recipe_importer.config import Settings
from recipe_importer.models import MissingInputError, Recipe, RecipeImportError
from recipe_importer.parser.pipeline import import_recipe

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
app = FastAPI(title="Recipe Importer")
app.state.limiter = limiter


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        {"error": "You're sending too many requests. Please wait a moment and try again."},
        status_code=429,
    )


@app.exception_handler(MissingInputError)
async def missing_input_handler(request: Request, exc: MissingInputError):
    return JSONResponse({"error": exc.message}, status_code=400)


@app.exception_handler(RecipeImportError)
async def import_error_handler(request: Request, exc: RecipeImportError):
    logger.warning(
        "%s [%s] for %s: %s",
        type(exc).__name__,
        exc.error_type,
        request.query_params.get("url"),
        exc.message,
    )
    return JSONResponse({"error": exc.message}, status_code=500)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


app.add_middleware(SecurityHeadersMiddleware)


@app.get("/api/import", response_model=Recipe, response_model_exclude_none=True)
@limiter.limit("30/minute")
async def import_endpoint(request: Request, url: str = ""):
    if not url.strip():
        raise MissingInputError("input", "Missing url param")
    settings = Settings.from_env()
    result = await import_recipe(url.strip(), settings=settings)
    logger.info("Served recipe %r from %s", result.title, url)
    return result
