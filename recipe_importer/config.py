"""Environment-driven settings for the importer.

Settings are read from ``RECIPE_IMPORTER_*`` variables each time they are
requested, so nothing here is cached at module level.
"""

import os
from collections.abc import Mapping
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from recipe_importer.models import ConfigurationError

USER_AGENT = "recipe-importer/1.0 (+https://github.com)"

ENV_PREFIX = "RECIPE_IMPORTER_"


class SparsePolicy(str, Enum):
    """When a plain-fetch result counts as too thin to keep without rendering."""

    # At most one ingredient or at most one step
    FEW_ITEMS = "few-items"
    # No ingredients and only the placeholder step
    PLACEHOLDER_ONLY = "placeholder-only"


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    allow_render: bool = True
    sparse_policy: SparsePolicy = SparsePolicy.FEW_ITEMS
    fetch_timeout: float = Field(10.0, gt=0)
    render_timeout: float = Field(30.0, gt=0)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        environ = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            raw = environ.get(ENV_PREFIX + name.upper())
            if raw is not None and raw.strip():
                values[name] = raw.strip().lower()
        try:
            return cls.model_validate(values)
        except ValidationError as e:
            fields = ", ".join(
                ENV_PREFIX + str(err["loc"][0]).upper() for err in e.errors()
            )
            raise ConfigurationError("config", f"Invalid configuration: {fields}")
