from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator
from pydantic.alias_generators import to_camel

PLACEHOLDER_INSTRUCTION = "See original recipe."


# Non-empty, trimmed text
Text = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class _RecipeModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


class StepSection(str, Enum):
    PREP = "Prep"
    COOK_MAIN = "Cook Main"
    COOK_SIDE = "Cook Side"
    MAKE_SAUCE = "Make Sauce"
    FINISH_AND_SERVE = "Finish & Serve"


class Ingredient(_RecipeModel):
    """One ingredient line. ``amount`` stays blank unless a source splits it out."""

    amount: str = ""
    name: Text
    note: str | None = None


class Step(_RecipeModel):
    section: StepSection | None = None
    short_title: str = ""
    instruction: Text


class Recipe(_RecipeModel):
    title: Text
    subtitle: str | None = None
    servings: int = Field(1, ge=1)
    prep_time_minutes: int = Field(0, ge=0)
    cook_time_minutes: int = Field(0, ge=0)
    ingredients: list[Ingredient] = Field(default_factory=list)
    equipment: list[Text] = Field(default_factory=list)
    steps: list[Step] = Field(default_factory=list, validate_default=True)
    tips: list[Text] = Field(default_factory=list)

    @field_validator("steps")
    @classmethod
    def ensure_step(cls, steps: list[Step]) -> list[Step]:
        """Guarantee at least one step so callers can always index ``steps[0]``."""
        if not steps:
            return [Step(instruction=PLACEHOLDER_INSTRUCTION)]
        return steps


class RecipeImportError(Exception):
    def __init__(self, error_type: str, message: str):
        self.error_type = error_type
        self.message = message
        super().__init__(message)


class FetchError(RecipeImportError):
    """The page could not be retrieved and no rendered copy was available."""


class RenderError(RecipeImportError):
    """The headless browser failed to produce the page."""


class MissingInputError(RecipeImportError):
    pass


class ConfigurationError(RecipeImportError):
    pass
