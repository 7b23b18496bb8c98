"""Wizard answer and prompt models."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

DEFAULT_CUISINE_STYLE = "French / Modern European"

CUISINE_STYLES = [
    "French / Modern European",
    "Mediterranean",
    "Middle Eastern",
    "Italian",
    "Japanese / Asian Fusion",
    "American",
    "Israeli",
    "Moroccan / North African",
    "Surprise me!",
]

MIN_SERVINGS = 1
MAX_SERVINGS = 50  # form bound only; the request model just needs a positive count


class MealType(str, Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    APPETIZER = "appetizer"
    DESSERT = "dessert"
    SNACK = "snack"


class DietaryCategory(str, Enum):
    """Kosher classification; exactly one applies to a dish."""

    MEAT = "meat"
    DAIRY = "dairy"
    PAREVE = "pareve"


class WizardAnswers(BaseModel):
    """Finalized wizard answers handed to the prompt compiler."""

    ingredients: str = Field(..., description="Ingredients the user wants to cook with")
    mealType: MealType
    dietaryCategory: DietaryCategory
    servings: int = Field(..., gt=0)
    cuisineStyle: str = Field(DEFAULT_CUISINE_STYLE, description="Cuisine direction")
    specialRequests: str = Field("", description="Free-text extras (dislikes, occasion, ...)")

    @field_validator("ingredients")
    @classmethod
    def ingredients_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("ingredients must not be empty")
        return value

    @field_validator("cuisineStyle", "specialRequests")
    @classmethod
    def strip_text(cls, value: str) -> str:
        return value.strip()


class GenerateRecipeRequest(BaseModel):
    """Body of POST /recipes/generate.

    Answer fields are kept loose here so that the wizard, not request parsing,
    decides which one is missing or invalid.
    """

    ingredients: Optional[str] = None
    mealType: Optional[str] = None
    dietaryCategory: Optional[str] = None
    servings: Optional[int] = None
    cuisineStyle: Optional[str] = None
    specialRequests: Optional[str] = None
    appliances: List[str] = Field(default_factory=list, description="Names of owned appliances")


class CompiledPrompt(BaseModel):
    """System/user text pair sent to the model."""

    instructions: str
    task: str
