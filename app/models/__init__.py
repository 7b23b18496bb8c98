"""Pydantic models."""

from app.models.appliance import (
    Appliance,
    ApplianceCollection,
    ApplianceMergeRequest,
)
from app.models.recipe import (
    GenerateRecipeResponse,
    Ingredient,
    Recipe,
    Step,
)
from app.models.wizard import (
    CompiledPrompt,
    DietaryCategory,
    GenerateRecipeRequest,
    MealType,
    WizardAnswers,
)

__all__ = [
    "Appliance",
    "ApplianceCollection",
    "ApplianceMergeRequest",
    "CompiledPrompt",
    "DietaryCategory",
    "GenerateRecipeRequest",
    "GenerateRecipeResponse",
    "Ingredient",
    "MealType",
    "Recipe",
    "Step",
    "WizardAnswers",
]
