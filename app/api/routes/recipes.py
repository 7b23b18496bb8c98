"""Recipe generation endpoints."""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from app.api.dependencies import get_recipe_generator
from app.middleware.rate_limit import rate_limit_dependency
from app.models.recipe import GenerateRecipeResponse
from app.models.wizard import (
    CUISINE_STYLES,
    DEFAULT_CUISINE_STYLE,
    MAX_SERVINGS,
    MIN_SERVINGS,
    DietaryCategory,
    GenerateRecipeRequest,
    MealType,
)
from app.services.prompt_compiler import DIETARY_DESCRIPTIONS, DIETARY_LABELS
from app.services.recipe_generator import RecipeGenerator
from app.services.wizard import RecipeWizard, WizardStep
from app.utils.exceptions import InvalidInput

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/recipes", tags=["recipes"])


def build_wizard(body: GenerateRecipeRequest) -> RecipeWizard:
    """Fill a single-page wizard from a request body and move it to confirm."""
    owned = [name.strip() for name in body.appliances if name and name.strip()]
    wizard = RecipeWizard.single_page_form(owned_appliances=lambda: owned)
    wizard.answer(WizardStep.INGREDIENTS, body.ingredients)
    wizard.answer(WizardStep.MEAL_TYPE, body.mealType)
    wizard.answer(WizardStep.DIETARY_CATEGORY, body.dietaryCategory)
    wizard.answer(WizardStep.SERVINGS, body.servings)
    wizard.set_extras(cuisine_style=body.cuisineStyle, special_requests=body.specialRequests)
    wizard.jump_to(WizardStep.CONFIRM)
    return wizard


@router.post("/generate", response_model=GenerateRecipeResponse)
async def generate_recipe(
    request: Request,
    body: GenerateRecipeRequest,
    _: None = Depends(rate_limit_dependency),
    recipe_generator: RecipeGenerator = Depends(get_recipe_generator),
) -> GenerateRecipeResponse:
    """
    Generate a kosher recipe from wizard answers.

    - **ingredients**: What the cook wants to use
    - **mealType**: breakfast, lunch, dinner, appetizer, dessert or snack
    - **dietaryCategory**: meat, dairy or pareve
    - **servings**: Positive number of servings
    - **appliances**: Names of the appliances the cook owns (at least one)
    """
    logger.info(
        "Route /recipes/generate called",
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "route": "/recipes/generate",
            "params": {
                "mealType": body.mealType,
                "dietaryCategory": body.dietaryCategory,
                "servings": body.servings,
                "appliance_count": len(body.appliances),
            },
        },
    )

    wizard = build_wizard(body)
    submission = wizard.submit()
    if submission is None:
        # Raises InvalidInput naming the first missing or invalid answer.
        wizard.finalize()
        raise InvalidInput("Recipe request could not be submitted")

    try:
        result = await recipe_generator.generate(submission)
    finally:
        wizard.finish()

    return GenerateRecipeResponse(recipe=result.recipe, unlistedAppliances=result.unlisted_appliances)


@router.get("/options")
async def recipe_options() -> Dict[str, Any]:
    """Choices and bounds for building the recipe form."""
    return {
        "mealTypes": [m.value for m in MealType],
        "dietaryCategories": [
            {
                "value": c.value,
                "label": DIETARY_LABELS[c],
                "description": DIETARY_DESCRIPTIONS[c],
            }
            for c in DietaryCategory
        ],
        "cuisineStyles": CUISINE_STYLES,
        "defaultCuisineStyle": DEFAULT_CUISINE_STYLE,
        "servings": {"min": MIN_SERVINGS, "max": MAX_SERVINGS},
        "steps": [step.name.lower() for step in WizardStep],
    }
