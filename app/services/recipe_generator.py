"""Compile -> call Gemini once -> validate."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from app.models.recipe import Recipe
from app.services.gemini_service import GeminiService
from app.services.prompt_compiler import compile_prompt
from app.services.response_validator import find_unlisted_appliances, validate_response
from app.services.wizard import WizardSubmission

logger = logging.getLogger(__name__)


@dataclass
class GeneratedRecipe:
    recipe: Recipe
    unlisted_appliances: List[str] = field(default_factory=list)


class RecipeGenerator:
    """Single-attempt recipe generation for one wizard submission."""

    def __init__(self, gemini_service: Optional[GeminiService] = None):
        self.gemini_service = gemini_service or GeminiService()

    async def generate(self, submission: WizardSubmission) -> GeneratedRecipe:
        """
        Raises:
            NoAppliancesConfigured: If the submission carries no owned appliance
            UpstreamUnavailable: If the Gemini call fails or times out
            MalformedResponse: If the output is not a valid recipe
        """
        answers = submission.answers
        prompt = compile_prompt(answers, submission.owned_appliances)

        logger.info(
            "Generating recipe",
            extra={
                "meal_type": answers.mealType.value,
                "dietary_category": answers.dietaryCategory.value,
                "servings": answers.servings,
                "appliance_count": len(submission.owned_appliances),
            },
        )

        text = await self.gemini_service.complete(prompt.instructions, prompt.task)
        recipe = validate_response(text)

        unlisted = find_unlisted_appliances(recipe, submission.owned_appliances)
        if unlisted:
            logger.warning("Recipe references appliances the user does not own: %s", unlisted)

        return GeneratedRecipe(recipe=recipe, unlisted_appliances=unlisted)
