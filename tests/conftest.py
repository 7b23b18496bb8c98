"""Pytest configuration and fixtures."""

import json
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from app.api.dependencies import get_recipe_generator
from app.main import app
from app.models.wizard import DietaryCategory, MealType, WizardAnswers
from app.services.recipe_generator import RecipeGenerator


class FakeGeminiService:
    """Stands in for GeminiService: returns canned text or raises."""

    def __init__(self, text: str = "", error: Optional[Exception] = None) -> None:
        self.text = text
        self.error = error
        self.calls: List[tuple] = []

    async def complete(self, system_instructions: str, user_instructions: str) -> str:
        self.calls.append((system_instructions, user_instructions))
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def recipe_payload() -> dict:
    """A complete, valid recipe document as the model would return it."""
    return {
        "name": "Lemon Chicken",
        "description": "Bright roast chicken with lemon.",
        "dietaryNotes": "Fleishig: no butter, use kosher-certified chicken.",
        "prepTime": "15 minutes",
        "cookTime": "50 minutes",
        "servings": "4",
        "difficulty": "Beginner-friendly",
        "ingredients": [
            {"amount": "1.5 kg", "item": "chicken thighs", "note": "kosher-certified"},
            {"amount": "2", "item": "lemons"},
        ],
        "steps": [
            {
                "number": 1,
                "title": "Heat the oven",
                "instruction": "Heat the oven to 220°C.",
                "tip": "Let it fully preheat.",
                "appliance": "Oven",
            },
            {
                "number": 2,
                "title": "Brown the chicken",
                "instruction": "Sear skin-side down until golden.",
                "appliance": "Stovetop",
            },
            {
                "number": 3,
                "title": "Rest",
                "instruction": "Rest for 5 minutes before serving.",
                "appliance": None,
            },
        ],
        "plating": "Slice and fan out on a warm plate.",
        "chefNote": "Swap lemon for orange in winter.",
    }


@pytest.fixture
def recipe_json(recipe_payload) -> str:
    return json.dumps(recipe_payload)


@pytest.fixture
def answers() -> WizardAnswers:
    return WizardAnswers(
        ingredients="chicken, lemon",
        mealType=MealType.DINNER,
        dietaryCategory=DietaryCategory.MEAT,
        servings=4,
    )


@pytest.fixture
def fake_gemini(recipe_json) -> FakeGeminiService:
    return FakeGeminiService(text=recipe_json)


@pytest.fixture
def client(fake_gemini):
    """Test client whose recipe generator talks to the fake Gemini service."""
    app.dependency_overrides[get_recipe_generator] = lambda: RecipeGenerator(gemini_service=fake_gemini)
    yield TestClient(app)
    app.dependency_overrides.clear()
