"""Recipe Pydantic models."""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Ingredient(BaseModel):
    """Single ingredient line, already scaled to the requested servings."""

    amount: str = Field(..., description="Quantity with unit (e.g., '2 tbsp')")
    item: str = Field(..., description="Ingredient name")
    note: Optional[str] = Field(None, description="Optional shopping or kosher note")


class Step(BaseModel):
    """Single numbered cooking step."""

    number: int = Field(..., ge=1, description="1-based step number")
    title: str = Field(..., description="Short step title")
    instruction: str = Field(..., description="Beginner-friendly instruction")
    tip: Optional[str] = Field(None, description="Beginner tip or common mistake to avoid")
    appliance: Optional[str] = Field(None, description="Appliance used in this step, or null")

    @field_validator("appliance")
    @classmethod
    def blank_appliance_is_none(cls, value: Optional[str]) -> Optional[str]:
        # Models sometimes send "" or the string "null" instead of a JSON null.
        if value is None or not value.strip() or value.strip().lower() == "null":
            return None
        return value.strip()


class Recipe(BaseModel):
    """Recipe returned by the generation endpoint."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Lemon-Thyme Roast Chicken",
                "description": "A golden roast chicken brightened with lemon and thyme.",
                "dietaryNotes": "Fleishig. Use kosher-certified poultry and no butter.",
                "prepTime": "20 minutes",
                "cookTime": "1 hour 15 minutes",
                "servings": "4",
                "difficulty": "Beginner-friendly",
                "ingredients": [
                    {"amount": "1 whole (about 1.8 kg)", "item": "kosher chicken", "note": None},
                    {"amount": "2", "item": "lemons", "note": "zested and halved"},
                ],
                "steps": [
                    {
                        "number": 1,
                        "title": "Heat the oven",
                        "instruction": "Heat the oven to 220°C (425°F).",
                        "tip": "A hot oven gives crisp skin.",
                        "appliance": "Oven",
                    }
                ],
                "plating": "Carve on a board and spoon the pan juices over.",
                "chefNote": "Stuff the cavity with whatever herbs you love.",
            }
        }
    )

    name: str = Field(..., description="Recipe name")
    description: str = Field(..., description="Short description of the dish")
    dietaryNotes: str = Field(..., description="Kosher considerations for this recipe")
    prepTime: str = Field(..., description="Preparation time (e.g., '20 minutes')")
    cookTime: str = Field(..., description="Cooking time (e.g., '35 minutes')")
    servings: str = Field(..., description="Number of servings")
    difficulty: str = Field(..., description="Difficulty label")
    ingredients: List[Ingredient] = Field(..., min_length=1, description="Ingredients in order of use")
    steps: List[Step] = Field(..., min_length=1, description="Numbered steps, starting at 1")
    plating: str = Field(..., description="Plating instructions")
    chefNote: str = Field(..., description="Chef's note about the dish")

    @field_validator("servings", mode="before")
    @classmethod
    def servings_as_string(cls, value):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @model_validator(mode="after")
    def steps_are_sequential(self) -> "Recipe":
        numbers = [step.number for step in self.steps]
        expected = list(range(1, len(self.steps) + 1))
        if numbers != expected:
            raise ValueError(f"steps must be numbered {expected}, got {numbers}")
        return self

    def appliances_used(self) -> List[str]:
        """Non-null appliances referenced by the steps, in first-use order."""
        seen: List[str] = []
        for step in self.steps:
            if step.appliance and step.appliance not in seen:
                seen.append(step.appliance)
        return seen


class GenerateRecipeResponse(BaseModel):
    """Successful generation result."""

    recipe: Recipe
    unlistedAppliances: List[str] = Field(
        default_factory=list,
        description="Appliances named in the steps that are not in the request's list",
    )
