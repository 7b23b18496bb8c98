"""
Prompt compiler: wizard answers + owned appliances -> system/user prompt pair.

Output depends only on the arguments, so the same answers always produce the
same two strings.
"""

from typing import Dict, Sequence

from app.models.wizard import CompiledPrompt, DietaryCategory, WizardAnswers
from app.utils.exceptions import NoAppliancesConfigured

DIETARY_RULES: Dict[DietaryCategory, str] = {
    DietaryCategory.MEAT: (
        "FLEISHIG (meat): Use only kosher-certified meat or poultry. No dairy of any kind — "
        "no butter, milk, cream, or cheese. No pork or shellfish ever."
    ),
    DietaryCategory.DAIRY: (
        "MILCHIG (dairy): May include dairy. No meat or poultry. No pork or shellfish ever."
    ),
    DietaryCategory.PAREVE: (
        "PAREVE (neutral): No meat, poultry, or dairy whatsoever. Fish (with fins and scales only) "
        "is permitted. This dish can be eaten with either a meat or dairy meal."
    ),
}

_missing_rules = set(DietaryCategory) - set(DIETARY_RULES)
if _missing_rules:
    raise RuntimeError(f"No dietary rule text for: {sorted(c.value for c in _missing_rules)}")

DIETARY_LABELS: Dict[DietaryCategory, str] = {
    DietaryCategory.MEAT: "Fleishig (Meat)",
    DietaryCategory.DAIRY: "Milchig (Dairy)",
    DietaryCategory.PAREVE: "Pareve (Neutral)",
}

DIETARY_DESCRIPTIONS: Dict[DietaryCategory, str] = {
    DietaryCategory.MEAT: "Contains kosher meat or poultry",
    DietaryCategory.DAIRY: "Contains dairy (no meat)",
    DietaryCategory.PAREVE: "No meat or dairy, can be eaten with either",
}

PERSONA = """You are a world-class Michelin-star chef who also deeply understands Jewish kosher dietary laws.
Your mission is to create elegant, impressive recipes that are:
1. Strictly Kosher — you never make mistakes on this
2. Achievable by a complete beginner home cook
3. Written with crystal-clear instructions that assume zero culinary knowledge

When you write steps, explain WHY each step matters (e.g. "We sear the meat first to lock in flavor and create a beautiful brown crust — this process is called the Maillard reaction").
Define any culinary terms immediately after using them.
Warn about common beginner mistakes before they happen.
Give visual/sensory cues so the cook knows when something is done (e.g. "The onions are ready when they are completely soft and translucent with golden edges")."""

OUTPUT_SCHEMA = """{{
  "name": "Recipe name",
  "description": "2-3 sentence description of the dish and why it is special",
  "dietaryNotes": "Specific kosher considerations for this recipe (certifications to look for, substitutions, etc.)",
  "prepTime": "e.g. 20 minutes",
  "cookTime": "e.g. 35 minutes",
  "servings": "{servings}",
  "difficulty": "Beginner-friendly",
  "ingredients": [
    {{ "amount": "2 tbsp", "item": "extra-virgin olive oil", "note": "look for the kosher certification symbol" }}
  ],
  "steps": [
    {{
      "number": 1,
      "title": "Short step title",
      "instruction": "Detailed, beginner-friendly instruction. Explain what to do, how to do it, and what it should look, smell, or feel like when done correctly.",
      "tip": "A beginner tip — a common mistake to avoid or a helpful trick",
      "appliance": "Name of appliance used in this step (exactly as listed), or null if none"
    }}
  ],
  "plating": "Simple but elegant plating instructions a beginner can follow",
  "chefNote": "An inspiring chef's note about the dish, its origins, or how to make it your own"
}}"""


def build_instructions(category: DietaryCategory, owned_appliances: Sequence[str]) -> str:
    appliance_list = ", ".join(owned_appliances)
    return (
        f"{PERSONA}\n\n"
        f"KOSHER LAW TO FOLLOW: {DIETARY_RULES[category]}\n\n"
        f"Available kitchen appliances: {appliance_list}\n"
        "You MUST only use these appliances in your recipe. "
        "If an appliance is not on this list, do not use it."
    )


def build_task(answers: WizardAnswers, owned_appliances: Sequence[str]) -> str:
    servings = answers.servings
    plural = "" if servings == 1 else "s"

    lines = [
        f"Create a {answers.cuisineStyle} {answers.mealType.value} recipe for {servings} serving{plural}.",
        f"Kosher category: {answers.dietaryCategory.value}",
        f"Build the recipe around these ingredients: {answers.ingredients}",
    ]
    if answers.specialRequests:
        lines.append(f"Special requests: {answers.specialRequests}")
    lines.append(
        f"Scale every ingredient quantity for exactly {servings} serving{plural}."
    )
    lines.append(f"Available appliances: {', '.join(owned_appliances)}")
    lines.append(
        "Only mention appliances from the available list; in each step set \"appliance\" "
        "to one of those names or null."
    )
    lines.append("")
    lines.append(
        "Respond with ONLY a valid JSON object. No markdown, no code fences, "
        "no explanation outside the JSON. Use this exact structure:"
    )
    lines.append("")
    lines.append(OUTPUT_SCHEMA.format(servings=servings))
    return "\n".join(lines)


def compile_prompt(answers: WizardAnswers, owned_appliances: Sequence[str]) -> CompiledPrompt:
    """
    Render the system and user prompt for one recipe request.

    Args:
        answers: Finalized wizard answers
        owned_appliances: Names of the appliances the cook owns

    Returns:
        CompiledPrompt with `instructions` (system) and `task` (user)

    Raises:
        NoAppliancesConfigured: If no appliance is owned
    """
    appliances = [name for name in owned_appliances if name and name.strip()]
    if not appliances:
        raise NoAppliancesConfigured()

    return CompiledPrompt(
        instructions=build_instructions(answers.dietaryCategory, appliances),
        task=build_task(answers, appliances),
    )
