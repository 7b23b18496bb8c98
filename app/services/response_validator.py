"""Turn raw model text into a validated Recipe."""

from __future__ import annotations

import json
import logging
import re
from typing import List, Sequence

from pydantic import ValidationError

from app.models.recipe import Recipe
from app.utils.exceptions import MalformedResponse

logger = logging.getLogger(__name__)

_LEADING_FENCE = re.compile(r"^```[\w-]*[ \t]*\n?")
_TRAILING_FENCE = re.compile(r"\n?[ \t]*```$")


def strip_code_fence(text: str) -> str:
    """Remove a leading ``` (optionally language-tagged) fence and its closing fence."""
    t = (text or "").strip()
    if not t.startswith("```"):
        return t
    t = _LEADING_FENCE.sub("", t, count=1)
    t = _TRAILING_FENCE.sub("", t, count=1)
    return t.strip()


def _describe(e: ValidationError) -> str:
    parts = []
    for err in e.errors():
        location = ".".join(str(p) for p in err.get("loc", ())) or "recipe"
        parts.append(f"{location}: {err.get('msg')}")
    return "; ".join(parts)


def validate_response(raw_text: str) -> Recipe:
    """
    Parse and validate model output.

    Args:
        raw_text: Text returned by the model, possibly wrapped in a code fence

    Returns:
        Validated Recipe

    Raises:
        MalformedResponse: If the text is not JSON or does not match the Recipe shape
    """
    json_text = strip_code_fence(raw_text)
    if not json_text:
        raise MalformedResponse("Model returned an empty response")

    try:
        data = json.loads(json_text)
    except (ValueError, RecursionError) as e:
        # RecursionError comes from input nested deeper than the decoder allows.
        logger.warning("Model output is not valid JSON: %s", e)
        raise MalformedResponse(f"Failed to parse recipe JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedResponse(f"Expected a JSON object, got {type(data).__name__}")

    try:
        return Recipe.model_validate(data)
    except ValidationError as e:
        logger.warning("Model output does not match the recipe schema: %s", _describe(e))
        raise MalformedResponse(f"Recipe is missing or has invalid fields: {_describe(e)}") from e


def find_unlisted_appliances(recipe: Recipe, owned_appliances: Sequence[str]) -> List[str]:
    """Appliances the steps mention that are not in the owned list (case-insensitive)."""
    owned = {name.strip().lower() for name in owned_appliances}
    return [name for name in recipe.appliances_used() if name.strip().lower() not in owned]
