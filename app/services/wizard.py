"""
Recipe wizard: a linear sequence of question steps ending in a confirm step.

Each question step has a completion predicate. `advance()` only moves forward
when the current step's answer is valid, `jump_to()` only reaches steps that
were already unlocked, and `submit()` only works from the confirm step with
every answer valid. No I/O happens here; the caller runs the generation and
calls `finish()` when it is done.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Callable, Dict, List, Optional

from pydantic import ValidationError

from app.models.wizard import (
    DEFAULT_CUISINE_STYLE,
    DietaryCategory,
    MealType,
    WizardAnswers,
)
from app.utils.exceptions import InvalidInput

logger = logging.getLogger(__name__)


class WizardStep(IntEnum):
    INGREDIENTS = 0
    MEAL_TYPE = 1
    DIETARY_CATEGORY = 2
    SERVINGS = 3
    CONFIRM = 4


# Answer field owned by each question step.
STEP_FIELDS: Dict[WizardStep, str] = {
    WizardStep.INGREDIENTS: "ingredients",
    WizardStep.MEAL_TYPE: "mealType",
    WizardStep.DIETARY_CATEGORY: "dietaryCategory",
    WizardStep.SERVINGS: "servings",
}


def _valid_ingredients(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _valid_enum(enum_cls) -> Callable[[Any], bool]:
    def check(value: Any) -> bool:
        try:
            enum_cls(value)
        except ValueError:
            return False
        return True

    return check


def _valid_servings(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


STEP_PREDICATES: Dict[WizardStep, Callable[[Any], bool]] = {
    WizardStep.INGREDIENTS: _valid_ingredients,
    WizardStep.MEAL_TYPE: _valid_enum(MealType),
    WizardStep.DIETARY_CATEGORY: _valid_enum(DietaryCategory),
    WizardStep.SERVINGS: _valid_servings,
}


@dataclass
class WizardDraft:
    """Answers as typed so far; any field may still be missing or invalid."""

    ingredients: Optional[str] = None
    mealType: Optional[str] = None
    dietaryCategory: Optional[str] = None
    servings: Optional[int] = None
    cuisineStyle: str = DEFAULT_CUISINE_STYLE
    specialRequests: str = ""


@dataclass(frozen=True)
class WizardSubmission:
    """What the wizard hands to the prompt compiler."""

    answers: WizardAnswers
    owned_appliances: List[str] = field(default_factory=list)


class RecipeWizard:
    """State machine over `WizardStep`.

    `owned_appliances` is a callable so the projection is read at submit
    time, not when the wizard is created.
    """

    FIRST_STEP = WizardStep.INGREDIENTS
    LAST_STEP = WizardStep.CONFIRM

    def __init__(
        self,
        owned_appliances: Callable[[], List[str]] = list,
        single_page: bool = False,
    ) -> None:
        self._owned_appliances = owned_appliances
        self.single_page = single_page
        self.busy = False
        self.reset()

    @classmethod
    def single_page_form(cls, owned_appliances: Callable[[], List[str]] = list) -> "RecipeWizard":
        """Every step unlocked at once; the form posts straight to confirm."""
        return cls(owned_appliances=owned_appliances, single_page=True)

    def reset(self) -> None:
        self.draft = WizardDraft()
        self.current = self.FIRST_STEP
        self.highest_reached = self.LAST_STEP if self.single_page else self.FIRST_STEP

    # ------------------------------------------------------------------
    # Answers
    # ------------------------------------------------------------------

    def answer(self, step: WizardStep, value: Any) -> None:
        """Record the answer for a question step (validity is checked on advance)."""
        if step not in STEP_FIELDS:
            raise ValueError(f"{step.name} does not take an answer")
        setattr(self.draft, STEP_FIELDS[step], value)

    def set_extras(self, cuisine_style: Optional[str] = None, special_requests: Optional[str] = None) -> None:
        if cuisine_style is not None:
            self.draft.cuisineStyle = cuisine_style.strip() or DEFAULT_CUISINE_STYLE
        if special_requests is not None:
            self.draft.specialRequests = special_requests

    def is_complete(self, step: WizardStep) -> bool:
        """Completion predicate; the confirm step is complete when every question is."""
        if step == WizardStep.CONFIRM:
            return not self.missing_steps()
        value = getattr(self.draft, STEP_FIELDS[step])
        return STEP_PREDICATES[step](value)

    def missing_steps(self) -> List[WizardStep]:
        return [step for step in STEP_FIELDS if not self.is_complete(step)]

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def advance(self) -> bool:
        if self.current == self.LAST_STEP or not self.is_complete(self.current):
            return False
        self.current = WizardStep(self.current + 1)
        self.highest_reached = max(self.highest_reached, self.current)
        return True

    def back(self) -> bool:
        if self.current == self.FIRST_STEP:
            return False
        self.current = WizardStep(self.current - 1)
        return True

    def jump_to(self, step: WizardStep) -> bool:
        try:
            target = WizardStep(step)
        except ValueError:
            return False
        if target > self.highest_reached:
            return False
        self.current = target
        return True

    @property
    def progress(self) -> float:
        """Fraction of the wizard completed, for a progress bar."""
        return self.current / float(self.LAST_STEP)

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def finalize(self) -> WizardAnswers:
        """Build the validated answers or raise InvalidInput naming the first bad field."""
        missing = self.missing_steps()
        if missing:
            field_name = STEP_FIELDS[missing[0]]
            raise InvalidInput(f"'{field_name}' is missing or invalid", field=field_name)
        try:
            return WizardAnswers(
                ingredients=self.draft.ingredients,
                mealType=self.draft.mealType,
                dietaryCategory=self.draft.dietaryCategory,
                servings=self.draft.servings,
                cuisineStyle=self.draft.cuisineStyle,
                specialRequests=self.draft.specialRequests or "",
            )
        except ValidationError as e:
            raise InvalidInput(f"Invalid wizard answers: {e}") from e

    def submit(self) -> Optional[WizardSubmission]:
        """Emit the finalized request, or None when submission is not allowed.

        Allowed only on the confirm step, with all answers valid and no
        generation already in flight. A successful submit marks the wizard
        busy until `finish()`.
        """
        if self.busy:
            logger.info("Wizard submit ignored: a generation is already in flight")
            return None
        if self.current != WizardStep.CONFIRM or self.missing_steps():
            return None

        submission = WizardSubmission(
            answers=self.finalize(),
            owned_appliances=list(self._owned_appliances()),
        )
        self.busy = True
        return submission

    def finish(self) -> None:
        """Clear the in-flight flag once the generation succeeded or failed."""
        self.busy = False
