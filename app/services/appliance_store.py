"""
Owned-appliance collection with merge-on-load.

The persisted collection lives under a single key. Loading never fails: a
missing or corrupt value yields the default seed set, and defaults added in
later releases are appended to an existing collection by id without touching
the user's own edits.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import Iterable, List, Optional

from pydantic import TypeAdapter, ValidationError

from app.models.appliance import CUSTOM_ID_PREFIX, Appliance
from app.services.storage import KeyValueStore

logger = logging.getLogger(__name__)

STORAGE_KEY = "kosher_recipe_appliances"
DEFAULT_CATEGORY = "Other"

_COLLECTION = TypeAdapter(List[Appliance])


def _seed(appliance_id: str, name: str, category: str, owned: bool = False) -> Appliance:
    return Appliance(id=appliance_id, name=name, category=category, owned=owned)


DEFAULT_APPLIANCES: List[Appliance] = [
    # Cooking surfaces
    _seed("stovetop", "Stovetop / Gas or Electric Range", "Cooking Surfaces", owned=True),
    _seed("oven", "Oven", "Cooking Surfaces", owned=True),
    _seed("toaster-oven", "Toaster Oven", "Cooking Surfaces"),
    _seed("induction-cooktop", "Induction Cooktop", "Cooking Surfaces"),
    # Small appliances
    _seed("microwave", "Microwave", "Small Appliances", owned=True),
    _seed("air-fryer", "Air Fryer", "Small Appliances"),
    _seed("instant-pot", "Instant Pot / Pressure Cooker", "Small Appliances"),
    _seed("slow-cooker", "Slow Cooker (Crock Pot)", "Small Appliances"),
    _seed("rice-cooker", "Rice Cooker", "Small Appliances"),
    _seed("electric-kettle", "Electric Kettle", "Small Appliances"),
    # Prep tools
    _seed("blender", "Blender", "Prep Tools"),
    _seed("immersion-blender", "Immersion / Hand Blender", "Prep Tools"),
    _seed("food-processor", "Food Processor", "Prep Tools"),
    _seed("stand-mixer", "Stand Mixer", "Prep Tools"),
    _seed("hand-mixer", "Hand Mixer", "Prep Tools"),
    # Specialty
    _seed("sous-vide", "Sous Vide Circulator", "Specialty"),
    _seed("cast-iron", "Cast Iron Skillet", "Specialty"),
    _seed("dutch-oven", "Dutch Oven", "Specialty"),
    _seed("wok", "Wok", "Specialty"),
    _seed("grill", "Outdoor Grill / BBQ", "Specialty"),
    _seed("panini-press", "Panini Press / Sandwich Maker", "Specialty"),
    _seed("waffle-iron", "Waffle Iron", "Specialty"),
]


def default_appliances() -> List[Appliance]:
    """Fresh copies of the seed set (callers may mutate them)."""
    return [a.model_copy() for a in DEFAULT_APPLIANCES]


def owned_names(appliances: Iterable[Appliance]) -> List[str]:
    """Names of owned appliances, in collection order."""
    return [a.name for a in appliances if a.owned]


def categories(appliances: Iterable[Appliance]) -> List[str]:
    """Distinct categories in first-seen order (the UI groups by these)."""
    seen: List[str] = []
    for a in appliances:
        if a.category not in seen:
            seen.append(a.category)
    return seen


def merge_defaults(stored: List[Appliance], defaults: Optional[List[Appliance]] = None) -> List[Appliance]:
    """Append every default whose id is missing from `stored`; stored records win."""
    defaults = default_appliances() if defaults is None else defaults
    stored_ids = {a.id for a in stored}
    merged = list(stored)
    for default in defaults:
        if default.id not in stored_ids:
            merged.append(default.model_copy())
            stored_ids.add(default.id)
    return merged


class ApplianceStore:
    """Working copy of the appliance collection on top of a key-value store.

    Mutations (`toggle`, `add`, `remove`) only change the working copy;
    nothing reaches the backing store until `save()`.
    """

    def __init__(
        self,
        backend: Optional[KeyValueStore] = None,
        defaults: Optional[List[Appliance]] = None,
        key: str = STORAGE_KEY,
    ) -> None:
        self.backend = backend
        self.key = key
        self._defaults = defaults
        self.appliances: List[Appliance] = []

    def _default_set(self) -> List[Appliance]:
        if self._defaults is None:
            return default_appliances()
        return [a.model_copy() for a in self._defaults]

    def load(self) -> List[Appliance]:
        """Load the persisted collection merged with defaults; never raises."""
        self.appliances = self._read()
        return self.appliances

    def _read(self) -> List[Appliance]:
        if self.backend is None:
            return self._default_set()

        try:
            raw = self.backend.get(self.key)
        except Exception as e:
            logger.warning("Appliance store read failed, using defaults: %s", e)
            return self._default_set()

        if not raw:
            return self._default_set()

        try:
            stored = _COLLECTION.validate_python(json.loads(raw))
        except (ValueError, RecursionError, ValidationError, TypeError) as e:
            logger.warning("Stored appliances unreadable, using defaults: %s", e)
            return self._default_set()

        # Keep the first record for any id that appears twice.
        unique: List[Appliance] = []
        seen_ids = set()
        for appliance in stored:
            if appliance.id not in seen_ids:
                unique.append(appliance)
                seen_ids.add(appliance.id)

        return merge_defaults(unique, self._default_set())

    def save(self, appliances: Optional[List[Appliance]] = None) -> None:
        """Overwrite the persisted collection in one write (no-op without a backend)."""
        if appliances is not None:
            self.appliances = list(appliances)
        if self.backend is None:
            return
        payload = _COLLECTION.dump_json(self.appliances).decode("utf-8")
        self.backend.set(self.key, payload)
        logger.info("Saved %d appliances (%d owned)", len(self.appliances), len(self.owned_names()))

    def toggle(self, appliance_id: str) -> None:
        for index, appliance in enumerate(self.appliances):
            if appliance.id == appliance_id:
                self.appliances[index] = appliance.model_copy(update={"owned": not appliance.owned})
                return

    def add(self, name: str, category: str = DEFAULT_CATEGORY) -> Optional[Appliance]:
        """Add an owned custom appliance; blank names are ignored."""
        name = (name or "").strip()
        if not name:
            return None

        existing = {a.id for a in self.appliances}
        appliance_id = f"{CUSTOM_ID_PREFIX}{uuid.uuid4().hex}"
        while appliance_id in existing:
            appliance_id = f"{CUSTOM_ID_PREFIX}{uuid.uuid4().hex}"

        appliance = Appliance(
            id=appliance_id,
            name=name,
            category=(category or "").strip() or DEFAULT_CATEGORY,
            owned=True,
        )
        self.appliances.append(appliance)
        return appliance

    def remove(self, appliance_id: str) -> None:
        self.appliances = [a for a in self.appliances if a.id != appliance_id]

    def owned_names(self) -> List[str]:
        return owned_names(self.appliances)
