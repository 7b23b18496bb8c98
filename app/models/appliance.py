"""Kitchen appliance models."""

from typing import List, Optional
from pydantic import BaseModel, Field

CUSTOM_ID_PREFIX = "custom-"


class Appliance(BaseModel):
    """One appliance the user may or may not own."""

    id: str = Field(..., description="Stable identifier (slug for defaults, 'custom-…' for user entries)")
    name: str = Field(..., description="Display label, also the name sent to the model")
    category: str = Field(..., description="Open-ended grouping tag (e.g., 'Prep Tools')")
    owned: bool = Field(False, description="Whether the user has this appliance")

    @property
    def is_custom(self) -> bool:
        """True for appliances added by the user (the only ones the UI lets you remove)."""
        return self.id.startswith(CUSTOM_ID_PREFIX)


class ApplianceMergeRequest(BaseModel):
    """Raw collection as stored in the browser, possibly missing or corrupt."""

    stored: Optional[str] = Field(None, description="Persisted JSON string, or null when nothing is stored")


class ApplianceCollection(BaseModel):
    """Appliance collection plus the owned-name projection used for prompts."""

    appliances: List[Appliance]
    categories: List[str]
    ownedAppliances: List[str]
