"""Appliance endpoints.

The collection itself is stored by the client; these endpoints only hand out
the default seed set and apply the merge-on-load upgrade to what the client
has stored.
"""

import logging

from fastapi import APIRouter, Request

from app.models.appliance import ApplianceCollection, ApplianceMergeRequest
from app.services.appliance_store import (
    STORAGE_KEY,
    ApplianceStore,
    categories,
    default_appliances,
    owned_names,
)
from app.services.storage import InMemoryStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/appliances", tags=["appliances"])


@router.get("/defaults", response_model=ApplianceCollection)
async def get_default_appliances() -> ApplianceCollection:
    """Default appliance seed set, grouped categories and owned names."""
    appliances = default_appliances()
    return ApplianceCollection(
        appliances=appliances,
        categories=categories(appliances),
        ownedAppliances=owned_names(appliances),
    )


@router.post("/merge", response_model=ApplianceCollection)
async def merge_appliances(request: Request, body: ApplianceMergeRequest) -> ApplianceCollection:
    """
    Upgrade a stored collection: unreadable data falls back to the defaults,
    and defaults added since it was saved are appended.
    """
    backend = InMemoryStore({STORAGE_KEY: body.stored} if body.stored else None)
    store = ApplianceStore(backend=backend)
    appliances = store.load()

    logger.info(
        "Route /appliances/merge called",
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "route": "/appliances/merge",
            "params": {"has_stored": bool(body.stored), "result_count": len(appliances)},
        },
    )

    return ApplianceCollection(
        appliances=appliances,
        categories=categories(appliances),
        ownedAppliances=store.owned_names(),
    )
