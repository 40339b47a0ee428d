"""Settings routes."""

from fastapi import APIRouter, Depends

from src.api.deps import get_settings
from src.api.schemas import ForfeitureSettingsResponse
from src.config import Settings

router = APIRouter(prefix="/api/v1/settings", tags=["settings"])


@router.get("/forfeiture", response_model=ForfeitureSettingsResponse)
async def get_forfeiture_settings(settings: Settings = Depends(get_settings)):
    """Current forfeiture policy. Changed through the environment, not the API."""
    return ForfeitureSettingsResponse(
        forfeiture_enabled=settings.forfeiture_enabled,
        forfeiture_days_threshold=settings.forfeiture_days_threshold,
    )
