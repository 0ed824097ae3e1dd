# app/api/routes/health.py
from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel, Field

from app.core.config import get_settings

APP_VERSION = "1.0.0"

router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    """
    Response schema for the health check endpoint.
    """

    status: str = Field(..., description="Overall health status of the service.", examples=["ok"])
    version: str = Field(..., description="Running application version.", examples=[APP_VERSION])
    app_name: str = Field(
        ...,
        description="Human-friendly name of the running application.",
        examples=["Meeting Usefulness"],
    )
    environment: str = Field(
        ...,
        description="Current deployment environment (local/dev/stage/prod).",
        examples=["local"],
    )
    timestamp_utc: datetime = Field(
        ...,
        description="Server-side timestamp (UTC) at which this health check was generated.",
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check for the Meeting Usefulness service",
    description=(
        "Lightweight endpoint to verify that the backend is up and responding.\n\n"
        "Typical use-cases:\n"
        "- Container / VM health probes\n"
        "- Uptime monitoring\n"
    ),
)
async def health_check() -> HealthResponse:
    """
    Returns the current health status of the service.

    Does not touch the feedback store so it stays reliable under load.
    """
    settings = get_settings()
    return HealthResponse(
        status="ok",
        version=APP_VERSION,
        app_name=settings.APP_NAME,
        environment=settings.APP_ENV,
        timestamp_utc=datetime.now(tz=timezone.utc),
    )
