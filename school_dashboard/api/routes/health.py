from fastapi import APIRouter
from pydantic import BaseModel, Field

router = APIRouter(tags=["health"])


# PUBLIC_INTERFACE
class HealthResponse(BaseModel):
    """Response model for health checks."""
    status: str = Field(..., description="Overall service status string, e.g. 'ok' or 'error'.")


@router.get("/", tags=["root"], summary="Root", description="Root endpoint to verify API is running.")
def read_root():
    """Return a simple greeting to confirm the API is live."""
    return {"message": "School Dashboard Backend is running."}


@router.get("/health", response_model=HealthResponse, summary="Liveness probe", description="Simple liveness check endpoint.")
def health():
    """Return liveness status for health checks."""
    return HealthResponse(status="ok")
