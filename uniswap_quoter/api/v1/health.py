"""
Health Check Endpoint
"""
from fastapi import APIRouter

from ..schemas import HealthCheckResponse
from ...config import settings

router = APIRouter()


@router.get("/health", response_model=HealthCheckResponse)
async def health_check():
    """
    Health check endpoint

    Returns the current health status of the API.
    """
    return HealthCheckResponse(
        status="healthy",
        version=settings.API_VERSION,
    )
