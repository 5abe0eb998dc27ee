"""
Health check endpoints for the account service
"""
from fastapi import APIRouter, HTTPException, status
from datetime import datetime

from ..db import check_db_connection
from ..schemas import HealthResponse, ReadinessResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse, status_code=status.HTTP_200_OK)
def health_check():
    return HealthResponse(status="healthy", timestamp=datetime.utcnow().isoformat())


@router.get("/ready", response_model=ReadinessResponse, status_code=status.HTTP_200_OK)
def readiness_check():
    """
    Readiness check endpoint.

    Raises:
        HTTPException: 503 if the database cannot be reached
    """
    db_connected = check_db_connection()
    response = ReadinessResponse(
        status="ready" if db_connected else "not_ready",
        database="connected" if db_connected else "disconnected",
        timestamp=datetime.utcnow().isoformat(),
    )
    if not db_connected:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=response.model_dump()
        )
    return response
