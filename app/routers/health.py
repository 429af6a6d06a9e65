"""
Health Check Router
Liveness and expense store connectivity
"""
from datetime import datetime, timezone

from fastapi import APIRouter

from app.core.config import settings
from app.db import dynamo

router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint.
    Returns API status.
    """
    return {
        "status": "healthy",
        "service": settings.PROJECT_NAME,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/status")
def store_status():
    """
    Check connectivity to the DynamoDB expenses table.
    """
    dynamodb_status = dynamo.ping()
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "services": {"dynamodb": dynamodb_status},
        "overall_status": "healthy" if dynamodb_status["connected"] else "degraded",
    }
