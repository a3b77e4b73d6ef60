from fastapi import APIRouter, Depends

from plotdesk.core.config import settings
from plotdesk.storage import DataStore, get_store

router = APIRouter()


@router.get("/health")
async def health_check(store: DataStore = Depends(get_store)):
    """Liveness probe"""
    return {
        "status": "healthy",
        "service": "plotdesk-backend",
        "environment": settings.ENVIRONMENT,
        "storage": store.backend,
    }
