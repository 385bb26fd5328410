import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from ..services.database import ping
from ..services.errors import FeedbackStoreError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check():
    """Report whether the document store is reachable."""
    try:
        await ping()
    except (FeedbackStoreError, PyMongoError) as e:
        logger.warning(f"Health check failed: {str(e)}")
        return JSONResponse(status_code=503, content={"status": "unhealthy"})
    return {"status": "healthy"}
