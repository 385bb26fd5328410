import logging
from typing import List

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorCollection

from ..models.feedback_model import Feedback, FeedbackSubmission
from ..services.database import get_feedback_collection
from ..services.errors import FeedbackValidationError
from ..services.feedback_service import FeedbackService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/feedbacks", tags=["Feedback"])


@router.get("", response_model=List[Feedback])
async def get_all_feedbacks(collection: AsyncIOMotorCollection = Depends(get_feedback_collection)):
    """Return all submitted feedback, most recent first."""
    try:
        return await FeedbackService(collection).list_feedbacks()
    except Exception as e:
        # Store faults and malformed documents alike; details stay in the log
        logger.error(f"Error fetching feedbacks: {str(e)}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Failed to fetch feedbacks"})


@router.post("/submit", response_model=Feedback, status_code=status.HTTP_201_CREATED)
async def submit_feedback(
    feedback: FeedbackSubmission,
    collection: AsyncIOMotorCollection = Depends(get_feedback_collection),
):
    """
    Store a new feedback entry.
    - Request body is validated before this runs (400 on failure)
    - The record is checked again against the stored schema
    - Responds with the created entry, including its id and createdAt
    """
    try:
        return await FeedbackService(collection).create_feedback(feedback)
    except FeedbackValidationError as e:
        logger.warning(f"Feedback rejected by schema: {str(e)}")
        return JSONResponse(status_code=400, content={"error": str(e)})
    except Exception as e:
        logger.error(f"Error submitting feedback: {str(e)}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Failed to submit feedback"})
