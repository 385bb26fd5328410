import logging
from typing import List

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from ..models.feedback_model import (Feedback, FeedbackRecord,
                                     FeedbackSubmission, utcnow)
from .errors import FeedbackStoreError

logger = logging.getLogger(__name__)


class FeedbackService:
    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    async def create_feedback(self, submission: FeedbackSubmission) -> Feedback:
        """
        Validate the submission against the stored schema and insert it.
        Raises FeedbackValidationError or FeedbackStoreError.
        """
        record = FeedbackRecord.build(
            name=submission.name,
            email=submission.email,
            message=submission.message,
            createdAt=utcnow(),
        )
        document = record.to_document()

        try:
            result = await self.collection.insert_one(document)
        except PyMongoError as e:
            raise FeedbackStoreError("Failed to insert feedback") from e

        logger.info(f"Stored feedback {result.inserted_id}")
        return Feedback.model_validate({**document, "_id": result.inserted_id})

    async def list_feedbacks(self) -> List[Feedback]:
        """Return every feedback entry, most recent first."""
        try:
            documents = await self.collection.find({}).sort("createdAt", DESCENDING).to_list(length=None)
        except PyMongoError as e:
            raise FeedbackStoreError("Failed to read feedbacks") from e

        return [Feedback.model_validate(document) for document in documents]
