"""Developeer Review Service

Review submission is open to anyone. Registered reviewers are settled
through the credit service; anonymous reviews only store the review.

Submission order (each step independently durable):
1. insert review
2. decrement form pending_requests      (registered only)
3. credit reviewer + append review id    (registered only)
4. record credit transaction             (registered only)
"""

from typing import Optional, List
import logging

from database import database
from developeer.errors import NotFound, ValidationError
from developeer.models.forms import Form
from developeer.models.reviews import AnonymousReviewer, Review, ReviewCreate
from developeer.models.user import UserResponse
from developeer.services.authorization import ensure_author
from developeer.services.credit_service import credit_service
from developeer.services.saga import Saga

logger = logging.getLogger(__name__)


class ReviewService:
    """Review submission and retrieval service."""

    def _get_db(self):
        return database.get_db()

    async def submit_review(self, data: ReviewCreate) -> Optional[UserResponse]:
        """Store a review and settle it.

        Returns the updated reviewer for registered reviewers, None for
        anonymous ones.
        """
        reviewer = data.reviewer_identity()
        db = self._get_db()

        form_doc = await db.forms.find_one({"form_id": data.form_id}, {"_id": 0})
        if not form_doc:
            raise ValidationError("Form not found", location="formId")
        form = Form(**form_doc)

        version = form.get_version(data.form_version)
        if version is None:
            raise ValidationError("Form version not found", location="formVersion")

        if len(data.responses) != len(version.questions):
            raise ValidationError(
                f"Expected {len(version.questions)} responses, got {len(data.responses)}",
                location="responses",
            )

        if not isinstance(reviewer, AnonymousReviewer):
            exists = await db.users.find_one({"user_id": reviewer.user_id}, {"_id": 0, "user_id": 1})
            if not exists:
                raise ValidationError("Reviewer not found", location="reviewerId")

        review = Review(
            form_id=form.form_id,
            form_version=version.version_id,
            responses=list(data.responses),
            reviewer=reviewer,
        )

        saga = Saga("submit_review", review_id=review.review_id, form_id=form.form_id)
        await saga.step("insert review", db.reviews.insert_one(review.model_dump()))

        if isinstance(reviewer, AnonymousReviewer):
            logger.info(f"Anonymous review {review.review_id} submitted on form {form.form_id}")
            return None

        user = await credit_service.settle_review(
            saga,
            reviewer_id=reviewer.user_id,
            form_id=form.form_id,
            review_id=review.review_id,
        )

        logger.info(
            f"Review {review.review_id} by user {reviewer.user_id} settled on form {form.form_id}"
        )
        return UserResponse.from_document(user)

    async def get_review(self, principal_id: str, review_id: str) -> Review:
        """Get a review. Only the author of the reviewed form may read it."""
        db = self._get_db()

        doc = await db.reviews.find_one({"review_id": review_id}, {"_id": 0})
        if not doc:
            raise NotFound("Review not found")
        review = Review(**doc)

        form = await db.forms.find_one(
            {"form_id": review.form_id},
            {"_id": 0, "form_id": 1, "author_id": 1},
        )
        if not form:
            raise NotFound("Form not found")

        ensure_author(principal_id, form["author_id"], resource=f"form {review.form_id}")
        return review

    async def list_reviews_for_form(self, principal_id: str, form_id: str) -> List[Review]:
        """All reviews of a form in submission order. Author only."""
        db = self._get_db()

        form = await db.forms.find_one(
            {"form_id": form_id},
            {"_id": 0, "form_id": 1, "author_id": 1},
        )
        if not form:
            raise NotFound("Form not found")

        ensure_author(principal_id, form["author_id"], resource=f"form {form_id}")

        cursor = db.reviews.find(
            {"form_id": form_id},
            {"_id": 0}
        ).sort([("created_at", 1), ("review_id", 1)])

        docs = await cursor.to_list(length=None)
        return [Review(**doc) for doc in docs]


# Global service instance
review_service = ReviewService()
