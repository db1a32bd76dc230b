"""Developeer Review Routes

Endpoints:
- POST /api/reviews - Submit a review (open to anonymous reviewers)
- GET /api/reviews/{id} - Get a review (author of the reviewed form only)
"""

from fastapi import APIRouter, Depends, Response
import logging

from middleware import get_current_principal
from developeer.errors import DeveloperError, InternalError
from developeer.models.reviews import Review, ReviewCreate
from developeer.models.user import UserResponse
from developeer.services.review_service import review_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reviews", tags=["Reviews"])


@router.post("", response_model=UserResponse, status_code=201)
async def submit_review(data: ReviewCreate):
    """Submit a review.

    Registered reviewers (reviewerId) get 201 with their updated record.
    Anonymous reviewers (reviewerName) get 204 with no body.
    """
    try:
        reviewer = await review_service.submit_review(data)
    except DeveloperError:
        raise
    except Exception as e:
        logger.error(f"Review submission failed: {e}")
        raise InternalError("Review submission failed") from e

    if reviewer is None:
        return Response(status_code=204)
    return reviewer


@router.get("/{review_id}", response_model=Review)
async def get_review(
    review_id: str,
    principal_id: str = Depends(get_current_principal),
):
    try:
        return await review_service.get_review(principal_id, review_id)
    except DeveloperError:
        raise
    except Exception as e:
        logger.error(f"Failed to get review: {e}")
        raise InternalError("Failed to get review") from e
