"""Developeer Form Routes

Endpoints:
- POST /api/forms - Create a form (returns updated author)
- GET /api/forms/random - Random form with open review slots
- GET /api/forms/{id} - Get a form (public)
- PATCH /api/forms/{id} - Partially update a form (returns updated author)
- DELETE /api/forms/{id} - Delete a form (returns updated author)
- GET /api/forms/{id}/reviews - All reviews of a form (author only)
"""

from fastapi import APIRouter, Body, Depends
from typing import Any, Dict, Optional
import logging

from middleware import get_current_principal, get_optional_principal
from developeer.errors import DeveloperError, InternalError
from developeer.models.forms import Form, FormCreate
from developeer.models.reviews import ReviewListResponse
from developeer.models.user import UserResponse
from developeer.services.form_service import form_service
from developeer.services.review_service import review_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/forms", tags=["Forms"])


@router.post("", response_model=UserResponse, status_code=201)
async def create_form(
    data: FormCreate,
    principal_id: str = Depends(get_current_principal),
):
    """Create a form owned by the caller.

    The response is the author's record so clients see the new forms list.
    """
    try:
        return await form_service.create_form(principal_id, data)
    except DeveloperError:
        raise
    except Exception as e:
        logger.error(f"Form creation failed: {e}")
        raise InternalError("Form creation failed") from e


@router.get("/random", response_model=Form)
async def get_random_form(principal_id: Optional[str] = Depends(get_optional_principal)):
    """Get a form to review. Signed-in callers never get their own forms."""
    try:
        return await form_service.get_random_reviewable_form(principal_id)
    except DeveloperError:
        raise
    except Exception as e:
        logger.error(f"Failed to pick a form: {e}")
        raise InternalError("Failed to get form") from e


@router.get("/{form_id}", response_model=Form)
async def get_form(form_id: str):
    """Get form details. No auth required - reviewers need it."""
    try:
        return await form_service.get_form(form_id)
    except DeveloperError:
        raise
    except Exception as e:
        logger.error(f"Failed to get form: {e}")
        raise InternalError("Failed to get form") from e


@router.patch("/{form_id}", response_model=UserResponse)
async def update_form(
    form_id: str,
    body: Any = Body(...),
    principal_id: str = Depends(get_current_principal),
):
    """Update name, projectUrl, overview, pendingRequests or questions.

    New questions add a version; a pendingRequests change moves author credit.
    """
    try:
        return await form_service.update_form(principal_id, form_id, body)
    except DeveloperError:
        raise
    except Exception as e:
        logger.error(f"Form update failed: {e}")
        raise InternalError("Form update failed") from e


@router.delete("/{form_id}", response_model=UserResponse)
async def delete_form(
    form_id: str,
    body: Optional[Dict[str, Any]] = Body(None),
    principal_id: str = Depends(get_current_principal),
):
    """Delete a form. The body must repeat the id: {"formId": "<id>"}."""
    try:
        return await form_service.delete_form(principal_id, form_id, body)
    except DeveloperError:
        raise
    except Exception as e:
        logger.error(f"Form deletion failed: {e}")
        raise InternalError("Form deletion failed") from e


@router.get("/{form_id}/reviews", response_model=ReviewListResponse)
async def list_form_reviews(
    form_id: str,
    principal_id: str = Depends(get_current_principal),
):
    try:
        reviews = await review_service.list_reviews_for_form(principal_id, form_id)
        return ReviewListResponse(form_id=form_id, reviews=reviews)
    except DeveloperError:
        raise
    except Exception as e:
        logger.error(f"Failed to list reviews: {e}")
        raise InternalError("Failed to list reviews") from e
