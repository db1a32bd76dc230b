"""Developeer Review Models

A review answers one specific version of a form. The reviewer is either a
registered user (earns credit) or an anonymous name (no ledger effect).
"""

from pydantic import BaseModel, Field
from typing import Annotated, List, Literal, Optional, Union
from datetime import datetime

from developeer.errors import ValidationError
from developeer.models.common import CAMEL_CONFIG, new_id, utc_now


class RegisteredReviewer(BaseModel):
    kind: Literal["registered"] = "registered"
    user_id: str

    model_config = CAMEL_CONFIG


class AnonymousReviewer(BaseModel):
    kind: Literal["anonymous"] = "anonymous"
    name: str

    model_config = CAMEL_CONFIG


ReviewerIdentity = Annotated[
    Union[RegisteredReviewer, AnonymousReviewer],
    Field(discriminator="kind"),
]


class Review(BaseModel):
    """Stored review record. Never updated after creation."""
    review_id: str = Field(default_factory=lambda: new_id("REV"))
    form_id: str
    form_version: str
    responses: List[str]
    reviewer: ReviewerIdentity
    created_at: datetime = Field(default_factory=utc_now)

    model_config = CAMEL_CONFIG


class ReviewCreate(BaseModel):
    """Request body for submitting a review.

    Exactly one of reviewer_id / reviewer_name must be given.
    """
    form_id: str
    form_version: str
    responses: List[str]
    reviewer_id: Optional[str] = None
    reviewer_name: Optional[str] = None

    model_config = CAMEL_CONFIG

    def reviewer_identity(self) -> Union[RegisteredReviewer, AnonymousReviewer]:
        reviewer_id = (self.reviewer_id or "").strip()
        reviewer_name = (self.reviewer_name or "").strip()

        if bool(reviewer_id) == bool(reviewer_name):
            raise ValidationError(
                "Must provide reviewerId or reviewerName",
                location="reviewerId",
            )

        if reviewer_id:
            return RegisteredReviewer(user_id=reviewer_id)
        return AnonymousReviewer(name=reviewer_name)


class ReviewListResponse(BaseModel):
    form_id: str
    reviews: List[Review]

    model_config = CAMEL_CONFIG
