"""Developeer User Model

A user is both an author (owns forms, spends credit to request reviews)
and a reviewer (earns credit by answering other authors' forms).
"""

from pydantic import BaseModel, Field
from typing import List
from datetime import datetime

from developeer.models.common import CAMEL_CONFIG, new_id, utc_now


class User(BaseModel):
    """Stored user record.

    credit, forms and reviews_given are only ever changed with atomic
    $inc / $addToSet / $push / $pull updates.
    """
    user_id: str = Field(default_factory=lambda: new_id("USR"))
    username: str
    password_hash: str

    # Signed balance: requests issued (debit) vs reviews performed (credit)
    credit: int = 0

    forms: List[str] = Field(default_factory=list)
    reviews_given: List[str] = Field(default_factory=list)

    created_at: datetime = Field(default_factory=utc_now)

    model_config = CAMEL_CONFIG


class UserCreate(BaseModel):
    """Registration request. Field rules are checked by the user service."""
    username: str
    password: str

    model_config = CAMEL_CONFIG


class UserLogin(BaseModel):
    username: str
    password: str

    model_config = CAMEL_CONFIG


class UserResponse(BaseModel):
    """Serialized user (no credential hash)."""
    user_id: str
    username: str
    credit: int = 0
    forms: List[str] = Field(default_factory=list)
    reviews_given: List[str] = Field(default_factory=list)
    created_at: datetime

    model_config = CAMEL_CONFIG

    @classmethod
    def from_document(cls, doc: dict) -> "UserResponse":
        return cls(**doc)


class UserPublicProfile(BaseModel):
    username: str

    model_config = CAMEL_CONFIG


class TokenResponse(BaseModel):
    auth_token: str

    model_config = CAMEL_CONFIG
