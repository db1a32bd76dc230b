"""Developeer User Service

Registration, login and user lookup. Credit and the forms/reviews_given
lists are never written here; the form and review services own them.
"""

import logging

from pymongo.errors import DuplicateKeyError

from database import database
from auth import (
    hash_password,
    verify_password,
    create_user_token,
    check_credential_sizes,
)
from developeer.errors import NotFound, Unauthorized, ValidationError
from developeer.models.user import (
    User,
    UserCreate,
    UserLogin,
    UserResponse,
    UserPublicProfile,
    TokenResponse,
)

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Incorrect username or password"


class UserService:
    """Account service for Developeer users."""

    def _get_db(self):
        return database.get_db()

    async def register(self, data: UserCreate) -> UserResponse:
        """Register a new user with zero credit."""
        for field in ("username", "password"):
            value = getattr(data, field)
            if value.strip() != value:
                raise ValidationError("Cannot start or end with whitespace", location=field)

        size_error = check_credential_sizes(data.username, data.password)
        if size_error:
            field, message = size_error
            raise ValidationError(message, location=field)

        db = self._get_db()

        if await db.users.count_documents({"username": data.username}) > 0:
            raise ValidationError("Already in use", location="username")

        user = User(
            username=data.username,
            password_hash=hash_password(data.password),
        )

        try:
            await db.users.insert_one(user.model_dump())
        except DuplicateKeyError:
            # Lost a registration race on the unique index
            raise ValidationError("Already in use", location="username")

        logger.info(f"New user registered: {user.user_id}")
        return UserResponse.from_document(user.model_dump())

    async def login(self, data: UserLogin) -> TokenResponse:
        """Check credentials and issue a token."""
        db = self._get_db()

        user = await db.users.find_one({"username": data.username}, {"_id": 0})
        if not user or not verify_password(data.password, user["password_hash"]):
            raise Unauthorized(INVALID_CREDENTIALS)

        return TokenResponse(auth_token=create_user_token(user["user_id"], user["username"]))

    async def refresh_token(self, user_id: str) -> TokenResponse:
        """Issue a token with a fresh expiry for an authenticated principal."""
        user = await self.get_user(user_id)
        return TokenResponse(auth_token=create_user_token(user.user_id, user.username))

    async def get_user(self, user_id: str) -> UserResponse:
        db = self._get_db()
        user = await db.users.find_one({"user_id": user_id}, {"_id": 0})
        if not user:
            raise NotFound("User not found")
        return UserResponse.from_document(user)

    async def get_public_profile(self, user_id: str) -> UserPublicProfile:
        """Only the username is public."""
        db = self._get_db()
        user = await db.users.find_one({"user_id": user_id}, {"_id": 0, "username": 1})
        if not user:
            raise NotFound("User not found")
        return UserPublicProfile(username=user["username"])


# Global service instance
user_service = UserService()
