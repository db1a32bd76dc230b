"""Developeer Authentication Routes

Endpoints:
- POST /api/auth/login - Exchange username/password for a token
- POST /api/auth/refresh - Exchange a valid token for a fresh one
"""

from fastapi import APIRouter, Depends
import logging

from middleware import get_current_principal
from developeer.errors import DeveloperError, InternalError
from developeer.models.user import UserLogin, TokenResponse
from developeer.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/login", response_model=TokenResponse)
async def login(data: UserLogin):
    try:
        return await user_service.login(data)
    except DeveloperError:
        raise
    except Exception as e:
        logger.error(f"Login failed: {e}")
        raise InternalError("Login failed") from e


@router.post("/refresh", response_model=TokenResponse)
async def refresh(principal_id: str = Depends(get_current_principal)):
    """Issue a new token with a later expiry."""
    return await user_service.refresh_token(principal_id)
