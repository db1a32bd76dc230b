"""Developeer User Routes

Endpoints:
- POST /api/users - Register
- GET /api/users/me - Current user (full record)
- GET /api/users/me/credits - Credit transaction history
- GET /api/users/{id} - Public profile (username only)
"""

from fastapi import APIRouter, Depends, Query
import logging

from middleware import get_current_principal
from developeer.errors import DeveloperError, InternalError
from developeer.models.credits import CreditHistoryResponse
from developeer.models.user import UserCreate, UserResponse, UserPublicProfile
from developeer.services.credit_service import credit_service
from developeer.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.post("", response_model=UserResponse, status_code=201)
async def register(data: UserCreate):
    """Register a new user. Credit starts at zero."""
    try:
        return await user_service.register(data)
    except DeveloperError:
        raise
    except Exception as e:
        logger.error(f"Registration failed: {e}")
        raise InternalError("Registration failed") from e


@router.get("/me", response_model=UserResponse)
async def get_me(principal_id: str = Depends(get_current_principal)):
    return await user_service.get_user(principal_id)


@router.get("/me/credits", response_model=CreditHistoryResponse)
async def get_credit_history(
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    principal_id: str = Depends(get_current_principal),
):
    """Get credit transaction history, newest first."""
    try:
        transactions = await credit_service.get_transaction_history(
            user_id=principal_id,
            limit=limit,
            offset=offset,
        )
        return CreditHistoryResponse(
            transactions=transactions,
            limit=limit,
            offset=offset,
        )
    except DeveloperError:
        raise
    except Exception as e:
        logger.error(f"Failed to get credit history: {e}")
        raise InternalError("Failed to get credit history") from e


@router.get("/{user_id}", response_model=UserPublicProfile)
async def get_user_profile(user_id: str):
    """Public profile. No auth required."""
    return await user_service.get_public_profile(user_id)
