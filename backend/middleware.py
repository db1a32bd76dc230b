from fastapi import Request, HTTPException, status
from typing import Optional
import logging
from auth import decode_access_token

logger = logging.getLogger(__name__)

async def get_current_user(request: Request) -> Optional[dict]:
    """Extract and validate current user from JWT token."""
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        return None
    
    token = auth_header.split(" ")[1]
    payload = decode_access_token(token)
    
    if not payload or not payload.get("sub"):
        return None
    
    return payload

async def require_auth(request: Request) -> dict:
    """Require valid authentication."""
    user = await get_current_user(request)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated"
        )
    return user

async def get_current_principal(request: Request) -> str:
    """Authenticated principal id (token subject). 401 if missing or invalid."""
    user = await require_auth(request)
    return user["sub"]

async def get_optional_principal(request: Request) -> Optional[str]:
    """Principal id when a token is sent, None for anonymous callers.

    A token that is present but invalid is still rejected.
    """
    if not request.headers.get("Authorization"):
        return None
    return await get_current_principal(request)
