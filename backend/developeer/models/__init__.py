"""Developeer Data Models"""

from .user import (
    User,
    UserCreate,
    UserLogin,
    UserResponse,
    UserPublicProfile,
    TokenResponse,
)
from .forms import (
    Form,
    FormVersion,
    FormCreate,
    FormUpdate,
)
from .reviews import (
    Review,
    ReviewCreate,
    ReviewListResponse,
    RegisteredReviewer,
    AnonymousReviewer,
)
from .credits import (
    CreditTransaction,
    CreditTransactionType,
    CreditHistoryResponse,
)

__all__ = [
    # User
    "User",
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "UserPublicProfile",
    "TokenResponse",
    # Forms
    "Form",
    "FormVersion",
    "FormCreate",
    "FormUpdate",
    # Reviews
    "Review",
    "ReviewCreate",
    "ReviewListResponse",
    "RegisteredReviewer",
    "AnonymousReviewer",
    # Credits
    "CreditTransaction",
    "CreditTransactionType",
    "CreditHistoryResponse",
]
