"""Developeer Services"""

from .credit_service import CreditService, credit_service
from .form_service import FormService, form_service
from .review_service import ReviewService, review_service
from .user_service import UserService, user_service
from .saga import Saga

__all__ = [
    "CreditService",
    "credit_service",
    "FormService",
    "form_service",
    "ReviewService",
    "review_service",
    "UserService",
    "user_service",
    "Saga",
]
