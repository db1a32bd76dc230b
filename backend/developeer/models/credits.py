"""Developeer Credit Ledger Models

The balance itself lives on User.credit. Each movement is also recorded
here for audit.
"""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from enum import Enum

from developeer.models.common import CAMEL_CONFIG, new_id, utc_now


class CreditTransactionType(str, Enum):
    """Types of credit transactions"""
    # Additions
    REVIEW_GIVEN = "REVIEW_GIVEN"          # Reviewer answered someone's form
    REQUESTS_CLOSED = "REQUESTS_CLOSED"    # Author lowered pending requests

    # Deductions
    REQUESTS_OPENED = "REQUESTS_OPENED"    # Author raised pending requests


class CreditTransaction(BaseModel):
    """Individual credit movement."""
    transaction_id: str = Field(default_factory=lambda: new_id("CTX"))
    user_id: str

    transaction_type: CreditTransactionType
    amount: int  # Positive for additions, negative for deductions
    balance_after: int

    # e.g. review_id or form_id
    reference_id: Optional[str] = None
    reference_type: Optional[str] = None
    description: str

    created_at: datetime = Field(default_factory=utc_now)

    model_config = CAMEL_CONFIG


class CreditHistoryResponse(BaseModel):
    transactions: List[CreditTransaction]
    limit: int
    offset: int

    model_config = CAMEL_CONFIG
