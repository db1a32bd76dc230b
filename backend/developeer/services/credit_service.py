"""Developeer Credit Service

Credit reconciliation between authors and reviewers:
- Registered review: form pending_requests -1, reviewer credit +1,
  review appended to the reviewer's reviews_given
- Pending request change on a form: author credit += previous - new
- Every credit movement recorded in credit_transactions

All steps run inside the caller's Saga so a partial failure reports the
step it stopped at.
"""

from typing import Optional, Dict, Any, List
import logging

from pymongo import ReturnDocument

from database import database
from developeer.models.credits import CreditTransaction, CreditTransactionType
from developeer.services.saga import Saga

logger = logging.getLogger(__name__)


class CreditService:
    """Applies credit deltas and keeps the ledger."""

    def _get_db(self):
        return database.get_db()

    async def apply_credit(
        self,
        saga: Saga,
        user_id: str,
        amount: int,
        transaction_type: CreditTransactionType,
        description: str,
        reference_id: Optional[str] = None,
        reference_type: Optional[str] = None,
        push: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Atomically add ``amount`` (may be negative) to a user's credit.

        Returns the updated user document.
        """
        db = self._get_db()

        update: Dict[str, Any] = {"$inc": {"credit": amount}}
        if push:
            update["$push"] = push

        description_step = f"apply {amount:+d} credit to user {user_id}"
        user = await saga.step(
            description_step,
            db.users.find_one_and_update(
                {"user_id": user_id},
                update,
                projection={"_id": 0},
                return_document=ReturnDocument.AFTER,
            ),
            expect=lambda doc: doc is not None,
            reason=f"user {user_id} not found",
        )

        transaction = CreditTransaction(
            user_id=user_id,
            transaction_type=transaction_type,
            amount=amount,
            balance_after=user.get("credit", 0),
            reference_id=reference_id,
            reference_type=reference_type,
            description=description,
        )
        await saga.step(
            "record credit transaction",
            db.credit_transactions.insert_one(transaction.model_dump()),
        )

        logger.info(
            f"Applied {amount:+d} credit to user {user_id} ({transaction_type.value}). "
            f"New balance: {transaction.balance_after}"
        )
        return user

    async def settle_review(
        self,
        saga: Saga,
        reviewer_id: str,
        form_id: str,
        review_id: str,
    ) -> Dict[str, Any]:
        """Settle a registered review: form slot consumed, reviewer paid.

        Order is form decrement then reviewer credit, so a crash in between
        under-counts the reviewer rather than double-counting.
        """
        db = self._get_db()

        await saga.step(
            "decrement form pending requests",
            db.forms.update_one(
                {"form_id": form_id},
                {"$inc": {"pending_requests": -1}},
            ),
            expect=lambda result: result.matched_count > 0,
            reason=f"form {form_id} not found",
        )

        return await self.apply_credit(
            saga,
            user_id=reviewer_id,
            amount=1,
            transaction_type=CreditTransactionType.REVIEW_GIVEN,
            description=f"Review {review_id} given on form {form_id}",
            reference_id=review_id,
            reference_type="review",
            push={"reviews_given": review_id},
        )

    async def reconcile_pending_requests(
        self,
        saga: Saga,
        author_id: str,
        form_id: str,
        previous: int,
        current: int,
    ) -> Optional[Dict[str, Any]]:
        """Charge or refund the author for a pending_requests change.

        Raising outstanding requests costs credit, lowering them refunds it.
        Returns the updated author document, or None when nothing changed.
        """
        delta = previous - current
        if delta == 0:
            return None

        if delta > 0:
            transaction_type = CreditTransactionType.REQUESTS_CLOSED
        else:
            transaction_type = CreditTransactionType.REQUESTS_OPENED

        return await self.apply_credit(
            saga,
            user_id=author_id,
            amount=delta,
            transaction_type=transaction_type,
            description=f"Pending requests on form {form_id} changed from {previous} to {current}",
            reference_id=form_id,
            reference_type="form",
        )

    async def get_transaction_history(
        self,
        user_id: str,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Dict[str, Any]]:
        """Get credit transaction history for a user, newest first."""
        db = self._get_db()

        cursor = db.credit_transactions.find(
            {"user_id": user_id},
            {"_id": 0}
        ).sort("created_at", -1).skip(offset).limit(limit)

        return await cursor.to_list(limit)


# Global service instance
credit_service = CreditService()
