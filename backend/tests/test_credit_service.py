"""
Credit ledger tests: balance deltas, transaction records, history paging.
"""
import pytest

from conftest import AUTHOR_ID, FORM_ID, make_cursor, user_doc
from developeer.errors import InternalError
from developeer.models.credits import CreditTransactionType
from developeer.services.credit_service import CreditService
from developeer.services.saga import Saga

pytestmark = pytest.mark.asyncio


class TestReconcilePendingRequests:

    @pytest.mark.parametrize("previous,current,amount,transaction_type", [
        (0, 5, -5, CreditTransactionType.REQUESTS_OPENED),
        (5, 2, 3, CreditTransactionType.REQUESTS_CLOSED),
        (2, -1, 3, CreditTransactionType.REQUESTS_CLOSED),
        (-1, 1, -2, CreditTransactionType.REQUESTS_OPENED),
    ])
    async def test_author_credit_moves_by_previous_minus_current(
        self, db, previous, current, amount, transaction_type
    ):
        db.users.find_one_and_update.return_value = user_doc(credit=amount)

        await CreditService().reconcile_pending_requests(
            Saga("test"), AUTHOR_ID, FORM_ID, previous, current
        )

        update = db.users.find_one_and_update.call_args[0][1]
        assert update == {"$inc": {"credit": amount}}
        transaction = db.credit_transactions.insert_one.call_args[0][0]
        assert transaction["transaction_type"] == transaction_type
        assert transaction["amount"] == amount

    async def test_no_change_is_a_no_op(self, db):
        result = await CreditService().reconcile_pending_requests(
            Saga("test"), AUTHOR_ID, FORM_ID, 4, 4
        )

        assert result is None
        db.users.find_one_and_update.assert_not_awaited()
        db.credit_transactions.insert_one.assert_not_awaited()


class TestApplyCredit:

    async def test_balance_after_comes_from_updated_user(self, db):
        db.users.find_one_and_update.return_value = user_doc(credit=12)

        user = await CreditService().apply_credit(
            Saga("test"),
            user_id=AUTHOR_ID,
            amount=2,
            transaction_type=CreditTransactionType.REQUESTS_CLOSED,
            description="closed",
            reference_id=FORM_ID,
            reference_type="form",
        )

        assert user["credit"] == 12
        transaction = db.credit_transactions.insert_one.call_args[0][0]
        assert transaction["balance_after"] == 12
        assert transaction["transaction_id"].startswith("CTX-")

    async def test_missing_user_fails_the_step(self, db):
        saga = Saga("test")

        with pytest.raises(InternalError) as exc_info:
            await CreditService().apply_credit(
                saga,
                user_id="USR-GONE00000000",
                amount=1,
                transaction_type=CreditTransactionType.REVIEW_GIVEN,
                description="review",
            )

        assert exc_info.value.step == 1
        assert "not found" in exc_info.value.message
        db.credit_transactions.insert_one.assert_not_awaited()


class TestTransactionHistory:

    async def test_history_is_newest_first_and_paged(self, db):
        cursor = make_cursor([{"transaction_id": "CTX-000000000002"}])
        db.credit_transactions.find.return_value = cursor

        history = await CreditService().get_transaction_history(AUTHOR_ID, limit=10, offset=20)

        assert history == [{"transaction_id": "CTX-000000000002"}]
        db.credit_transactions.find.assert_called_once_with({"user_id": AUTHOR_ID}, {"_id": 0})
        cursor.sort.assert_called_once_with("created_at", -1)
        cursor.skip.assert_called_once_with(20)
        cursor.limit.assert_called_once_with(10)
