"""Developeer Form Service

Form lifecycle:
- Create: insert form, then register it on the author's forms list
- Update: allow-listed patch; new questions append a version; a changed
  pending_requests is reconciled against the author's credit
- Delete: remove form, then pull it from the author's forms list
- Read: by id (public) or a uniformly random reviewable form

Every response for a mutation is the author's updated record.
"""

from typing import Optional, Dict, Any
import logging

from pymongo import ReturnDocument

from database import database
from developeer.errors import NotFound
from developeer.models.forms import Form, FormCreate, FormUpdate, FormVersion
from developeer.models.user import UserResponse
from developeer.services.authorization import ensure_author
from developeer.services.credit_service import credit_service
from developeer.services.saga import Saga
from developeer.validation import require_matching_ids
from utils.public_app_url import build_review_link

logger = logging.getLogger(__name__)


class FormService:
    """Form lifecycle management."""

    def _get_db(self):
        return database.get_db()

    async def get_form(self, form_id: str) -> Form:
        """Get a form by id. No authorization: reviewers read forms too."""
        db = self._get_db()
        doc = await db.forms.find_one({"form_id": form_id}, {"_id": 0})
        if not doc:
            raise NotFound("Form not found")
        return Form(**doc)

    async def get_random_reviewable_form(self, requester_id: Optional[str] = None) -> Form:
        """Pick a form with open review slots, uniformly at random.

        The requester's own forms are excluded when the requester is known.
        """
        db = self._get_db()

        match: Dict[str, Any] = {"pending_requests": {"$gt": 0}}
        if requester_id:
            match["author_id"] = {"$ne": requester_id}

        docs = await db.forms.aggregate([
            {"$match": match},
            {"$sample": {"size": 1}},
            {"$project": {"_id": 0}},
        ]).to_list(1)

        if not docs:
            raise NotFound("No forms found")
        return Form(**docs[0])

    async def create_form(self, author_id: str, data: FormCreate) -> UserResponse:
        """Create a form with a single version and register it on the author."""
        db = self._get_db()
        await self._get_user_document(author_id)

        form = Form(
            author_id=author_id,
            name=data.name,
            project_url=data.project_url,
            overview=data.overview,
            pending_requests=0,
            versions=[FormVersion(questions=list(data.questions))],
        )
        form.shareable_url = build_review_link(form.form_id)

        saga = Saga("create_form", form_id=form.form_id, author_id=author_id)
        await saga.step("insert form", db.forms.insert_one(form.model_dump()))

        author = await saga.step(
            "register form on author",
            db.users.find_one_and_update(
                {"user_id": author_id},
                {"$addToSet": {"forms": form.form_id}},
                projection={"_id": 0},
                return_document=ReturnDocument.AFTER,
            ),
            expect=lambda doc: doc is not None,
            reason=f"user {author_id} not found",
        )

        logger.info(f"Created form {form.form_id} for user {author_id}")
        return UserResponse.from_document(author)

    async def update_form(
        self,
        principal_id: str,
        form_id: str,
        body: Dict[str, Any],
    ) -> UserResponse:
        """Apply a partial update. Last write wins per field."""
        changes = FormUpdate.from_patch(body)

        db = self._get_db()
        form = await self.get_form(form_id)
        ensure_author(principal_id, form.author_id, resource=f"form {form_id}")

        update: Dict[str, Any] = {}
        field_changes = changes.field_changes()
        if field_changes:
            update["$set"] = field_changes
        if changes.questions is not None:
            version = FormVersion(questions=list(changes.questions))
            update["$push"] = {"versions": version.model_dump()}

        saga = Saga("update_form", form_id=form_id, author_id=form.author_id)
        previous = form.pending_requests
        if update:
            # The credit delta is taken from the value actually overwritten
            before = await saga.step(
                "update form",
                db.forms.find_one_and_update(
                    {"form_id": form_id},
                    update,
                    projection={"_id": 0, "pending_requests": 1},
                    return_document=ReturnDocument.BEFORE,
                ),
                expect=lambda doc: doc is not None,
                reason=f"form {form_id} not found",
            )
            previous = before.get("pending_requests", 0)

        author = None
        if "pending_requests" in field_changes:
            author = await credit_service.reconcile_pending_requests(
                saga,
                author_id=form.author_id,
                form_id=form_id,
                previous=previous,
                current=field_changes["pending_requests"],
            )

        if author is None:
            author = await self._get_user_document(form.author_id)

        logger.info(f"Updated form {form_id} fields={sorted(body)}")
        return UserResponse.from_document(author)

    async def delete_form(
        self,
        principal_id: str,
        form_id: str,
        body: Optional[Dict[str, Any]],
    ) -> UserResponse:
        """Delete a form and unregister it from its author.

        The author's credit is left as is; open pending requests are not refunded.
        """
        require_matching_ids(form_id, body, "formId")

        db = self._get_db()
        form = await self.get_form(form_id)
        ensure_author(principal_id, form.author_id, resource=f"form {form_id}")

        saga = Saga("delete_form", form_id=form_id, author_id=form.author_id)
        await saga.step("delete form", db.forms.delete_one({"form_id": form_id}))

        author = await saga.step(
            "unregister form from author",
            db.users.find_one_and_update(
                {"user_id": form.author_id},
                {"$pull": {"forms": form_id}},
                projection={"_id": 0},
                return_document=ReturnDocument.AFTER,
            ),
            expect=lambda doc: doc is not None,
            reason=f"user {form.author_id} not found",
        )

        logger.info(f"Deleted form {form_id} of user {form.author_id}")
        return UserResponse.from_document(author)

    async def _get_user_document(self, user_id: str) -> Dict[str, Any]:
        db = self._get_db()
        user = await db.users.find_one({"user_id": user_id}, {"_id": 0})
        if not user:
            raise NotFound("User not found")
        return user


# Global service instance
form_service = FormService()
