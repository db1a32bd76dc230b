"""
Pytest configuration and shared test helpers for backend tests.

The motor database is replaced by MagicMock collections whose coroutine
methods are AsyncMocks; tests set return values / side effects per case.
"""
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

BACKEND_DIR = Path(__file__).resolve().parent.parent
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

os.environ.setdefault("FRONTEND_PUBLIC_URL", "https://developeer.example.com")

import pytest
from fastapi.testclient import TestClient

AUTHOR_ID = "USR-AUTHOR000001"
REVIEWER_ID = "USR-REVIEWER0001"
OTHER_ID = "USR-OTHER0000001"
FORM_ID = "FRM-FORM00000001"
VERSION_ID = "VER-VERSION00001"

COLLECTIONS = ("users", "forms", "reviews", "credit_transactions")


def make_cursor(docs=None):
    """Cursor supporting the find(...).sort(...).skip(...).limit(...).to_list(...) chain."""
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.skip.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.to_list = AsyncMock(return_value=list(docs or []))
    return cursor


def make_collection():
    collection = MagicMock()
    collection.find_one = AsyncMock(return_value=None)
    collection.insert_one = AsyncMock()
    collection.update_one = AsyncMock(return_value=MagicMock(matched_count=1, modified_count=1))
    collection.find_one_and_update = AsyncMock(return_value=None)
    collection.delete_one = AsyncMock(return_value=MagicMock(deleted_count=1))
    collection.count_documents = AsyncMock(return_value=0)
    collection.find = MagicMock(return_value=make_cursor())
    collection.aggregate = MagicMock(return_value=make_cursor())
    return collection


def make_db():
    db = MagicMock()
    for name in COLLECTIONS:
        setattr(db, name, make_collection())
    return db


def user_doc(user_id=AUTHOR_ID, username="author", credit=0, forms=None, reviews_given=None):
    return {
        "user_id": user_id,
        "username": username,
        "password_hash": "$2b$12$notarealhash",
        "credit": credit,
        "forms": list(forms or []),
        "reviews_given": list(reviews_given or []),
        "created_at": datetime(2026, 1, 1, tzinfo=timezone.utc),
    }


def form_doc(form_id=FORM_ID, author_id=AUTHOR_ID, pending_requests=0, questions=("q1", "q2"), versions=None):
    return {
        "form_id": form_id,
        "author_id": author_id,
        "name": "F",
        "project_url": "u",
        "overview": "o",
        "shareable_url": f"https://developeer.example.com/review/{form_id}",
        "pending_requests": pending_requests,
        "created_at": datetime(2026, 1, 2, tzinfo=timezone.utc),
        "versions": versions or [
            {
                "version_id": VERSION_ID,
                "questions": list(questions),
                "created_at": datetime(2026, 1, 2, tzinfo=timezone.utc),
            }
        ],
    }


def review_doc(review_id="REV-REVIEW000001", form_id=FORM_ID, reviewer=None):
    return {
        "review_id": review_id,
        "form_id": form_id,
        "form_version": VERSION_ID,
        "responses": ["a1", "a2"],
        "reviewer": reviewer or {"kind": "anonymous", "name": "anon"},
        "created_at": datetime(2026, 1, 3, tzinfo=timezone.utc),
    }


@pytest.fixture
def db():
    """Mock database wired into every service through database.get_db()."""
    mock_db = make_db()
    with patch("database.database.get_db", return_value=mock_db):
        yield mock_db


@pytest.fixture
def client():
    """TestClient for the main FastAPI app (server:app). Lifespan is not run, so no MongoDB."""
    from server import app
    return TestClient(app)


def bearer(user_id, username="someone"):
    from auth import create_user_token
    return {"Authorization": f"Bearer {create_user_token(user_id, username)}"}


@pytest.fixture
def auth_headers():
    """Factory for Authorization headers carrying a valid token for user_id."""
    return bearer
