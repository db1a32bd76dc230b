"""Tests for get_public_app_url (shareable review link base URL)."""
import os
from unittest.mock import patch


def test_get_public_app_url_prefers_frontend_public_url():
    """FRONTEND_PUBLIC_URL wins over the other settings."""
    from utils.public_app_url import get_public_app_url

    with patch.dict(
        os.environ,
        {
            "FRONTEND_PUBLIC_URL": "https://developeer.example.com",
            "PUBLIC_APP_URL": "https://other.example.com",
        },
        clear=False,
    ):
        url = get_public_app_url()
    assert url == "https://developeer.example.com"


def test_get_public_app_url_strips_trailing_slash_and_upgrades_http():
    from utils.public_app_url import get_public_app_url

    with patch.dict(
        os.environ,
        {"FRONTEND_PUBLIC_URL": "", "PUBLIC_APP_URL": "http://app.example.com/"},
        clear=False,
    ):
        url = get_public_app_url()
    assert url == "https://app.example.com"


def test_get_public_app_url_falls_back_to_localhost():
    """With nothing configured links point at the local dev frontend."""
    from utils.public_app_url import get_public_app_url

    with patch.dict(
        os.environ,
        {"FRONTEND_PUBLIC_URL": "", "PUBLIC_APP_URL": "", "FRONTEND_URL": ""},
        clear=False,
    ):
        url = get_public_app_url()
    assert url == "http://localhost:3000"


def test_build_review_link():
    from utils.public_app_url import build_review_link

    with patch.dict(os.environ, {"FRONTEND_PUBLIC_URL": "https://developeer.example.com"}, clear=False):
        link = build_review_link("FRM-ABC123ABC123")
    assert link == "https://developeer.example.com/review/FRM-ABC123ABC123"
