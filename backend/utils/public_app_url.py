"""
Canonical public frontend base URL for shareable review links.
Use build_review_link() for every link handed to reviewers. No other code should build frontend links directly.
"""
import os
import logging

logger = logging.getLogger(__name__)


def get_public_app_url() -> str:
    """
    Return normalized public frontend base URL (no trailing slash).
    Fallback order: FRONTEND_PUBLIC_URL, PUBLIC_APP_URL, FRONTEND_URL, then local dev default.

    Rules:
    - Result is stripped and trailing slash removed.
    - Non-localhost http URLs are upgraded to https.

    Returns:
        Base URL, e.g. https://app.example.com
    """
    raw = (
        (os.getenv("FRONTEND_PUBLIC_URL") or "").strip()
        or (os.getenv("PUBLIC_APP_URL") or "").strip()
        or (os.getenv("FRONTEND_URL") or "").strip()
        or ""
    )
    raw = raw.rstrip("/")
    if not raw:
        env = (os.getenv("ENVIRONMENT") or os.getenv("ENV") or "").strip().lower()
        if env in ("production", "prod"):
            logger.warning(
                "get_public_app_url: no public frontend URL configured; shareable links will point at localhost."
            )
        return "http://localhost:3000"
    if raw.startswith("http://") and "localhost" not in raw:
        raw = "https://" + raw.split("://", 1)[1]
    return raw


def build_review_link(form_id: str) -> str:
    """Link a reviewer can open to answer a form."""
    return f"{get_public_app_url()}/review/{form_id}"
