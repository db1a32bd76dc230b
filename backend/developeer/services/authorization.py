"""Authorization guard: the authenticated principal must be the form's author.

Pure comparison, no I/O. Callers load the form first.
"""

from typing import Any, Optional

from developeer.errors import Unauthorized


def normalize_id(value: Any) -> str:
    return str(value).strip() if value is not None else ""


def is_author(principal_id: Any, author_id: Any) -> bool:
    principal = normalize_id(principal_id)
    return bool(principal) and principal == normalize_id(author_id)


def ensure_author(
    principal_id: Any,
    author_id: Any,
    resource: Optional[str] = None,
) -> None:
    """Raise Unauthorized unless principal_id and author_id match."""
    if is_author(principal_id, author_id):
        return

    principal = normalize_id(principal_id)
    author = normalize_id(author_id)
    target = f" of {resource}" if resource else ""
    raise Unauthorized(
        f"User {principal or '(anonymous)'} is not the author{target} (author is {author})",
        principal_id=principal,
        owner_id=author,
    )
