"""Developeer Form Models

A form is an author-owned set of review questions for one project.
Question sets are versioned: editing the questions appends a new
FormVersion, existing versions are never touched.
"""

from pydantic import BaseModel, Field, StrictInt, ValidationError as PydanticValidationError
from typing import Any, Dict, List, Optional
from datetime import datetime

from developeer.errors import ValidationError
from developeer.models.common import CAMEL_CONFIG, new_id, utc_now
from developeer.validation import reject_disallowed_fields, validation_error_from_errors


class FormVersion(BaseModel):
    """Immutable, timestamped snapshot of a form's questions."""
    version_id: str = Field(default_factory=lambda: new_id("VER"))
    questions: List[str]
    created_at: datetime = Field(default_factory=utc_now)

    model_config = CAMEL_CONFIG


class Form(BaseModel):
    """Stored form record."""
    form_id: str = Field(default_factory=lambda: new_id("FRM"))
    author_id: str

    name: str
    project_url: str
    overview: str = ""
    shareable_url: Optional[str] = None

    # Outstanding review slots; may go negative
    pending_requests: int = 0

    created_at: datetime = Field(default_factory=utc_now)

    # Append-only, oldest first
    versions: List[FormVersion] = Field(min_length=1)

    model_config = CAMEL_CONFIG

    @property
    def latest_version(self) -> FormVersion:
        return self.versions[-1]

    def get_version(self, version_id: str) -> Optional[FormVersion]:
        return next((v for v in self.versions if v.version_id == version_id), None)


class FormCreate(BaseModel):
    """Request body for creating a form."""
    name: str
    project_url: str
    overview: str = ""
    questions: List[str]

    model_config = CAMEL_CONFIG


class FormUpdate(BaseModel):
    """Partial update. Only the fields present in the request are applied."""
    name: Optional[str] = None
    project_url: Optional[str] = None
    overview: Optional[str] = None
    pending_requests: Optional[StrictInt] = None
    questions: Optional[List[str]] = None

    model_config = CAMEL_CONFIG

    @classmethod
    def allowed_fields(cls) -> List[str]:
        return [field.alias or name for name, field in cls.model_fields.items()]

    @classmethod
    def from_patch(cls, body: Any) -> "FormUpdate":
        """Validate a raw PATCH body against the allow-list and field types."""
        if not isinstance(body, dict):
            raise ValidationError("Incorrect request body: expected object", location="body")

        reject_disallowed_fields(body, cls.allowed_fields())

        try:
            update = cls.model_validate(body)
        except PydanticValidationError as e:
            raise validation_error_from_errors(e.errors()) from e

        for name in update.model_fields_set:
            if getattr(update, name) is None:
                alias = cls.model_fields[name].alias or name
                raise ValidationError("field cannot be null", location=alias)

        return update

    def field_changes(self) -> Dict[str, Any]:
        """Fields set directly on the form ($set), keyed by stored name."""
        return self.model_dump(exclude_unset=True, exclude={"questions"})
