from datetime import datetime, timezone
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.const import MAX_TEMPLATE_CONTENT_LENGTH, MAX_TEMPLATE_NAME_LENGTH


class Template(BaseModel):
    """
    A clinician-authored note template.

    Mirrors the record held by the template persistence backend. The cache
    treats it as an opaque payload apart from ``id``, ``name`` and
    ``created_at``.
    """

    id: str = Field(..., min_length=1, description="Opaque template identifier assigned by the backend")
    name: str = Field(..., min_length=1, max_length=MAX_TEMPLATE_NAME_LENGTH, description="Display name")
    content: str = Field(default="", max_length=MAX_TEMPLATE_CONTENT_LENGTH, description="Template body")
    created_at: datetime = Field(..., description="Creation instant, used for newest-first ordering")
    user_id: str = Field(..., min_length=1, description="Owner of the template")

    model_config = ConfigDict(validate_assignment=True)

    @field_validator("created_at")
    @classmethod
    def _ensure_timezone(cls, value: datetime) -> datetime:
        # Naive datetimes are stored by the backend in UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def created_at_ms(self) -> int:
        """Creation instant as epoch milliseconds."""
        return int(self.created_at.timestamp() * 1000)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the Template to a JSON-compatible dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Template":
        """Create a Template from a dictionary, validating every field."""
        return cls.model_validate(data)
