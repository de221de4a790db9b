"""
Draft Form State

The in-memory form the wizard edits. Autosave and explicit saves send the
whole form as one snapshot; nothing is diffed.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from hestia.shared.core.exceptions import ValidationError
from hestia.shared.models.enums import ContactChannel
from hestia.shared.schemas.artisan import DraftProfile, DraftUpdate

# Fields that count as "the user actually started" for save & exit
MEANINGFUL_FIELDS = ("display_name", "category", "bio", "location")


@dataclass
class DraftForm:
    """Editable form state, one attribute per wizard input."""

    display_name: str = ""
    category: str = ""
    bio: str = ""
    location: str = ""
    contact_channel: ContactChannel = ContactChannel.INSTAGRAM
    contact_value: str = ""
    email: str = ""
    phone: str = ""
    instagram: str = ""
    whatsapp_url: str = ""
    telegram: str = ""
    external_shop_url: str = ""
    accepting_orders: bool = False
    hours: Optional[dict[str, Any]] = None
    tags: list[str] = field(default_factory=list)

    @classmethod
    def from_profile(cls, draft: DraftProfile) -> "DraftForm":
        """Pre-populate the form from a stored draft (NULL → empty input)."""
        values = {}
        for f in fields(cls):
            value = getattr(draft, f.name)
            values[f.name] = "" if value is None and f.type is str else value
        values["tags"] = list(draft.tags)
        return cls(**values)

    def set_field(self, name: str, value: Any) -> None:
        """
        Set one input, checked against the same rules as a draft write.

        Raises:
            ValidationError: Unknown field name, or a value the draft would reject
        """
        if name not in self.field_names():
            raise ValidationError(f"Unknown form field '{name}'", details={"field": name})
        try:
            DraftUpdate.model_validate({name: value})
        except PydanticValidationError as e:
            reason = e.errors()[0]["msg"]
            raise ValidationError(
                f"Invalid value for '{name}': {reason}",
                details={"field": name, "reason": reason},
            ) from e
        if name == "contact_channel" and not isinstance(value, ContactChannel):
            value = ContactChannel(value)
        setattr(self, name, value)

    def has_meaningful_data(self) -> bool:
        return any(getattr(self, name).strip() for name in MEANINGFUL_FIELDS)

    def to_update(self) -> DraftUpdate:
        """Full snapshot as a DraftUpdate with every field present."""
        values = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, str) and not value.strip():
                value = None
            values[f.name] = value
        values["tags"] = list(self.tags)
        return DraftUpdate(**values)

    @classmethod
    def field_names(cls) -> set[str]:
        return {f.name for f in fields(cls)}
