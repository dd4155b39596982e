from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

__all__ = [
    "DirectoryEnum",
    "Lifecycle",
    "UserInterface",
    "YesNo",
    "Contact",
    "Record",
    "SOURCE_FIELDS",
    "as_text",
]


class DirectoryEnum(str, Enum):
    """Base class for the enumerated record columns."""

    @classmethod
    def values(cls) -> tuple[str, ...]:
        return tuple(item.value for item in cls)


class Lifecycle(DirectoryEnum):
    PRODUCTION = "Production"
    DEVELOPMENT = "Development"
    TESTING = "Testing"


class UserInterface(DirectoryEnum):
    EXTERNAL = "Externally Facing"
    INTERNAL = "Internally Facing"


class YesNo(DirectoryEnum):
    YES = "Yes"
    NO = "No"


# Source keys in the order the converters emit them.
SOURCE_FIELDS: Tuple[str, ...] = (
    "apm_application_code",
    "application_name",
    "application_description",
    "application_lifecycle",
    "critical_information_asset",
    "application_security_release_assessment_required",
    "application_contact",
    "application_contact_email",
    "application_contact_title",
    "it_manager",
    "itmanageremail",
    "it_manager_title",
    "it_vp",
    "itvpemail",
    "it_vp_title",
    "user_interface",
    "isusapp",
)

# attribute -> (name key, title key, email key)
_CONTACT_KEYS: Dict[str, Tuple[str, str, str]] = {
    "owner": ("application_contact", "application_contact_title", "application_contact_email"),
    "it_manager": ("it_manager", "it_manager_title", "itmanageremail"),
    "it_vp": ("it_vp", "it_vp_title", "itvpemail"),
}


def as_text(value: Any) -> str:
    """Render a raw cell value as the string stored on a record.

    Spreadsheet sources hand over numbers and booleans; ``12.0`` becomes
    ``"12"`` and booleans map onto the ``Yes``/``No`` flag literals.
    """

    if value is None:
        return ""
    if isinstance(value, bool):
        return YesNo.YES.value if value else YesNo.NO.value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


class Contact(BaseModel):
    """Person attached to an application (owner, IT manager, IT VP)."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    title: str = ""
    email: str = ""

    @field_validator("name", "title", "email", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return as_text(value)


class Record(BaseModel):
    """One application row of the directory.

    Attributes are addressed by short names; the dataset's column names are
    accepted as aliases so JSON rows validate directly.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    code: str = Field(alias="apm_application_code")
    name: str = Field(default="", alias="application_name")
    description: str = Field(default="", alias="application_description")
    lifecycle: str = Field(default="", alias="application_lifecycle")
    critical_information_asset: str = Field(default="", alias="critical_information_asset")
    security_assessment_required: str = Field(
        default="", alias="application_security_release_assessment_required"
    )
    user_interface: str = Field(default="", alias="user_interface")
    is_us_app: str = Field(default="", alias="isusapp")
    owner: Contact = Field(default_factory=Contact)
    it_manager: Contact = Field(default_factory=Contact)
    it_vp: Contact = Field(default_factory=Contact)

    @model_validator(mode="before")
    @classmethod
    def _fold_contacts(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        folded = dict(data)
        for attr, (name_key, title_key, email_key) in _CONTACT_KEYS.items():
            current = folded.get(attr)
            if isinstance(current, (Contact, Mapping)):
                continue
            folded[attr] = {
                "name": folded.pop(name_key, None),
                "title": folded.pop(title_key, None),
                "email": folded.pop(email_key, None),
            }
        return folded

    @field_validator(
        "code",
        "name",
        "description",
        "lifecycle",
        "critical_information_asset",
        "security_assessment_required",
        "user_interface",
        "is_us_app",
        mode="before",
    )
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return as_text(value)

    @field_validator("code")
    @classmethod
    def _code_not_blank(cls, value: str) -> str:
        if not value:
            raise ValueError("apm_application_code must not be blank")
        return value

    @property
    def is_critical_information_asset(self) -> bool:
        return self.critical_information_asset == YesNo.YES.value

    @property
    def requires_security_assessment(self) -> bool:
        return self.security_assessment_required == YesNo.YES.value

    @property
    def is_externally_facing(self) -> bool:
        return self.user_interface == UserInterface.EXTERNAL.value

    def to_source(self) -> Dict[str, str]:
        """Return the flat row keyed by dataset column names."""

        row = {
            "apm_application_code": self.code,
            "application_name": self.name,
            "application_description": self.description,
            "application_lifecycle": self.lifecycle,
            "critical_information_asset": self.critical_information_asset,
            "application_security_release_assessment_required": self.security_assessment_required,
            "user_interface": self.user_interface,
            "isusapp": self.is_us_app,
        }
        for attr, (name_key, title_key, email_key) in _CONTACT_KEYS.items():
            contact: Contact = getattr(self, attr)
            row[name_key] = contact.name
            row[title_key] = contact.title
            row[email_key] = contact.email
        return {key: row[key] for key in SOURCE_FIELDS}
