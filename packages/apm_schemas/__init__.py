"""
Public schemas for the application directory.

Records are Pydantic v2 models validated once at load time and treated as
immutable afterwards.
"""

from .models import Contact, Lifecycle, Record, SOURCE_FIELDS, UserInterface, YesNo

__all__ = [
    "Contact",
    "Lifecycle",
    "Record",
    "SOURCE_FIELDS",
    "UserInterface",
    "YesNo",
]
