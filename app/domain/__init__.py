"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.enums import (
    ContentType,
    LostFoundStatus,
    LostFoundType,
    ResultType,
    SearchStatus,
)
from app.domain.exceptions import (
    CampusException,
    ResourceNotFoundException,
    StoreError,
    StoreNotConfiguredException,
    ValidationException,
)

__all__ = [
    # Enums
    "ContentType",
    "LostFoundStatus",
    "LostFoundType",
    "ResultType",
    "SearchStatus",
    # Exceptions
    "CampusException",
    "ResourceNotFoundException",
    "StoreError",
    "StoreNotConfiguredException",
    "ValidationException",
]
