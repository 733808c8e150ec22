"""BLF Core - Shared protocol constants and record types."""
from .records import (
    AppText,
    CanMessage,
    FileHeader,
    LogContainer,
    ObjectHeader,
    ObjectRecord,
    Opaque,
    PaddedOpaque,
)

__all__ = [
    "AppText",
    "CanMessage",
    "FileHeader",
    "LogContainer",
    "ObjectHeader",
    "ObjectRecord",
    "Opaque",
    "PaddedOpaque",
]
