"""
Storageman configuration.

Usage in settings.py:
    STORAGEMAN = {
        "BLOCK_INSERT_BATCH_SIZE": 6,
        "ACTIVITY_PAGE_SIZE": 20,
    }
"""

from dataclasses import dataclass
from typing import Any

from django.conf import settings


@dataclass
class StorageSettings:
    """Storageman configuration settings."""

    # Rows per INSERT when generating the blocks of a new storage
    BLOCK_INSERT_BATCH_SIZE: int = 6

    # Activity log entries returned per page
    ACTIVITY_PAGE_SIZE: int = 20


def get_storageman_settings() -> StorageSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "STORAGEMAN", {})
    return StorageSettings(**{
        k: v for k, v in user_settings.items()
        if k in StorageSettings.__dataclass_fields__
    })


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_storageman_settings(), name)


storageman_settings = _LazySettings()
