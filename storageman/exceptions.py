"""
Exceptions for Storageman.

Every error is a StorageError with a structured code for programmatic
handling. Subclasses group the codes by kind so callers can map them to
responses without inspecting the code:

    NotFoundError      NotFound:<entity>     (client-correctable)
    ConflictError      Conflict:<reason>     (client-correctable)
    InvalidStateError  InvalidState:<reason> (client-correctable)
      InsufficientRemainingError   quantity > boxes left
        AlreadyClosedError         nothing left at all
    InternalError      Internal              (opaque, store failure)
"""

import functools
import logging
from decimal import Decimal
from typing import Any

from django.db import DatabaseError

logger = logging.getLogger('storageman')


class BaseError(Exception):
    """
    Exception carrying a code, a human-readable message and context data.

    Usage:
        raise StorageError('BOX_NOT_FOUND', box_id=42)
    """

    _default_messages: dict[str, str] = {}

    def __init__(self, code: str, message: str | None = None, **data: Any):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code!r}, {self.data!r})"


class StorageError(BaseError):
    """
    Structured exception for storage operations.

    Usage:
        try:
            inventory.checkout_box(storage_id, block_id, box_id, 10, actor=user)
        except StorageError as e:
            if e.code == 'INSUFFICIENT_REMAINING':
                print(f"Only {e.data['remaining']} left")

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable message
        data: Additional context data
    """

    kind_prefix = 'Error'

    _default_messages = {
        'STORAGE_NOT_FOUND': 'Storage does not exist',
        'BLOCK_NOT_FOUND': 'Storage block does not exist',
        'BOX_NOT_FOUND': 'Storage box does not exist',
        'PRODUCT_NOT_FOUND': 'Product does not exist',
        'USER_NOT_FOUND': 'User does not exist',
        'COUNTRY_NOT_FOUND': 'Invalid countries',
        'NAME_TAKEN': 'Storage with name already exists',
        'ALREADY_CLOSED': 'All the boxes are already checked out',
        'INSUFFICIENT_REMAINING': 'Cannot check out more boxes than the boxes available',
        'INVALID_QUANTITY': 'Quantity must be at least 1',
        'INTERNAL': 'Something went wrong',
    }

    @property
    def reason(self) -> str:
        """Code without the kind suffix, lower-cased (``BOX_NOT_FOUND`` -> ``box``)."""
        return self.code.lower()

    @property
    def kind(self) -> str:
        """Machine-readable failure kind, e.g. ``NotFound:product``."""
        return f"{self.kind_prefix}:{self.reason}"

    def as_dict(self) -> dict[str, Any]:
        """Serialize to dict (useful for APIs)."""
        return {
            'code': self.code,
            'kind': self.kind,
            'message': self.message,
            'data': {
                k: str(v) if isinstance(v, Decimal) else v
                for k, v in self.data.items()
            }
        }


class NotFoundError(StorageError):
    """A referenced entity does not exist or is soft-deleted."""

    kind_prefix = 'NotFound'

    @classmethod
    def for_entity(cls, entity: str, **data: Any) -> 'NotFoundError':
        return cls(f'{entity.upper()}_NOT_FOUND', **data)

    @property
    def entity(self) -> str:
        return self.code.removesuffix('_NOT_FOUND').lower()

    @property
    def reason(self) -> str:
        return self.entity


class ConflictError(StorageError):
    """The operation collides with existing data (duplicate name)."""

    kind_prefix = 'Conflict'


class InvalidStateError(StorageError):
    """The box cannot accept the requested checkout."""

    kind_prefix = 'InvalidState'

    @property
    def remaining(self) -> int | None:
        """Shortcut for data['remaining']."""
        return self.data.get('remaining')

    @property
    def requested(self) -> int | None:
        """Shortcut for data['requested']."""
        return self.data.get('requested')


class InsufficientRemainingError(InvalidStateError):
    """Requested quantity exceeds the boxes left to check out."""

    def __init__(self, code: str = 'INSUFFICIENT_REMAINING', message: str | None = None, **data: Any):
        super().__init__(code, message, **data)


class AlreadyClosedError(InsufficientRemainingError):
    """Every box was already checked out; nothing remains."""

    def __init__(self, message: str | None = None, **data: Any):
        super().__init__('ALREADY_CLOSED', message, **data)


class InternalError(StorageError):
    """The store failed (aborted transaction, lost connection)."""

    kind_prefix = 'Internal'

    def __init__(self, message: str | None = None, **data: Any):
        super().__init__('INTERNAL', message, **data)

    @property
    def kind(self) -> str:
        return self.kind_prefix


def translate_database_errors(func):
    """
    Re-raise store failures as InternalError.

    StorageError subclasses pass through untouched; any other
    ``DatabaseError`` (aborted transaction, lost connection) becomes an
    opaque InternalError chained to the original exception.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except DatabaseError as e:
            logger.exception("storage.internal_error", extra={"operation": func.__name__})
            raise InternalError() from e
    return wrapper
