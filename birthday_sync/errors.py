"""Error kinds raised while authorizing and synchronizing."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .models import SyncResult


class ErrorKind(Enum):
    AUTH_FAILURE = "auth_failure"
    TRANSIENT_PROVIDER_ERROR = "transient_provider_error"
    MALFORMED_CONTACT = "malformed_contact"


class SyncError(Exception):
    """Base class; ``partial`` holds what the run changed before failing."""

    kind: ErrorKind

    def __init__(self, message: str, partial: Optional["SyncResult"] = None):
        super().__init__(message)
        self.partial = partial

    @property
    def calendar_modified(self) -> bool:
        return self.partial is not None and self.partial.mutation_count > 0


class AuthFailure(SyncError):
    """No usable credential; nothing was touched."""

    kind = ErrorKind.AUTH_FAILURE


class TransientProviderError(SyncError):
    """A remote call failed. Not retried."""

    kind = ErrorKind.TRANSIENT_PROVIDER_ERROR


class MalformedContact(SyncError):
    kind = ErrorKind.MALFORMED_CONTACT
