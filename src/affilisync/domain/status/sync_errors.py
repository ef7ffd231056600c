"""Classify the error left behind by the last registry write attempt.

The rules run in a fixed order:

1) no error                                  -> ``NONE``
2) status code 404                           -> ``NOT_FOUND``
3) message contains ``invalid_scope``        -> ``INVALID_SCOPE``
4) anything else, including garbled payloads -> ``OTHER``

``NOT_FOUND`` wins over the scope marker when a payload carries both.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final, Protocol

from affilisync.domain.model import SyncErrorKind

if TYPE_CHECKING:
    from affilisync.domain.model import SyncError

NOT_FOUND_CODE: Final[int] = 404
INVALID_SCOPE_MARKER: Final[str] = "invalid_scope"


class ClassifySyncError(Protocol):
    def __call__(self, error: SyncError | None) -> SyncErrorKind: ...


def _coerce_code(value: object) -> int | None:
    # bool is an int subclass; a flag is not a status code
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.isascii() and stripped.isdigit():
            return int(stripped)
    return None


def classify_sync_error(error: SyncError | None) -> SyncErrorKind:
    """Return the failure category of ``error``; never raises."""

    if error is None:
        return SyncErrorKind.NONE
    if _coerce_code(getattr(error, "code", None)) == NOT_FOUND_CODE:
        return SyncErrorKind.NOT_FOUND
    message = getattr(error, "message", None)
    if isinstance(message, str) and INVALID_SCOPE_MARKER in message:
        return SyncErrorKind.INVALID_SCOPE
    return SyncErrorKind.OTHER
