"""Error captured from the last failed registry write."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class SyncError:
    """Structured registry failure.

    ``code`` and ``message`` are ``None`` when the stored payload could not be parsed;
    ``raw`` keeps the payload text as it was stored.
    """

    code: int | None = None
    message: str | None = None
    raw: str | None = None
