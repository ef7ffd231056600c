"""ORCID registry adapter: payload schemas and translation into the domain."""

from __future__ import annotations

from .schema import RegistryErrorPayload
from .translator import RawSyncError, dump_sync_error, parse_sync_error

__all__ = [
    "RawSyncError",
    "RegistryErrorPayload",
    "dump_sync_error",
    "parse_sync_error",
]
