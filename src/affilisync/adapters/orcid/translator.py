"""Translate stored registry error payloads into domain ``SyncError`` values."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import cast

from pydantic import ValidationError

from affilisync.adapters.orcid.schema import RegistryErrorPayload
from affilisync.domain.model import SyncError

log = logging.getLogger(__name__)

type RawSyncError = SyncError | Mapping[str, object] | str | bytes | None


def _malformed(raw: str, reason: str) -> SyncError:
    log.warning("Unparseable registry error payload (%s): %.200s", reason, raw)
    return SyncError(raw=raw)


def parse_sync_error(payload: RawSyncError) -> SyncError | None:
    """Parse a stored registry error; never raises.

    Blank payloads mean "no error". Payloads that cannot be parsed become a
    ``SyncError`` without code or message, which classifies as a generic failure.
    """

    if payload is None or isinstance(payload, SyncError):
        return payload

    if isinstance(payload, Mapping):
        mapping = cast(Mapping[str, object], payload)
        try:
            raw = json.dumps(dict(mapping), default=str, sort_keys=True)
        except (ValueError, RecursionError):
            raw = repr(dict(mapping))
        document: object = mapping
    else:
        raw = payload.decode("utf-8", errors="replace") if isinstance(payload, bytes) else payload
        if not raw.strip():
            return None
        try:
            document = json.loads(raw)
        except (ValueError, RecursionError) as exc:
            # JSONDecodeError, oversized integer literals and runaway nesting
            return _malformed(raw, str(exc))

    if not isinstance(document, Mapping):
        return _malformed(raw, "not a JSON object")
    try:
        model = RegistryErrorPayload.model_validate(document)
    except ValidationError as exc:
        return _malformed(raw, f"{exc.error_count()} validation error(s)")
    return SyncError(code=model.status_code, message=model.error, raw=raw)


def dump_sync_error(error: SyncError | None) -> str | None:
    """Render ``error`` in the stored payload shape, reusing the raw text if present."""

    if error is None:
        return None
    if error.raw is not None:
        return error.raw
    payload = RegistryErrorPayload(status_code=error.code, error=error.message)
    return payload.model_dump_json(by_alias=True)
