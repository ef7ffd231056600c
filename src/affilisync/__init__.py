from __future__ import annotations

from importlib import metadata

from affilisync.domain.model import AssertionStatus
from affilisync.domain.status import classify_assertion_status

try:
    __version__ = metadata.version("affilisync")
except metadata.PackageNotFoundError:
    __version__ = "0.0.0+local"

__all__ = ["AssertionStatus", "classify_assertion_status"]
