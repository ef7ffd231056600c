"""ORCID registry settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Final

from .errors import ConfigurationError

DEFAULT_ORCID_BASE_URL: Final[str] = "https://orcid.org"


@dataclass(frozen=True, slots=True)
class RegistryConfig:
    base_url: str = DEFAULT_ORCID_BASE_URL

    def profile_url(self, orcid_id: str | None) -> str | None:
        if not orcid_id:
            return None
        return f"{self.base_url.rstrip('/')}/{orcid_id}"


def get_registry_config() -> RegistryConfig:
    base_url = os.getenv("ORCID_BASE_URL")
    if base_url is None or not base_url.strip():
        return RegistryConfig()
    base_url = base_url.strip()
    if not base_url.startswith(("http://", "https://")):
        raise ConfigurationError(f"ORCID_BASE_URL must be an http(s) URL, got: {base_url}")
    return RegistryConfig(base_url=base_url)
