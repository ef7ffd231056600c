"""Domain ports."""

from __future__ import annotations

from .persistence import AccessGrantRepository, AssertionRepository, Repository
from .unit_of_work import (
    AssertionRepositories,
    AssertionUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "AccessGrantRepository",
    "AssertionRepositories",
    "AssertionRepository",
    "AssertionUnitOfWork",
    "Repository",
    "RepositoryCollection",
    "UnitOfWork",
]
