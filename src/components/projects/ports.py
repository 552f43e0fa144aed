"""
Projects component port definitions.
"""

from __future__ import annotations

from typing import Protocol

from src.ports.repo import ProjectRepoPort


class VisitCleanupPort(Protocol):
    """Removes the visit log of a deleted project."""

    def delete_by_project(self, project_id: str) -> int:
        """Delete all visits of one project; returns the number removed."""
        ...


__all__ = ["ProjectRepoPort", "VisitCleanupPort"]
