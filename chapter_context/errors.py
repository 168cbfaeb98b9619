# chapter_context/errors.py
"""Errors raised by context assembly."""

from __future__ import annotations

from typing import Any


class ContextAssemblyError(Exception):
    """Base class for errors raised while assembling context."""

    status_code: int = 500
    code: str = "CONTEXT_ERROR"

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.context = context

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error for API responses."""
        data: dict[str, Any] = {"code": self.code, "message": str(self)}
        if self.context:
            data["context"] = self.context
        return data


class EntityNotFoundError(ContextAssemblyError):
    """The requested entity does not exist."""

    status_code = 404
    code = "NOT_FOUND"

    def __init__(self, entity_type: str, entity_id: str | int) -> None:
        super().__init__(
            f"{entity_type} {entity_id} not found",
            {"entity_type": entity_type, "entity_id": entity_id},
        )
        self.entity_type = entity_type
        self.entity_id = entity_id
