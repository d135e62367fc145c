"""Exception types shared across the routine builder."""

from __future__ import annotations

from typing import Any, Optional


class RoutineBuilderError(Exception):
    """Base class for all routine builder errors."""


class PayloadError(RoutineBuilderError, ValueError):
    def __init__(self, message: str, *, payload: Optional[Any] = None) -> None:
        super().__init__(message)
        self.payload = payload


class CatalogPayloadError(PayloadError):
    """Catalog source returned something that is not a usable catalog."""


class SelectionDeserializationError(PayloadError):
    """Persisted selection state could not be parsed."""


class RelayResponseError(PayloadError):
    """Relay response body lacks a usable reply."""


class UnknownProductError(RoutineBuilderError, KeyError):
    def __init__(self, product_id: Any) -> None:
        super().__init__(product_id)
        self.product_id = product_id

    def __str__(self) -> str:
        return f"Unknown product id: {self.product_id!r}"


class SessionNotFoundError(RoutineBuilderError, KeyError):
    def __init__(self, session_id: str) -> None:
        super().__init__(session_id)
        self.session_id = session_id

    def __str__(self) -> str:
        return f"Session not found: {self.session_id}"
