"""
Error taxonomy for the shop.

Input problems (``ValidationError``, ``ReferenceNotFoundError`` and
their subclasses) are recovered where they happen by asking for the
field again.  ``StoreError`` aborts the current operation and the menu
carries on.  ``StoreConnectionError`` is raised only at startup and is
fatal.
"""

from typing import Any


class ShopError(Exception):
    """Base class for all errors raised by the shop."""


class ValidationError(ShopError):
    """A field value failed its constraint."""

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(reason)


class DuplicateKeyError(ValidationError):
    """A caller-supplied key is already taken."""

    def __init__(self, entity: str, key: Any) -> None:
        self.entity = entity
        self.key = key
        super().__init__(entity, f"{entity} {key} already exists")


class ReferenceNotFoundError(ShopError):
    """An existence check found no row for the referenced key."""

    def __init__(self, entity: str, key: Any, reason: str | None = None) -> None:
        self.entity = entity
        self.key = key
        super().__init__(reason or f"{entity} {key} does not exist")


class RequestAlreadyClosedError(ReferenceNotFoundError):
    """The service request exists but already has a work order."""

    def __init__(self, rid: int) -> None:
        super().__init__("Service request", rid, f"Service request {rid} is already closed")


class StoreError(ShopError):
    """The data store rejected a statement."""


class StoreConnectionError(StoreError):
    """The data store could not be opened."""
