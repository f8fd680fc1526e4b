"""Error types raised by the data-access layer."""

from typing import Any, Iterable, List


class NorthwindError(Exception):
    """Base class for catalog errors."""


class NotFoundError(NorthwindError):
    """An operation referenced a record that does not exist."""

    def __init__(self, entity: str, key: Any):
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} {key!r} not found")


class IntegrityError(NorthwindError):
    """A write or delete would break a referential or uniqueness rule."""


class ValidationError(NorthwindError):
    """Scalar field constraints failed before reaching the store.

    Args:
        errors: Human readable messages, one per failed constraint
    """

    def __init__(self, errors: Iterable[str]):
        self.errors: List[str] = list(errors)
        super().__init__("; ".join(self.errors))


class StoreError(NorthwindError):
    """Unexpected failure talking to the store (connectivity, locking...)."""


class NotLoadedError(NorthwindError):
    """A detached entity was asked for a relationship its query did not load."""

    def __init__(self, entity: str, attribute: str):
        self.entity = entity
        self.attribute = attribute
        super().__init__(f"{entity}.{attribute} was not loaded; fetch it with a query that includes {attribute!r}")
