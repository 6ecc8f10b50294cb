"""Error taxonomy for the tracker core."""


class TrackerError(Exception):
    """Base class for tracker errors."""


class PreconditionViolation(TrackerError, ValueError):
    """Raised when an input breaks a documented precondition."""


class OrphanedReference(TrackerError):
    """A meal item points at a product that no longer exists."""

    def __init__(self, item_id: int, product_id: int) -> None:
        super().__init__(f"Meal item {item_id} references missing product {product_id}")
        self.item_id = item_id
        self.product_id = product_id


class NotFound(TrackerError, LookupError):
    """An explicitly requested row does not exist or is not owned by the caller."""

    def __init__(self, entity: str, entity_id: object) -> None:
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class StorageFailure(TrackerError, RuntimeError):
    """The storage backend did not complete a write."""
