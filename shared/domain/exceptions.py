"""
Domain Exceptions

- DomainError: base class for errors raised by the rental core
- NotFoundError: a referenced record does not exist in the store
- InvalidStatusTransition: a booking status change the lifecycle forbids
"""


class DomainError(Exception):
    """Base class for rental domain errors"""


class NotFoundError(DomainError, LookupError):
    """Raised when an operation references an unknown record id."""

    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class InvalidStatusTransition(DomainError, ValueError):
    """Raised when a booking cannot move from its current status."""

    def __init__(self, current, target):
        self.current = current
        self.target = target
        super().__init__(
            f"Cannot change booking status from {getattr(current, 'value', current)} "
            f"to {getattr(target, 'value', target)}"
        )
