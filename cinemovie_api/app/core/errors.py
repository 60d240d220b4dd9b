"""
Error types raised by the service layer.

Services raise these at the point of detection and never handle them
locally.  They subclass ``ValueError`` so callers that only care
about "bad request data" can catch them together; ``main.create_app``
maps each kind onto an HTTP status code.
"""


class ServiceError(ValueError):
    """Base class for errors reported by services."""


class NotFoundError(ServiceError):
    """A referenced entity does not exist."""

    def __init__(self, entity: str, entity_id) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} with id {entity_id} is not found")


class ConflictError(ServiceError):
    """A create or update would violate a uniqueness constraint."""


class InvalidInputError(ServiceError):
    """Input data is outside the accepted range."""
