class StoreError(Exception):
    """Base class for errors returned by a message store."""


class NotFoundError(StoreError):
    """A user, group or message does not exist."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class AlreadyExistsError(StoreError):
    """A user or group id is already taken."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} already exists: {entity_id}")


class InvalidArgumentError(StoreError):
    """An argument is outside the accepted range, e.g. a non-positive page size."""
