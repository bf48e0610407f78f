"""Errors raised by the event and registration stores."""


class StoreError(Exception):
    """Base exception for store-related errors."""
    pass

class NotFoundError(StoreError):
    """Raised when a record with the given id does not exist."""

    def __init__(self, kind: str, record_id: str):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} '{record_id}' not found")

class ValidationError(StoreError):
    """Raised when input fields are malformed."""
    pass

class LoadFailure(StoreError):
    """Raised when the underlying backend could not be read or written."""
    pass
