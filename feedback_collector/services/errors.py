"""
Exceptions raised by the persistence layer.
"""


class FeedbackStoreError(Exception):
    """Server-side failure while talking to the document store."""


class DatabaseConnectionError(FeedbackStoreError):
    """The store is not configured or could not be reached."""


class FeedbackValidationError(ValueError):
    """A record violated the write-time schema."""
