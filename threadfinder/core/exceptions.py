# threadfinder/core/exceptions.py

"""Exception classes shared across threadfinder."""


class ThreadfinderError(Exception):
    """Base exception for all threadfinder errors."""

    def __init__(self, message: str = "An unexpected error occurred"):
        self.message = message
        super().__init__(self.message)


class FetchError(ThreadfinderError):
    """Raised when an upstream store request fails.

    The message is what ends up in the per-store ``error`` field, so it
    stays short (``HTTP 404``, ``Connection timed out`` ...).
    """

    def __init__(self, store_id: str, message: str):
        self.store_id = store_id
        super().__init__(message)


class SearchValidationError(ThreadfinderError):
    """Raised when an inbound search request is malformed."""
