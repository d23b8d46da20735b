"""Custom exceptions for the persistence context."""

from typing import Optional


class RemoteSaveError(Exception):
    """
    Exception raised when publishing a resume to the remote store fails.

    This is the only persistence failure shown to the user; local storage and
    remote load failures are recovered silently.

    Attributes:
        message: User-facing message (server-provided error or generic fallback)
        status_code: HTTP status of the response, None for transport failures
        original_error: The underlying transport or decoding error, if any
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.original_error = original_error
        super().__init__(message)


class SaveInProgressError(RuntimeError):
    """Raised when a save is requested while another save has not yet resolved."""

    pass
