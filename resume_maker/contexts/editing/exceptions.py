"""Custom exceptions for the editing context with path references."""

from typing import Any, Optional


class DocumentFormatError(ValueError):
    """
    Exception raised when serialized resume data does not match the document schema.

    Raised by Document.from_dict() for values of the wrong JSON shape
    (e.g., a string where a list of bullets is expected).

    Attributes:
        message: Error description
        location: Dotted location of the offending value (e.g., 'experience.0.bullets')
    """

    def __init__(self, message: str, location: Optional[str] = None):
        self.message = message
        self.location = location

        if location:
            message = f"{message} (at '{location}')"

        super().__init__(message)


class DocumentPathError(ValueError):
    """
    Base exception for path-addressed mutations that cannot be applied.

    These are programming-contract violations: the document passed in is never
    modified when one is raised.

    Attributes:
        message: Error description
        path: The path that failed to resolve
    """

    def __init__(self, message: str, path: Optional[str] = None):
        self.message = message
        self.path = path

        parts = [message]
        if path is not None:
            parts.append(f"Path: '{path}'")

        super().__init__("\n".join(parts))


class InvalidPathError(DocumentPathError):
    """Raised when a path does not resolve to an existing container of the expected shape."""

    pass


class InvalidValueError(DocumentPathError):
    """
    Raised when a value does not match the declared type of the addressed field.

    Attributes:
        value: The rejected value
    """

    def __init__(self, message: str, path: Optional[str] = None, value: Any = None):
        self.value = value
        super().__init__(f"{message} (got {type(value).__name__}: {value!r})", path=path)
