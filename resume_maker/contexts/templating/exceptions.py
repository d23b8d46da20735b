"""Custom exceptions for templating context with template references."""

from pathlib import Path
from typing import List, Optional


class UnknownThemeError(ValueError):
    """
    Exception raised when a theme name matches no known layout.

    Attributes:
        theme: The requested theme name
        available: Theme names that would have been accepted
    """

    def __init__(self, theme: str, available: Optional[List[str]] = None):
        self.theme = theme
        self.available = available or []

        message = f"Unknown theme '{theme}'"
        if self.available:
            message += f" (available: {', '.join(self.available)})"

        super().__init__(message)


class TemplateRenderError(Exception):
    """
    Exception raised when template rendering fails.

    Attributes:
        message: Error description
        template_name: Name of the template being rendered
        template_path: Path to the template file
        original_error: The original Jinja2 error
    """

    def __init__(
        self,
        message: str,
        template_name: Optional[str] = None,
        template_path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.template_name = template_name
        self.template_path = template_path
        self.original_error = original_error

        # Build enhanced error message
        parts = [message]

        if template_name and template_path:
            parts.append(f"\nTemplate: {template_path}")
            parts.append(f"Name: {template_name}")

        if original_error:
            parts.append(f"\nOriginal error: {str(original_error)}")

        super().__init__("\n".join(parts))
