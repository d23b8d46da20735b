"""
Editing Context

Responsibilities:
- Owns the resume document model and its defaults
- Applies copy-on-write mutations addressed by validated paths
- Describes the form's field bindings per tab
- Runs the editing session (EditorSession in editing/session.py) that ties
  mutations to persistence, preview and export

Owns: Document model, path addressing, session state
Never: Decides layout or talks HTTP directly
"""

from resume_maker.contexts.editing.defaults import (
    default_document,
    empty_education,
    empty_experience,
    empty_project,
)
from resume_maker.contexts.editing.document import (
    Document,
    Education,
    Experience,
    Meta,
    Profile,
    Project,
    Theme,
)
from resume_maker.contexts.editing.exceptions import (
    DocumentFormatError,
    DocumentPathError,
    InvalidPathError,
    InvalidValueError,
)
from resume_maker.contexts.editing.mutator import (
    FieldPath,
    add_array_item,
    read,
    remove_array_item,
    update,
)

__all__ = [
    # Data model
    "Document",
    "Meta",
    "Profile",
    "Experience",
    "Education",
    "Project",
    "Theme",
    # Defaults and new-entry factories
    "default_document",
    "empty_experience",
    "empty_education",
    "empty_project",
    # Path-addressed mutations
    "FieldPath",
    "read",
    "update",
    "add_array_item",
    "remove_array_item",
    # Errors
    "DocumentFormatError",
    "DocumentPathError",
    "InvalidPathError",
    "InvalidValueError",
]
