"""
Form field bindings.

Describes which document fields each editor tab exposes, with the labels the
form shows. The session uses the same paths for its mutations, so the form and
the preview always read and write one document.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List

from resume_maker.contexts.editing.defaults import (
    empty_education,
    empty_experience,
    empty_project,
)
from resume_maker.contexts.editing.document import Document
from resume_maker.contexts.editing.mutator import (
    FieldPath,
    education_field,
    experience_bullet,
    experience_field,
    profile_field,
    project_field,
)


class Tab(str, Enum):
    """Editor tabs. PREVIEW shows the rendered resume only."""

    PROFILE = "profile"
    EXPERIENCE = "experience"
    PROJECTS = "projects"
    PREVIEW = "preview"


@dataclass(frozen=True)
class FieldBinding:
    """
    One editable form field.

    Attributes:
        label: Label or placeholder shown by the form
        path: Document path the field reads and writes
        value: Current value
        multiline: Rendered as a text area
    """

    label: str
    path: FieldPath
    value: str
    multiline: bool = False


# New-entry factories for the list sections the form can add to
SECTION_FACTORIES: Dict[str, Callable] = {
    "experience": empty_experience,
    "education": empty_education,
    "projects": empty_project,
}

PROFILE_FIELDS = [
    ("Full Name", "name"),
    ("Title", "title"),
    ("Phone", "phone"),
    ("Email", "email"),
    ("Location", "location"),
    ("Website", "website"),
]

EXPERIENCE_FIELDS = [
    ("Role", "role"),
    ("Company", "company"),
    ("Location", "location"),
    ("Start (e.g., 2023)", "start"),
    ("End (e.g., Present)", "end"),
]

EDUCATION_FIELDS = [
    ("School", "school"),
    ("Degree", "degree"),
    ("Start", "start"),
    ("End", "end"),
]


def fields_for_tab(document: Document, tab: Tab) -> List[FieldBinding]:
    """
    List the field bindings of one editor tab in display order.

    The projects tab also carries the education editor, as in the form layout.
    The preview tab has no fields.
    """
    tab = Tab(tab)
    bindings: List[FieldBinding] = []

    if tab is Tab.PROFILE:
        profile = document.profile
        for label, name in PROFILE_FIELDS:
            bindings.append(FieldBinding(label, profile_field(name), getattr(profile, name)))
        bindings.append(
            FieldBinding("Summary", profile_field("summary"), profile.summary, multiline=True)
        )

    elif tab is Tab.EXPERIENCE:
        for i, item in enumerate(document.experience):
            for label, name in EXPERIENCE_FIELDS:
                bindings.append(
                    FieldBinding(label, experience_field(i, name), getattr(item, name))
                )
            for j, bullet in enumerate(item.bullets):
                bindings.append(FieldBinding(f"Bullet {j + 1}", experience_bullet(i, j), bullet))

    elif tab is Tab.PROJECTS:
        for i, project in enumerate(document.projects):
            bindings.append(FieldBinding("Name", project_field(i, "name"), project.name))
            bindings.append(FieldBinding("Link", project_field(i, "link"), project.link))
            bindings.append(
                FieldBinding(
                    "Description",
                    project_field(i, "description"),
                    project.description,
                    multiline=True,
                )
            )
        for i, item in enumerate(document.education):
            for label, name in EDUCATION_FIELDS:
                bindings.append(FieldBinding(label, education_field(i, name), getattr(item, name)))
            bindings.append(
                FieldBinding(
                    "Details (GPA, coursework, etc.)",
                    education_field(i, "details"),
                    item.details,
                    multiline=True,
                )
            )

    return bindings
