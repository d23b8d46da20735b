"""
Resume Document Structure

Defines the structured data representation of one resume. This structure is the
single source of truth shared by the form session, the theme renderer, the export
pipeline, and both persistence stores.

Serialized form (local storage and the remote API) uses these wire keys:

    {
      "meta": {"theme": "classic", "dark": false},
      "profile": {"name": ..., "title": ..., ...},
      "skills": [...],
      "experience": [{"role": ..., "bullets": [...]}, ...],
      "education": [{"school": ..., "details": ...}, ...],
      "projects": [{"name": ..., "tech": [...]}, ...]
    }
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, TypeVar

from resume_maker.contexts.editing.exceptions import DocumentFormatError

T = TypeVar("T")


class Theme(str, Enum):
    """Named layout variants applied to the same document."""

    CLASSIC = "classic"
    MODERN = "modern"

    @classmethod
    def coerce(cls, value: Any) -> "Theme":
        """
        Convert a theme name or Theme into a Theme.

        Raises:
            ValueError: If value names no known theme
        """
        if isinstance(value, cls):
            return value
        return cls(value)


@dataclass
class Meta:
    """
    Presentation metadata. Has no effect on the semantic content of the resume.

    Attributes:
        theme: Layout variant used by the preview and export
        dark: Dark palette for the preview surface
    """

    theme: Theme = Theme.CLASSIC
    dark: bool = False

    def clone(self) -> "Meta":
        return replace(self)


@dataclass
class Profile:
    """Header information. All fields are free text and may be empty."""

    name: str = ""
    title: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    website: str = ""
    summary: str = ""

    def clone(self) -> "Profile":
        return replace(self)


@dataclass
class Experience:
    """
    Work experience entry.

    Attributes:
        role: Job title
        company: Employer
        location: Free-text location
        start: Free-text start date (e.g., "2023")
        end: Free-text end date, including the literal "Present"
        bullets: Ordered accomplishments. Empty strings are valid here and are
            suppressed only at render time.
    """

    role: str = ""
    company: str = ""
    location: str = ""
    start: str = ""
    end: str = ""
    bullets: List[str] = field(default_factory=list)

    def clone(self) -> "Experience":
        return replace(self, bullets=list(self.bullets))


@dataclass
class Education:
    """Education entry. All fields are free text."""

    school: str = ""
    degree: str = ""
    start: str = ""
    end: str = ""
    details: str = ""

    def clone(self) -> "Education":
        return replace(self)


@dataclass
class Project:
    """
    Project entry.

    Attributes:
        name: Project name
        link: Optional URL, empty when absent
        description: Free-text description
        tech: Technology tags. None when absent from legacy data; read through
            tech_tags, never directly.
    """

    name: str = ""
    link: str = ""
    description: str = ""
    tech: Optional[List[str]] = None

    @property
    def tech_tags(self) -> List[str]:
        """Technology tags with absent data read as an empty list."""
        return list(self.tech) if self.tech else []

    def clone(self) -> "Project":
        return replace(self, tech=None if self.tech is None else list(self.tech))


@dataclass
class Document:
    """
    Complete resume document: one instance per editing session.

    Attributes:
        meta: Presentation metadata (theme, dark mode)
        profile: Header and summary
        skills: Ordered skill tags; duplicates permitted
        experience: Ordered work history
        education: Ordered education history
        projects: Ordered projects
    """

    meta: Meta = field(default_factory=Meta)
    profile: Profile = field(default_factory=Profile)
    skills: List[str] = field(default_factory=list)
    experience: List[Experience] = field(default_factory=list)
    education: List[Education] = field(default_factory=list)
    projects: List[Project] = field(default_factory=list)

    def clone(self) -> "Document":
        """Deep copy sharing no mutable structure with this document."""
        return Document(
            meta=self.meta.clone(),
            profile=self.profile.clone(),
            skills=list(self.skills),
            experience=[item.clone() for item in self.experience],
            education=[item.clone() for item in self.education],
            projects=[item.clone() for item in self.projects],
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize to plain JSON-compatible data using the wire keys.

        A project whose tech is None is written without a "tech" key so legacy
        documents round-trip unchanged.
        """
        projects = []
        for project in self.projects:
            entry = {
                "name": project.name,
                "link": project.link,
                "description": project.description,
            }
            if project.tech is not None:
                entry["tech"] = list(project.tech)
            projects.append(entry)

        return {
            "meta": {"theme": self.meta.theme.value, "dark": self.meta.dark},
            "profile": {
                "name": self.profile.name,
                "title": self.profile.title,
                "email": self.profile.email,
                "phone": self.profile.phone,
                "location": self.profile.location,
                "website": self.profile.website,
                "summary": self.profile.summary,
            },
            "skills": list(self.skills),
            "experience": [
                {
                    "role": item.role,
                    "company": item.company,
                    "location": item.location,
                    "start": item.start,
                    "end": item.end,
                    "bullets": list(item.bullets),
                }
                for item in self.experience
            ],
            "education": [
                {
                    "school": item.school,
                    "degree": item.degree,
                    "start": item.start,
                    "end": item.end,
                    "details": item.details,
                }
                for item in self.education
            ],
            "projects": projects,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Document":
        """
        Build a Document from serialized data.

        Tolerant of partial data: missing keys take empty defaults and an unknown
        theme falls back to classic.

        Raises:
            DocumentFormatError: If a present value has the wrong JSON shape
        """
        data = _mapping(data, "document")
        meta = _mapping(data.get("meta"), "meta")
        profile = _mapping(data.get("profile"), "profile")

        try:
            theme = Theme.coerce(meta.get("theme") or Theme.CLASSIC)
        except ValueError:
            theme = Theme.CLASSIC

        dark = meta.get("dark", False)
        if not isinstance(dark, bool):
            raise DocumentFormatError("Expected a boolean", "meta.dark")

        return cls(
            meta=Meta(theme=theme, dark=dark),
            profile=Profile(
                **{name: _string(profile, name, "profile") for name in _PROFILE_FIELDS}
            ),
            skills=_string_list(data.get("skills"), "skills"),
            experience=_records(data.get("experience"), "experience", _experience_from_dict),
            education=_records(data.get("education"), "education", _education_from_dict),
            projects=_records(data.get("projects"), "projects", _project_from_dict),
        )


_PROFILE_FIELDS = ("name", "title", "email", "phone", "location", "website", "summary")


def _mapping(value: Any, location: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise DocumentFormatError(f"Expected an object, got {type(value).__name__}", location)
    return value


def _string(data: Dict[str, Any], key: str, location: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DocumentFormatError(
            f"Expected a string, got {type(value).__name__}", f"{location}.{key}"
        )
    return value


def _string_list(value: Any, location: str) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise DocumentFormatError(f"Expected a list, got {type(value).__name__}", location)
    for i, item in enumerate(value):
        if not isinstance(item, str):
            raise DocumentFormatError(
                f"Expected a string, got {type(item).__name__}", f"{location}.{i}"
            )
    return list(value)


def _records(
    value: Any, location: str, build: Callable[[Dict[str, Any], str], T]
) -> List[T]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise DocumentFormatError(f"Expected a list, got {type(value).__name__}", location)
    return [
        build(_mapping(item, f"{location}.{i}"), f"{location}.{i}")
        for i, item in enumerate(value)
    ]


def _experience_from_dict(data: Dict[str, Any], location: str) -> Experience:
    return Experience(
        role=_string(data, "role", location),
        company=_string(data, "company", location),
        location=_string(data, "location", location),
        start=_string(data, "start", location),
        end=_string(data, "end", location),
        bullets=_string_list(data.get("bullets"), f"{location}.bullets"),
    )


def _education_from_dict(data: Dict[str, Any], location: str) -> Education:
    return Education(
        school=_string(data, "school", location),
        degree=_string(data, "degree", location),
        start=_string(data, "start", location),
        end=_string(data, "end", location),
        details=_string(data, "details", location),
    )


def _project_from_dict(data: Dict[str, Any], location: str) -> Project:
    tech = data.get("tech")
    return Project(
        name=_string(data, "name", location),
        link=_string(data, "link", location),
        description=_string(data, "description", location),
        tech=None if tech is None else _string_list(tech, f"{location}.tech"),
    )
