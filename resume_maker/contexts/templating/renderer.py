"""
Theme Renderer

Pure mapping from (Document, theme) to a layout tree. No mutation, no I/O: the
same input always yields an equal tree.

Themes:
- classic: single column, centered header, sections Summary, Skills,
  Experience, Projects, Education, each heading separated by a rule
- modern: header split into name/title (left) and contact (right), then an
  aside (Summary, Skills) beside a wider main column (Experience, Projects,
  Education)

Both themes render every list in stored order, drop empty bullets, skills and
tech tags, and omit empty leaves (no link node without a link, no details node
without details).
"""

from typing import Callable, Dict, Iterable, Optional, Union

from resume_maker.contexts.editing.document import (
    Document,
    Education,
    Experience,
    Project,
    Theme,
)
from resume_maker.contexts.templating.exceptions import UnknownThemeError
from resume_maker.contexts.templating.layout import LayoutNode, node

CONTACT_SEPARATOR = " • "
HEADING_SEPARATOR = " — "
DATE_SEPARATOR = " – "


def _joined(parts: Iterable[str], separator: str) -> str:
    return separator.join(part for part in parts if part)


def _text(tag: str, classes: str, text: str) -> Optional[LayoutNode]:
    """Leaf node, or None when text is empty."""
    return node(tag, classes, text) if text else None


def _badges(items: Iterable[str], classes: str) -> LayoutNode:
    return node("div", "badges", children=[node("span", classes, item) for item in items if item])


def _section(name: str, heading_classes: str, *children: Optional[LayoutNode]) -> LayoutNode:
    return node(
        "section",
        f"section section-{name.lower()}",
        children=[node("h2", heading_classes, name), *children],
    )


def _bullets(item: Experience) -> Optional[LayoutNode]:
    # Empty bullets stay in the document and are only hidden here
    items = [node("li", "bullet", bullet) for bullet in item.bullets if bullet]
    return node("ul", "bullets", children=items) if items else None


def _experience_entry(item: Experience, classes: str) -> LayoutNode:
    return node(
        "div",
        classes,
        children=[
            node(
                "div",
                "entry-header",
                children=[
                    _text("div", "entry-title", _joined([item.role, item.company], HEADING_SEPARATOR)),
                    _text("div", "entry-dates", _joined([item.start, item.end], DATE_SEPARATOR)),
                ],
            ),
            _text("div", "entry-location", item.location),
            _bullets(item),
        ],
    )


def _link(project: Project, classes: str) -> Optional[LayoutNode]:
    if not project.link:
        return None
    return node("a", classes, project.link, href=project.link, target="_blank", rel="noreferrer")


def _tech(project: Project) -> Optional[LayoutNode]:
    tags = [tag for tag in project.tech_tags if tag]
    return _badges(tags, "badge badge-outline tech") if tags else None


def _education_entry(item: Education, classes: str) -> LayoutNode:
    return node(
        "div",
        classes,
        children=[
            node(
                "div",
                "entry-header",
                children=[
                    _text("div", "entry-title", _joined([item.degree, item.school], HEADING_SEPARATOR)),
                    _text("div", "entry-dates", _joined([item.start, item.end], DATE_SEPARATOR)),
                ],
            ),
            _text("div", "details", item.details),
        ],
    )


# Classic


def _render_classic(document: Document) -> LayoutNode:
    profile = document.profile
    heading = "section-heading rule"

    header = node(
        "header",
        "header header-centered",
        children=[
            _text("h1", "name", profile.name),
            _text("p", "title", profile.title),
            _text(
                "p",
                "contact",
                _joined([profile.email, profile.phone, profile.location], CONTACT_SEPARATOR),
            ),
            _text("p", "website", profile.website),
        ],
    )

    projects = [
        node(
            "div",
            "entry project-entry",
            children=[
                node(
                    "div",
                    "entry-header",
                    children=[
                        node(
                            "div",
                            "entry-title",
                            project.name,
                            children=[_link(project, "link")],
                        )
                    ],
                ),
                _text("p", "description", project.description),
                _tech(project),
            ],
        )
        for project in document.projects
    ]

    return node(
        "div",
        "resume theme-classic",
        children=[
            header,
            _section("Summary", heading, _text("p", "summary", profile.summary)),
            _section("Skills", heading, _badges(document.skills, "badge badge-outline skill")),
            _section(
                "Experience",
                heading,
                node(
                    "div",
                    "entries",
                    children=[
                        _experience_entry(item, "entry experience-entry")
                        for item in document.experience
                    ],
                ),
            ),
            _section("Projects", heading, node("div", "entries", children=projects)),
            _section(
                "Education",
                heading,
                node(
                    "div",
                    "entries",
                    children=[
                        _education_entry(item, "entry education-entry")
                        for item in document.education
                    ],
                ),
            ),
        ],
    )


# Modern


def _render_modern(document: Document) -> LayoutNode:
    profile = document.profile
    heading = "section-heading"

    header = node(
        "header",
        "header header-split",
        children=[
            node(
                "div",
                "identity",
                children=[_text("h1", "name", profile.name), _text("p", "title", profile.title)],
            ),
            node(
                "div",
                "contact-block align-right",
                children=[
                    _text("div", "contact", value)
                    for value in (profile.email, profile.phone, profile.location)
                ]
                + [_text("div", "website", profile.website)],
            ),
        ],
    )

    projects = [
        node(
            "div",
            "entry project-entry card-outline",
            children=[
                node(
                    "div",
                    "entry-header",
                    children=[_text("div", "entry-title", project.name), _link(project, "link")],
                ),
                _text("p", "description", project.description),
                _tech(project),
            ],
        )
        for project in document.projects
    ]

    aside = node(
        "aside",
        "column column-aside",
        children=[
            _section("Summary", heading, _text("p", "summary", profile.summary)),
            _section("Skills", heading, _badges(document.skills, "badge badge-solid skill")),
        ],
    )

    main = node(
        "main",
        "column column-main",
        children=[
            _section(
                "Experience",
                heading,
                node(
                    "div",
                    "entries",
                    children=[
                        _experience_entry(item, "entry experience-entry card")
                        for item in document.experience
                    ],
                ),
            ),
            _section("Projects", heading, node("div", "entries", children=projects)),
            _section(
                "Education",
                heading,
                node(
                    "div",
                    "entries",
                    children=[
                        _education_entry(item, "entry education-entry")
                        for item in document.education
                    ],
                ),
            ),
        ],
    )

    return node(
        "div",
        "resume theme-modern",
        children=[header, node("div", "columns", children=[aside, main])],
    )


def resolve_theme(theme: Union[Theme, str]) -> Theme:
    """Convert a theme name into a Theme, raising UnknownThemeError if unknown."""
    try:
        return Theme.coerce(theme)
    except ValueError:
        raise UnknownThemeError(str(theme), [t.value for t in Theme]) from None


THEME_RENDERERS: Dict[Theme, Callable[[Document], LayoutNode]] = {
    Theme.CLASSIC: _render_classic,
    Theme.MODERN: _render_modern,
}


def render(document: Document, theme: Union[Theme, str]) -> LayoutNode:
    """
    Render a document with the given theme.

    Args:
        document: Document to render (not modified)
        theme: Theme or theme name ("classic", "modern")

    Returns:
        Root LayoutNode of the rendered resume

    Raises:
        UnknownThemeError: If theme names no known layout
    """
    return THEME_RENDERERS[resolve_theme(theme)](document)


def render_document(document: Document) -> LayoutNode:
    """Render a document with its own selected theme."""
    return render(document, document.meta.theme)
