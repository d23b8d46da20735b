"""
Mounted surface.

Turns a document's layout tree into a self-contained HTML page at the fixed
export size (A4 at 96 dpi). The export pipeline captures exactly this page.
"""

from dataclasses import dataclass
from typing import Optional, Union

from jinja2 import TemplateError

from resume_maker.contexts.editing.document import Document, Theme
from resume_maker.contexts.templating.exceptions import TemplateRenderError
from resume_maker.contexts.templating.layout import LayoutNode
from resume_maker.contexts.templating.logger import log_surface_rendered
from resume_maker.contexts.templating.registries import TemplateRegistry, ThemeStyleRegistry
from resume_maker.contexts.templating.renderer import render, resolve_theme

SURFACE_WIDTH = 794
SURFACE_MIN_HEIGHT = 1123
SURFACE_ELEMENT_ID = "resume-surface"
SURFACE_TEMPLATE = "surface"

_template_registry = TemplateRegistry()
_style_registry = ThemeStyleRegistry()


@dataclass(frozen=True)
class RenderedSurface:
    """
    An HTML page holding one rendered resume.

    Attributes:
        html: Complete HTML document
        theme: Theme the layout was rendered with
        dark: Whether the dark palette was applied
        profile_name: Name shown on the resume (used for the export filename)
        layout: The layout tree the HTML was generated from
        width: Fixed surface width in CSS pixels
        min_height: Minimum surface height in CSS pixels
    """

    html: str
    theme: Theme
    dark: bool
    profile_name: str
    layout: LayoutNode
    width: int = SURFACE_WIDTH
    min_height: int = SURFACE_MIN_HEIGHT

    @property
    def selector(self) -> str:
        return f"#{SURFACE_ELEMENT_ID}"


def render_surface(
    document: Document,
    theme: Optional[Union[Theme, str]] = None,
    template_registry: TemplateRegistry = None,
    style_registry: ThemeStyleRegistry = None,
) -> RenderedSurface:
    """
    Render a document into a mounted HTML surface.

    Args:
        document: Document to render
        theme: Theme override; defaults to the document's own theme
        template_registry: Registry for the page template (default: shared instance)
        style_registry: Registry for palettes (default: shared instance)

    Returns:
        RenderedSurface with the HTML page and its layout tree

    Raises:
        UnknownThemeError: If the theme is not known
        TemplateRenderError: If the page template fails to render
    """
    template_registry = template_registry or _template_registry
    style_registry = style_registry or _style_registry

    theme = resolve_theme(theme) if theme is not None else document.meta.theme
    layout = render(document, theme)
    style = style_registry.get_style(theme.value)
    dark = document.meta.dark

    try:
        template = template_registry.get_template(SURFACE_TEMPLATE)
        html = template.render(
            root=layout,
            title=document.profile.name or "Resume",
            palette=style["dark" if dark else "light"],
            font_family=style["font_family"],
            dark=dark,
            width=SURFACE_WIDTH,
            min_height=SURFACE_MIN_HEIGHT,
        )
    except TemplateError as e:
        raise TemplateRenderError(
            "Failed to render resume surface",
            template_name=SURFACE_TEMPLATE,
            template_path=template_registry.get_template_path(SURFACE_TEMPLATE),
            original_error=e,
        ) from e

    log_surface_rendered(document.profile.name, theme.value, dark, len(html))

    return RenderedSurface(
        html=html,
        theme=theme,
        dark=dark,
        profile_name=document.profile.name,
        layout=layout,
    )
