"""
Templating Context

Responsibilities:
- Maps a document and a theme to a layout tree (classic, modern)
- Generates the mounted HTML surface from the layout tree
- Manages surface templates and per-theme style tokens (themes.yaml)

Owns: Layout tree, theme layouts, surface HTML and palettes
Never: Mutates the document or writes files
"""

from resume_maker.contexts.templating.exceptions import TemplateRenderError, UnknownThemeError
from resume_maker.contexts.templating.layout import LayoutNode, node
from resume_maker.contexts.templating.registries import TemplateRegistry, ThemeStyleRegistry
from resume_maker.contexts.templating.renderer import (
    THEME_RENDERERS,
    render,
    render_document,
    resolve_theme,
)
from resume_maker.contexts.templating.surface import (
    SURFACE_MIN_HEIGHT,
    SURFACE_WIDTH,
    RenderedSurface,
    render_surface,
)

__all__ = [
    # Layout
    "LayoutNode",
    "node",
    "render",
    "render_document",
    "resolve_theme",
    "THEME_RENDERERS",
    # Surface
    "RenderedSurface",
    "render_surface",
    "SURFACE_WIDTH",
    "SURFACE_MIN_HEIGHT",
    # Registries
    "TemplateRegistry",
    "ThemeStyleRegistry",
    # Errors
    "UnknownThemeError",
    "TemplateRenderError",
]
