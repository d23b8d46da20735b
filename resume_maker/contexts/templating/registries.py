"""
Templating Registries

Centralized registries for loading and caching surface templates and theme styles.
"""

import os
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv
from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    Template,
    TemplateNotFound,
    select_autoescape,
)
from omegaconf import OmegaConf

from resume_maker.contexts.templating.exceptions import UnknownThemeError

load_dotenv()

CONTEXT_DIR = Path(__file__).parent
TEMPLATES_PATH = CONTEXT_DIR / "templates"
THEMES_PATH = Path(os.getenv("RESUME_MAKER_THEMES_PATH", str(CONTEXT_DIR / "themes.yaml")))

TEMPLATE_SUFFIX = ".html.jinja"


class TemplateRegistry:
    """
    Registry for loading and caching Jinja2 templates for HTML surfaces.

    Templates are stored in resume_maker/contexts/templating/templates/{name}.html.jinja
    and rendered with autoescaping, so document text never becomes markup.
    """

    def __init__(self, templates_path: Path = None):
        """
        Initialize the template registry.

        Args:
            templates_path: Directory holding the templates. Defaults to the
                           templates/ directory of this context
        """
        if templates_path is None:
            templates_path = TEMPLATES_PATH

        self.templates_path = templates_path
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(templates_path)),
            # Catches silent failures
            undefined=StrictUndefined,
            autoescape=select_autoescape(enabled_extensions=("html", "jinja"), default=True),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def get_template(self, name: str) -> Template:
        """
        Get a template by name, loading and caching it if necessary.

        Args:
            name: Template name without suffix (e.g., 'surface')

        Returns:
            Jinja2 Template object

        Raises:
            TemplateNotFound: If template file doesn't exist
            TemplateSyntaxError: If template has Jinja2 syntax errors
        """
        if name in self._cache:
            return self._cache[name]

        template_file = f"{name}{TEMPLATE_SUFFIX}"

        try:
            template = self.env.get_template(template_file)
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Template not found for '{name}' at {self.templates_path / template_file}"
            ) from e

        self._cache[name] = template
        return template

    def get_template_path(self, name: str) -> Path:
        return self.templates_path / f"{name}{TEMPLATE_SUFFIX}"

    def clear_cache(self):
        """Clear the template cache."""
        self._cache.clear()

    def is_cached(self, name: str) -> bool:
        return name in self._cache


class ThemeStyleRegistry:
    """
    Registry for per-theme style tokens.

    Styles live in a single YAML file (themes.yaml, or RESUME_MAKER_THEMES_PATH)
    with one entry per theme holding a font stack plus "light" and "dark"
    palettes. The file is loaded once with OmegaConf and cached.
    """

    def __init__(self, themes_path: Path = None):
        if themes_path is None:
            themes_path = THEMES_PATH

        self.themes_path = Path(themes_path)
        self._styles: Dict[str, Dict[str, Any]] = None

    def _load(self) -> Dict[str, Dict[str, Any]]:
        if self._styles is None:
            if not self.themes_path.exists():
                raise FileNotFoundError(f"Theme styles not found at {self.themes_path}")

            config = OmegaConf.load(self.themes_path)
            self._styles = OmegaConf.to_container(config, resolve=True)["themes"]

        return self._styles

    def theme_names(self):
        return list(self._load().keys())

    def get_style(self, theme: str) -> Dict[str, Any]:
        """
        Get the full style entry for a theme.

        Raises:
            UnknownThemeError: If the theme has no entry
        """
        styles = self._load()
        if theme not in styles:
            raise UnknownThemeError(theme, list(styles.keys()))
        return styles[theme]

    def get_palette(self, theme: str, dark: bool = False) -> Dict[str, str]:
        """
        Get the color tokens for a theme.

        Args:
            theme: Theme name
            dark: Select the dark-mode palette

        Returns:
            Mapping of token name (background, text, accent, ...) to CSS color
        """
        return self.get_style(theme)["dark" if dark else "light"]

    def clear_cache(self):
        self._styles = None

    def is_cached(self) -> bool:
        return self._styles is not None
