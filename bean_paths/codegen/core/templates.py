"""
Template engine wrapper for code generation.

Provides a small interface over Jinja2 for rendering the fixed code
fragments that extensions write line by line.
"""

from typing import Any, Dict, List, Optional

from jinja2 import DictLoader, Environment, StrictUndefined, TemplateNotFound


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


# Canonical indentation unit used inside built-in templates
TEMPLATE_INDENT = "    "


class TemplateEngine:
    """Wrapper for a Jinja2 environment holding in-memory templates."""

    def __init__(self, templates: Optional[Dict[str, str]] = None):
        """
        Initialize template engine.

        Args:
            templates: Initial mapping of template name to template source
        """
        self._env = Environment(
            loader=DictLoader(dict(templates or {})),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=False,
        )

    def render_template(self, template_name: str, context: Optional[Dict[str, Any]] = None) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of a registered template
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**(context or {}))
        except TemplateNotFound as e:
            raise TemplateError(f"Template not found: {template_name}") from e
        except Exception as e:
            raise TemplateError(f"Failed to render template {template_name}: {str(e)}") from e

    def render_lines(
        self,
        template_name: str,
        context: Optional[Dict[str, Any]] = None,
        indent_string: str = TEMPLATE_INDENT,
    ) -> List[str]:
        """
        Render a template and split it into lines.

        Every canonical four-space unit is replaced by ``indent_string``,
        so nesting depth is preserved for any indentation style.
        """
        rendered = self.render_template(template_name, context)
        return [
            line.replace(TEMPLATE_INDENT, indent_string)
            for line in rendered.split("\n")
        ]

    def add_template(self, name: str, content: str):
        """
        Add an in-memory template.

        Args:
            name: Template name
            content: Template content
        """
        self._env.loader.mapping[name] = content

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return template_name in self._env.loader.mapping


# Universal base class of every generated path-builder hierarchy
FIELDS_CLASS_TEMPLATE = """\
class Fields {
    protected parent: Fields | undefined;
    protected name: string | undefined;
    constructor(parent?: Fields, name?: string) {
        this.parent = parent;
        this.name = name;
    };
    get(): string | undefined {
        if (this.parent && this.parent.get()) {
            return this.name ? this.parent.get() + "." + this.name : this.parent.get();
        } else {
            return this.name;
        }
    }
}"""


def create_template_engine(templates: Optional[Dict[str, str]] = None) -> TemplateEngine:
    """Create a template engine preloaded with the built-in templates."""
    engine = TemplateEngine({"fields_class.ts": FIELDS_CLASS_TEMPLATE})
    for name, content in (templates or {}).items():
        engine.add_template(name, content)
    return engine
