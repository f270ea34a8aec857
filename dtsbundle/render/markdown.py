"""Combined Markdown reference page."""

from __future__ import annotations

from jinja2 import Environment

from ..models import KIND_GROUPS, ModuleRegistry
from .environment import create_environment, kind_groups, tidy


class MarkdownRenderer:
    """Renders the whole registry as one Markdown document."""

    TEMPLATE = "reference.md.j2"

    def __init__(self, *, title: str = "p5.js", env: Environment | None = None) -> None:
        self.title = title
        self._env = env or create_environment()

    def render(self, registry: ModuleRegistry, version: str, generated_at: str) -> str:
        groups = kind_groups({group: registry.all_elements(group) for group in KIND_GROUPS})
        template = self._env.get_template(self.TEMPLATE)
        return tidy(
            template.render(
                title=self.title,
                version=version,
                generated_at=generated_at,
                groups=groups,
            )
        )


__all__ = ["MarkdownRenderer"]
