"""Help-dialect pages for terminal help viewers."""

from __future__ import annotations

from typing import Dict, Set, Tuple

from jinja2 import Environment

from ..models import KIND_GROUPS, ModuleRecord
from .environment import create_environment, kind_groups, tidy


def module_page_name(namespace: str, module: str) -> str:
    return f"{namespace}-{module}.txt"


def index_page_name(namespace: str) -> str:
    return f"{namespace}-index.txt"


def combined_page_name(namespace: str) -> str:
    return f"{namespace}.txt"


# Suffixes for names already tagged by an earlier group or section of the page.
COLLISION_SUFFIXES = {
    "functions": "()",
    "classes": "-class",
    "variables": "-variable",
}


def element_tags(record: ModuleRecord, prefix: str) -> Dict[Tuple[str, str], str]:
    """Map `(group, name)` to a help tag that is unique within the page.

    The first element to claim a name keeps the bare `<prefix>-<name>` tag.
    Later groups reusing the name, and names equal to a section tag, get a
    group suffix.
    """
    claimed: Set[str] = {"contents", *KIND_GROUPS}
    tags: Dict[Tuple[str, str], str] = {}
    for group in KIND_GROUPS:
        for element in record.elements(group):
            suffix = COLLISION_SUFFIXES[group] if element.name in claimed else ""
            claimed.add(element.name)
            tags[(group, element.name)] = f"{prefix}-{element.name}{suffix}"
    return tags


class HelpPageRenderer:
    """Renders one module per page with banners and `*tag*`/`|ref|` links."""

    MODULE_TEMPLATE = "module.txt.j2"
    COMBINED_TEMPLATE = "combined.txt.j2"

    def __init__(
        self,
        *,
        namespace: str = "p5",
        title: str = "p5.js",
        env: Environment | None = None,
    ) -> None:
        self.namespace = namespace
        self.title = title
        self._env = env or create_environment()

    def render_module(self, record: ModuleRecord, version: str, generated_at: str) -> str:
        template = self._env.get_template(self.MODULE_TEMPLATE)
        groups = kind_groups({group: record.elements(group) for group in KIND_GROUPS})
        prefix = f"{self.namespace}-{record.name}"
        return tidy(
            template.render(
                page=module_page_name(self.namespace, record.name),
                prefix=prefix,
                tags=element_tags(record, prefix),
                module_title=record.name.title(),
                title=self.title,
                version=version,
                generated_at=generated_at,
                groups=groups,
                index_page=index_page_name(self.namespace),
            )
        )

    def render_combined(self, markdown: str, version: str, generated_at: str) -> str:
        """Wrap the Markdown reference in help-page banners.

        Used when no external Markdown-to-help converter is available.
        """
        template = self._env.get_template(self.COMBINED_TEMPLATE)
        return tidy(
            template.render(
                page=combined_page_name(self.namespace),
                namespace=self.namespace,
                title=self.title,
                version=version,
                generated_at=generated_at,
                markdown=markdown.strip(),
            )
        )


__all__ = [
    "COLLISION_SUFFIXES",
    "HelpPageRenderer",
    "combined_page_name",
    "element_tags",
    "index_page_name",
    "module_page_name",
]
