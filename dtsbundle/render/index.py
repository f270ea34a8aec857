"""Master index page listing every module."""

from __future__ import annotations

from typing import List

from jinja2 import Environment

from ..models import ModuleRegistry
from .environment import create_environment, tidy
from .helpdoc import index_page_name, module_page_name
from .icons import IconTable


class IndexRenderer:
    """One line per module with icon, title, page, and per-kind counts."""

    TEMPLATE = "index.txt.j2"

    def __init__(
        self,
        *,
        namespace: str = "p5",
        title: str = "p5.js",
        icons: IconTable | None = None,
        env: Environment | None = None,
    ) -> None:
        self.namespace = namespace
        self.title = title
        self.icons = icons or IconTable()
        self._env = env or create_environment()

    def rows(self, registry: ModuleRegistry) -> List[str]:
        records = registry.records()
        if not records:
            return []
        title_width = max(len(record.name) for record in records)
        page_width = max(len(module_page_name(self.namespace, record.name)) for record in records) + 2
        rows: List[str] = []
        for record in records:
            counts = record.counts()
            page = f"|{module_page_name(self.namespace, record.name)}|"
            rows.append(
                f"{self.icons.lookup(record.name)} "
                f"{record.name.title():<{title_width}}  "
                f"{page:<{page_width}}  "
                f"functions: {counts['functions']}  "
                f"classes: {counts['classes']}  "
                f"variables: {counts['variables']}"
            )
        return rows

    def usage(self, registry: ModuleRegistry) -> str:
        names = ", ".join(registry)
        return f"Usage: :help {self.namespace}-<module>.txt  (modules: {names})"

    def render(self, registry: ModuleRegistry, version: str, generated_at: str) -> str:
        template = self._env.get_template(self.TEMPLATE)
        return tidy(
            template.render(
                page=index_page_name(self.namespace),
                namespace=self.namespace,
                title=self.title,
                version=version,
                generated_at=generated_at,
                rows=self.rows(registry),
                usage=self.usage(registry),
            )
        )


__all__ = ["IndexRenderer"]
