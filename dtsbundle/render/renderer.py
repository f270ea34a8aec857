"""Multi-format rendering of a ModuleRegistry into output artifacts."""

from __future__ import annotations

from pathlib import Path
from typing import List

from ..models import ModuleRegistry, OutputArtifact
from .environment import create_environment
from .helpdoc import HelpPageRenderer, index_page_name, module_page_name
from .icons import IconTable
from .index import IndexRenderer
from .markdown import MarkdownRenderer


class MultiFormatRenderer:
    """Renders the Markdown reference, per-module help pages, and the index.

    Rendering is a pure function of the registry, version, and timestamp.
    """

    def __init__(
        self,
        *,
        namespace: str = "p5",
        title: str = "p5.js",
        icons: IconTable | None = None,
        templates_dir: Path | None = None,
    ) -> None:
        env = create_environment(templates_dir)
        self.namespace = namespace
        self.markdown = MarkdownRenderer(title=title, env=env)
        self.help_pages = HelpPageRenderer(namespace=namespace, title=title, env=env)
        self.index = IndexRenderer(namespace=namespace, title=title, icons=icons, env=env)

    def markdown_path(self, output_dir: Path) -> Path:
        return output_dir / f"{self.namespace}.md"

    def render_all(
        self,
        registry: ModuleRegistry,
        version: str,
        generated_at: str,
        output_dir: Path,
    ) -> List[OutputArtifact]:
        artifacts = [
            OutputArtifact(
                kind="markdown",
                destination=str(self.markdown_path(output_dir)),
                content=self.markdown.render(registry, version, generated_at),
            )
        ]
        for record in registry.records():
            artifacts.append(
                OutputArtifact(
                    kind="help",
                    destination=str(output_dir / module_page_name(self.namespace, record.name)),
                    content=self.help_pages.render_module(record, version, generated_at),
                )
            )
        artifacts.append(
            OutputArtifact(
                kind="index",
                destination=str(output_dir / index_page_name(self.namespace)),
                content=self.index.render(registry, version, generated_at),
            )
        )
        return artifacts


__all__ = ["MultiFormatRenderer"]
