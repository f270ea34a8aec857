"""Pipeline orchestration for the bundle, module-asset, and documentation stages."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Callable, List

from .bundler import DocumentComposer, ReferenceResolver
from .collaborators import (
    ConverterError,
    FetchOutcome,
    MetadataError,
    PandocConverter,
    SourceFetcher,
)
from .config import DtsBundleConfig
from .logging import get_logger
from .models import ModuleRegistry, OutputArtifact
from .registry import APIRegistryBuilder
from .render import IconTable, MultiFormatRenderer, combined_page_name
from .stores import ArtifactWriter


class BundleError(RuntimeError):
    """Raised when a pipeline stage cannot find the inputs it needs."""


@dataclass
class DocsOutcome:
    """Paths written by the documentation stage."""

    registry: ModuleRegistry
    paths: List[Path]
    converter_used: bool


@dataclass
class RunSummary:
    """Stages executed by a pipeline run."""

    completed: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)


def _utc_timestamp() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


class Orchestrator:
    """Runs the pipeline stages against a loaded configuration."""

    def __init__(
        self,
        config: DtsBundleConfig,
        *,
        writer: ArtifactWriter | None = None,
        fetcher: SourceFetcher | None = None,
        converter: PandocConverter | None = None,
        clock: Callable[[], str] = _utc_timestamp,
    ) -> None:
        self.config = config
        self.writer = writer or ArtifactWriter()
        self.fetcher = fetcher or SourceFetcher()
        self.converter = converter
        if self.converter is None and config.docs.converter:
            self.converter = PandocConverter(executable=config.docs.converter)
        self.clock = clock
        self.logger = get_logger("orchestrator")

    # ------------------------------------------------------------------
    # Stages

    def run(
        self,
        *,
        skip_types: bool = False,
        skip_modules: bool = False,
        skip_docs: bool = False,
    ) -> RunSummary:
        """Run every stage not skipped, stopping at the first failure."""
        summary = RunSummary()
        plan = (
            ("types", skip_types, self.run_bundle),
            ("modules", skip_modules, self.run_modules),
            ("docs", skip_docs, self.run_docs),
        )
        for name, skipped, stage in plan:
            if skipped:
                self.logger.info("Skipping %s stage", name)
                summary.skipped.append(name)
                continue
            stage()
            summary.completed.append(name)
        self.logger.info("All tasks completed successfully")
        return summary

    def run_bundle(self) -> Path:
        bundle = self.config.bundle
        for label, path in (("entry", bundle.entry), ("global", bundle.global_file)):
            if not path.is_file():
                raise BundleError(f"Root {label} declaration file not found: {path}")

        self.logger.info("Resolving type references from %s", bundle.entry)
        # Separate resolver calls: each root gets its own visited set.
        resolver = ReferenceResolver(max_depth=bundle.max_depth)
        resolved_entry = resolver.resolve_file(bundle.entry)
        self.logger.info("Resolving global declarations from %s", bundle.global_file)
        resolved_global = resolver.resolve_file(bundle.global_file)

        composer = DocumentComposer(namespace=bundle.namespace)
        duplicates = composer.duplicate_symbols(resolved_entry, resolved_global)
        if duplicates:
            self.logger.warning(
                "%d symbols are declared in both the namespace and global sections",
                len(duplicates),
            )
            self.logger.debug("Duplicate symbols: %s", ", ".join(duplicates))

        content = composer.compose(resolved_entry, resolved_global, generated_at=self.clock())
        return self.writer.write(
            OutputArtifact(kind="bundle", destination=str(bundle.output), content=content)
        )

    def run_modules(self) -> FetchOutcome:
        modules = self.config.modules
        self.logger.info("Fetching latest release modules from %s", modules.repository)
        outcome = self.fetcher.fetch_release(modules.repository, modules.files, modules.output_dir)
        self.logger.info(
            "Fetched %d module files from %s (%d missing)",
            len(outcome.copied),
            outcome.tag,
            len(outcome.missing),
        )
        return outcome

    def run_docs(self) -> DocsOutcome:
        bundle_path = self.config.bundle.output
        if not bundle_path.is_file():
            raise BundleError(
                f"Bundled declarations not found at {bundle_path}; run the types stage first"
            )

        docs = self.config.docs
        namespace = self.config.bundle.namespace
        bundled = bundle_path.read_text(encoding="utf-8")
        registry = APIRegistryBuilder(
            attribution_pattern=docs.attribution_pattern,
            default_module=docs.default_module,
        ).build(bundled)

        version = self.resolve_version()
        generated_at = self.clock()
        renderer = MultiFormatRenderer(
            namespace=namespace,
            title=docs.title,
            icons=IconTable.with_overrides(docs.icons, docs.default_icon),
        )
        artifacts = renderer.render_all(registry, version, generated_at, docs.output_dir)
        paths = self.writer.write_all(artifacts)

        markdown_path = renderer.markdown_path(docs.output_dir)
        help_path = docs.output_dir / combined_page_name(namespace)
        converter_used = self._convert_with_external(markdown_path, help_path)
        if not converter_used:
            markdown = artifacts[0].content
            paths.append(
                self.writer.write(
                    OutputArtifact(
                        kind="combined-help",
                        destination=str(help_path),
                        content=renderer.help_pages.render_combined(markdown, version, generated_at),
                    )
                )
            )
        else:
            paths.append(help_path)
        return DocsOutcome(registry=registry, paths=paths, converter_used=converter_used)

    # ------------------------------------------------------------------
    # Helpers

    def resolve_version(self) -> str:
        """Return the configured version or the one in the entry package.json."""
        if self.config.docs.version:
            return self.config.docs.version
        package_json = self.config.bundle.entry.parent / "package.json"
        if not package_json.exists():
            return "unknown"
        try:
            data = json.loads(package_json.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise MetadataError(f"Malformed package metadata in {package_json}: {exc}") from exc
        version = data.get("version") if isinstance(data, dict) else None
        if not isinstance(version, str) or not version.strip():
            raise MetadataError(f"Package metadata in {package_json} has no version string")
        return version.strip()

    def _convert_with_external(self, markdown_path: Path, help_path: Path) -> bool:
        if self.converter is None:
            self.logger.info("External converter disabled; rendering help page in-process")
            return False
        try:
            self.converter.convert(
                markdown_path,
                help_path,
                title=self.config.bundle.namespace,
                description=f"{self.config.docs.title} API Documentation",
            )
        except ConverterError as exc:
            self.logger.warning("%s; creating simple help page instead", exc)
            return False
        return True


__all__ = ["BundleError", "DocsOutcome", "Orchestrator", "RunSummary"]
