"""Mining of documented API surface from a bundled declaration document."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from ..logging import get_logger
from ..models import KIND_GROUPS, ApiElement, ElementKind, ModuleRecord, ModuleRegistry
from .doc_comments import clean_doc_block
from .patterns import (
    ACCESSOR_DECLARATION,
    CLASS_DECLARATION,
    DEFAULT_ATTRIBUTION_PATTERN,
    EXCLUDED_NAMES,
    FUNCTION_DECLARATION,
    PROPERTY_DECLARATION,
    PROVENANCE_MARKER,
)

DEFAULT_MODULE = "global"


@dataclass(frozen=True)
class AttributedChunk:
    """Bundled text following one provenance marker."""

    source: str
    content: str
    module: Optional[str] = None
    submodule: Optional[str] = None


@dataclass
class _ModuleAccumulator:
    name: str
    groups: Dict[str, List[ApiElement]] = field(
        default_factory=lambda: {group: [] for group in KIND_GROUPS}
    )
    seen: Set[Tuple[str, str]] = field(default_factory=set)

    def add(self, element: ApiElement) -> bool:
        key = (element.kind.group, element.name)
        if key in self.seen:
            return False
        self.seen.add(key)
        self.groups[element.kind.group].append(element)
        return True

    def freeze(self) -> ModuleRecord:
        return ModuleRecord(
            name=self.name,
            functions=tuple(self.groups["functions"]),
            classes=tuple(self.groups["classes"]),
            variables=tuple(self.groups["variables"]),
        )


class APIRegistryBuilder:
    """Builds a ModuleRegistry from provenance-marked bundle text.

    Text before the first provenance marker is unattributed and ignored.
    Chunks whose marker path does not match the attribution pattern are
    scanned but grouped under the most recently seen module.
    """

    def __init__(
        self,
        *,
        attribution_pattern: str = DEFAULT_ATTRIBUTION_PATTERN,
        default_module: str = DEFAULT_MODULE,
    ) -> None:
        self.attribution = re.compile(attribution_pattern)
        self.default_module = default_module
        self.logger = get_logger("registry")

    def split(self, bundled: str) -> List[AttributedChunk]:
        parts = PROVENANCE_MARKER.split(bundled)
        chunks: List[AttributedChunk] = []
        # parts alternates: [unattributed, path, content, path, content, ...]
        for index in range(1, len(parts) - 1, 2):
            source = parts[index]
            content = parts[index + 1]
            match = self.attribution.search(source)
            if match:
                chunks.append(
                    AttributedChunk(
                        source=source,
                        content=content,
                        module=match.group("module"),
                        submodule=match.group("submodule"),
                    )
                )
            else:
                chunks.append(AttributedChunk(source=source, content=content))
        return chunks

    def scan(
        self,
        content: str,
        *,
        module: Optional[str] = None,
        submodule: Optional[str] = None,
    ) -> List[ApiElement]:
        """Return documented declarations in content, in order of appearance."""
        found: List[Tuple[int, ApiElement]] = []

        def _collect(pattern: re.Pattern, kind_for) -> None:
            for match in pattern.finditer(content):
                name = match.group("name")
                if name in EXCLUDED_NAMES:
                    continue
                found.append(
                    (
                        match.start("name"),
                        ApiElement(
                            name=name,
                            kind=kind_for(match),
                            description=clean_doc_block(match.group("doc")),
                            origin_module=module,
                            origin_submodule=submodule,
                        ),
                    )
                )

        _collect(FUNCTION_DECLARATION, lambda _match: ElementKind.FUNCTION)
        _collect(CLASS_DECLARATION, lambda match: ElementKind(match.group("keyword")))
        _collect(PROPERTY_DECLARATION, lambda _match: ElementKind.VARIABLE)
        _collect(ACCESSOR_DECLARATION, lambda _match: ElementKind.VARIABLE)

        found.sort(key=lambda item: item[0])
        return [element for _, element in found]

    def build(self, bundled: str) -> ModuleRegistry:
        accumulators: Dict[str, _ModuleAccumulator] = {}
        current: Optional[str] = None

        for chunk in self.split(bundled):
            if chunk.module is not None:
                current = chunk.module
                accumulators.setdefault(current, _ModuleAccumulator(name=current))
            target = current or self.default_module

            elements = self.scan(chunk.content, module=chunk.module, submodule=chunk.submodule)
            if not elements:
                continue
            accumulator = accumulators.setdefault(target, _ModuleAccumulator(name=target))
            added = sum(1 for element in elements if accumulator.add(element))
            self.logger.debug(
                "Collected %d documented declarations from %s into %s",
                added,
                chunk.source,
                target,
            )

        registry = ModuleRegistry([accumulator.freeze() for accumulator in accumulators.values()])
        self.logger.info(
            "Registry built with %d modules (%d functions, %d classes, %d variables)",
            len(registry),
            len(registry.all_elements("functions")),
            len(registry.all_elements("classes")),
            len(registry.all_elements("variables")),
        )
        return registry


__all__ = ["APIRegistryBuilder", "AttributedChunk", "DEFAULT_MODULE"]
