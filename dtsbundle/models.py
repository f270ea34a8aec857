"""Core data models shared across dtsbundle components."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple


@dataclass(frozen=True)
class ReferenceDirective:
    """A `/// <reference path="..." />` line found in a declaration file."""

    literal_path: str
    resolved_path: str


@dataclass
class DeclarationFile:
    """A declaration file on disk and the directives it contains."""

    path: str
    raw_text: str
    directives: List[ReferenceDirective] = field(default_factory=list)


class ElementKind(str, Enum):
    FUNCTION = "function"
    CLASS = "class"
    INTERFACE = "interface"
    VARIABLE = "variable"

    @property
    def group(self) -> str:
        """Name of the ModuleRecord bucket holding this kind."""
        if self is ElementKind.FUNCTION:
            return "functions"
        if self is ElementKind.VARIABLE:
            return "variables"
        return "classes"


KIND_GROUPS: Tuple[str, ...] = ("functions", "classes", "variables")


@dataclass(frozen=True)
class ApiElement:
    """A documented declaration mined from the bundled document."""

    name: str
    kind: ElementKind
    description: str
    origin_module: Optional[str] = None
    origin_submodule: Optional[str] = None


@dataclass(frozen=True)
class ModuleRecord:
    """Documented API surface for one module, in first-occurrence order."""

    name: str
    functions: Tuple[ApiElement, ...] = ()
    classes: Tuple[ApiElement, ...] = ()
    variables: Tuple[ApiElement, ...] = ()

    def elements(self, group: str) -> Tuple[ApiElement, ...]:
        return getattr(self, group)

    def counts(self) -> Dict[str, int]:
        return {group: len(self.elements(group)) for group in KIND_GROUPS}

    @property
    def is_empty(self) -> bool:
        return not any(self.counts().values())


class ModuleRegistry(Mapping):
    """Read-only ordered mapping of module name to ModuleRecord."""

    def __init__(self, records: Tuple[ModuleRecord, ...] | List[ModuleRecord] = ()) -> None:
        self._records: Dict[str, ModuleRecord] = {}
        for record in records:
            self._records[record.name] = record

    def __getitem__(self, name: str) -> ModuleRecord:
        return self._records[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"ModuleRegistry({list(self._records)!r})"

    def records(self) -> Tuple[ModuleRecord, ...]:
        return tuple(self._records.values())

    def all_elements(self, group: str) -> List[ApiElement]:
        """Return every element of a kind group across modules in registry order."""
        collected: List[ApiElement] = []
        for record in self._records.values():
            collected.extend(record.elements(group))
        return collected


@dataclass(frozen=True)
class OutputArtifact:
    """A rendered page or bundle ready to be written to disk."""

    kind: str
    destination: str
    content: str
