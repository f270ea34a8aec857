"""Recursive inlining of triple-slash reference directives."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Set

from ..logging import get_logger
from ..models import DeclarationFile, ReferenceDirective
from .extractor import REFERENCE_DIRECTIVE, ModuleContentExtractor

PROVENANCE_PREFIX = "// Inlined from: "
FAILURE_PREFIX = "// Failed to resolve: "

DEFAULT_MAX_DEPTH = 64


def scan_directives(content: str, base_path: Path) -> List[ReferenceDirective]:
    """Return directives in order of appearance with absolute target paths."""
    return [
        ReferenceDirective(
            literal_path=match.group(1),
            resolved_path=str((base_path / match.group(1)).resolve()),
        )
        for match in REFERENCE_DIRECTIVE.finditer(content)
    ]


def load_declaration_file(path: Path) -> DeclarationFile:
    """Read a declaration file and record its reference directives."""
    text = path.read_text(encoding="utf-8")
    return DeclarationFile(
        path=str(path),
        raw_text=text,
        directives=scan_directives(text, path.parent),
    )


class ReferenceResolver:
    """Replaces reference directives with the cleaned content they point at.

    The visited set is threaded through recursive calls and scoped to a
    single top-level `resolve` call: a file reached twice within one call
    tree is inlined once, while an independent top-level call starts fresh.
    """

    def __init__(
        self,
        extractor: ModuleContentExtractor | None = None,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self.extractor = extractor or ModuleContentExtractor()
        self.max_depth = max_depth
        self.logger = get_logger("bundler.resolver")

    def resolve_file(self, path: Path) -> str:
        """Resolve a root file, treating the root itself as already visited."""
        root = load_declaration_file(path.resolve())
        self.logger.debug(
            "%s declares %d reference directives", root.path, len(root.directives)
        )
        return self.resolve(root.raw_text, Path(root.path).parent, visited={root.path})

    def resolve(
        self,
        content: str,
        base_path: Path,
        *,
        visited: Optional[Set[str]] = None,
        depth: int = 0,
    ) -> str:
        if visited is None:
            visited = set()

        pieces: List[str] = []
        cursor = 0
        for match in REFERENCE_DIRECTIVE.finditer(content):
            literal = match.group(1)
            target = (base_path / literal).resolve()
            key = str(target)
            pieces.append(content[cursor:match.start()])
            cursor = match.end()

            if key in visited:
                self.logger.debug("Skipping already inlined reference %s", literal)
                pieces.append(match.group(0))
                continue

            if depth >= self.max_depth:
                self.logger.warning(
                    "Could not resolve reference: %s (maximum depth %d exceeded)",
                    literal,
                    self.max_depth,
                )
                pieces.append(f"{FAILURE_PREFIX}{literal}")
                continue

            try:
                raw = target.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                self.logger.warning("Could not resolve reference: %s (%s)", literal, exc)
                pieces.append(f"{FAILURE_PREFIX}{literal}")
                continue

            # Visited before recursing: a reference back to an ancestor stays literal.
            visited.add(key)
            self.logger.debug("Inlining %s", literal)
            nested = self.resolve(raw, target.parent, visited=visited, depth=depth + 1)
            cleaned = self.extractor.extract(nested)
            pieces.append(f"{PROVENANCE_PREFIX}{literal}\n{cleaned}")

        pieces.append(content[cursor:])
        return "".join(pieces)


__all__ = [
    "DEFAULT_MAX_DEPTH",
    "FAILURE_PREFIX",
    "PROVENANCE_PREFIX",
    "ReferenceResolver",
    "load_declaration_file",
    "scan_directives",
]
