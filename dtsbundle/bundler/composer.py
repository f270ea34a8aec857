"""Assembly of the final bundled declaration document."""

from __future__ import annotations

import re
from typing import List, Sequence, Set

from .extractor import (
    ANY_MODULE_PATH,
    ES_IMPORT_RULES,
    CleanupRule,
    apply_rules,
    require_import,
)

BANNER = "// " + "=" * 76

PREAMBLE_ALIASES: Sequence[str] = (
    "type DEGREES = 'degrees';",
    "type RADIANS = 'radians';",
    "type LABEL = 'label';",
    "type FALLBACK = 'fallback';",
    "type ANGLE_MODE = RADIANS | DEGREES;",
    "type DESCRIBE_DISPLAY = LABEL | FALLBACK;",
    "type GRID_DISPLAY = FALLBACK | LABEL;",
    "type TEXT_DISPLAY = FALLBACK | LABEL;",
)

SECTION_RULES: Sequence[CleanupRule] = (
    (require_import(r"\./index"), ""),
    (require_import(ANY_MODULE_PATH), "// Import removed"),
    *ES_IMPORT_RULES,
    (re.compile(r"declare module ['\"][^'\"]*['\"]"), "// Module declaration removed"),
    (re.compile(r"export\s*\{[^}]*\}"), "// Export removed"),
    (re.compile(r"export\s+default\s+[^;]*;"), "// Default export removed"),
    (re.compile(r"export\s+\*\s+from\s+['\"][^'\"]*['\"];?"), "// Export from removed"),
    (re.compile(r"///\s*<reference\s+path=\"[^\"]*\"\s*/>"), "// Reference directive removed"),
)

_TOP_LEVEL_DECLARATION = re.compile(
    r"^(?:export\s+)?(?:declare\s+)?(?:abstract\s+)?"
    r"(?:function|class|interface|type|enum|const|let|var|namespace)\s+([A-Za-z_$][\w$]*)",
    re.MULTILINE,
)


def _banner(*lines: str) -> str:
    body = [f"// {line}" for line in lines]
    return "\n".join([BANNER, *body, BANNER])


def declared_names(text: str) -> List[str]:
    """Return names declared at the start of a line, in order of appearance."""
    return [match.group(1) for match in _TOP_LEVEL_DECLARATION.finditer(text)]


class DocumentComposer:
    """Concatenates the preamble, namespace, global, and export sections."""

    def __init__(
        self,
        *,
        namespace: str = "p5",
        source_label: str | None = None,
        rules: Sequence[CleanupRule] = SECTION_RULES,
    ) -> None:
        self.namespace = namespace
        self.source_label = source_label or f"@types/{namespace} package"
        self._rules = tuple(rules)

    def clean(self, content: str) -> str:
        return apply_rules(content, self._rules)

    def compose(
        self,
        resolved_entry: str,
        resolved_global: str,
        *,
        generated_at: str | None = None,
    ) -> str:
        ns = self.namespace
        header = [
            f"// Generated {ns} Type Definitions",
            f"// This file provides both global and {ns} namespace support",
        ]
        if generated_at:
            header.append(f"// Generated: {generated_at}")
        header.append(f"// Original source: {self.source_label}")

        sections = [
            "\n".join(header),
            _banner(
                "BASIC TYPE DEFINITIONS",
                "Ensure all fundamental types are available globally",
            ),
            "\n".join(PREAMBLE_ALIASES),
            _banner(
                f"{ns.upper()} NAMESPACE SUPPORT",
                f"Use: import {ns} from '{ns}'; const instance = new {ns}();",
            ),
            self.clean(resolved_entry),
            _banner(
                "GLOBAL SUPPORT",
                "Use: functions are directly available in global scope",
            ),
            self.clean(resolved_global),
            _banner(
                "DUAL EXPORT SUPPORT",
                "Supports both import styles for maximum compatibility",
            ),
            f"export as namespace {ns};\nexport = {ns};",
        ]
        return "\n\n".join(sections) + "\n"

    def duplicate_symbols(self, resolved_entry: str, resolved_global: str) -> List[str]:
        """List names declared at top level in both the entry and global content.

        The composed output is not altered; callers decide how to report them.
        """
        global_names: Set[str] = set(declared_names(self.clean(resolved_global)))
        seen: Set[str] = set()
        duplicates: List[str] = []
        for name in declared_names(self.clean(resolved_entry)):
            if name in global_names and name not in seen:
                duplicates.append(name)
                seen.add(name)
        return duplicates


__all__ = [
    "BANNER",
    "DocumentComposer",
    "PREAMBLE_ALIASES",
    "SECTION_RULES",
    "declared_names",
]
