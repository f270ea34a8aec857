"""Extraction of ambient module bodies from inlined declaration text."""

from __future__ import annotations

import re
from typing import List, Sequence, Tuple

# Body ends at the first closing brace that starts a line; irregular nesting
# may therefore truncate the extracted text.
AMBIENT_MODULE = re.compile(r"declare module\s+['\"][^'\"]*['\"]\s*\{([\s\S]*?)\n\}")

REFERENCE_DIRECTIVE = re.compile(r"///\s*<reference\s+path=\"([^\"]+)\"\s*/>")

CleanupRule = Tuple[re.Pattern, str]


def require_import(path: str) -> re.Pattern:
    """Match `import x = require(...)` for a module path pattern, either quote style."""
    return re.compile(
        r"import\s+[A-Za-z_$][\w$]*\s*=\s*require\(\s*(?P<q>[\"'])"
        + path
        + r"(?P=q)\s*\);?"
    )


ANY_MODULE_PATH = r"[^\"'\n]*"

# `import ... from '...'` (default, namespace, named and type-only forms) and
# bare side-effect imports. Either form would turn the bundle into a module.
ES_IMPORT_RULES: Sequence[CleanupRule] = (
    (
        re.compile(
            r"^[ \t]*import\s+[^;'\"]+?\s*from\s*(?P<q>[\"'])[^\"'\n]*(?P=q);?",
            re.MULTILINE,
        ),
        "// Import removed",
    ),
    (
        re.compile(r"^[ \t]*import\s+(?P<q>[\"'])[^\"'\n]*(?P=q);?", re.MULTILINE),
        "// Import removed",
    ),
)

# Import of the parent namespace is dropped outright; the namespace is
# already in scope once spliced into the bundle.
SNIPPET_RULES: Sequence[CleanupRule] = (
    (require_import(r"\.\./" + ANY_MODULE_PATH), ""),
    (require_import(ANY_MODULE_PATH), "// Import removed"),
    *ES_IMPORT_RULES,
    (re.compile(r"export\s*\{[^}]*\}"), "// Export removed"),
    (re.compile(r"export\s+default\s+[^;]*;"), "// Default export removed"),
    (re.compile(r"export\s+\*\s+from\s+['\"][^'\"]*['\"];?"), "// Export from removed"),
    (re.compile(r"///\s*<reference\s+path=\"[^\"]*\"\s*/>"), "// Reference directive removed"),
)


def apply_rules(text: str, rules: Sequence[CleanupRule]) -> str:
    """Apply ordered pattern substitutions to text."""
    for pattern, replacement in rules:
        text = pattern.sub(lambda _match: replacement, text)
    return text


class ModuleContentExtractor:
    """Strips module wrappers and import/export syntax from an inlined file."""

    def __init__(self, rules: Sequence[CleanupRule] = SNIPPET_RULES) -> None:
        self._rules = tuple(rules)

    def extract(self, text: str) -> str:
        bodies: List[str] = [match.group(1) + "\n" for match in AMBIENT_MODULE.finditer(text)]
        extracted = "".join(bodies)
        if not extracted:
            return apply_rules(text, self._rules)
        return apply_rules(extracted, self._rules)


__all__ = [
    "AMBIENT_MODULE",
    "ANY_MODULE_PATH",
    "ES_IMPORT_RULES",
    "REFERENCE_DIRECTIVE",
    "SNIPPET_RULES",
    "CleanupRule",
    "ModuleContentExtractor",
    "apply_rules",
    "require_import",
]
