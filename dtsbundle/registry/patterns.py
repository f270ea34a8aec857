"""Declaration shapes recognised by the registry builder.

Every shape starts with a documentation block so undocumented declarations
never match. Only whitespace may separate the block from the declaration.
"""

from __future__ import annotations

import re

IDENTIFIER = r"[A-Za-z_$][\w$]*"

DOC_BLOCK = r"/\*\*(?P<doc>(?:(?!\*/)[\s\S])*)\*/\s*"

# Parameter lists may contain one level of nested parentheses (callback types).
_PARAMS = r"\((?P<params>[^()]*(?:\([^()]*\)[^()]*)*)\)"
_GENERICS = r"(?:<[^<>]*(?:<[^<>]*>[^<>]*)*>)?"

FUNCTION_DECLARATION = re.compile(
    DOC_BLOCK
    + r"(?:(?:export|declare|static|public|protected|private|abstract|async|function)\s+)*"
    + rf"(?P<name>{IDENTIFIER})\s*\??\s*{_GENERICS}\s*{_PARAMS}\s*:"
)

CLASS_DECLARATION = re.compile(
    DOC_BLOCK
    + r"(?:(?:export|declare|abstract|default)\s+)*"
    + rf"(?P<keyword>class|interface)\s+(?P<name>{IDENTIFIER})"
)

PROPERTY_DECLARATION = re.compile(
    DOC_BLOCK
    + r"(?:(?:export|declare|static|readonly|public|protected|private|const|let|var)\s+)*"
    + rf"(?P<name>{IDENTIFIER})\s*\??\s*:"
)

# Accessors read as properties; a getter and setter pair yields one element.
ACCESSOR_DECLARATION = re.compile(
    DOC_BLOCK
    + r"(?:(?:static|public|protected|private|abstract)\s+)*"
    + rf"(?:get|set)\s+(?P<name>{IDENTIFIER})\s*\("
)

PROVENANCE_MARKER = re.compile(r"^[ \t]*// Inlined from: (.+?)[ \t]*$", re.MULTILINE)

DEFAULT_ATTRIBUTION_PATTERN = r"(?:^|/)(?P<module>[\w-]+)/(?P<submodule>[\w.-]+?)\.d\.ts$"

EXCLUDED_NAMES = frozenset({"constructor", "new"})

__all__ = [
    "ACCESSOR_DECLARATION",
    "CLASS_DECLARATION",
    "DEFAULT_ATTRIBUTION_PATTERN",
    "DOC_BLOCK",
    "EXCLUDED_NAMES",
    "FUNCTION_DECLARATION",
    "IDENTIFIER",
    "PROPERTY_DECLARATION",
    "PROVENANCE_MARKER",
]
