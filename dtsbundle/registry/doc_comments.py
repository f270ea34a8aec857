"""Cleaning of JSDoc-style documentation blocks."""

from __future__ import annotations

import re

_LEADING_MARKER = re.compile(r"^\*+ ?")
_PARAM_TAG = re.compile(r"^@param[ \t]+(?:\{[^}]*\}[ \t]+)?(\S+)[ \t]*(.*)$", re.MULTILINE)
_RETURNS_TAG = re.compile(r"^@returns[ \t]+(.*)$", re.MULTILINE)


def _param_bullet(match: re.Match) -> str:
    name, text = match.group(1), match.group(2).strip()
    return f"- {name}: {text}" if text else f"- {name}:"


def clean_doc_block(raw: str) -> str:
    """Turn a raw documentation block into plain description text.

    `@param` and `@returns` tags become bullets; other tags are kept verbatim.
    """
    text = raw.strip()
    if text.startswith("/**"):
        text = text[3:]
    if text.endswith("*/"):
        text = text[:-2]

    lines = []
    for line in text.splitlines():
        stripped = _LEADING_MARKER.sub("", line.strip())
        lines.append(stripped.rstrip())

    cleaned = "\n".join(lines)
    cleaned = _PARAM_TAG.sub(_param_bullet, cleaned)
    cleaned = _RETURNS_TAG.sub(lambda match: f"- Returns: {match.group(1).strip()}", cleaned)
    return cleaned.strip()


__all__ = ["clean_doc_block"]
