"""Template environment and helpers shared by the page renderers."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Sequence

from jinja2 import Environment, FileSystemLoader

from ..models import KIND_GROUPS, ApiElement

HELP_WIDTH = 78
HELP_RULE = "=" * HELP_WIDTH
HELP_MODELINE = "vim:tw=78:ts=8:ft=help:norl:"

GROUP_TITLES = {
    "functions": "Functions",
    "classes": "Classes",
    "variables": "Variables",
}


@dataclass(frozen=True)
class KindGroup:
    """Non-empty elements of one kind, ready for a template."""

    key: str
    title: str
    elements: Sequence[ApiElement]


def kind_groups(elements_by_group: Mapping[str, Sequence[ApiElement]]) -> List[KindGroup]:
    """Return groups in fixed kind order, omitting kinds with no elements."""
    return [
        KindGroup(key=key, title=GROUP_TITLES[key], elements=elements_by_group[key])
        for key in KIND_GROUPS
        if elements_by_group.get(key)
    ]


def align(left: str, right: str, width: int = HELP_WIDTH) -> str:
    """Place `right` flush with the help page width after `left`."""
    gap = max(1, width - len(left) - len(right))
    return f"{left}{' ' * gap}{right}"


def anchor(name: str) -> str:
    return name.lower()


def tidy(text: str) -> str:
    """Strip trailing spaces, collapse blank runs, and end with one newline."""
    lines = [line.rstrip() for line in text.replace("\r\n", "\n").split("\n")]
    cleaned: List[str] = []
    for line in lines:
        if not line and (not cleaned or not cleaned[-1]):
            continue
        cleaned.append(line)
    while cleaned and not cleaned[-1]:
        cleaned.pop()
    return "\n".join(cleaned) + "\n"


def create_environment(templates_dir: Path | None = None) -> Environment:
    directories = []
    if templates_dir:
        directories.append(str(templates_dir))
    directories.append(str(Path(__file__).with_name("templates")))
    env = Environment(
        loader=FileSystemLoader(directories),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.globals.update(align=align, rule=HELP_RULE, modeline=HELP_MODELINE)
    env.filters["anchor"] = anchor
    return env


__all__ = [
    "GROUP_TITLES",
    "HELP_MODELINE",
    "HELP_RULE",
    "HELP_WIDTH",
    "KindGroup",
    "align",
    "anchor",
    "create_environment",
    "kind_groups",
    "tidy",
]
