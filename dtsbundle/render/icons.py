"""Module name to icon configuration for the master index."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

DEFAULT_ICON = "📦"

BUILTIN_ICONS: Dict[str, str] = {
    "core": "⚙️",
    "color": "🎨",
    "shape": "🔷",
    "math": "🧮",
    "typography": "🔤",
    "image": "🖼️",
    "io": "💾",
    "data": "📊",
    "dom": "🌐",
    "events": "🖱️",
    "environment": "🌍",
    "rendering": "🖌️",
    "structure": "🏗️",
    "transform": "🔄",
    "utilities": "🛠️",
    "webgl": "🧊",
    "accessibility": "♿",
    "sound": "🔊",
    "addons": "🧩",
}


@dataclass(frozen=True)
class IconTable:
    """Static icon lookup with a default for unmapped module names."""

    icons: Mapping[str, str] = field(default_factory=lambda: dict(BUILTIN_ICONS))
    default: str = DEFAULT_ICON

    @classmethod
    def with_overrides(
        cls, overrides: Optional[Mapping[str, str]] = None, default: Optional[str] = None
    ) -> "IconTable":
        merged = dict(BUILTIN_ICONS)
        merged.update({key.lower(): icon for key, icon in (overrides or {}).items()})
        return cls(icons=merged, default=default or DEFAULT_ICON)

    def lookup(self, module: str) -> str:
        return self.icons.get(module.lower(), self.default)


__all__ = ["BUILTIN_ICONS", "DEFAULT_ICON", "IconTable"]
