"""Configuration loading for dtsbundle (.dtsbundle.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .registry.patterns import DEFAULT_ATTRIBUTION_PATTERN

CONFIG_FILENAME = ".dtsbundle.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class BundleConfig:
    """Inputs and output of the bundling stage."""

    entry: Path
    global_file: Path
    output: Path
    namespace: str = "p5"
    max_depth: int = 64


@dataclass
class DocsConfig:
    """Documentation stage settings."""

    output_dir: Path
    title: str = "p5.js"
    version: Optional[str] = None
    attribution_pattern: str = DEFAULT_ATTRIBUTION_PATTERN
    default_module: str = "global"
    icons: Dict[str, str] = field(default_factory=dict)
    default_icon: Optional[str] = None
    converter: Optional[str] = "pandoc"


@dataclass
class ModulesConfig:
    """Upstream module asset retrieval settings."""

    output_dir: Path
    repository: str = "https://github.com/processing/p5.js.git"
    files: Dict[str, str] = field(
        default_factory=lambda: {
            "src/app.js": "p5.js",
            "lib/addons/p5.sound.js": "p5.sound.js",
        }
    )


@dataclass
class DtsBundleConfig:
    """Represents the settings defined in .dtsbundle.yml."""

    root: Path
    bundle: BundleConfig
    docs: DocsConfig
    modules: ModulesConfig


def default_config(root: Path) -> DtsBundleConfig:
    return DtsBundleConfig(
        root=root,
        bundle=BundleConfig(
            entry=root / "node_modules/@types/p5/index.d.ts",
            global_file=root / "node_modules/@types/p5/global.d.ts",
            output=root / "assets/types/p5.d.ts",
        ),
        docs=DocsConfig(output_dir=root / "doc"),
        modules=ModulesConfig(output_dir=root / "assets/libs"),
    )


def load_config(config_path: Path) -> DtsBundleConfig:
    """Load configuration from disk, falling back to defaults for missing keys."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()
    config = default_config(root)

    if not config_file.exists():
        return config

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    bundle_data = _as_dict(data.get("bundle"))
    bundle = config.bundle
    bundle.entry = _as_path(root, bundle_data.get("entry")) or bundle.entry
    bundle.global_file = _as_path(root, bundle_data.get("global")) or bundle.global_file
    bundle.output = _as_path(root, bundle_data.get("output")) or bundle.output
    bundle.namespace = _as_str(bundle_data.get("namespace")) or bundle.namespace
    max_depth = _as_int(bundle_data.get("max_depth"))
    if max_depth is not None:
        if max_depth < 1:
            raise ConfigError("bundle.max_depth must be a positive integer")
        bundle.max_depth = max_depth

    docs_data = _as_dict(data.get("docs"))
    docs = config.docs
    docs.output_dir = _as_path(root, docs_data.get("output_dir")) or docs.output_dir
    docs.title = _as_str(docs_data.get("title")) or docs.title
    docs.version = _as_str(docs_data.get("version"))
    docs.attribution_pattern = (
        _as_str(docs_data.get("attribution_pattern")) or docs.attribution_pattern
    )
    docs.default_module = _as_str(docs_data.get("default_module")) or docs.default_module
    docs.icons = _as_str_mapping(docs_data.get("icons"))
    docs.default_icon = _as_str(docs_data.get("default_icon"))
    if "converter" in docs_data:
        converter = _as_str(docs_data.get("converter"))
        docs.converter = None if converter in (None, "", "none") else converter

    modules_data = _as_dict(data.get("modules"))
    modules = config.modules
    modules.output_dir = _as_path(root, modules_data.get("output_dir")) or modules.output_dir
    modules.repository = _as_str(modules_data.get("repository")) or modules.repository
    files = _as_str_mapping(modules_data.get("files"))
    if files:
        modules.files = files

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_path(root: Path, value: Any) -> Optional[Path]:
    text = _as_str(value)
    if not text:
        return None
    path = Path(text).expanduser()
    return path if path.is_absolute() else root / path


def _as_str_mapping(value: Any) -> Dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {
        str(key): str(item)
        for key, item in value.items()
        if isinstance(item, (str, int, float)) and not isinstance(item, bool)
    }
