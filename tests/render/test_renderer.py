"""Tests for multi-format rendering and shared template helpers."""

from __future__ import annotations

from pathlib import Path

from dtsbundle.models import ModuleRegistry
from dtsbundle.render import MultiFormatRenderer
from dtsbundle.render.environment import align, tidy


def test_render_all_produces_markdown_help_and_index(
    math_registry: ModuleRegistry, tmp_path: Path
) -> None:
    renderer = MultiFormatRenderer(namespace="p5")

    artifacts = renderer.render_all(math_registry, "1.9.0", "now", tmp_path)

    assert [artifact.kind for artifact in artifacts] == ["markdown", "help", "index"]
    assert [Path(artifact.destination).name for artifact in artifacts] == [
        "p5.md",
        "p5-math.txt",
        "p5-index.txt",
    ]


def test_render_all_is_deterministic(math_registry: ModuleRegistry, tmp_path: Path) -> None:
    renderer = MultiFormatRenderer()

    first = renderer.render_all(math_registry, "1.9.0", "now", tmp_path)
    second = renderer.render_all(math_registry, "1.9.0", "now", tmp_path)

    assert first == second


def test_templates_dir_overrides_builtin_templates(
    math_registry: ModuleRegistry, tmp_path: Path
) -> None:
    templates = tmp_path / "templates"
    templates.mkdir()
    (templates / "index.txt.j2").write_text("custom {{ namespace }}\n", encoding="utf-8")

    renderer = MultiFormatRenderer(templates_dir=templates)
    index = renderer.render_all(math_registry, "1.9.0", "now", tmp_path)[-1]

    assert index.content == "custom p5\n"


def test_align_and_tidy_helpers() -> None:
    assert align("left", "right", width=12) == "left   right"
    assert align("much too long", "tag", width=5) == "much too long tag"
    assert tidy("\n\na  \n\n\n\nb\n\n") == "a\n\nb\n"
