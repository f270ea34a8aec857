"""Tests for per-module help pages."""

from __future__ import annotations

from dtsbundle.models import ApiElement, ElementKind, ModuleRecord, ModuleRegistry
from dtsbundle.registry import APIRegistryBuilder
from dtsbundle.render import HelpPageRenderer
from dtsbundle.render.helpdoc import element_tags
from dtsbundle.render.environment import HELP_WIDTH


def test_render_module_builds_tags_and_references(math_registry: ModuleRegistry) -> None:
    page = HelpPageRenderer().render_module(math_registry["math"], "1.9.0", "2024-01-01T00:00:00Z")
    lines = page.splitlines()

    assert lines[0].startswith("*p5-math.txt*")
    assert lines[0].endswith("p5.js Math API")
    assert len(lines[0]) == HELP_WIDTH
    assert "  1. Functions (1) |p5-math-functions|" in lines
    assert "  2. Variables (1) |p5-math-variables|" in lines
    assert any(line.startswith("add") and line.endswith("*p5-math-add*") for line in lines)
    assert "    Adds two numbers." in lines
    assert "    - a: first value" in lines
    assert "    Defined in: math/calculation" in lines
    assert "|p5-index.txt|" in page
    assert "*p5-math-classes*" not in page
    assert page.endswith(" vim:tw=78:ts=8:ft=help:norl:\n")


def test_render_module_has_no_trailing_whitespace(math_registry: ModuleRegistry) -> None:
    page = HelpPageRenderer().render_module(math_registry["math"], "1.9.0", "now")

    assert all(line == line.rstrip() for line in page.splitlines())
    assert "\n\n\n" not in page


def test_render_combined_wraps_markdown_in_banners() -> None:
    page = HelpPageRenderer(namespace="p5").render_combined("# Title\n\nBody\n", "1.9.0", "now")
    lines = page.splitlines()

    assert lines[0].startswith("*p5.txt*")
    assert lines[0].endswith("p5.js API Documentation    p5")
    assert "*p5-contents*" in page
    assert "# Title\n\nBody" in page
    assert page.endswith("vim:tw=78:ts=8:ft=help:norl:\n")


def test_render_module_keeps_tags_unique_across_groups() -> None:
    bundled = (
        "// Inlined from: ./src/dom/dom.d.ts\n"
        "/** Resizes the element. */\n"
        "size(w: number, h: number): void;\n"
        "/** Current size of the element. */\n"
        "size: number;\n"
    )
    record = APIRegistryBuilder().build(bundled)["dom"]

    page = HelpPageRenderer().render_module(record, "1.0.0", "now")

    assert page.count("*p5-dom-size*") == 1
    assert page.count("*p5-dom-size-variable*") == 1


def test_element_tags_avoid_section_tags() -> None:
    functions = ApiElement(name="functions", kind=ElementKind.FUNCTION, description="")
    color = ApiElement(name="Color", kind=ElementKind.CLASS, description="")
    color_variable = ApiElement(name="Color", kind=ElementKind.VARIABLE, description="")
    record = ModuleRecord(
        name="color",
        functions=(functions,),
        classes=(color,),
        variables=(color_variable,),
    )

    tags = element_tags(record, "p5-color")

    assert tags == {
        ("functions", "functions"): "p5-color-functions()",
        ("classes", "Color"): "p5-color-Color",
        ("variables", "Color"): "p5-color-Color-variable",
    }
