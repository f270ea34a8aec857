"""Tests for API registry mining from bundled text."""

from __future__ import annotations

from dtsbundle.models import ElementKind
from dtsbundle.registry import APIRegistryBuilder

MATH_CHUNK = """\
// Inlined from: ./src/math/calculation.d.ts

    interface p5InstanceExtensions {
        /**
         * Adds two numbers.
         * @param a first value
         * @param b second value
         * @returns the sum
         */
        add(a: number, b: number): number;

        floor(n: number): number;
    }
"""


def test_build_attributes_documented_function_to_module() -> None:
    registry = APIRegistryBuilder().build(MATH_CHUNK)

    assert list(registry) == ["math"]
    record = registry["math"]
    assert [element.name for element in record.functions] == ["add"]
    add = record.functions[0]
    assert add.kind is ElementKind.FUNCTION
    assert add.description == "Adds two numbers.\n- a: first value\n- b: second value\n- Returns: the sum"
    assert (add.origin_module, add.origin_submodule) == ("math", "calculation")
    assert record.classes == ()
    assert record.variables == ()


def test_build_ignores_text_before_first_marker() -> None:
    bundled = "/** Preamble docs. */\ndeclare function setup(): void;\n" + MATH_CHUNK

    registry = APIRegistryBuilder().build(bundled)

    assert list(registry) == ["math"]
    assert all(element.name != "setup" for element in registry.all_elements("functions"))


def test_build_groups_unmatched_chunks_under_previous_module() -> None:
    bundled = MATH_CHUNK + (
        "// Inlined from: ./constants.d.ts\n"
        "/** Half of pi. */\n"
        "declare const HALF_PI: number;\n"
    )

    registry = APIRegistryBuilder().build(bundled)

    assert list(registry) == ["math"]
    half_pi = registry["math"].variables[0]
    assert half_pi.name == "HALF_PI"
    assert half_pi.kind is ElementKind.VARIABLE
    assert half_pi.origin_module is None


def test_build_uses_default_module_before_any_attributed_chunk() -> None:
    bundled = (
        "// Inlined from: ./constants.d.ts\n"
        "/** Full circle. */\n"
        "declare const TWO_PI: number;\n"
    )

    assert list(APIRegistryBuilder().build(bundled)) == ["global"]
    assert list(APIRegistryBuilder(default_module="misc").build(bundled)) == ["misc"]


def test_build_keeps_first_overload_and_skips_constructors() -> None:
    bundled = (
        "// Inlined from: ./src/color/p5.Color.d.ts\n"
        "/** A color value. */\n"
        "class Color {\n"
        "    /** Builds a color. */\n"
        "    constructor(r: number);\n"
        "    /** Sets the red channel. */\n"
        "    setRed(red: number): void;\n"
        "    /** Overload taking a string. */\n"
        "    setRed(red: string): void;\n"
        "}\n"
    )

    record = APIRegistryBuilder().build(bundled)["color"]

    assert [element.name for element in record.classes] == ["Color"]
    assert record.classes[0].kind is ElementKind.CLASS
    assert [element.name for element in record.functions] == ["setRed"]
    assert record.functions[0].description == "Sets the red channel."


def test_build_orders_elements_by_position_and_detects_interfaces() -> None:
    bundled = (
        "// Inlined from: ./src/core/shape.d.ts\n"
        "/** Second in file. */\n"
        "declare function rect(x: number): void;\n"
        "/** Shape options. */\n"
        "interface ShapeOptions {}\n"
        "/** First function after the interface. */\n"
        "declare function ellipse(x: number): void;\n"
    )

    record = APIRegistryBuilder().build(bundled)["core"]

    assert [element.name for element in record.functions] == ["rect", "ellipse"]
    assert record.classes[0].kind is ElementKind.INTERFACE


def test_build_records_matched_module_without_documented_elements() -> None:
    bundled = "// Inlined from: ./src/io/files.d.ts\ndeclare function loadJSON(path: string): object;\n"

    registry = APIRegistryBuilder().build(bundled)

    assert list(registry) == ["io"]
    assert registry["io"].is_empty


def test_build_accepts_custom_attribution_pattern() -> None:
    bundled = (
        "// Inlined from: lib/sound/p5.sound.d.ts\n"
        "/** Starts audio. */\n"
        "declare function userStartAudio(): Promise<any>;\n"
    )
    builder = APIRegistryBuilder(
        attribution_pattern=r"lib/(?P<module>\w+)/(?P<submodule>[\w.]+)\.d\.ts$"
    )

    record = builder.build(bundled)["sound"]

    assert record.functions[0].origin_submodule == "p5.sound"


def test_split_returns_chunks_in_marker_order() -> None:
    bundled = (
        "header\n"
        "// Inlined from: ./src/a/one.d.ts\nfirst\n"
        "// Inlined from: ./other.d.ts\nsecond\n"
    )

    chunks = APIRegistryBuilder().split(bundled)

    assert [chunk.source for chunk in chunks] == ["./src/a/one.d.ts", "./other.d.ts"]
    assert chunks[0].module == "a"
    assert chunks[1].module is None
    assert "second" in chunks[1].content


def test_build_mines_private_members_and_accessors() -> None:
    bundled = (
        "// Inlined from: ./src/core/p5.Graphics.d.ts\n"
        "/** Canvas width in pixels. */\n"
        "private width: number;\n"
        "/** Canvas height in pixels. */\n"
        "get height(): number;\n"
        "/** Sets the canvas height. */\n"
        "set height(value: number);\n"
        "/** Clears the backing buffer. */\n"
        "private reset(): void;\n"
    )

    record = APIRegistryBuilder().build(bundled)["core"]

    assert [element.name for element in record.variables] == ["width", "height"]
    assert record.variables[1].description == "Canvas height in pixels."
    assert [element.name for element in record.functions] == ["reset"]
