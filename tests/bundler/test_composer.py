"""Tests for the bundled document composer."""

from __future__ import annotations

from dtsbundle.bundler.composer import DocumentComposer, declared_names


def test_compose_orders_preamble_entry_global_and_footer() -> None:
    composer = DocumentComposer(namespace="p5")

    document = composer.compose(
        "declare class p5 {}\n",
        "declare function createCanvas(w: number, h: number): void;\n",
        generated_at="2024-05-01T00:00:00Z",
    )

    preamble = document.index("type ANGLE_MODE = RADIANS | DEGREES;")
    entry = document.index("declare class p5 {}")
    global_section = document.index("declare function createCanvas")
    footer = document.index("export as namespace p5;")
    assert preamble < entry < global_section < footer
    assert document.rstrip().endswith("export = p5;")
    assert "// Generated: 2024-05-01T00:00:00Z" in document
    assert "P5 NAMESPACE SUPPORT" in document


def test_compose_neutralises_module_syntax_in_sections() -> None:
    composer = DocumentComposer()
    global_content = (
        'import p5 = require("./index");\n'
        'import other = require("./lib/other");\n'
        "declare module 'p5' {\n"
        "}\n"
    )

    document = composer.compose("", global_content)

    assert 'require("./index")' not in document
    assert "// Import removed" in document
    assert "// Module declaration removed" in document


def test_compose_keeps_duplicate_declarations() -> None:
    composer = DocumentComposer()
    entry = "declare function background(v: number): void;\n"

    document = composer.compose(entry, entry)

    assert document.count("declare function background") == 2
    assert composer.duplicate_symbols(entry, entry) == ["background"]


def test_duplicate_symbols_lists_shared_top_level_names() -> None:
    composer = DocumentComposer()
    entry = "declare function add(a: number): number;\nclass Vector {}\ndeclare const TAU: number;\n"
    global_content = "declare function add(a: number): number;\ndeclare var TAU: number;\n"

    assert composer.duplicate_symbols(entry, global_content) == ["add", "TAU"]
    assert declared_names(entry) == ["add", "Vector", "TAU"]


def test_compose_neutralises_es_imports_in_sections() -> None:
    composer = DocumentComposer()
    global_content = (
        "import * as p5 from './index';\n"
        "import p5b = require('./index');\n"
        "import { Color } from './color';\n"
        "declare function fill(v: number): void;\n"
    )

    document = composer.compose("", global_content)
    global_section = document.split("GLOBAL SUPPORT", 1)[1]

    assert not any(line.startswith("import") for line in global_section.splitlines())
    assert "require(" not in global_section
    assert global_section.count("// Import removed") == 2
    assert "declare function fill(v: number): void;" in global_section
