from __future__ import annotations

import logging
from pathlib import Path

import pytest

from dtsbundle.models import ApiElement, ElementKind, ModuleRecord, ModuleRegistry
from tests._fixtures.tree_builder import DeclarationTreeBuilder


@pytest.fixture
def tree_builder(tmp_path: Path) -> DeclarationTreeBuilder:
    """Provide a declaration tree builder rooted at the pytest tmp_path."""
    return DeclarationTreeBuilder(tmp_path)


@pytest.fixture
def math_registry() -> ModuleRegistry:
    """Registry with one documented function and one documented constant."""
    add = ApiElement(
        name="add",
        kind=ElementKind.FUNCTION,
        description="Adds two numbers.\n- a: first value\n- b: second value",
        origin_module="math",
        origin_submodule="calculation",
    )
    tau = ApiElement(name="TAU", kind=ElementKind.VARIABLE, description="Full turn.")
    return ModuleRegistry([ModuleRecord(name="math", functions=(add,), variables=(tau,))])


@pytest.fixture(autouse=True)
def _reset_dtsbundle_logger():
    """Undo CLI logging configuration so caplog sees dtsbundle records."""

    def _reset() -> None:
        logger = logging.getLogger("dtsbundle")
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.propagate = True
        logger.setLevel(logging.NOTSET)

    _reset()
    yield
    _reset()
