"""Tests for dtsbundle logger configuration."""

from __future__ import annotations

import logging

from dtsbundle.logging import ROOT_LOGGER, configure_logging, get_logger


def test_get_logger_nests_components_under_root() -> None:
    assert get_logger("bundler.resolver").name == "dtsbundle.bundler.resolver"
    assert get_logger().name == ROOT_LOGGER


def test_configure_logging_replaces_handlers_on_repeat_calls() -> None:
    configure_logging()
    logger = configure_logging(verbose=True)

    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert logger.propagate is False


def test_verbose_output_names_the_component(capsys) -> None:
    configure_logging(verbose=True)

    get_logger("registry").debug("Collected %d declarations", 3)

    assert "[dtsbundle] DEBUG registry: Collected 3 declarations" in capsys.readouterr().err


def test_default_output_omits_debug_records(capsys) -> None:
    configure_logging()

    get_logger("registry").debug("hidden")
    get_logger("registry").info("shown")

    err = capsys.readouterr().err
    assert "hidden" not in err
    assert "[dtsbundle] INFO shown" in err
