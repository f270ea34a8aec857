"""Optional Markdown-to-help conversion through pandoc."""

from __future__ import annotations

import subprocess
from pathlib import Path

from ..logging import get_logger
from .runner import CommandRunner, default_runner


class ConverterError(RuntimeError):
    """Raised when the external converter is missing or fails."""


class PandocConverter:
    """Converts the Markdown reference into a help page with pandoc."""

    def __init__(self, runner: CommandRunner | None = None, *, executable: str = "pandoc") -> None:
        self._runner = runner or default_runner
        self.executable = executable
        self.logger = get_logger("collaborators.converter")

    def available(self) -> bool:
        try:
            self._runner([self.executable, "--version"], capture_output=True)
        except (OSError, subprocess.CalledProcessError):
            return False
        return True

    def convert(self, markdown_path: Path, output_path: Path, *, title: str, description: str) -> Path:
        if not self.available():
            raise ConverterError(f"{self.executable} is not available")
        args = [
            self.executable,
            str(markdown_path),
            "-f",
            "markdown",
            "-t",
            "vimdoc",
            f"--metadata=title={title}",
            f"--variable=description={description}",
            "-o",
            str(output_path),
        ]
        try:
            self._runner(args)
        except (OSError, subprocess.CalledProcessError) as exc:
            raise ConverterError(f"{self.executable} conversion failed: {exc}") from exc
        self.logger.info("Help page written to %s by %s", output_path, self.executable)
        return output_path


__all__ = ["ConverterError", "PandocConverter"]
