"""Subprocess runner shared by external collaborators."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, Iterable

CommandRunner = Callable[..., str]


def default_runner(
    args: Iterable[str],
    *,
    cwd: Path | None = None,
    capture_output: bool = False,
) -> str:
    completed = subprocess.run(
        list(args),
        cwd=str(cwd) if cwd is not None else None,
        check=True,
        text=True,
        capture_output=capture_output,
    )
    if capture_output:
        return completed.stdout
    return ""


__all__ = ["CommandRunner", "default_runner"]
