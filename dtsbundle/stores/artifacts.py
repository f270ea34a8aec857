"""Writing of rendered artifacts to disk."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from ..logging import get_logger
from ..models import OutputArtifact


class ArtifactWriteError(RuntimeError):
    """Raised when an artifact cannot be written."""


class ArtifactWriter:
    """Writes artifacts as UTF-8 text, creating parent directories.

    Artifacts already written in a run are left in place when a later write
    fails.
    """

    def __init__(self) -> None:
        self.logger = get_logger("stores.artifacts")
        self.written: List[Path] = []

    def write(self, artifact: OutputArtifact) -> Path:
        path = Path(artifact.destination)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(artifact.content, encoding="utf-8")
        except OSError as exc:
            raise ArtifactWriteError(f"Failed to write {artifact.kind} artifact {path}: {exc}") from exc
        self.written.append(path)
        self.logger.info(
            "Wrote %s to %s (%d bytes, %d lines)",
            artifact.kind,
            path,
            len(artifact.content.encode("utf-8")),
            artifact.content.count("\n"),
        )
        return path

    def write_all(self, artifacts: Iterable[OutputArtifact]) -> List[Path]:
        return [self.write(artifact) for artifact in artifacts]


__all__ = ["ArtifactWriteError", "ArtifactWriter"]
