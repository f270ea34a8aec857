"""Persistence helpers for dtsbundle outputs."""

from .artifacts import ArtifactWriteError, ArtifactWriter

__all__ = ["ArtifactWriteError", "ArtifactWriter"]
