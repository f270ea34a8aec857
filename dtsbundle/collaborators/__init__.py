"""Thin wrappers around external tools invoked by the pipeline."""

from .converter import ConverterError, PandocConverter
from .git import FetchError, FetchOutcome, MetadataError, SourceFetcher
from .runner import CommandRunner, default_runner

__all__ = [
    "CommandRunner",
    "ConverterError",
    "FetchError",
    "FetchOutcome",
    "MetadataError",
    "PandocConverter",
    "SourceFetcher",
    "default_runner",
]
