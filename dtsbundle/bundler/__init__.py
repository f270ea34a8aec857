"""Bundling of declaration trees into a single flat document."""

from .composer import DocumentComposer
from .extractor import ModuleContentExtractor
from .resolver import (
    FAILURE_PREFIX,
    PROVENANCE_PREFIX,
    ReferenceResolver,
    load_declaration_file,
    scan_directives,
)

__all__ = [
    "DocumentComposer",
    "FAILURE_PREFIX",
    "ModuleContentExtractor",
    "PROVENANCE_PREFIX",
    "ReferenceResolver",
    "load_declaration_file",
    "scan_directives",
]
