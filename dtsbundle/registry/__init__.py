"""API registry mining from bundled declaration text."""

from .builder import DEFAULT_MODULE, APIRegistryBuilder, AttributedChunk
from .doc_comments import clean_doc_block

__all__ = ["APIRegistryBuilder", "AttributedChunk", "DEFAULT_MODULE", "clean_doc_block"]
