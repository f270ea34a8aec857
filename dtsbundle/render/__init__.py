"""Rendering of the API registry into documentation pages."""

from .helpdoc import HelpPageRenderer, combined_page_name, index_page_name, module_page_name
from .icons import BUILTIN_ICONS, DEFAULT_ICON, IconTable
from .index import IndexRenderer
from .markdown import MarkdownRenderer
from .renderer import MultiFormatRenderer

__all__ = [
    "BUILTIN_ICONS",
    "DEFAULT_ICON",
    "HelpPageRenderer",
    "IconTable",
    "IndexRenderer",
    "MarkdownRenderer",
    "MultiFormatRenderer",
    "combined_page_name",
    "index_page_name",
    "module_page_name",
]
