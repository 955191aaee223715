"""Markdown export of rendered templates."""

from profile_studio.markdown.document import ExportOptions, document_to_markdown
from profile_studio.markdown.serializer import (
    MARKDOWN_RENDERERS,
    block_to_markdown,
    section_to_markdown,
)

__all__ = [
    "MARKDOWN_RENDERERS",
    "ExportOptions",
    "block_to_markdown",
    "document_to_markdown",
    "section_to_markdown",
]
