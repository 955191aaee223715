"""Structural (HTML) preview of rendered templates."""

from profile_studio.preview.images import ImageTracker, StatCardImage
from profile_studio.preview.nodes import UINode
from profile_studio.preview.renderer import (
    PREVIEW_RENDERERS,
    PreviewContext,
    render_block,
    render_output,
    render_preview_page,
    render_section,
)

__all__ = [
    "PREVIEW_RENDERERS",
    "ImageTracker",
    "PreviewContext",
    "StatCardImage",
    "UINode",
    "render_block",
    "render_output",
    "render_preview_page",
    "render_section",
]
