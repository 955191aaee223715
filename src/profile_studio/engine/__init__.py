"""Template rendering engine."""

from profile_studio.engine.errors import RenderError, RenderErrorCode, RenderWarning
from profile_studio.engine.renderer import (
    RenderContext,
    RenderedSection,
    RenderMetadata,
    RenderOptions,
    RenderOutput,
    RenderResult,
    TemplateAnalysis,
    analyze_template,
    render,
    render_single_section,
    validate,
)
from profile_studio.engine.validation import ValidationResult, validate_template

__all__ = [
    "RenderContext",
    "RenderError",
    "RenderErrorCode",
    "RenderMetadata",
    "RenderOptions",
    "RenderOutput",
    "RenderResult",
    "RenderWarning",
    "RenderedSection",
    "TemplateAnalysis",
    "ValidationResult",
    "analyze_template",
    "render",
    "render_single_section",
    "validate",
    "validate_template",
]
