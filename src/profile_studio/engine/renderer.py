"""Render pipeline: Template + UserProfile -> RenderOutput.

render() validates the template, orders its enabled sections and builds
each section's blocks. It is deterministic: the output holds no clock or
random values, so identical inputs give structurally equal outputs.

Failure policy:
- Validation errors abort the render (``success=False``, no output).
- A failing section is dropped and recorded when ``continue_on_error`` is
  set; the render still succeeds with the remaining sections.
- Without ``continue_on_error`` the first section failure aborts.
"""

import logging
from collections.abc import Callable
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from profile_studio.blocks.models import Block
from profile_studio.core.profile import UserProfile
from profile_studio.core.template import ColorScheme, Section, Template
from profile_studio.engine.errors import RenderError, RenderWarning, from_section_exception
from profile_studio.engine.sections import build_section_blocks
from profile_studio.engine.validation import ValidationResult, validate_profile, validate_template
from profile_studio.exceptions import SectionRenderError

logger = logging.getLogger(__name__)


class RenderContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    template_id: str
    theme: ColorScheme = "system"
    locale: str = "en"


class RenderedSection(BaseModel):
    """One section of the output with its built blocks."""

    model_config = ConfigDict(frozen=True)

    id: str
    type: str
    title: str | None = None
    visible: bool = True
    order: int = 0
    blocks: list[Block] = Field(default_factory=list)


class RenderMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    template_id: str
    template_name: str
    template_version: str
    sections_rendered: int = 0
    sections_skipped: int = 0
    warnings: list[RenderWarning] = Field(default_factory=list)


class RenderOutput(BaseModel):
    """Complete result of one render, replaced wholesale on the next."""

    model_config = ConfigDict(frozen=True)

    context: RenderContext
    sections: list[RenderedSection] = Field(default_factory=list)
    metadata: RenderMetadata


class RenderOptions(BaseModel):
    """Render settings.

    Attributes:
        theme: Preview color scheme; defaults to the template's theme
        locale: Output locale tag
        skip_validation: Skip structural validation (live preview)
        continue_on_error: Drop failing sections instead of aborting
        on_section_rendered: Called with each successfully built section
        on_error: Called with each section error as it happens
    """

    model_config = ConfigDict(frozen=True)

    theme: ColorScheme | None = None
    locale: str = "en"
    skip_validation: bool = False
    continue_on_error: bool = True
    on_section_rendered: Callable[[RenderedSection], None] | None = None
    on_error: Callable[[RenderError], None] | None = None


class RenderResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool
    output: RenderOutput | None = None
    errors: list[RenderError] = Field(default_factory=list)


def render(
    template: Template, profile: UserProfile, options: RenderOptions | None = None
) -> RenderResult:
    """Render a template against a profile.

    Args:
        template: Template to render
        profile: Profile data bound into section content
        options: Render options (defaults to ``RenderOptions()``)

    Returns:
        RenderResult with the output on success and every recorded error
    """
    opts = options or RenderOptions()

    if not opts.skip_validation:
        validation = validate_template(template)
        if not validation.valid:
            logger.error(
                "Template %s failed validation with %d error(s)",
                template.metadata.id,
                len(validation.errors),
            )
            return RenderResult(success=False, errors=validation.errors)

    context = RenderContext(
        template_id=template.metadata.id,
        theme=opts.theme or template.styles.default_theme,
        locale=opts.locale,
    )

    rendered: list[RenderedSection] = []
    errors: list[RenderError] = []
    warnings: list[RenderWarning] = []
    skipped = 0

    for section in template.sorted_sections():
        if not section.enabled:
            skipped += 1
            continue

        logger.debug("Rendering section %s (%s)", section.id, section.type)
        try:
            blocks = build_section_blocks(section, profile)
        except SectionRenderError as e:
            error = from_section_exception(e)
            if opts.on_error:
                opts.on_error(error)
            if not opts.continue_on_error:
                logger.error("Render aborted: %s", e.message)
                return RenderResult(success=False, errors=[error])

            logger.warning("Skipping section %s: %s", section.id, e.cause)
            errors.append(error)
            warnings.append(
                RenderWarning(code=error.code, message=error.message, section_id=section.id)
            )
            skipped += 1
            continue

        rendered_section = RenderedSection(
            id=section.id,
            type=section.type,
            title=section.title,
            visible=True,
            order=section.order,
            blocks=blocks,
        )
        rendered.append(rendered_section)
        if opts.on_section_rendered:
            opts.on_section_rendered(rendered_section)

    metadata = RenderMetadata(
        template_id=template.metadata.id,
        template_name=template.metadata.name,
        template_version=template.version_string,
        sections_rendered=len(rendered),
        sections_skipped=skipped,
        warnings=warnings,
    )
    return RenderResult(
        success=True,
        output=RenderOutput(context=context, sections=rendered, metadata=metadata),
        errors=errors,
    )


# Convenience functions


def validate(template: Template, profile: UserProfile) -> ValidationResult:
    """Validate template structure and warn about sections the profile can't fill."""
    result = validate_template(template)
    return result.model_copy(update={"warnings": validate_profile(template, profile)})


def render_single_section(
    section: Section,
    profile: UserProfile,
    template: Template,
    options: RenderOptions | None = None,
) -> RenderResult:
    """Render one section using ``template``'s metadata and capabilities."""
    return render(template.with_sections([section]), profile, options)


class TemplateAnalysis(BaseModel):
    total_sections: int
    enabled_sections: int
    section_types: list[str]
    estimated_complexity: Literal["low", "medium", "high"]


def analyze_template(template: Template) -> TemplateAnalysis:
    """Summarize a template's size and complexity."""
    enabled = [section for section in template.sections if section.enabled]
    section_types = list(dict.fromkeys(section.type for section in template.sections))

    complexity: Literal["low", "medium", "high"] = "low"
    if len(enabled) > 10:
        complexity = "high"
    elif len(enabled) > 5:
        complexity = "medium"

    return TemplateAnalysis(
        total_sections=len(template.sections),
        enabled_sections=len(enabled),
        section_types=section_types,
        estimated_complexity=complexity,
    )
