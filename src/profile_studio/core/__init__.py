"""Declarative template, section and profile models."""

from profile_studio.core.profile import UserProfile
from profile_studio.core.sections import SECTION_PAYLOADS, SectionType, payload_types
from profile_studio.core.template import (
    Section,
    Template,
    TemplateCapabilities,
    TemplateLayout,
    TemplateMetadata,
    TemplateStyles,
)

__all__ = [
    "SECTION_PAYLOADS",
    "Section",
    "SectionType",
    "Template",
    "TemplateCapabilities",
    "TemplateLayout",
    "TemplateMetadata",
    "TemplateStyles",
    "UserProfile",
    "payload_types",
]
