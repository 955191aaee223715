"""Pydantic schemas for templates and sections."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, SerializeAsAny, model_validator

from profile_studio.core.sections import (
    SECTION_PAYLOADS,
    SectionConfig,
    SectionData,
    SectionType,
)

ColorScheme = Literal["light", "dark", "system"]

DEFAULT_SUPPORTED_SECTIONS: list[SectionType] = [
    SectionType.HERO,
    SectionType.ABOUT,
    SectionType.TECH_STACK,
    SectionType.GITHUB_STATS,
    SectionType.PROJECTS,
    SectionType.SOCIALS,
    SectionType.CONTACT,
    SectionType.DIVIDER,
    SectionType.SPACER,
]


class Section(BaseModel):
    """A titled, orderable, toggleable unit of a template.

    ``data`` and ``config`` are coerced into the concrete record types
    registered for ``type`` in ``SECTION_PAYLOADS``.
    """

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    id: str
    type: SectionType
    enabled: bool = True
    order: int = 0
    title: str | None = None
    data: SerializeAsAny[SectionData]
    config: SerializeAsAny[SectionConfig]

    @model_validator(mode="before")
    @classmethod
    def _coerce_payloads(cls, values: Any) -> Any:
        if not isinstance(values, dict) or "type" not in values:
            return values
        try:
            data_cls, config_cls = SECTION_PAYLOADS[SectionType(values["type"])]
        except ValueError:
            # Unknown tag; let field validation report it
            return values

        coerced = dict(values)
        for key, payload_cls in (("data", data_cls), ("config", config_cls)):
            raw = coerced.get(key)
            if raw is None:
                coerced[key] = payload_cls()
            elif type(raw) is payload_cls:
                continue
            elif isinstance(raw, BaseModel):
                coerced[key] = payload_cls.model_validate(raw.model_dump())
            else:
                coerced[key] = payload_cls.model_validate(raw)
        return coerced


class SemanticVersion(BaseModel):
    """Template version triple."""

    model_config = ConfigDict(frozen=True)

    major: int = 1
    minor: int = 0
    patch: int = 0

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


class TemplateMetadata(BaseModel):
    """Descriptive template metadata."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    category: Literal[
        "minimal",
        "professional",
        "creative",
        "developer",
        "animated",
        "data-driven",
        "portfolio",
        "academic",
    ] = "minimal"
    tags: list[str] = Field(default_factory=list)
    author: str = ""
    version: SemanticVersion = Field(default_factory=SemanticVersion)
    featured: bool = False


class TemplateLayout(BaseModel):
    """Page-level layout hints."""

    model_config = ConfigDict(frozen=True)

    direction: Literal["vertical", "horizontal"] = "vertical"
    max_width: Literal["sm", "md", "lg", "xl", "full"] = "lg"
    container_style: Literal["centered", "full-width", "sidebar"] = "centered"


class TemplateStyles(BaseModel):
    """Visual style theme."""

    model_config = ConfigDict(frozen=True)

    default_theme: ColorScheme = "system"
    accent_color: str = "#0969da"


class TemplateCapabilities(BaseModel):
    """Capability flags a template declares."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    supported_sections: list[SectionType] = Field(
        default_factory=lambda: list(DEFAULT_SUPPORTED_SECTIONS)
    )
    max_sections: int = 20
    supports_animations: bool = True
    supports_github_stats: bool = True
    supports_dark_mode: bool = True
    allow_custom_sections: bool = False
    allow_section_reordering: bool = True

    def supports(self, section_type: SectionType | str) -> bool:
        """Check if a section type is supported."""
        return SectionType(section_type).value in self.supported_sections


class Template(BaseModel):
    """Complete declarative template.

    Templates are immutable: every edit produces a new Template value.
    """

    model_config = ConfigDict(frozen=True)

    metadata: TemplateMetadata
    layout: TemplateLayout = Field(default_factory=TemplateLayout)
    styles: TemplateStyles = Field(default_factory=TemplateStyles)
    capabilities: TemplateCapabilities = Field(default_factory=TemplateCapabilities)
    sections: list[Section] = Field(default_factory=list)

    @property
    def version_string(self) -> str:
        return str(self.metadata.version)

    def get_section(self, section_id: str) -> Section | None:
        """Get a section by id."""
        for section in self.sections:
            if section.id == section_id:
                return section
        return None

    def sorted_sections(self) -> list[Section]:
        """Sections sorted by ``order``; ties keep array position."""
        return sorted(self.sections, key=lambda s: s.order)

    def with_sections(self, sections: list[Section]) -> "Template":
        """Return a copy of this template holding ``sections``."""
        return self.model_copy(update={"sections": sections})
