"""Render error records.

Exceptions in ``profile_studio.exceptions`` are raised; the records here are
returned in ``RenderResult.errors`` so callers can inspect every failure of a
render without catching anything.
"""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from profile_studio.exceptions import SectionRenderError


class RenderErrorCode(str, Enum):
    """Machine-readable error codes."""

    VALIDATION_FAILED = "VALIDATION_FAILED"
    DUPLICATE_SECTION_ID = "DUPLICATE_SECTION_ID"
    EMPTY_SECTION_ID = "EMPTY_SECTION_ID"
    SECTION_UNSUPPORTED = "SECTION_UNSUPPORTED"
    SECTION_LIMIT_EXCEEDED = "SECTION_LIMIT_EXCEEDED"
    SECTION_RENDER_FAILED = "SECTION_RENDER_FAILED"
    GITHUB_USERNAME_REQUIRED = "GITHUB_USERNAME_REQUIRED"


ErrorCategory = Literal["validation", "section"]


class RenderError(BaseModel):
    """One failure recorded during validation or section rendering."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    code: RenderErrorCode
    message: str
    category: ErrorCategory
    recoverable: bool = False
    section_id: str | None = None
    section_type: str | None = None
    details: dict[str, Any] = Field(default_factory=dict)


class RenderWarning(BaseModel):
    """Non-fatal note attached to render metadata."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    section_id: str | None = None


# Factories


def validation_failed(message: str, **details: Any) -> RenderError:
    return RenderError(
        code=RenderErrorCode.VALIDATION_FAILED,
        message=message,
        category="validation",
        details=details,
    )


def empty_section_id(index: int, section_type: str) -> RenderError:
    return RenderError(
        code=RenderErrorCode.EMPTY_SECTION_ID,
        message=f"Section at position {index} has an empty id",
        category="validation",
        section_type=section_type,
        details={"index": index},
    )


def duplicate_section_id(section_id: str, section_type: str) -> RenderError:
    return RenderError(
        code=RenderErrorCode.DUPLICATE_SECTION_ID,
        message=f"Duplicate section id '{section_id}'",
        category="validation",
        section_id=section_id,
        section_type=section_type,
    )


def section_unsupported(
    section_id: str, section_type: str, template_id: str, supported: list[str]
) -> RenderError:
    return RenderError(
        code=RenderErrorCode.SECTION_UNSUPPORTED,
        message=f"Section type '{section_type}' is not supported by template '{template_id}'",
        category="validation",
        section_id=section_id,
        section_type=section_type,
        details={"template_id": template_id, "supported_sections": supported},
    )


def section_limit_exceeded(max_sections: int, actual: int, template_id: str) -> RenderError:
    return RenderError(
        code=RenderErrorCode.SECTION_LIMIT_EXCEEDED,
        message=(
            f"Template '{template_id}' allows at most {max_sections} sections, "
            f"found {actual}"
        ),
        category="validation",
        details={"max_sections": max_sections, "actual_sections": actual},
    )


def from_section_exception(exc: SectionRenderError) -> RenderError:
    """Convert a raised ``SectionRenderError`` into a recoverable record."""
    return RenderError(
        code=RenderErrorCode(exc.code),
        message=exc.message,
        category="section",
        recoverable=True,
        section_id=exc.section_id,
        section_type=exc.section_type,
        details={"cause": exc.cause},
    )
