"""Profile Studio exception hierarchy.

Provides a unified exception hierarchy for the rendering engine, the
builder store and the CLI. This enables:
- User-friendly error messages in the CLI
- Programmatic error handling in library usage
- Clear distinction between authoring errors and internal bugs

Usage:
    from profile_studio.exceptions import SectionRenderError, StudioError

    try:
        blocks = build_section_blocks(section, profile)
    except SectionRenderError as e:
        print(f"Section {e.section_id} failed: {e.cause}")
    except StudioError as e:
        print(f"Profile Studio error: {e}")
"""


class StudioError(Exception):
    """Base exception for all Profile Studio errors.

    All package-specific exceptions inherit from this class, allowing
    callers to catch every engine error with a single except clause.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


# Configuration Errors


class ConfigurationError(StudioError):
    """Error in Profile Studio configuration.

    Raised when config.yaml is invalid, missing required fields,
    or contains incompatible settings.
    """

    pass


# Template Errors


class TemplateError(StudioError):
    """Base class for template-related errors."""

    pass


class TemplateNotFoundError(TemplateError):
    """Template not found in the catalog."""

    def __init__(self, template_id: str) -> None:
        self.template_id = template_id
        super().__init__(f"Template not found: {template_id}")


# Render Errors


class RenderingError(StudioError):
    """Base class for errors raised while producing output."""

    pass


class SectionRenderError(RenderingError):
    """A single section's block-builder failed.

    Recovered by the render pipeline when error-tolerant mode is enabled,
    escalated to abort the pipeline otherwise.
    """

    def __init__(
        self,
        section_id: str,
        section_type: str,
        cause: str,
        code: str = "SECTION_RENDER_FAILED",
    ) -> None:
        self.section_id = section_id
        self.section_type = section_type
        self.cause = cause
        self.code = code
        super().__init__(
            f"Failed to render section '{section_id}' of type '{section_type}': {cause}"
        )


class SerializationError(RenderingError):
    """Output could not be serialized.

    The serializers are total, so this signals a defect such as a block
    kind missing from a dispatch table rather than bad user input.
    """

    def __init__(self, kind: str, target: str) -> None:
        self.kind = kind
        self.target = target
        super().__init__(f"No {target} serializer registered for block kind '{kind}'")


# Storage Errors


class StateFileError(StudioError):
    """Persisted builder state could not be read or written."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid state file {path}: {reason}")


class ProfileError(StudioError):
    """A profile file could not be read or does not match the profile schema."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid profile {path}: {reason}")
