"""Structural template validation.

Checks that a template can be rendered: its metadata names it, section ids
are non-empty and unique, every section type is one the template supports
and the section count stays within ``capabilities.max_sections``.
"""

from pydantic import BaseModel, Field
from rich.console import Console

from profile_studio.core.profile import UserProfile
from profile_studio.core.sections import SectionType
from profile_studio.core.template import Template
from profile_studio.engine.errors import (
    RenderError,
    duplicate_section_id,
    empty_section_id,
    section_limit_exceeded,
    section_unsupported,
    validation_failed,
)

# Section types that cannot render without a GitHub username
USERNAME_SECTIONS = frozenset(
    {
        SectionType.GITHUB_STATS.value,
        SectionType.CONTRIBUTIONS.value,
        SectionType.PINNED_REPOS.value,
    }
)


class ValidationResult(BaseModel):
    """Result of template validation.

    Attributes:
        errors: Structural errors; any error makes the template invalid
        warnings: Problems that will only drop individual sections
    """

    errors: list[RenderError] = Field(default_factory=list, description="Blocking errors")
    warnings: list[str] = Field(default_factory=list, description="Non-blocking problems")

    @property
    def valid(self) -> bool:
        return not self.errors

    def format(self) -> str:
        """Format validation result for display with Rich."""
        lines: list[str] = []

        if self.valid:
            lines.append("[green]✓[/green] Template is valid")
        else:
            lines.append("[red]✗[/red] Template is invalid")

        if self.errors:
            lines.append("\n[red bold]Errors:[/red bold]")
            for error in self.errors:
                lines.append(f"  [red]•[/red] {error.code}: {error.message}")

        if self.warnings:
            lines.append("\n[yellow bold]Warnings:[/yellow bold]")
            for warning in self.warnings:
                lines.append(f"  [yellow]•[/yellow] {warning}")

        return "\n".join(lines)

    def print(self) -> None:
        """Print formatted validation result to console."""
        console = Console()
        console.print(self.format())


def validate_template(template: Template) -> ValidationResult:
    """Validate template structure, reporting every problem found."""
    errors: list[RenderError] = []
    capabilities = template.capabilities

    issues = [
        f"Template {field} is required"
        for field in ("id", "name")
        if not getattr(template.metadata, field).strip()
    ]
    if issues:
        errors.append(
            validation_failed(
                f"Validation failed with {len(issues)} issue(s): {'; '.join(issues)}",
                issues=issues,
            )
        )

    if len(template.sections) > capabilities.max_sections:
        errors.append(
            section_limit_exceeded(
                capabilities.max_sections, len(template.sections), template.metadata.id
            )
        )

    seen: set[str] = set()
    for index, section in enumerate(template.sections):
        if not section.id.strip():
            errors.append(empty_section_id(index, section.type))
        elif section.id in seen:
            errors.append(duplicate_section_id(section.id, section.type))
        seen.add(section.id)

        if not capabilities.supports(section.type):
            errors.append(
                section_unsupported(
                    section.id,
                    section.type,
                    template.metadata.id,
                    list(capabilities.supported_sections),
                )
            )

    return ValidationResult(errors=errors)


def validate_profile(template: Template, profile: UserProfile) -> list[str]:
    """Warn about enabled sections the profile cannot fill."""
    warnings: list[str] = []
    for section in template.sections:
        if not section.enabled or section.type not in USERNAME_SECTIONS:
            continue
        username = getattr(section.data, "username", "")
        if not username and not profile.github_username:
            warnings.append(
                f"Section '{section.id}' ({section.type}) needs a GitHub username "
                "and will be skipped"
            )
    return warnings
