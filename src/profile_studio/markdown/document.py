"""README document assembly using Jinja2 templates."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Literal

from jinja2 import Environment, FileSystemLoader, select_autoescape
from pydantic import BaseModel

from profile_studio.markdown.escape import normalize_line_endings
from profile_studio.markdown.serializer import section_to_markdown

if TYPE_CHECKING:
    from profile_studio.engine.renderer import RenderOutput

# Template directory
TEMPLATES_DIR = Path(__file__).parent / "templates"

ATTRIBUTION_COMMENT = "<!-- Created with GitHub Profile Studio -->"
ATTRIBUTION_FOOTER = (
    "*Made with ❤️ using [GitHub Profile Studio](https://github.com/github-profile-studio)*"
)


class ExportOptions(BaseModel):
    """Markdown export settings.

    Attributes:
        include_section_comments: Prefix each section with ``<!-- Section: type -->``
        attribution: Add the Profile Studio header comment and footer
        line_ending: ``lf`` or ``crlf``
    """

    include_section_comments: bool = False
    attribution: bool = False
    line_ending: Literal["lf", "crlf"] = "lf"


def get_jinja_env() -> Environment:
    """Get configured Jinja2 environment."""
    return Environment(
        loader=FileSystemLoader(TEMPLATES_DIR),
        autoescape=select_autoescape(default=False),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def document_to_markdown(output: RenderOutput, options: ExportOptions | None = None) -> str:
    """Assemble the README for a render output.

    Visible sections are separated by a blank line. The result has no
    trailing whitespace beyond a single final newline, and is "" when
    there is nothing to export.

    Args:
        output: Render output to export
        options: Export settings (defaults to ``ExportOptions()``)

    Returns:
        Markdown text using the requested line endings
    """
    opts = options or ExportOptions()
    sections = [
        markdown
        for section in output.sections
        if (markdown := section_to_markdown(section, opts.include_section_comments))
    ]

    env = get_jinja_env()
    template = env.get_template("readme.md.j2")
    result: str = template.render(
        sections=sections,
        options=opts,
        attribution_comment=ATTRIBUTION_COMMENT,
        attribution_footer=ATTRIBUTION_FOOTER,
    )

    result = result.strip()
    if not result:
        return ""
    # Ensure trailing newline for POSIX compliance
    return normalize_line_endings(result + "\n", opts.line_ending)
