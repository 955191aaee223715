"""Render command implementation - template to README markdown."""

import logging
from pathlib import Path
from typing import Literal

import typer

from profile_studio.commands.inputs import load_inputs
from profile_studio.config import load_config, merge_cli_overrides
from profile_studio.core.template import ColorScheme
from profile_studio.display import print_error, print_render_result
from profile_studio.engine.renderer import render
from profile_studio.exceptions import ConfigurationError
from profile_studio.markdown.document import document_to_markdown

logger = logging.getLogger(__name__)


def render_command(
    template_ref: str,
    profile_path: Path | None = None,
    username: str | None = None,
    output: Path | None = None,
    theme: ColorScheme | None = None,
    strict: bool | None = None,
    section_comments: bool | None = None,
    attribution: bool | None = None,
    line_ending: Literal["lf", "crlf"] | None = None,
) -> None:
    """Render a template to README markdown.

    Writes to ``output`` when given, otherwise to stdout so the result
    can be piped.

    Exit Codes:
        0: Rendered (possibly with skipped sections)
        1: Inputs could not be loaded or the render failed
    """
    template, profile = load_inputs(template_ref, profile_path, username)

    try:
        config = merge_cli_overrides(
            load_config(),
            theme=theme,
            continue_on_error=None if strict is None else not strict,
            include_section_comments=section_comments,
            attribution=attribution,
            line_ending=line_ending,
        )
    except ConfigurationError as e:
        print_error(e.message)
        raise SystemExit(1) from None

    result = render(template, profile, config.render.to_options())
    if not result.success or result.output is None:
        print_render_result(result)
        raise SystemExit(1)

    markdown = document_to_markdown(result.output, config.export)

    if output is None:
        typer.echo(markdown, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(markdown, newline="")
    logger.info("Wrote %d characters to %s", len(markdown), output)
    print_render_result(result, output)
