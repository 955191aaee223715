"""Profile Studio CLI - Main entry point.

Commands:
- render: Render a template to README markdown
- preview: Render a template to an HTML preview page
- validate: Check a template's structure
- templates: List built-in templates
- init: Create a config file and example profile
"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from profile_studio import __version__
from profile_studio.commands import (
    init_command,
    preview_command,
    render_command,
    templates_command,
    validate_command,
)

app = typer.Typer(
    help="Profile Studio - GitHub profile README builder.",
    no_args_is_help=True,
)

TemplateArg = Annotated[str, typer.Argument(help="Template id or path to a template file")]
ProfileOpt = Annotated[
    Optional[Path],
    typer.Option("--profile", "-p", help="Profile YAML/JSON file", exists=True, dir_okay=False),
]
UsernameOpt = Annotated[
    Optional[str], typer.Option("--username", "-u", help="GitHub username override")
]
ThemeOpt = Annotated[
    Optional[str], typer.Option("--theme", help="Color scheme: light, dark or system")
]

THEMES = ("light", "dark", "system")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"profile-studio {__version__}")
        raise typer.Exit()


def _check_theme(theme: str | None) -> None:
    if theme is not None and theme not in THEMES:
        raise typer.BadParameter(f"must be one of {', '.join(THEMES)}", param_hint="--theme")


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", help="Enable debug logging.")] = False,
) -> None:
    """Profile Studio - GitHub profile README builder."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def render(
    template: TemplateArg,
    profile: ProfileOpt = None,
    username: UsernameOpt = None,
    output: Annotated[
        Optional[Path], typer.Option("--output", "-o", help="Write README here instead of stdout")
    ] = None,
    theme: ThemeOpt = None,
    strict: Annotated[
        Optional[bool],
        typer.Option("--strict/--lenient", help="Abort on the first failing section"),
    ] = None,
    section_comments: Annotated[
        Optional[bool],
        typer.Option("--section-comments/--no-section-comments", help="Mark each section"),
    ] = None,
    attribution: Annotated[
        Optional[bool],
        typer.Option("--attribution/--no-attribution", help="Add the Profile Studio footer"),
    ] = None,
    crlf: Annotated[bool, typer.Option("--crlf", help="Use CRLF line endings")] = False,
) -> None:
    """Render a template to README markdown.

    Examples:
        profile-studio render minimal-professional -u octocat
        profile-studio render fullstack-developer -p profile.yaml -o README.md
        profile-studio render ./my-template.yaml --strict
    """
    _check_theme(theme)
    render_command(
        template,
        profile_path=profile,
        username=username,
        output=output,
        theme=theme,
        strict=strict,
        section_comments=section_comments,
        attribution=attribution,
        line_ending="crlf" if crlf else None,
    )


@app.command()
def preview(
    template: TemplateArg,
    profile: ProfileOpt = None,
    username: UsernameOpt = None,
    output: Annotated[
        Path, typer.Option("--output", "-o", help="HTML file to write")
    ] = Path("preview.html"),
    theme: ThemeOpt = None,
    base_url: Annotated[
        Optional[str], typer.Option("--base-url", help="Base for relative image and link URLs")
    ] = None,
    as_markdown: Annotated[
        bool, typer.Option("--markdown", help="Show each block's markdown source")
    ] = False,
    skeletons: Annotated[
        bool, typer.Option("--skeletons", help="Show stats cards as loading placeholders")
    ] = False,
) -> None:
    """Render a template to an HTML preview page.

    Examples:
        profile-studio preview fullstack-developer -p profile.yaml
        profile-studio preview minimal-professional --theme dark -o out/preview.html
    """
    _check_theme(theme)
    preview_command(
        template,
        profile_path=profile,
        username=username,
        output=output,
        theme=theme,
        base_url=base_url,
        as_markdown=as_markdown,
        skeletons=skeletons,
    )


@app.command()
def validate(template: TemplateArg, profile: ProfileOpt = None) -> None:
    """Validate a template's structure.

    Examples:
        profile-studio validate ./my-template.yaml
        profile-studio validate fullstack-developer -p profile.yaml
    """
    validate_command(template, profile)


@app.command()
def templates(
    category: Annotated[
        Optional[str], typer.Option("--category", "-c", help="Only this category")
    ] = None,
    featured: Annotated[bool, typer.Option("--featured", help="Only featured templates")] = False,
) -> None:
    """List built-in templates."""
    templates_command(category, featured)


@app.command()
def init(
    force: Annotated[bool, typer.Option("--force", help="Overwrite an existing config")] = False,
) -> None:
    """Create .profile-studio/config.yaml and an example profile.yaml.

    Examples:
        profile-studio init
        profile-studio init --force
    """
    init_command(force=force)


if __name__ == "__main__":
    app()
