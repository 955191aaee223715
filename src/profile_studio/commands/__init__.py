"""Profile Studio CLI commands.

Each command module contains the business logic for a CLI command.
The cli.py module handles Typer options and argument parsing,
then delegates to these command functions.
"""

from profile_studio.commands.init import init_command
from profile_studio.commands.preview import preview_command
from profile_studio.commands.render import render_command
from profile_studio.commands.templates import templates_command
from profile_studio.commands.validate import validate_command

__all__ = [
    "init_command",
    "preview_command",
    "render_command",
    "templates_command",
    "validate_command",
]
