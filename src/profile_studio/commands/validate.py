"""Validate command implementation - template structural validation."""

import sys
from pathlib import Path

from profile_studio.commands.inputs import load_inputs
from profile_studio.engine.renderer import validate


def validate_command(template_ref: str, profile_path: Path | None = None) -> None:
    """Validate template structure and check the profile can fill it.

    Exit Codes:
        0: Validation passed (warnings allowed)
        1: Validation failed (errors found)
    """
    template, profile = load_inputs(template_ref, profile_path, None)

    result = validate(template, profile)
    result.print()

    sys.exit(0 if result.valid else 1)
