"""Template and profile loading shared by the render commands."""

from pathlib import Path

from profile_studio.catalog import resolve_template
from profile_studio.core.profile import UserProfile
from profile_studio.core.template import Template
from profile_studio.display import print_error
from profile_studio.exceptions import StudioError
from profile_studio.storage import load_profile_file


def load_inputs(
    template_ref: str,
    profile_path: Path | None,
    username: str | None,
) -> tuple[Template, UserProfile]:
    """Resolve the template and profile, exiting with status 1 on failure.

    Args:
        template_ref: Catalog id or path to a template file
        profile_path: Profile YAML/JSON file (empty profile if None)
        username: Overrides the profile's GitHub username
    """
    try:
        template = resolve_template(template_ref)
        profile = load_profile_file(profile_path) if profile_path else UserProfile()
    except StudioError as e:
        print_error(e.message)
        raise SystemExit(1) from None

    if username:
        profile = profile.model_copy(update={"github_username": username})
    return template, profile
