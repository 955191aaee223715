"""Persisted builder state.

State is saved as one JSON document::

    {"version": 1, "template": {...} | null, "profile": {...}, "preview_theme": "system"}

Only the inputs to a render are stored; output is always recomputed.
"""

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

from profile_studio.core.profile import UserProfile
from profile_studio.core.template import ColorScheme, Template
from profile_studio.exceptions import ProfileError, StateFileError
from profile_studio.store import BuilderStore

STATE_VERSION = 1


class StoredState(BaseModel):
    version: Literal[1] = STATE_VERSION
    template: Template | None = None
    profile: UserProfile = Field(default_factory=UserProfile)
    preview_theme: ColorScheme = "system"


def save_state(
    path: Path,
    template: Template | None,
    profile: UserProfile,
    preview_theme: ColorScheme = "system",
) -> StoredState:
    """Write builder state to ``path``, creating parent directories."""
    state = StoredState(template=template, profile=profile, preview_theme=preview_theme)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(state.model_dump_json(indent=2))
    except OSError as e:
        raise StateFileError(str(path), str(e)) from e
    return state


def load_state(path: Path) -> StoredState:
    """Read builder state written by ``save_state``.

    Raises:
        StateFileError: If the file is missing, not JSON, from another
            version or does not match the schema
    """
    try:
        content = path.read_text()
    except OSError as e:
        raise StateFileError(str(path), str(e)) from e

    try:
        return StoredState.model_validate_json(content)
    except ValidationError as e:
        raise StateFileError(str(path), f"{e.error_count()} validation error(s): {e}") from e


def save_store(store: BuilderStore, path: Path) -> StoredState:
    """Persist the current state of a builder store."""
    state = store.state
    return save_state(path, state.template, state.profile, state.preview_theme)


def restore_store(path: Path) -> BuilderStore:
    """Create a builder store from saved state and render it once."""
    stored = load_state(path)
    store = BuilderStore(profile=stored.profile)
    if stored.template is not None:
        store.set_template(stored.template)
    store.set_preview_theme(stored.preview_theme)
    store.flush()
    return store


def load_profile_file(path: Path) -> UserProfile:
    """Load a user profile from a YAML or JSON file.

    Raises:
        ProfileError: If the file cannot be parsed or fails validation
    """
    try:
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ProfileError(str(path), str(e)) from e

    try:
        return UserProfile.model_validate(raw)
    except ValidationError as e:
        raise ProfileError(str(path), f"{e.error_count()} validation error(s): {e}") from e
