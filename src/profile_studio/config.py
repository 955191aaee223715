"""Studio configuration schema and loading."""

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

from profile_studio.core.template import ColorScheme
from profile_studio.engine.renderer import RenderOptions
from profile_studio.exceptions import ConfigurationError
from profile_studio.markdown.document import ExportOptions
from profile_studio.preview.images import DEFAULT_TIMEOUT_SECONDS

CONFIG_DIR = ".profile-studio"
CONFIG_FILE = "config.yaml"


class RenderConfig(BaseModel):
    """Render pipeline defaults."""

    theme: ColorScheme | None = Field(
        default=None, description="Preview theme (defaults to the template's theme)"
    )
    locale: str = Field(default="en", description="Output locale tag")
    skip_validation: bool = Field(default=False, description="Skip structural validation")
    continue_on_error: bool = Field(
        default=True, description="Drop failing sections instead of aborting the render"
    )

    def to_options(self) -> RenderOptions:
        return RenderOptions(
            theme=self.theme,
            locale=self.locale,
            skip_validation=self.skip_validation,
            continue_on_error=self.continue_on_error,
        )


class PreviewConfig(BaseModel):
    """HTML preview settings."""

    image_timeout_seconds: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        gt=0,
        description="Seconds before a loading stats card is shown as failed",
    )


class StudioConfig(BaseModel):
    """Complete studio configuration.

    Loaded from .profile-studio/config.yaml under 'studio:' section.
    CLI flags override config values with precedence:
    1. CLI flags (highest)
    2. .profile-studio/config.yaml
    3. Defaults (lowest)
    """

    render: RenderConfig = Field(default_factory=RenderConfig)
    export: ExportOptions = Field(default_factory=ExportOptions)
    preview: PreviewConfig = Field(default_factory=PreviewConfig)


def config_path(project_root: Path) -> Path:
    return project_root / CONFIG_DIR / CONFIG_FILE


def load_config(project_root: Path | None = None) -> StudioConfig:
    """Load studio configuration from .profile-studio/config.yaml.

    Args:
        project_root: Directory containing .profile-studio/. Defaults to cwd.

    Returns:
        StudioConfig with values from file or defaults

    Raises:
        ConfigurationError: If the file is not valid YAML or fails validation
    """
    if project_root is None:
        project_root = Path.cwd()

    path = config_path(project_root)

    # Return defaults if no config file
    if not path.exists():
        return StudioConfig()

    try:
        with open(path) as f:
            raw_config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(raw_config, dict):
        raise ConfigurationError(f"Invalid studio config in {path}: expected a mapping")

    studio_section = raw_config.get("studio") or {}

    try:
        return StudioConfig.model_validate(studio_section)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid studio config in {path}: {e}") from e


def merge_cli_overrides(
    config: StudioConfig,
    theme: ColorScheme | None = None,
    skip_validation: bool | None = None,
    continue_on_error: bool | None = None,
    include_section_comments: bool | None = None,
    attribution: bool | None = None,
    line_ending: Literal["lf", "crlf"] | None = None,
) -> StudioConfig:
    """Merge CLI flag overrides into config.

    ``None`` means the flag was not given and the file value stands.

    Example:
        config = load_config()
        config = merge_cli_overrides(config, theme="dark")
    """
    render_updates = {
        key: value
        for key, value in (
            ("theme", theme),
            ("skip_validation", skip_validation),
            ("continue_on_error", continue_on_error),
        )
        if value is not None
    }
    export_updates = {
        key: value
        for key, value in (
            ("include_section_comments", include_section_comments),
            ("attribution", attribution),
            ("line_ending", line_ending),
        )
        if value is not None
    }

    return config.model_copy(
        update={
            "render": config.render.model_copy(update=render_updates),
            "export": config.export.model_copy(update=export_updates),
        }
    )


def save_example_config(output_path: Path) -> None:
    """Save example studio configuration to file.

    Args:
        output_path: Path to write example config.yaml
    """
    example = {
        "studio": {
            "render": {
                "theme": "dark",
                "locale": "en",
                "skip_validation": False,
                "continue_on_error": True,
            },
            "export": {
                "include_section_comments": False,
                "attribution": True,
                "line_ending": "lf",
            },
            "preview": {
                "image_timeout_seconds": DEFAULT_TIMEOUT_SECONDS,
            },
        }
    }

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        yaml.dump(example, f, default_flow_style=False, sort_keys=False)
