"""Built-in template catalog.

Templates ship as YAML files in ``builtin_templates/`` and are validated
into ``Template`` models on first use. Every catalog template renders
without further configuration; profile data fills in names, usernames and
any section lists the template leaves empty.
"""

from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import ValidationError

from profile_studio.core.sections import SectionType
from profile_studio.core.template import Template, TemplateCapabilities, TemplateMetadata
from profile_studio.exceptions import TemplateError, TemplateNotFoundError

BUILTIN_TEMPLATES_DIR = Path(__file__).parent / "builtin_templates"

BLANK_TEMPLATE_ID = "blank"

TEMPLATE_FILE_SUFFIXES = (".yaml", ".yml", ".json")


def load_template_file(path: Path) -> Template:
    """Load and validate a template from a YAML (or JSON) file.

    Raises:
        TemplateError: If the file cannot be parsed or does not describe a template
    """
    try:
        with open(path) as f:
            raw = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise TemplateError(f"Cannot read template {path}: {e}") from e

    try:
        return Template.model_validate(raw)
    except ValidationError as e:
        raise TemplateError(f"Invalid template {path}: {e}") from e


@lru_cache(maxsize=1)
def _builtin_templates() -> tuple[Template, ...]:
    return tuple(
        load_template_file(path) for path in sorted(BUILTIN_TEMPLATES_DIR.glob("*.yaml"))
    )


def list_templates() -> list[Template]:
    """All built-in templates, featured first, then by name."""
    return sorted(
        _builtin_templates(),
        key=lambda t: (not t.metadata.featured, t.metadata.name.lower()),
    )


def get_template(template_id: str) -> Template:
    """Get a template by id.

    ``blank`` is always available and returns ``blank_template()``.

    Raises:
        TemplateNotFoundError: If no template has this id
    """
    if template_id == BLANK_TEMPLATE_ID:
        return blank_template()
    for template in _builtin_templates():
        if template.metadata.id == template_id:
            return template
    raise TemplateNotFoundError(template_id)


def get_templates_by_category(category: str) -> list[Template]:
    return [t for t in list_templates() if t.metadata.category == category]


def get_featured_templates() -> list[Template]:
    return [t for t in list_templates() if t.metadata.featured]


def blank_template(name: str = "Blank Template") -> Template:
    """Empty starting point that accepts every section type."""
    return Template(
        metadata=TemplateMetadata(
            id=BLANK_TEMPLATE_ID,
            name=name,
            description="Start from scratch",
            category="minimal",
        ),
        capabilities=TemplateCapabilities(
            supported_sections=list(SectionType),
            allow_custom_sections=True,
        ),
        sections=[],
    )


def resolve_template(reference: str) -> Template:
    """Resolve a catalog id or a path to a template file.

    Existing ``.yaml``/``.yml``/``.json`` paths are loaded from disk;
    anything else is looked up in the catalog.
    """
    path = Path(reference)
    if path.suffix in TEMPLATE_FILE_SUFFIXES and path.exists():
        return load_template_file(path)
    return get_template(reference)
