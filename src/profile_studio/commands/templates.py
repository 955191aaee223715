"""Templates command implementation - list the built-in catalog."""

from profile_studio.catalog import get_featured_templates, list_templates
from profile_studio.display import print_template_list


def templates_command(category: str | None = None, featured: bool = False) -> None:
    """List catalog templates, optionally filtered by category or featured flag."""
    templates = get_featured_templates() if featured else list_templates()
    if category:
        templates = [t for t in templates if t.metadata.category == category]
    print_template_list(templates)
