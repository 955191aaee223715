"""Init command implementation."""

from pathlib import Path

import yaml

from profile_studio.config import config_path, save_example_config
from profile_studio.display import console, print_error, print_info, print_success

EXAMPLE_PROFILE = {
    "github_username": "your-username",
    "personal": {
        "display_name": "Your Name",
        "headline": "Software Engineer",
        "bio": "I build things for the web.",
        "location": "Earth",
        "email": "hello@example.com",
    },
    "professional": {"years_of_experience": 3},
    "tech_stack": {
        "items": [
            {"name": "Python", "category": "language"},
            {"name": "TypeScript", "category": "language"},
            {"name": "PostgreSQL", "category": "database"},
        ]
    },
    "social_links": {
        "links": [
            {"platform": "github", "url": "https://github.com/your-username"},
            {"platform": "linkedin", "url": "https://linkedin.com/in/your-username"},
        ]
    },
}


def init_command(project_root: Path | None = None, force: bool = False) -> None:
    """Create .profile-studio/config.yaml and an example profile.yaml."""
    root = project_root or Path.cwd()
    path = config_path(root)

    if path.exists() and not force:
        print_info(f"Profile Studio is already initialized at {path}")
        console.print("  Run [cyan]profile-studio init --force[/] to overwrite")
        return

    try:
        save_example_config(path)
        profile_path = root / "profile.yaml"
        if not profile_path.exists():
            with open(profile_path, "w") as f:
                yaml.dump(EXAMPLE_PROFILE, f, default_flow_style=False, sort_keys=False)
    except OSError as e:
        print_error(f"Failed to initialize Profile Studio: {e}")
        raise SystemExit(1) from None

    print_success(f"Initialized Profile Studio in {path.parent}")
    console.print()
    console.print("[bold]Next steps:[/]")
    console.print("  1. Edit [cyan]profile.yaml[/] with your details")
    console.print("  2. Run [cyan]profile-studio templates[/] to pick a template")
    console.print(
        "  3. Run [cyan]profile-studio render fullstack-developer -p profile.yaml -o README.md[/]"
    )
