"""Section block-builders.

One builder per section type turns a Section plus the user's profile into
the blocks of a rendered section. Builders are pure: they read
``section.data`` and ``section.config``, fall back to profile fields where
the section leaves a value empty, and never touch the network.

A builder signals a section-level failure by raising ``SectionRenderError``.
"""

from collections.abc import Callable

from profile_studio.assets.urls import wakatime_url
from profile_studio.blocks.builders import BlockBuilder
from profile_studio.blocks.models import BadgeBlock, Block
from profile_studio.core.profile import UserProfile
from profile_studio.core.sections import ContactMethod, SectionType, TechStackItem
from profile_studio.core.template import Section
from profile_studio.exceptions import SectionRenderError
from profile_studio.markdown.escape import escape_alt_text, sanitize_html

SectionBuilder = Callable[[Section, UserProfile, BlockBuilder], list[Block]]

WAVE_GIF_URL = (
    "https://user-images.githubusercontent.com/18350557/"
    "176309783-0785949b-9127-417c-8b55-ab5a4333674e.gif"
)

SOCIAL_PLATFORMS = frozenset(
    {
        "github",
        "twitter",
        "linkedin",
        "instagram",
        "youtube",
        "twitch",
        "discord",
        "email",
        "website",
    }
)

SPACER_HEIGHTS = {
    "0": "xs",
    "1": "xs",
    "2": "sm",
    "3": "sm",
    "4": "md",
    "5": "md",
    "6": "lg",
    "8": "lg",
    "10": "xl",
    "12": "xl",
    "16": "xl",
}

DIVIDER_STYLES = {
    "line": "solid",
    "dashed": "dashed",
    "dotted": "dotted",
    "gradient": "gradient",
    "wave": "wave",
}


# Data binding helpers


def bind_placeholders(text: str, profile: UserProfile) -> str:
    """Replace ``{name}``, ``{username}`` and ``{years}`` with profile values."""
    years = profile.professional.years_of_experience
    return (
        text.replace("{name}", profile.display_name)
        .replace("{username}", profile.github_username)
        .replace("{years}", str(years) if years is not None else "X")
    )


def require_username(section: Section, profile: UserProfile) -> str:
    """Resolve the GitHub username for a section or fail the section."""
    username = getattr(section.data, "username", "") or profile.github_username
    if not username:
        raise SectionRenderError(
            section.id,
            section.type,
            "GitHub username required",
            code="GITHUB_USERNAME_REQUIRED",
        )
    return username


def format_category(category: str) -> str:
    """``"dev-ops"`` -> ``"Dev Ops"``."""
    return " ".join(word.capitalize() for word in category.replace("-", " ").split())


def logo_slug(name: str) -> str:
    """Shields logo name for a technology."""
    return "".join(name.lower().split())


def platform_id(platform: str) -> str:
    """Normalize a social platform name, mapping unknown ones to ``other``."""
    platform = platform.lower()
    return platform if platform in SOCIAL_PLATFORMS else "other"


def contact_href(method: ContactMethod) -> str:
    if method.type == "email" and not method.value.startswith("mailto:"):
        return f"mailto:{method.value}"
    if method.type == "phone" and not method.value.startswith("tel:"):
        return f"tel:{method.value}"
    return method.value


# Builders


def build_hero(section: Section, profile: UserProfile, b: BlockBuilder) -> list[Block]:
    data, config = section.data, section.config
    align = {"left-aligned": "left", "right-aligned": "right"}.get(config.layout, config.alignment)
    blocks: list[Block] = []

    if data.show_wave_animation:
        blocks.append(b.image(WAVE_GIF_URL, "Wave", align=align, is_animated=True, width=60))

    blocks.append(b.heading(bind_placeholders(data.headline, profile), 1, align=align))

    if data.subheadline:
        blocks.append(b.heading(bind_placeholders(data.subheadline, profile), 3, align=align))

    if data.typing_texts:
        blocks.append(
            b.typing_animation(
                [bind_placeholders(text, profile) for text in data.typing_texts],
                speed=config.typing_speed,
                delete_speed=config.typing_delete_speed,
                pause_time=config.typing_pause_time,
            )
        )

    if data.tagline:
        blocks.append(
            b.text(bind_placeholders(data.tagline, profile), emphasis="italic", align=align)
        )

    return blocks


def build_about(section: Section, profile: UserProfile, b: BlockBuilder) -> list[Block]:
    data, config = section.data, section.config
    blocks: list[Block] = []

    if config.show_avatar and profile.avatar_url:
        blocks.append(
            b.image(
                profile.avatar_url,
                f"{profile.github_username}'s avatar",
                size=config.avatar_size,
                align="center" if config.avatar_position == "top" else config.avatar_position,
            )
        )

    content = data.content or profile.personal.bio or ""
    if content:
        blocks.append(b.text(bind_placeholders(content, profile)))

    if data.highlights:
        blocks.append(
            b.list(
                [b.list_item(h, icon=config.highlight_icon) for h in data.highlights],
                list_type="unordered" if config.show_highlights_as_bullets else "none",
            )
        )

    if data.current_focus:
        blocks.append(b.text(f"🔭 **Currently:** {data.current_focus}"))

    if data.fun_fact:
        blocks.append(b.text(f"⚡ **Fun fact:** {data.fun_fact}"))

    location = data.location or profile.personal.location
    if location:
        blocks.append(b.text(f"📍 {location}"))

    return blocks


def build_tech_stack(section: Section, profile: UserProfile, b: BlockBuilder) -> list[Block]:
    data, config = section.data, section.config
    items = data.items or profile.tech_stack.items
    if not items:
        return []

    if config.display_style == "list":
        return [b.list([item.name for item in items])]

    if config.display_style != "badges":
        return [b.grid([b.text(item.name) for item in items], columns=config.columns)]

    def badge(item: TechStackItem) -> BadgeBlock:
        return b.badge(item.name, logo=logo_slug(item.name), style=config.badge_style)

    if not (data.group_by_category and config.show_category_headers):
        return [b.badge_group([badge(item) for item in items], align=config.alignment)]

    categories: dict[str, list[TechStackItem]] = {}
    for item in items:
        categories.setdefault(item.category, []).append(item)

    blocks: list[Block] = []
    for category, category_items in categories.items():
        blocks.append(b.heading(format_category(category), 4, align="left"))
        blocks.append(
            b.badge_group([badge(item) for item in category_items], align="left", gap="sm")
        )
    return blocks


def build_github_stats(section: Section, profile: UserProfile, b: BlockBuilder) -> list[Block]:
    username = require_username(section, profile)
    data, config = section.data, section.config

    cards = [
        b.github_stats_card(
            username,
            card_type,
            theme=config.theme,
            show_icons=config.show_icons,
            hide_border=config.hide_border,
            include_all_commits=config.include_all_commits,
            count_private=config.count_private_contributions,
        )
        for card_type in data.cards
    ]
    if not cards:
        return []

    if config.card_layout == "row":
        return [b.row(cards, gap="md", wrap=True)]
    if config.card_layout == "column":
        return [b.column(cards)]
    return [b.grid(cards, columns=2)]


def build_projects(section: Section, profile: UserProfile, b: BlockBuilder) -> list[Block]:
    data, config = section.data, section.config
    projects = list(data.items or profile.projects.items)

    if data.show_featured_only:
        projects = [project for project in projects if project.featured]
    if config.max_projects:
        projects = projects[: config.max_projects]

    cards = [
        b.project_card(
            project.name,
            project.description,
            repo_url=project.repo_url,
            demo_url=project.demo_url,
            tech_stack=project.tech_stack,
            stars=project.stars,
            forks=project.forks,
            featured=project.featured,
        )
        for project in projects
    ]
    if not cards:
        return []
    if config.display_style in ("cards", "grid"):
        return [b.grid(cards, columns=config.columns)]
    return cards


def build_experience(section: Section, profile: UserProfile, b: BlockBuilder) -> list[Block]:
    config = section.config
    entries = section.data.items or profile.professional.experience
    return [
        b.experience_item(
            entry.company,
            entry.role,
            entry.start_date,
            end_date=entry.end_date,
            location=entry.location,
            description=entry.description,
            highlights=entry.highlights,
            technologies=entry.technologies if config.show_technologies else [],
        )
        for entry in entries
    ]


def build_education(section: Section, profile: UserProfile, b: BlockBuilder) -> list[Block]:
    config = section.config
    entries = section.data.items or profile.professional.education
    return [
        b.education_item(
            entry.institution,
            entry.degree,
            entry.start_date,
            end_date=entry.end_date,
            field=entry.field,
            gpa=entry.gpa if config.show_gpa else None,
            honors=entry.honors,
        )
        for entry in entries
    ]


def build_achievements(section: Section, profile: UserProfile, b: BlockBuilder) -> list[Block]:
    data, config = section.data, section.config
    if not data.items:
        return []

    if config.display_style == "badges":
        badges = [
            b.badge(item.title, message=item.issuer, link=item.url, style="flat")
            for item in data.items
        ]
        return [b.badge_group(badges, align=config.alignment)]

    items = [
        b.achievement_item(
            item.title,
            description=item.description,
            date=item.date,
            issuer=item.issuer,
            icon=item.icon,
            url=item.url,
        )
        for item in data.items
    ]
    if config.display_style == "grid":
        return [b.grid(items, columns=config.columns)]
    return items


def build_blog_posts(section: Section, profile: UserProfile, b: BlockBuilder) -> list[Block]:
    data, config = section.data, section.config
    blocks: list[Block] = []

    for post in data.items[: data.max_posts]:
        children: list[Block] = [b.link(post.url, post.title)]
        if config.show_excerpt and post.excerpt:
            children.append(b.text(post.excerpt))
        if config.show_date and post.date:
            children.append(b.text(post.date, emphasis="italic"))
        blocks.append(b.column(children))

    return blocks


def build_contact(section: Section, profile: UserProfile, b: BlockBuilder) -> list[Block]:
    data, config = section.data, section.config
    blocks: list[Block] = []

    if data.headline:
        blocks.append(b.heading(data.headline, 3, align=config.alignment))
    if data.description:
        blocks.append(b.text(data.description, align=config.alignment))

    methods = list(data.methods)
    if not methods and profile.personal.email:
        methods.append(ContactMethod(type="email", value=profile.personal.email))
    if not methods:
        return blocks

    if config.display_style == "minimal":
        links = [b.link(contact_href(m), m.label or m.type) for m in methods]
        blocks.append(b.row(links, gap="md"))
    else:
        blocks.append(b.list([f"**{m.label or m.type}:** {m.value}" for m in methods]))
    return blocks


def build_socials(section: Section, profile: UserProfile, b: BlockBuilder) -> list[Block]:
    config = section.config
    links = section.data.links or profile.social_links.links
    if not links:
        return []

    social_links = [
        b.social_link(
            platform_id(link.platform),
            link.url,
            username=link.username,
            label=link.label,
            show_icon=config.display_style != "minimal",
            show_label=config.show_labels,
        )
        for link in links
    ]
    style = config.display_style
    if style not in ("icons", "buttons", "pills"):
        style = "badges"
    return [b.social_group(social_links, style=style, align=config.alignment)]


def build_quote(section: Section, profile: UserProfile, b: BlockBuilder) -> list[Block]:
    data = section.data
    if not data.quote:
        return []
    return [b.quote(data.quote, author=data.author, source=data.source)]


def build_divider(section: Section, profile: UserProfile, b: BlockBuilder) -> list[Block]:
    style = DIVIDER_STYLES.get(section.data.style)
    if style is None:
        return []
    return [b.divider(style=style, width=section.config.width)]


def build_spacer(section: Section, profile: UserProfile, b: BlockBuilder) -> list[Block]:
    return [b.spacer(SPACER_HEIGHTS.get(section.data.height, "md"))]


def build_custom_markdown(section: Section, profile: UserProfile, b: BlockBuilder) -> list[Block]:
    markdown = section.data.markdown
    if not markdown.strip():
        return []
    return [b.custom("markdown", bind_placeholders(markdown, profile))]


def build_custom_html(section: Section, profile: UserProfile, b: BlockBuilder) -> list[Block]:
    data = section.data
    html = sanitize_html(data.html) if data.sanitize else data.html
    if not html.strip():
        return []
    return [b.custom("html", html, {"sanitize": data.sanitize})]


def build_spotify(section: Section, profile: UserProfile, b: BlockBuilder) -> list[Block]:
    data, config = section.data, section.config
    if not data.embed_url:
        return []
    label = data.type.replace("-", " ").title()
    alt = f"Spotify {label}"
    return [
        b.custom(
            f"spotify-{data.type}",
            f"![{escape_alt_text(alt)}]({data.embed_url})",
            {
                "image_url": data.embed_url,
                "alt": alt,
                "theme": config.theme,
                "show_album_art": config.show_album_art,
                "compact": config.compact,
            },
        )
    ]


def build_wakatime(section: Section, profile: UserProfile, b: BlockBuilder) -> list[Block]:
    data, config = section.data, section.config
    username = data.username or profile.integrations.wakatime.username
    if not username:
        raise SectionRenderError(section.id, section.type, "WakaTime username required")

    url = wakatime_url(username, layout=config.layout)
    alt = f"{username}'s WakaTime stats"
    return [
        b.custom(
            "wakatime-stats",
            f"![{escape_alt_text(alt)}]({url})",
            {
                "image_url": url,
                "alt": alt,
                "username": username,
                "range": data.range,
                "show_languages": config.show_languages,
                "show_editors": config.show_editors,
            },
        )
    ]


def build_contributions(section: Section, profile: UserProfile, b: BlockBuilder) -> list[Block]:
    username = require_username(section, profile)
    return [
        b.contribution_graph(
            username, theme=section.config.theme, show_legend=section.data.show_legend
        )
    ]


def build_pinned_repos(section: Section, profile: UserProfile, b: BlockBuilder) -> list[Block]:
    username = require_username(section, profile)
    data = section.data

    cards = [
        b.project_card(name, repo_url=f"https://github.com/{username}/{name}")
        for name in data.repos[: data.max_repos]
    ]
    if not cards and profile.github:
        cards = [
            b.project_card(
                repo.name,
                repo.description or "",
                repo_url=repo.html_url,
                tech_stack=[repo.language] if repo.language else [],
                stars=repo.stargazers_count,
                forks=repo.forks_count,
            )
            for repo in profile.github.pinned_repos[: data.max_repos]
        ]
    if not cards:
        return []
    return [b.grid(cards, columns=2)]


# Registry


class SectionRegistry:
    """Registry mapping section types to their builders."""

    def __init__(self, builders: dict[str, SectionBuilder] | None = None) -> None:
        self._builders: dict[str, SectionBuilder] = dict(builders or {})

    def register(self, section_type: SectionType | str, builder: SectionBuilder) -> None:
        """Register (or replace) the builder for a section type."""
        self._builders[SectionType(section_type).value] = builder

    def get(self, section_type: str) -> SectionBuilder | None:
        """Get the builder for a section type."""
        return self._builders.get(section_type)

    def require(self, section_type: str) -> SectionBuilder:
        """Get a builder, raising if none is registered."""
        builder = self.get(section_type)
        if builder is None:
            available = ", ".join(sorted(self._builders)) or "(none)"
            raise KeyError(f"No builder for section type '{section_type}'. Available: {available}")
        return builder

    def list_all(self) -> list[str]:
        """List all section types with a builder."""
        return list(self._builders)

    def copy(self) -> "SectionRegistry":
        return SectionRegistry(self._builders)


DEFAULT_BUILDERS: dict[str, SectionBuilder] = {
    SectionType.HERO.value: build_hero,
    SectionType.ABOUT.value: build_about,
    SectionType.TECH_STACK.value: build_tech_stack,
    SectionType.GITHUB_STATS.value: build_github_stats,
    SectionType.PROJECTS.value: build_projects,
    SectionType.EXPERIENCE.value: build_experience,
    SectionType.EDUCATION.value: build_education,
    SectionType.ACHIEVEMENTS.value: build_achievements,
    SectionType.BLOG_POSTS.value: build_blog_posts,
    SectionType.CONTACT.value: build_contact,
    SectionType.SOCIALS.value: build_socials,
    SectionType.QUOTE.value: build_quote,
    SectionType.DIVIDER.value: build_divider,
    SectionType.SPACER.value: build_spacer,
    SectionType.CUSTOM_MARKDOWN.value: build_custom_markdown,
    SectionType.CUSTOM_HTML.value: build_custom_html,
    SectionType.SPOTIFY.value: build_spotify,
    SectionType.WAKATIME.value: build_wakatime,
    SectionType.CONTRIBUTIONS.value: build_contributions,
    SectionType.PINNED_REPOS.value: build_pinned_repos,
}

# Global registry instance
_registry: SectionRegistry | None = None


def get_section_registry() -> SectionRegistry:
    """Get the global section registry."""
    global _registry
    if _registry is None:
        _registry = SectionRegistry(DEFAULT_BUILDERS)
    return _registry


def set_section_registry(registry: SectionRegistry | None) -> None:
    """Set the global section registry; ``None`` restores the defaults."""
    global _registry
    _registry = registry


def build_section_blocks(section: Section, profile: UserProfile) -> list[Block]:
    """Build the blocks for one section.

    Raises:
        SectionRenderError: If the builder fails. Unexpected exceptions are
            wrapped so callers only ever see ``SectionRenderError``.
    """
    try:
        builder = get_section_registry().require(section.type)
        return builder(section, profile, BlockBuilder(section.id))
    except SectionRenderError:
        raise
    except Exception as e:
        raise SectionRenderError(section.id, section.type, str(e)) from e
