"""Per-type section payloads.

Every section type carries one concrete ``data`` record and one concrete
``config`` record. ``SECTION_PAYLOADS`` maps the type tag to that pair and is
the single source the ``Section`` model uses to coerce raw dictionaries.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

TextAlign = Literal["left", "center", "right"]
BadgeStyle = Literal["flat", "flat-square", "plastic", "for-the-badge", "social"]


class SectionType(str, Enum):
    """Supported section tags."""

    HERO = "hero"
    ABOUT = "about"
    TECH_STACK = "tech-stack"
    GITHUB_STATS = "github-stats"
    PROJECTS = "projects"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    ACHIEVEMENTS = "achievements"
    BLOG_POSTS = "blog-posts"
    CONTACT = "contact"
    SOCIALS = "socials"
    QUOTE = "quote"
    DIVIDER = "divider"
    SPACER = "spacer"
    CUSTOM_MARKDOWN = "custom-markdown"
    CUSTOM_HTML = "custom-html"
    SPOTIFY = "spotify"
    WAKATIME = "wakatime"
    CONTRIBUTIONS = "contributions"
    PINNED_REPOS = "pinned-repos"


class Payload(BaseModel):
    """Base for all section payload records."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class SectionData(Payload):
    """Base class for section data records."""


class SectionConfig(Payload):
    """Shared presentation settings."""

    alignment: TextAlign = "center"


# Shared entries (also referenced by UserProfile)


class TechStackItem(Payload):
    name: str
    category: str = "other"
    proficiency: Literal["beginner", "intermediate", "advanced", "expert"] | None = None
    featured: bool = False


class ProjectItem(Payload):
    name: str
    description: str = ""
    repo_url: str | None = None
    demo_url: str | None = None
    tech_stack: list[str] = Field(default_factory=list)
    status: Literal["active", "completed", "archived", "on-hold", "coming-soon"] = "active"
    featured: bool = False
    stars: int | None = None
    forks: int | None = None


class ExperienceEntry(Payload):
    company: str
    role: str
    start_date: str
    end_date: str | None = None  # None means current position
    location: str | None = None
    description: str = ""
    highlights: list[str] = Field(default_factory=list)
    technologies: list[str] = Field(default_factory=list)


class EducationEntry(Payload):
    institution: str
    degree: str
    start_date: str
    end_date: str | None = None
    field: str | None = None
    gpa: str | None = None
    honors: list[str] = Field(default_factory=list)


class AchievementEntry(Payload):
    title: str
    description: str | None = None
    date: str | None = None
    issuer: str | None = None
    icon: str | None = None
    url: str | None = None


class BlogPost(Payload):
    title: str
    url: str
    date: str | None = None
    excerpt: str | None = None


class ContactMethod(Payload):
    type: Literal["email", "phone", "form", "calendly", "other"] = "email"
    value: str
    label: str | None = None


class SocialLink(Payload):
    platform: str
    url: str
    username: str | None = None
    label: str | None = None


# Hero


class HeroData(SectionData):
    headline: str = "Hi there, I'm {name} 👋"
    subheadline: str | None = None
    tagline: str | None = None
    typing_texts: list[str] = Field(default_factory=list)
    show_wave_animation: bool = False


class HeroConfig(SectionConfig):
    layout: Literal["centered", "left-aligned", "right-aligned", "split", "minimal"] = "centered"
    typing_speed: int | None = None
    typing_delete_speed: int | None = None
    typing_pause_time: int | None = None


# About


class AboutData(SectionData):
    content: str = ""
    highlights: list[str] = Field(default_factory=list)
    current_focus: str | None = None
    fun_fact: str | None = None
    location: str | None = None


class AboutConfig(SectionConfig):
    show_avatar: bool = False
    avatar_position: Literal["left", "right", "top"] = "top"
    avatar_size: Literal["sm", "md", "lg"] = "md"
    show_highlights_as_bullets: bool = True
    highlight_icon: str | None = None


# Tech stack


class TechStackData(SectionData):
    items: list[TechStackItem] = Field(default_factory=list)
    group_by_category: bool = False


class TechStackConfig(SectionConfig):
    display_style: Literal["badges", "icons", "cards", "list", "table"] = "badges"
    columns: int = Field(default=4, ge=1, le=6)
    show_category_headers: bool = True
    badge_style: BadgeStyle = "for-the-badge"


# GitHub stats

GitHubCardType = Literal[
    "stats", "top-langs", "streak", "trophies", "activity-graph", "profile-summary"
]


class GitHubStatsData(SectionData):
    username: str = ""
    cards: list[GitHubCardType] = Field(default_factory=lambda: ["stats", "top-langs"])


class GitHubStatsConfig(SectionConfig):
    theme: str = "default"
    show_icons: bool = True
    include_all_commits: bool = True
    count_private_contributions: bool = True
    hide_border: bool = False
    card_layout: Literal["row", "column", "grid"] = "row"


# Projects


class ProjectsData(SectionData):
    items: list[ProjectItem] = Field(default_factory=list)
    show_featured_only: bool = False


class ProjectsConfig(SectionConfig):
    display_style: Literal["cards", "list", "grid", "compact", "showcase"] = "cards"
    columns: int = Field(default=2, ge=1, le=3)
    max_projects: int | None = None


# Experience / education / achievements


class ExperienceData(SectionData):
    items: list[ExperienceEntry] = Field(default_factory=list)


class ExperienceConfig(SectionConfig):
    display_style: Literal["timeline", "cards", "list"] = "timeline"
    show_technologies: bool = True


class EducationData(SectionData):
    items: list[EducationEntry] = Field(default_factory=list)


class EducationConfig(SectionConfig):
    display_style: Literal["timeline", "cards", "list"] = "timeline"
    show_gpa: bool = True


class AchievementsData(SectionData):
    items: list[AchievementEntry] = Field(default_factory=list)


class AchievementsConfig(SectionConfig):
    display_style: Literal["grid", "list", "badges"] = "list"
    columns: int = Field(default=3, ge=2, le=4)


# Blog posts / contact / socials


class BlogPostsData(SectionData):
    items: list[BlogPost] = Field(default_factory=list)
    max_posts: int = 5


class BlogPostsConfig(SectionConfig):
    show_excerpt: bool = True
    show_date: bool = True


class ContactData(SectionData):
    headline: str | None = None
    description: str | None = None
    methods: list[ContactMethod] = Field(default_factory=list)


class ContactConfig(SectionConfig):
    display_style: Literal["card", "minimal", "split"] = "card"


class SocialsData(SectionData):
    links: list[SocialLink] = Field(default_factory=list)


class SocialsConfig(SectionConfig):
    display_style: Literal["icons", "badges", "buttons", "pills", "minimal"] = "badges"
    show_labels: bool = True


# Utility sections


class QuoteData(SectionData):
    quote: str = ""
    author: str | None = None
    source: str | None = None


class QuoteConfig(SectionConfig):
    style: Literal["simple", "boxed", "decorated", "minimal"] = "simple"


class DividerData(SectionData):
    style: Literal["line", "dashed", "dotted", "gradient", "wave", "none"] = "line"


class DividerConfig(SectionConfig):
    width: Literal["25%", "50%", "75%", "100%"] = "100%"


class SpacerData(SectionData):
    height: str = "4"


# Custom sections


class CustomMarkdownData(SectionData):
    markdown: str = ""


class CustomHtmlData(SectionData):
    html: str = ""
    sanitize: bool = True


# Integrations


class SpotifyData(SectionData):
    type: Literal["now-playing", "top-tracks", "recently-played"] = "now-playing"
    embed_url: str | None = None


class SpotifyConfig(SectionConfig):
    theme: Literal["light", "dark", "system"] = "dark"
    show_album_art: bool = True
    compact: bool = False


class WakatimeData(SectionData):
    username: str = ""
    range: Literal[
        "last_7_days", "last_30_days", "last_6_months", "last_year", "all_time"
    ] = "last_7_days"


class WakatimeConfig(SectionConfig):
    layout: Literal["compact", "default"] = "compact"
    show_languages: bool = True
    show_editors: bool = False


class ContributionsData(SectionData):
    username: str = ""
    show_legend: bool = True


class ContributionsConfig(SectionConfig):
    theme: str = "github-compact"


class PinnedReposData(SectionData):
    username: str = ""
    repos: list[str] = Field(default_factory=list)
    max_repos: int = 6


class PinnedReposConfig(SectionConfig):
    theme: str = "default"


SECTION_PAYLOADS: dict[SectionType, tuple[type[SectionData], type[SectionConfig]]] = {
    SectionType.HERO: (HeroData, HeroConfig),
    SectionType.ABOUT: (AboutData, AboutConfig),
    SectionType.TECH_STACK: (TechStackData, TechStackConfig),
    SectionType.GITHUB_STATS: (GitHubStatsData, GitHubStatsConfig),
    SectionType.PROJECTS: (ProjectsData, ProjectsConfig),
    SectionType.EXPERIENCE: (ExperienceData, ExperienceConfig),
    SectionType.EDUCATION: (EducationData, EducationConfig),
    SectionType.ACHIEVEMENTS: (AchievementsData, AchievementsConfig),
    SectionType.BLOG_POSTS: (BlogPostsData, BlogPostsConfig),
    SectionType.CONTACT: (ContactData, ContactConfig),
    SectionType.SOCIALS: (SocialsData, SocialsConfig),
    SectionType.QUOTE: (QuoteData, QuoteConfig),
    SectionType.DIVIDER: (DividerData, DividerConfig),
    SectionType.SPACER: (SpacerData, SectionConfig),
    SectionType.CUSTOM_MARKDOWN: (CustomMarkdownData, SectionConfig),
    SectionType.CUSTOM_HTML: (CustomHtmlData, SectionConfig),
    SectionType.SPOTIFY: (SpotifyData, SpotifyConfig),
    SectionType.WAKATIME: (WakatimeData, WakatimeConfig),
    SectionType.CONTRIBUTIONS: (ContributionsData, ContributionsConfig),
    SectionType.PINNED_REPOS: (PinnedReposData, PinnedReposConfig),
}


def payload_types(section_type: SectionType | str) -> tuple[type[SectionData], type[SectionConfig]]:
    """Get the (data, config) record types for a section tag."""
    return SECTION_PAYLOADS[SectionType(section_type)]
