"""Block intermediate representation.

A rendered section is a list of blocks. Each block is a frozen pydantic
model tagged by ``kind``; ``Block`` is the discriminated union of every
variant, so a serialized tree round-trips through ``TypeAdapter(Block)``.

Composite variants carry their children in order. Every variant has a
stable ``id`` and a ``visible`` gate: an invisible block contributes
nothing to any output, whatever its depth.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from profile_studio.core.sections import BadgeStyle, TextAlign
from profile_studio.exceptions import SerializationError

TextEmphasis = Literal["normal", "bold", "italic", "code", "strikethrough"]
Gap = Literal["sm", "md", "lg"]
SizeToken = Literal["xs", "sm", "md", "lg", "xl"]
GitHubCardType = Literal[
    "stats", "top-langs", "streak", "trophies", "activity-graph", "profile-summary"
]


class BlockBase(BaseModel):
    """Fields shared by every block variant."""

    model_config = ConfigDict(frozen=True)

    id: str
    visible: bool = True

    def iter_children(self) -> Iterator[Block]:
        """Yield directly nested blocks, in order."""
        return iter(())


# Text


class TextBlock(BlockBase):
    kind: Literal["text"] = "text"
    value: str
    emphasis: TextEmphasis = "normal"
    align: TextAlign | None = None


class HeadingBlock(BlockBase):
    kind: Literal["heading"] = "heading"
    value: str
    level: int = Field(default=2, ge=1, le=6)
    align: TextAlign | None = None


class CodeBlock(BlockBase):
    kind: Literal["code"] = "code"
    value: str
    language: str | None = None
    inline: bool = False


class QuoteBlock(BlockBase):
    kind: Literal["quote"] = "quote"
    value: str
    author: str | None = None
    source: str | None = None


# Media and links


class ImageBlock(BlockBase):
    kind: Literal["image"] = "image"
    src: str
    alt: str = ""
    width: int | None = None
    height: int | None = None
    size: Literal["xs", "sm", "md", "lg", "xl", "full", "auto"] | None = None
    align: TextAlign | None = None
    is_animated: bool = False
    link: str | None = None


class LinkBlock(BlockBase):
    kind: Literal["link"] = "link"
    href: str
    text: str
    title: str | None = None
    external: bool = True


class BadgeBlock(BlockBase):
    kind: Literal["badge"] = "badge"
    label: str
    message: str | None = None
    color: str = "#0969da"
    label_color: str | None = None
    logo: str | None = None
    logo_color: str | None = None
    style: BadgeStyle = "for-the-badge"
    link: str | None = None


# Layout


class SpacerBlock(BlockBase):
    kind: Literal["spacer"] = "spacer"
    height: SizeToken = "md"


class DividerBlock(BlockBase):
    kind: Literal["divider"] = "divider"
    style: Literal["solid", "dashed", "dotted", "gradient", "wave"] = "solid"
    width: Literal["25%", "50%", "75%", "100%"] = "100%"


# Stats and socials


class StatBlock(BlockBase):
    kind: Literal["stat"] = "stat"
    label: str
    value: str | int | float
    icon: str | None = None
    color: str | None = None
    format: Literal["number", "percentage", "currency"] | None = None


class SocialLinkBlock(BlockBase):
    kind: Literal["social-link"] = "social-link"
    platform: str
    url: str
    username: str | None = None
    label: str | None = None
    show_icon: bool = True
    show_label: bool = True


class TypingAnimationBlock(BlockBase):
    kind: Literal["typing-animation"] = "typing-animation"
    texts: list[str]
    speed: int = 100
    delete_speed: int = 50
    pause_time: int = 2000
    loop: bool = True


# GitHub integrations


class GitHubStatsCardBlock(BlockBase):
    kind: Literal["github-stats-card"] = "github-stats-card"
    username: str
    card_type: GitHubCardType = "stats"
    theme: str = "default"
    show_icons: bool = True
    hide_border: bool = False
    include_all_commits: bool = True
    count_private: bool = True


class ContributionGraphBlock(BlockBase):
    kind: Literal["contribution-graph"] = "contribution-graph"
    username: str
    theme: str = "github-compact"
    show_legend: bool = True


# Cards


class CardBlock(BlockBase):
    kind: Literal["card"] = "card"
    title: str
    subtitle: str | None = None
    description: str | None = None
    url: str | None = None
    icon: str | None = None


class ProjectCardBlock(BlockBase):
    kind: Literal["project-card"] = "project-card"
    name: str
    description: str = ""
    repo_url: str | None = None
    demo_url: str | None = None
    image_url: str | None = None
    tech_stack: list[str] = Field(default_factory=list)
    stars: int | None = None
    forks: int | None = None
    featured: bool = False


class ExperienceItemBlock(BlockBase):
    kind: Literal["experience-item"] = "experience-item"
    company: str
    role: str
    start_date: str
    end_date: str | None = None
    location: str | None = None
    description: str = ""
    highlights: list[str] = Field(default_factory=list)
    technologies: list[str] = Field(default_factory=list)

    @property
    def current(self) -> bool:
        return self.end_date is None


class EducationItemBlock(BlockBase):
    kind: Literal["education-item"] = "education-item"
    institution: str
    degree: str
    start_date: str
    end_date: str | None = None
    field: str | None = None
    gpa: str | None = None
    honors: list[str] = Field(default_factory=list)


class AchievementItemBlock(BlockBase):
    kind: Literal["achievement-item"] = "achievement-item"
    title: str
    description: str | None = None
    date: str | None = None
    issuer: str | None = None
    icon: str | None = None
    url: str | None = None


class CustomBlock(BlockBase):
    """Opaque content passed through to the output.

    ``custom_type`` names the sub-type (``markdown``, ``html``,
    ``wakatime-stats``, ``spotify-now-playing``...). ``content`` is emitted
    as-is in markdown; ``data`` carries any extra structured settings.
    """

    kind: Literal["custom"] = "custom"
    custom_type: str
    content: str = ""
    data: dict[str, Any] = Field(default_factory=dict)


# Composites


class _Container(BlockBase):
    children: list[Block] = Field(default_factory=list)

    def iter_children(self) -> Iterator[Block]:
        return iter(self.children)


class RowBlock(_Container):
    kind: Literal["row"] = "row"
    align: Literal["start", "center", "end", "stretch"] = "center"
    justify: Literal["start", "center", "end", "between", "around"] = "center"
    gap: Gap = "md"
    wrap: bool = True


class ColumnBlock(_Container):
    kind: Literal["column"] = "column"
    span: int | None = None


class GridBlock(_Container):
    kind: Literal["grid"] = "grid"
    columns: int = Field(default=3, ge=1)
    gap: Gap = "md"


class ParagraphBlock(_Container):
    kind: Literal["paragraph"] = "paragraph"
    align: TextAlign | None = None


class BadgeGroupBlock(BlockBase):
    kind: Literal["badge-group"] = "badge-group"
    children: list[BadgeBlock] = Field(default_factory=list)
    align: TextAlign = "center"
    gap: Gap = "md"

    def iter_children(self) -> Iterator[Block]:
        return iter(self.children)


class StatGroupBlock(BlockBase):
    kind: Literal["stat-group"] = "stat-group"
    children: list[StatBlock] = Field(default_factory=list)
    layout: Literal["row", "grid"] = "row"

    def iter_children(self) -> Iterator[Block]:
        return iter(self.children)


class SocialGroupBlock(BlockBase):
    kind: Literal["social-group"] = "social-group"
    children: list[SocialLinkBlock] = Field(default_factory=list)
    style: Literal["icons", "badges", "buttons", "pills"] = "badges"
    align: TextAlign = "center"

    def iter_children(self) -> Iterator[Block]:
        return iter(self.children)


class ListItem(BaseModel):
    """One list entry: plain text or a nested block, with optional sub-items."""

    model_config = ConfigDict(frozen=True)

    content: Union[str, Block]
    icon: str | None = None
    nested: list[ListItem] = Field(default_factory=list)


class ListBlock(BlockBase):
    kind: Literal["list"] = "list"
    items: list[ListItem] = Field(default_factory=list)
    list_type: Literal["unordered", "ordered", "none"] = "unordered"

    def iter_children(self) -> Iterator[Block]:
        pending = list(self.items)
        while pending:
            item = pending.pop(0)
            if not isinstance(item.content, str):
                yield item.content
            pending[:0] = item.nested


Block = Annotated[
    Union[
        TextBlock,
        HeadingBlock,
        ParagraphBlock,
        CodeBlock,
        QuoteBlock,
        ImageBlock,
        LinkBlock,
        BadgeBlock,
        BadgeGroupBlock,
        ListBlock,
        SpacerBlock,
        DividerBlock,
        RowBlock,
        ColumnBlock,
        GridBlock,
        StatBlock,
        StatGroupBlock,
        SocialLinkBlock,
        SocialGroupBlock,
        TypingAnimationBlock,
        GitHubStatsCardBlock,
        ContributionGraphBlock,
        CardBlock,
        ProjectCardBlock,
        ExperienceItemBlock,
        EducationItemBlock,
        AchievementItemBlock,
        CustomBlock,
    ],
    Field(discriminator="kind"),
]

BLOCK_TYPES: dict[str, type[BlockBase]] = {
    cls.model_fields["kind"].default: cls
    for cls in (
        TextBlock,
        HeadingBlock,
        ParagraphBlock,
        CodeBlock,
        QuoteBlock,
        ImageBlock,
        LinkBlock,
        BadgeBlock,
        BadgeGroupBlock,
        ListBlock,
        SpacerBlock,
        DividerBlock,
        RowBlock,
        ColumnBlock,
        GridBlock,
        StatBlock,
        StatGroupBlock,
        SocialLinkBlock,
        SocialGroupBlock,
        TypingAnimationBlock,
        GitHubStatsCardBlock,
        ContributionGraphBlock,
        CardBlock,
        ProjectCardBlock,
        ExperienceItemBlock,
        EducationItemBlock,
        AchievementItemBlock,
        CustomBlock,
    )
}

BLOCK_KINDS: frozenset[str] = frozenset(BLOCK_TYPES)

for _model in (_Container, RowBlock, ColumnBlock, GridBlock, ParagraphBlock, ListItem, ListBlock):
    _model.model_rebuild()


def iter_blocks(blocks: list[Block]) -> Iterator[Block]:
    """Depth-first walk over ``blocks`` and everything nested in them."""
    for block in blocks:
        yield block
        yield from iter_blocks(list(block.iter_children()))


def ensure_exhaustive(table: Mapping[str, Any], target: str) -> None:
    """Check that a dispatch table handles exactly ``BLOCK_KINDS``.

    Raises:
        SerializationError: For the first kind with no handler, or a handler
            registered for a kind that does not exist.
    """
    missing = sorted(BLOCK_KINDS - set(table))
    if missing:
        raise SerializationError(missing[0], target)
    unknown = sorted(set(table) - BLOCK_KINDS)
    if unknown:
        raise SerializationError(unknown[0], target)
