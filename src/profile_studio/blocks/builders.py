"""Block factory used by section builders."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from profile_studio.blocks.models import (
    AchievementItemBlock,
    BadgeBlock,
    BadgeGroupBlock,
    Block,
    CardBlock,
    CodeBlock,
    ColumnBlock,
    ContributionGraphBlock,
    CustomBlock,
    DividerBlock,
    EducationItemBlock,
    ExperienceItemBlock,
    GitHubStatsCardBlock,
    GridBlock,
    HeadingBlock,
    ImageBlock,
    LinkBlock,
    ListBlock,
    ListItem,
    ParagraphBlock,
    ProjectCardBlock,
    QuoteBlock,
    RowBlock,
    SocialGroupBlock,
    SocialLinkBlock,
    SpacerBlock,
    StatBlock,
    StatGroupBlock,
    TextBlock,
    TypingAnimationBlock,
)


class BlockBuilder:
    """Create blocks with deterministic ids.

    Ids have the form ``{scope}-{kind}-{n}`` where ``n`` counts every block
    this builder has created so far, so the same sequence of calls always
    yields the same ids.

    Example:
        b = BlockBuilder("hero-1")
        heading = b.heading("Hi there", level=1, align="center")
        heading.id  # 'hero-1-heading-1'
    """

    def __init__(self, scope: str) -> None:
        self.scope = scope
        self.count = 0

    def next_id(self, kind: str) -> str:
        """Reserve the next id for a block of ``kind``."""
        self.count += 1
        return f"{self.scope}-{kind}-{self.count}"

    # Text

    def text(
        self,
        value: str,
        *,
        emphasis: str = "normal",
        align: str | None = None,
        visible: bool = True,
    ) -> TextBlock:
        return TextBlock(
            id=self.next_id("text"), value=value, emphasis=emphasis, align=align, visible=visible
        )

    def heading(
        self, value: str, level: int = 2, *, align: str | None = None, visible: bool = True
    ) -> HeadingBlock:
        return HeadingBlock(
            id=self.next_id("heading"), value=value, level=level, align=align, visible=visible
        )

    def paragraph(self, children: Sequence[Block], *, align: str | None = None) -> ParagraphBlock:
        return ParagraphBlock(id=self.next_id("paragraph"), children=list(children), align=align)

    def code(self, value: str, *, language: str | None = None, inline: bool = False) -> CodeBlock:
        return CodeBlock(id=self.next_id("code"), value=value, language=language, inline=inline)

    def quote(
        self, value: str, *, author: str | None = None, source: str | None = None
    ) -> QuoteBlock:
        return QuoteBlock(id=self.next_id("quote"), value=value, author=author, source=source)

    # Media and links

    def image(self, src: str, alt: str = "", **options: Any) -> ImageBlock:
        """Create an image; options are any ``ImageBlock`` field."""
        return ImageBlock(id=self.next_id("image"), src=src, alt=alt, **options)

    def link(
        self, href: str, text: str, *, title: str | None = None, external: bool = True
    ) -> LinkBlock:
        return LinkBlock(
            id=self.next_id("link"), href=href, text=text, title=title, external=external
        )

    def badge(self, label: str, **options: Any) -> BadgeBlock:
        """Create a badge; options are any ``BadgeBlock`` field."""
        return BadgeBlock(id=self.next_id("badge"), label=label, **options)

    def badge_group(
        self, badges: Sequence[BadgeBlock], *, align: str = "center", gap: str = "md"
    ) -> BadgeGroupBlock:
        return BadgeGroupBlock(
            id=self.next_id("badge-group"), children=list(badges), align=align, gap=gap
        )

    @staticmethod
    def list_item(
        content: str | Block, *, icon: str | None = None, nested: Sequence[ListItem] = ()
    ) -> ListItem:
        """Create a list entry. Entries are not blocks and take no id."""
        return ListItem(content=content, icon=icon, nested=list(nested))

    def list(self, items: Sequence[ListItem | str], *, list_type: str = "unordered") -> ListBlock:
        entries = [
            item if isinstance(item, ListItem) else ListItem(content=item) for item in items
        ]
        return ListBlock(id=self.next_id("list"), items=entries, list_type=list_type)

    # Layout

    def spacer(self, height: str = "md") -> SpacerBlock:
        return SpacerBlock(id=self.next_id("spacer"), height=height)

    def divider(self, *, style: str = "solid", width: str = "100%") -> DividerBlock:
        return DividerBlock(id=self.next_id("divider"), style=style, width=width)

    def row(self, children: Sequence[Block], **options: Any) -> RowBlock:
        return RowBlock(id=self.next_id("row"), children=list(children), **options)

    def column(self, children: Sequence[Block], *, span: int | None = None) -> ColumnBlock:
        return ColumnBlock(id=self.next_id("column"), children=list(children), span=span)

    def grid(self, children: Sequence[Block], *, columns: int = 3, gap: str = "md") -> GridBlock:
        return GridBlock(
            id=self.next_id("grid"), children=list(children), columns=columns, gap=gap
        )

    # Stats and socials

    def stat(self, label: str, value: str | int | float, **options: Any) -> StatBlock:
        return StatBlock(id=self.next_id("stat"), label=label, value=value, **options)

    def stat_group(self, stats: Sequence[StatBlock], *, layout: str = "row") -> StatGroupBlock:
        return StatGroupBlock(id=self.next_id("stat-group"), children=list(stats), layout=layout)

    def social_link(self, platform: str, url: str, **options: Any) -> SocialLinkBlock:
        return SocialLinkBlock(
            id=self.next_id("social-link"), platform=platform, url=url, **options
        )

    def social_group(
        self, links: Sequence[SocialLinkBlock], *, style: str = "badges", align: str = "center"
    ) -> SocialGroupBlock:
        return SocialGroupBlock(
            id=self.next_id("social-group"), children=list(links), style=style, align=align
        )

    def typing_animation(self, texts: Sequence[str], **options: Any) -> TypingAnimationBlock:
        """Create a typing animation; ``None`` timing options keep the defaults."""
        timing = {key: value for key, value in options.items() if value is not None}
        return TypingAnimationBlock(
            id=self.next_id("typing-animation"), texts=list(texts), **timing
        )

    # GitHub integrations

    def github_stats_card(
        self, username: str, card_type: str = "stats", **options: Any
    ) -> GitHubStatsCardBlock:
        return GitHubStatsCardBlock(
            id=self.next_id("github-stats-card"),
            username=username,
            card_type=card_type,
            **options,
        )

    def contribution_graph(
        self, username: str, *, theme: str = "github-compact", show_legend: bool = True
    ) -> ContributionGraphBlock:
        return ContributionGraphBlock(
            id=self.next_id("contribution-graph"),
            username=username,
            theme=theme,
            show_legend=show_legend,
        )

    # Cards

    def card(self, title: str, **options: Any) -> CardBlock:
        return CardBlock(id=self.next_id("card"), title=title, **options)

    def project_card(self, name: str, description: str = "", **options: Any) -> ProjectCardBlock:
        return ProjectCardBlock(
            id=self.next_id("project-card"), name=name, description=description, **options
        )

    def experience_item(
        self, company: str, role: str, start_date: str, **options: Any
    ) -> ExperienceItemBlock:
        return ExperienceItemBlock(
            id=self.next_id("experience-item"),
            company=company,
            role=role,
            start_date=start_date,
            **options,
        )

    def education_item(
        self, institution: str, degree: str, start_date: str, **options: Any
    ) -> EducationItemBlock:
        return EducationItemBlock(
            id=self.next_id("education-item"),
            institution=institution,
            degree=degree,
            start_date=start_date,
            **options,
        )

    def achievement_item(self, title: str, **options: Any) -> AchievementItemBlock:
        return AchievementItemBlock(id=self.next_id("achievement-item"), title=title, **options)

    def custom(
        self, custom_type: str, content: str = "", data: dict[str, Any] | None = None
    ) -> CustomBlock:
        return CustomBlock(
            id=self.next_id("custom"), custom_type=custom_type, content=content, data=data or {}
        )
