"""Block and section serialization to GitHub-flavored markdown.

Serialization is pure and total: every block kind has an entry in
``MARKDOWN_RENDERERS`` (checked at import), an unknown kind yields "" and
nothing here raises. Invisible blocks yield "" at any depth, and composite
blocks drop children whose markdown is empty before joining.

Alignment that markdown cannot express is written as raw HTML
(``<p align>``, ``<hN align>``, ``<div align>``).
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from profile_studio.assets.urls import (
    STATS_CARD_LABELS,
    badge_url,
    contribution_graph_url,
    social_badge_url,
    stats_card_url,
    typing_svg_url,
)
from profile_studio.blocks.models import (
    AchievementItemBlock,
    BadgeBlock,
    BadgeGroupBlock,
    Block,
    CardBlock,
    CodeBlock,
    ContributionGraphBlock,
    CustomBlock,
    DividerBlock,
    EducationItemBlock,
    ExperienceItemBlock,
    GitHubStatsCardBlock,
    HeadingBlock,
    ImageBlock,
    LinkBlock,
    ListBlock,
    ListItem,
    ParagraphBlock,
    ProjectCardBlock,
    QuoteBlock,
    SocialGroupBlock,
    SocialLinkBlock,
    SpacerBlock,
    StatBlock,
    StatGroupBlock,
    TextBlock,
    TypingAnimationBlock,
    ensure_exhaustive,
)
from profile_studio.markdown.escape import (
    apply_emphasis,
    emphasis_to_html,
    escape_alt_text,
    escape_attr,
    escape_inline_code,
    inline_markdown_to_html,
)

if TYPE_CHECKING:
    from profile_studio.engine.renderer import RenderedSection

ALIGNED = ("center", "right")

# Number of <br /> lines per spacer height
SPACER_LINES = {"xs": 1, "sm": 1, "md": 2, "lg": 3, "xl": 4}


def block_to_markdown(block: Block) -> str:
    """Convert a block to markdown; invisible or unknown blocks yield ""."""
    if not block.visible:
        return ""
    handler = MARKDOWN_RENDERERS.get(getattr(block, "kind", ""))
    if handler is None:
        return ""
    return handler(block)


def join_blocks(blocks: Iterable[Block], separator: str) -> str:
    """Join the non-empty markdown of ``blocks``."""
    return separator.join(md for md in (block_to_markdown(b) for b in blocks) if md)


def align_container(markdown: str, align: str | None) -> str:
    """Center or right-align a markdown fragment.

    Blank lines around the fragment keep GitHub rendering it as markdown
    inside the HTML container.
    """
    if not markdown or align not in ALIGNED:
        return markdown
    return f'<div align="{align}">\n\n{markdown}\n\n</div>'


def date_range(start: str, end: str | None) -> str:
    return f"{start} – {end or 'Present'}"


# Text


def _text(block: TextBlock) -> str:
    if not block.value:
        return ""
    if block.align in ALIGNED:
        content = emphasis_to_html(inline_markdown_to_html(block.value), block.emphasis)
        return f'<p align="{block.align}">{content}</p>'
    return apply_emphasis(block.value, block.emphasis)


def _heading(block: HeadingBlock) -> str:
    if not block.value:
        return ""
    if block.align in ALIGNED:
        level = block.level
        content = inline_markdown_to_html(block.value)
        return f'<h{level} align="{block.align}">{content}</h{level}>'
    return f"{'#' * block.level} {block.value}"


def _paragraph(block: ParagraphBlock) -> str:
    return align_container(join_blocks(block.children, " "), block.align)


def _code(block: CodeBlock) -> str:
    if block.inline:
        return escape_inline_code(block.value)
    return f"```{block.language or ''}\n{block.value}\n```"


def _quote(block: QuoteBlock) -> str:
    if not block.value:
        return ""
    lines = [f"> {line}" if line else ">" for line in block.value.split("\n")]
    if block.author:
        attribution = f"> — {block.author}"
        if block.source:
            attribution += f", *{block.source}*"
        lines.extend([">", attribution])
    return "\n".join(lines)


# Media and links


def _image(block: ImageBlock) -> str:
    if block.align in ALIGNED or block.width or block.height:
        attrs = f'src="{escape_attr(block.src)}" alt="{escape_attr(block.alt)}"'
        if block.width:
            attrs += f' width="{block.width}"'
        if block.height:
            attrs += f' height="{block.height}"'
        tag = f"<img {attrs} />"
        if block.link:
            tag = f'<a href="{escape_attr(block.link)}">{tag}</a>'
        if block.align in ALIGNED:
            return f'<p align="{block.align}">{tag}</p>'
        return tag

    image = f"![{escape_alt_text(block.alt)}]({block.src})"
    return f"[{image}]({block.link})" if block.link else image


def _link(block: LinkBlock) -> str:
    if block.title:
        return f'[{block.text}]({block.href} "{block.title}")'
    return f"[{block.text}]({block.href})"


def badge_image_url(block: BadgeBlock) -> str:
    return badge_url(
        block.label,
        block.message,
        block.color,
        style=block.style,
        logo=block.logo,
        logo_color=block.logo_color,
        label_color=block.label_color,
    )


def _badge(block: BadgeBlock) -> str:
    image = f"![{escape_alt_text(block.label)}]({badge_image_url(block)})"
    return f"[{image}]({block.link})" if block.link else image


def _badge_group(block: BadgeGroupBlock) -> str:
    return align_container(join_blocks(block.children, " "), block.align)


def _list_lines(items: list[ListItem], list_type: str, depth: int) -> list[str]:
    lines: list[str] = []
    indent = "  " * depth
    number = 0
    for item in items:
        if isinstance(item.content, str):
            content = item.content
        else:
            content = block_to_markdown(item.content)
        if not content:
            continue
        number += 1
        prefix = f"{number}." if list_type == "ordered" else "-"
        if item.icon:
            content = f"{item.icon} {content}"
        lines.append(f"{indent}{prefix} {content}")
        lines.extend(_list_lines(item.nested, list_type, depth + 1))
    return lines


def _list(block: ListBlock) -> str:
    return "\n".join(_list_lines(block.items, block.list_type, 0))


# Layout


def _spacer(block: SpacerBlock) -> str:
    return "\n".join(["<br />"] * SPACER_LINES[block.height])


def _divider(block: DividerBlock) -> str:
    return "---"


def _stack(block: Block) -> str:
    return join_blocks(block.iter_children(), "\n\n")


# Stats and socials


def _stat(block: StatBlock) -> str:
    label = f"{block.icon} {block.label}" if block.icon else block.label
    return f"**{label}:** {block.value}"


def _stat_group(block: StatGroupBlock) -> str:
    return join_blocks(block.children, " | ")


def _social_link(block: SocialLinkBlock) -> str:
    text = block.label or block.platform
    if block.show_icon:
        badge = social_badge_url(block.platform, text if block.show_label else None)
        return f"[![{escape_alt_text(text)}]({badge})]({block.url})"
    return f"[{text}]({block.url})"


def _social_group(block: SocialGroupBlock) -> str:
    return align_container(join_blocks(block.children, " "), block.align)


def typing_image_url(block: TypingAnimationBlock) -> str:
    return typing_svg_url(block.texts, pause=block.pause_time)


def _typing_animation(block: TypingAnimationBlock) -> str:
    if not block.texts:
        return ""
    return f"![Typing SVG]({typing_image_url(block)})"


# GitHub integrations


def stats_card_image_url(block: GitHubStatsCardBlock) -> str:
    return stats_card_url(
        block.username,
        block.card_type,
        theme=block.theme,
        show_icons=block.show_icons,
        hide_border=block.hide_border,
        include_all_commits=block.include_all_commits,
        count_private=block.count_private,
    )


def stats_card_alt(block: GitHubStatsCardBlock) -> str:
    return f"{block.username}'s {STATS_CARD_LABELS[block.card_type]}"


def _github_stats_card(block: GitHubStatsCardBlock) -> str:
    return f"![{escape_alt_text(stats_card_alt(block))}]({stats_card_image_url(block)})"


def contribution_image_url(block: ContributionGraphBlock) -> str:
    return contribution_graph_url(block.username, theme=block.theme)


def _contribution_graph(block: ContributionGraphBlock) -> str:
    return f"![{block.username}'s contribution graph]({contribution_image_url(block)})"


# Cards


def _card(block: CardBlock) -> str:
    title = f"{block.icon} {block.title}" if block.icon else block.title
    parts = [f"### {title}"]
    if block.subtitle:
        parts.append(f"*{block.subtitle}*")
    if block.description:
        parts.append(block.description)
    if block.url:
        parts.append(f"[🔗 Link]({block.url})")
    return "\n\n".join(parts)


def _project_card(block: ProjectCardBlock) -> str:
    parts = [f"### {block.name}"]
    if block.description:
        parts.append(block.description)
    if block.tech_stack:
        parts.append(f"**Tech:** {', '.join(block.tech_stack)}")

    stats = []
    if block.stars is not None:
        stats.append(f"⭐ {block.stars}")
    if block.forks is not None:
        stats.append(f"🍴 {block.forks}")
    if stats:
        parts.append(" · ".join(stats))

    links = []
    if block.repo_url:
        links.append(f"[📁 Repository]({block.repo_url})")
    if block.demo_url:
        links.append(f"[🚀 Live Demo]({block.demo_url})")
    if links:
        parts.append(" · ".join(links))
    return "\n\n".join(parts)


def _experience_item(block: ExperienceItemBlock) -> str:
    dates = date_range(block.start_date, block.end_date)
    if block.location:
        dates += f" · {block.location}"
    parts = [f"#### {block.role} @ {block.company}\n*{dates}*"]
    if block.description:
        parts.append(block.description)
    if block.highlights:
        parts.append("\n".join(f"- {highlight}" for highlight in block.highlights))
    if block.technologies:
        parts.append(f"**Tech:** {', '.join(block.technologies)}")
    return "\n\n".join(parts)


def _education_item(block: EducationItemBlock) -> str:
    degree = f"{block.degree} in {block.field}" if block.field else block.degree
    lines = [
        f"#### {degree}",
        f"*{block.institution}*",
        f"*{date_range(block.start_date, block.end_date)}*",
    ]
    parts = ["\n".join(lines)]
    if block.gpa:
        parts.append(f"**GPA:** {block.gpa}")
    if block.honors:
        parts.append("\n".join(f"- {honor}" for honor in block.honors))
    return "\n\n".join(parts)


def _achievement_item(block: AchievementItemBlock) -> str:
    title = f"[{block.title}]({block.url})" if block.url else block.title
    line = f"{block.icon or '🏆'} **{title}**"
    if block.description:
        line += f" — {block.description}"
    details = [value for value in (block.issuer, block.date) if value]
    if details:
        line += f" *({', '.join(details)})*"
    return line


def _custom(block: CustomBlock) -> str:
    return block.content


MARKDOWN_RENDERERS: dict[str, Callable[[Block], str]] = {
    "text": _text,
    "heading": _heading,
    "paragraph": _paragraph,
    "code": _code,
    "quote": _quote,
    "image": _image,
    "link": _link,
    "badge": _badge,
    "badge-group": _badge_group,
    "list": _list,
    "spacer": _spacer,
    "divider": _divider,
    "row": _stack,
    "column": _stack,
    "grid": _stack,
    "stat": _stat,
    "stat-group": _stat_group,
    "social-link": _social_link,
    "social-group": _social_group,
    "typing-animation": _typing_animation,
    "github-stats-card": _github_stats_card,
    "contribution-graph": _contribution_graph,
    "card": _card,
    "project-card": _project_card,
    "experience-item": _experience_item,
    "education-item": _education_item,
    "achievement-item": _achievement_item,
    "custom": _custom,
}

ensure_exhaustive(MARKDOWN_RENDERERS, "markdown")


def section_to_markdown(section: RenderedSection, include_section_comment: bool = False) -> str:
    """Convert a rendered section to markdown.

    Produces an optional ``<!-- Section: type -->`` marker, an optional
    ``## title`` and the non-empty block markdown separated by blank lines.
    A hidden section, or one whose blocks all serialize to "", yields "".
    """
    if not section.visible:
        return ""
    body = join_blocks(section.blocks, "\n\n")
    if not body:
        return ""

    header: list[str] = []
    if include_section_comment:
        header.append(f"<!-- Section: {section.type} -->")
    if section.title:
        header.append(f"## {section.title}")
    if not header:
        return body
    return "\n".join(header) + "\n\n" + body
