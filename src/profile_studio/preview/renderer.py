"""Structural renderer: RenderOutput -> UINode tree -> HTML preview.

Mirrors the markdown serializer block for block so a preview shows what
the export will contain. Every block kind has an entry in
``PREVIEW_RENDERERS`` (checked at import); invisible blocks produce no
node at any depth.
"""

from __future__ import annotations

import html
import logging
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import urljoin, urlparse

from jinja2 import Environment, FileSystemLoader, select_autoescape
from pydantic import BaseModel, ConfigDict, Field

from profile_studio.assets.urls import social_badge_url
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
    ensure_exhaustive,
)
from profile_studio.core.template import ColorScheme
from profile_studio.markdown.escape import emphasis_to_html, inline_markdown_to_html, sanitize_html
from profile_studio.markdown.serializer import (
    badge_image_url,
    block_to_markdown,
    contribution_image_url,
    date_range,
    stats_card_alt,
    stats_card_image_url,
    typing_image_url,
)
from profile_studio.preview.images import ImageTracker
from profile_studio.preview.nodes import UINode, node

if TYPE_CHECKING:
    from profile_studio.engine.errors import RenderError
    from profile_studio.engine.renderer import RenderedSection, RenderOutput

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"

# Custom sub-types whose content is already markup
RAW_CUSTOM_TYPES = ("markdown", "html")

# Project cards list at most this many technologies
PROJECT_TECH_LIMIT = 3


class PreviewContext(BaseModel):
    """Settings shared by every node rendered for one preview.

    Attributes:
        theme: Color scheme applied to the preview root
        as_markdown: Show each block's markdown in a ``<pre>`` instead
        base_url: Base for resolving relative link and image URLs
        images: Load state of stat-card images, kept across renders
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    theme: ColorScheme = "system"
    as_markdown: bool = False
    base_url: str | None = None
    images: ImageTracker = Field(default_factory=ImageTracker)


def resolve_url(url: str, base_url: str | None) -> str:
    """Resolve a relative URL against ``base_url``.

    Absolute URLs, protocol-relative URLs and fragments are returned as-is.
    """
    if not base_url or not url or url.startswith(("#", "//")) or urlparse(url).scheme:
        return url
    return urljoin(base_url, url)


def render_block(block: Block, context: PreviewContext) -> UINode | None:
    """Render one block; invisible or unknown blocks yield ``None``."""
    if not block.visible:
        return None
    if context.as_markdown:
        markdown = block_to_markdown(block)
        return node("pre", markdown, class_="markdown-source") if markdown else None

    handler = PREVIEW_RENDERERS.get(getattr(block, "kind", ""))
    if handler is None:
        return None
    return handler(block, context)


def render_children(blocks: Iterable[Block], context: PreviewContext) -> list[UINode]:
    return [rendered for b in blocks if (rendered := render_block(b, context)) is not None]


def align_class(align: str | None) -> str | None:
    return f"text-{align}" if align else None


# Text


def inline_html(text: str) -> str:
    """Escape ``text`` and convert its inline markdown emphasis to tags."""
    return inline_markdown_to_html(html.escape(text, quote=False))


def _container(
    tag: str, children: Sequence[Block], context: PreviewContext, **attrs: str | None
) -> UINode | None:
    # A container with nothing visible inside renders nothing, like its markdown
    rendered = render_children(children, context)
    if not rendered:
        return None
    return node(tag, *rendered, **attrs)


def _text(block: TextBlock, context: PreviewContext) -> UINode | None:
    if not block.value:
        return None
    content = emphasis_to_html(inline_html(block.value), block.emphasis)
    return node("span", content, raw=True, class_=align_class(block.align))


def _heading(block: HeadingBlock, context: PreviewContext) -> UINode | None:
    if not block.value:
        return None
    return node(
        f"h{block.level}", inline_html(block.value), raw=True, class_=align_class(block.align)
    )


def _paragraph(block: ParagraphBlock, context: PreviewContext) -> UINode | None:
    return _container("p", block.children, context, class_=align_class(block.align))


def _code(block: CodeBlock, context: PreviewContext) -> UINode:
    if block.inline:
        return node("code", block.value)
    language = f"language-{block.language}" if block.language else None
    return node("pre", node("code", block.value, class_=language))


def _quote(block: QuoteBlock, context: PreviewContext) -> UINode:
    footer = None
    if block.author:
        footer = node(
            "footer",
            f"— {block.author}",
            node("cite", f", {block.source}") if block.source else None,
        )
    return node("blockquote", node("p", block.value), footer)


# Media and links


def _image(block: ImageBlock, context: PreviewContext) -> UINode:
    image = node(
        "img",
        src=resolve_url(block.src, context.base_url),
        alt=block.alt,
        width=str(block.width) if block.width else None,
        height=str(block.height) if block.height else None,
        loading="lazy",
        class_=f"img-{block.size}" if block.size else None,
    )
    if block.link:
        image = node("a", image, href=resolve_url(block.link, context.base_url))
    return node("p", image, class_=align_class(block.align or "center"))


def _link(block: LinkBlock, context: PreviewContext) -> UINode:
    return node(
        "a",
        block.text,
        href=resolve_url(block.href, context.base_url),
        title=block.title,
        target="_blank" if block.external else None,
        rel="noopener noreferrer" if block.external else None,
    )


def _badge(block: BadgeBlock, context: PreviewContext) -> UINode:
    image = node("img", src=badge_image_url(block), alt=block.label, loading="lazy")
    if block.link:
        return node("a", image, href=resolve_url(block.link, context.base_url), target="_blank")
    return image


def _badge_group(block: BadgeGroupBlock, context: PreviewContext) -> UINode | None:
    return _container(
        "div",
        block.children,
        context,
        class_=f"badge-container gap-{block.gap} {align_class(block.align)}",
    )


def _list_item(item: ListItem, list_type: str, context: PreviewContext) -> UINode | None:
    icon = node("span", item.icon, class_="list-icon") if item.icon else None
    nested = _list_items(item.nested, list_type, context)
    if isinstance(item.content, str):
        if not item.content:
            return None
        # String items carry inline markdown such as "**Email:** ..."
        return node("li", icon, inline_html(item.content), nested, raw=True)
    content = render_block(item.content, context)
    if content is None:
        return None
    return node("li", icon, content, nested)


def _list_items(
    items: Sequence[ListItem], list_type: str, context: PreviewContext
) -> UINode | None:
    entries = [li for item in items if (li := _list_item(item, list_type, context)) is not None]
    if not entries:
        return None
    if list_type == "ordered":
        return node("ol", *entries)
    return node("ul", *entries, class_="list-none" if list_type == "none" else None)


def _list(block: ListBlock, context: PreviewContext) -> UINode | None:
    return _list_items(block.items, block.list_type, context)


# Layout


def _spacer(block: SpacerBlock, context: PreviewContext) -> UINode:
    return node("div", class_=f"spacer spacer-{block.height}")


def _divider(block: DividerBlock, context: PreviewContext) -> UINode:
    return node("hr", class_=f"divider divider-{block.style}", style=f"width: {block.width}")


def _row(block: RowBlock, context: PreviewContext) -> UINode | None:
    classes = f"flex-row align-{block.align} justify-{block.justify} gap-{block.gap}"
    if block.wrap:
        classes += " flex-wrap"
    return _container("div", block.children, context, class_=classes)


def _column(block: ColumnBlock, context: PreviewContext) -> UINode | None:
    return _container(
        "div",
        block.children,
        context,
        class_="flex-col",
        style=f"flex: {block.span}" if block.span else None,
    )


def _grid(block: GridBlock, context: PreviewContext) -> UINode | None:
    return _container(
        "div",
        block.children,
        context,
        class_=f"grid gap-{block.gap}",
        style=f"grid-template-columns: repeat({block.columns}, minmax(0, 1fr))",
    )


# Stats and socials


def _stat(block: StatBlock, context: PreviewContext) -> UINode:
    return node(
        "div",
        node("span", block.icon, class_="stat-icon") if block.icon else None,
        node("span", str(block.value), class_="stat-value", style=_color(block.color)),
        node("span", block.label, class_="stat-label"),
        class_="stat",
    )


def _color(color: str | None) -> str | None:
    return f"color: {color}" if color else None


def _stat_group(block: StatGroupBlock, context: PreviewContext) -> UINode | None:
    return _container(
        "div", block.children, context, class_=f"stats-container stats-{block.layout}"
    )


def _social_link(block: SocialLinkBlock, context: PreviewContext) -> UINode:
    text = block.label or block.platform
    if block.show_icon:
        label = text if block.show_label else None
        content: UINode | str = node(
            "img", src=social_badge_url(block.platform, label), alt=text, loading="lazy"
        )
    else:
        content = text
    return node(
        "a",
        content,
        href=resolve_url(block.url, context.base_url),
        target="_blank",
        rel="noopener noreferrer",
        class_=f"social-link social-{block.platform}",
    )


def _social_group(block: SocialGroupBlock, context: PreviewContext) -> UINode | None:
    return _container(
        "div",
        block.children,
        context,
        class_=f"social-links social-{block.style} {align_class(block.align)}",
    )


def _typing_animation(block: TypingAnimationBlock, context: PreviewContext) -> UINode | None:
    if not block.texts:
        return None
    return node(
        "p",
        node("img", src=typing_image_url(block), alt="Typing SVG", loading="lazy"),
        class_="text-center",
    )


# GitHub integrations


def stat_card_node(src: str, alt: str, card_type: str, context: PreviewContext) -> UINode:
    """Image node for an externally generated card.

    Until the image is reported loaded, an inert skeleton of the same
    card type is shown instead. A card that fails or times out stays a
    skeleton.
    """
    image = context.images.track(src, alt, card_type)
    status = image.status
    if status == "loaded":
        return node("img", src=src, alt=alt, loading="lazy", class_=f"stat-card stat-{card_type}")
    return node(
        "div",
        class_=f"stat-card-skeleton stat-{card_type}",
        role="img",
        aria_label=alt,
        aria_busy="true" if status == "loading" else None,
        data_status=status,
        data_src=src,
    )


def _github_stats_card(block: GitHubStatsCardBlock, context: PreviewContext) -> UINode:
    return stat_card_node(
        stats_card_image_url(block), stats_card_alt(block), block.card_type, context
    )


def _contribution_graph(block: ContributionGraphBlock, context: PreviewContext) -> UINode:
    return stat_card_node(
        contribution_image_url(block),
        f"{block.username}'s contribution graph",
        "activity-graph",
        context,
    )


# Cards


def _card(block: CardBlock, context: PreviewContext) -> UINode:
    title = f"{block.icon} {block.title}" if block.icon else block.title
    return node(
        "div",
        node("h4", title, class_="card-title"),
        node("p", block.subtitle, class_="card-subtitle") if block.subtitle else None,
        node("p", block.description, class_="card-description") if block.description else None,
        node("a", "🔗 Link", href=resolve_url(block.url, context.base_url), target="_blank")
        if block.url
        else None,
        class_="card",
    )


def _project_card(block: ProjectCardBlock, context: PreviewContext) -> UINode:
    tech = [
        node("span", name, class_="tech-tag") for name in block.tech_stack[:PROJECT_TECH_LIMIT]
    ]
    counts = []
    if block.stars is not None:
        counts.append(node("span", f"⭐ {block.stars}"))
    if block.forks is not None:
        counts.append(node("span", f"🍴 {block.forks}"))

    links = []
    if block.repo_url:
        links.append(node("a", "📁 Repository", href=block.repo_url, target="_blank"))
    if block.demo_url:
        links.append(node("a", "🚀 Live Demo", href=block.demo_url, target="_blank"))

    return node(
        "div",
        node("img", src=block.image_url, alt=block.name, loading="lazy", class_="card-image")
        if block.image_url
        else None,
        node("h4", block.name, class_="card-title"),
        node("p", block.description, class_="card-description") if block.description else None,
        node("div", *tech, *counts, class_="card-footer") if tech or counts else None,
        node("div", *links, class_="card-links") if links else None,
        class_="card project-card featured" if block.featured else "card project-card",
    )


def _experience_item(block: ExperienceItemBlock, context: PreviewContext) -> UINode:
    dates = date_range(block.start_date, block.end_date)
    if block.location:
        dates += f" · {block.location}"
    return node(
        "div",
        node("h4", block.role, class_="timeline-title"),
        node("p", block.company, class_="timeline-subtitle"),
        node("p", dates, class_="timeline-date"),
        node("p", block.description) if block.description else None,
        node("ul", *(node("li", h) for h in block.highlights)) if block.highlights else None,
        node("p", f"Tech: {', '.join(block.technologies)}", class_="timeline-tech")
        if block.technologies
        else None,
        class_="timeline-item current" if block.current else "timeline-item",
    )


def _education_item(block: EducationItemBlock, context: PreviewContext) -> UINode:
    degree = f"{block.degree} in {block.field}" if block.field else block.degree
    return node(
        "div",
        node("h4", degree, class_="timeline-title"),
        node("p", block.institution, class_="timeline-subtitle"),
        node("p", date_range(block.start_date, block.end_date), class_="timeline-date"),
        node("p", f"GPA: {block.gpa}") if block.gpa else None,
        node("ul", *(node("li", honor) for honor in block.honors)) if block.honors else None,
        class_="timeline-item",
    )


def _achievement_item(block: AchievementItemBlock, context: PreviewContext) -> UINode:
    title: UINode | str = block.title
    if block.url:
        title = node("a", block.title, href=resolve_url(block.url, context.base_url))
    details = ", ".join(value for value in (block.issuer, block.date) if value)
    return node(
        "div",
        node("span", block.icon or "🏆", class_="achievement-icon"),
        node(
            "div",
            node("h4", title),
            node("p", block.description) if block.description else None,
            node("p", details, class_="achievement-meta") if details else None,
            class_="achievement-content",
        ),
        class_="achievement",
    )


def _custom(block: CustomBlock, context: PreviewContext) -> UINode | None:
    image_url = block.data.get("image_url")
    if image_url:
        alt = block.data.get("alt") or block.custom_type
        return stat_card_node(image_url, alt, block.custom_type, context)
    if not block.content:
        return None
    if block.custom_type in RAW_CUSTOM_TYPES:
        content = block.content
        if block.custom_type == "html":
            content = sanitize_html(content)
        return node("div", content, raw=True, class_=f"custom custom-{block.custom_type}")
    return node("div", block.content, class_=f"custom custom-{block.custom_type}")


PREVIEW_RENDERERS: dict[str, Callable[[Block, PreviewContext], UINode | None]] = {
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
    "row": _row,
    "column": _column,
    "grid": _grid,
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

ensure_exhaustive(PREVIEW_RENDERERS, "preview")


# Sections and documents


def render_section(section: RenderedSection, context: PreviewContext) -> UINode | None:
    if not section.visible:
        return None
    children = render_children(section.blocks, context)
    if not children:
        return None
    return node(
        "section",
        node("h2", section.title, class_="section-title") if section.title else None,
        *children,
        id=section.id,
        class_=f"section section-{section.type}",
        data_section_type=section.type,
    )


def render_output(output: RenderOutput, context: PreviewContext) -> UINode:
    """Render every section of ``output`` into a themed root node."""
    sections = [
        rendered
        for section in output.sections
        if (rendered := render_section(section, context)) is not None
    ]
    return node(
        "div",
        *sections,
        class_=f"preview theme-{context.theme}",
        data_template=output.context.template_id,
    )


def error_node(errors: Sequence[RenderError] = ()) -> UINode:
    """Generic, non-fatal placeholder shown when a render produced no output."""
    count = len(errors)
    detail = f"{count} error{'s' if count != 1 else ''}" if count else "unknown error"
    return node(
        "div",
        node("p", "Preview unavailable", class_="preview-error-title"),
        node("p", f"The template could not be rendered ({detail}).", class_="preview-error-detail"),
        class_="preview-error",
        role="alert",
    )


def get_jinja_env() -> Environment:
    """Get configured Jinja2 environment."""
    return Environment(
        loader=FileSystemLoader(TEMPLATES_DIR),
        autoescape=select_autoescape(enabled_extensions=("html.j2",), default=False),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_preview_page(
    output: RenderOutput | None,
    context: PreviewContext,
    errors: Sequence[RenderError] = (),
    title: str = "Profile preview",
) -> str:
    """Render a standalone HTML page for ``output``.

    A missing output (failed render) produces a page holding the generic
    error node rather than raising.
    """
    if output is None:
        logger.warning("No render output; showing preview error with %d error(s)", len(errors))
        body = error_node(errors)
    else:
        body = render_output(output, context)

    env = get_jinja_env()
    template = env.get_template("preview.html.j2")
    return template.render(title=title, theme=context.theme, body=body.to_html())
