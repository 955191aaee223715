"""External image URL generators.

Pure functions that map semantic fields to fully-qualified URLs on the
badge and stats services a profile README embeds. Nothing here performs
network I/O; the services are only ever referenced by URL.

Query parameters keep insertion order and ``None`` values are dropped, so
identical inputs always produce identical URLs.
"""

import math
from collections.abc import Mapping, Sequence
from urllib.parse import quote

PROVIDER_URLS: dict[str, str] = {
    "shields": "https://img.shields.io/badge",
    "github_stats": "https://github-readme-stats.vercel.app/api",
    "streak_stats": "https://github-readme-streak-stats.herokuapp.com",
    "trophies": "https://github-profile-trophy.vercel.app",
    "activity_graph": "https://github-readme-activity-graph.vercel.app/graph",
    "profile_summary": "https://github-profile-summary-cards.vercel.app/api/cards/profile-details",
    "typing_svg": "https://readme-typing-svg.herokuapp.com",
}

STATS_CARD_LABELS: dict[str, str] = {
    "stats": "GitHub Stats",
    "top-langs": "Top Languages",
    "streak": "Streak Stats",
    "trophies": "Trophies",
    "activity-graph": "Activity Graph",
    "profile-summary": "Profile Summary",
}
STATS_CARD_TYPES = tuple(STATS_CARD_LABELS)

# Shields logo and brand color per social platform
SOCIAL_BADGES: dict[str, tuple[str, str]] = {
    "github": ("github", "181717"),
    "linkedin": ("linkedin", "0A66C2"),
    "twitter": ("twitter", "1DA1F2"),
    "instagram": ("instagram", "E4405F"),
    "youtube": ("youtube", "FF0000"),
    "twitch": ("twitch", "9146FF"),
    "discord": ("discord", "5865F2"),
    "email": ("gmail", "EA4335"),
    "website": ("googlechrome", "4285F4"),
}
DEFAULT_SOCIAL_BADGE = ("link", "gray")

# Characters left unescaped, matching browser URI component encoding
_SAFE = "!*'()"


def encode_component(value: object) -> str:
    """Percent-encode a single URL component."""
    if isinstance(value, bool):
        value = "true" if value else "false"
    return quote(str(value), safe=_SAFE)


def encode_color(color: str) -> str:
    """Strip a leading ``#`` from a hex color."""
    return color.removeprefix("#")


def escape_badge_text(text: str) -> str:
    """Escape badge label/message text for a shields.io path segment.

    Shields uses ``-`` and ``_`` as field separator and space, so literal
    occurrences are doubled before percent-encoding.
    """
    return encode_component(text.replace("-", "--").replace("_", "__"))


def build_query_string(params: Mapping[str, object]) -> str:
    """Build ``k=v&k2=v2`` from params, dropping ``None`` values.

    Booleans are written as ``true``/``false``. Returns "" when every value
    is ``None``.
    """
    return "&".join(
        f"{encode_component(key)}={encode_component(value)}"
        for key, value in params.items()
        if value is not None
    )


def _with_query(base: str, params: Mapping[str, object]) -> str:
    query = build_query_string(params)
    return f"{base}?{query}" if query else base


def badge_url(
    label: str,
    message: str | None = None,
    color: str = "blue",
    *,
    style: str | None = None,
    logo: str | None = None,
    logo_color: str | None = None,
    label_color: str | None = None,
) -> str:
    """Generate a shields.io static badge URL.

    Example:
        >>> badge_url("build", "passing", "#4c1", style="flat")
        'https://img.shields.io/badge/build-passing-4c1?style=flat'
    """
    segments = [escape_badge_text(label)]
    if message:
        segments.append(escape_badge_text(message))
    segments.append(encode_color(color))

    return _with_query(
        f"{PROVIDER_URLS['shields']}/{'-'.join(segments)}",
        {
            "style": style,
            "logo": logo,
            "logoColor": encode_color(logo_color) if logo_color else None,
            "labelColor": encode_color(label_color) if label_color else None,
        },
    )


def stats_card_url(
    username: str,
    card_type: str = "stats",
    *,
    theme: str = "default",
    show_icons: bool = True,
    hide_border: bool = False,
    include_all_commits: bool = False,
    count_private: bool = False,
) -> str:
    """Generate the image URL for a GitHub stats card.

    Raises:
        ValueError: If ``card_type`` is not one of ``STATS_CARD_TYPES``.
    """
    if card_type == "stats":
        return _with_query(
            PROVIDER_URLS["github_stats"],
            {
                "username": username,
                "theme": theme,
                "show_icons": show_icons,
                "include_all_commits": include_all_commits or None,
                "count_private": count_private or None,
                "hide_border": hide_border or None,
            },
        )
    if card_type == "top-langs":
        return _with_query(
            f"{PROVIDER_URLS['github_stats']}/top-langs",
            {
                "username": username,
                "theme": theme,
                "layout": "compact",
                "hide_border": hide_border or None,
            },
        )
    if card_type == "streak":
        return _with_query(
            PROVIDER_URLS["streak_stats"],
            {"user": username, "theme": theme, "hide_border": hide_border or None},
        )
    if card_type == "trophies":
        return _with_query(
            PROVIDER_URLS["trophies"],
            {"username": username, "theme": theme, "row": 1, "column": 6},
        )
    if card_type == "activity-graph":
        return contribution_graph_url(
            username,
            theme="github-compact" if theme == "default" else theme,
            hide_border=hide_border,
        )
    if card_type == "profile-summary":
        return _with_query(
            PROVIDER_URLS["profile_summary"],
            {"username": username, "theme": theme},
        )
    raise ValueError(f"Unknown stats card type: {card_type}")


def contribution_graph_url(
    username: str, *, theme: str = "github-compact", hide_border: bool = False
) -> str:
    """Generate the activity graph URL used for contribution graphs."""
    return _with_query(
        PROVIDER_URLS["activity_graph"],
        {"username": username, "theme": theme, "hide_border": hide_border or None},
    )


def typing_svg_url(
    lines: Sequence[str],
    *,
    center: bool = True,
    color: str | None = None,
    size: int | None = None,
    pause: int | None = None,
    duration: int | None = None,
    width: int | None = None,
) -> str:
    """Generate a readme-typing-svg URL.

    Lines are encoded individually and joined with ``;``, which the service
    treats as the line separator. Without an explicit ``width`` one is
    estimated from the longest line so text is not clipped.
    """
    encoded_lines = ";".join(encode_component(line) for line in lines)

    font_size = size or 24
    longest = max((len(line) for line in lines), default=0)
    if width is None:
        width = max(500, math.ceil(longest * font_size * 0.6) + 100)

    query = build_query_string(
        {
            "width": width,
            "center": True if center else None,
            "color": encode_color(color) if color else None,
            "size": size,
            "pause": pause,
            "duration": duration,
        }
    )
    return f"{PROVIDER_URLS['typing_svg']}?lines={encoded_lines}&{query}"


def social_badge_url(platform: str, label: str | None = None) -> str:
    """Generate the branded badge used for a social link."""
    logo, color = SOCIAL_BADGES.get(platform, DEFAULT_SOCIAL_BADGE)
    text = escape_badge_text(label or platform)
    return _with_query(
        f"{PROVIDER_URLS['shields']}/{text}-{color}",
        {"style": "for-the-badge", "logo": logo, "logoColor": "white"},
    )


def wakatime_url(username: str, *, layout: str = "compact", hide_border: bool = False) -> str:
    """Generate a WakaTime stats card URL."""
    return _with_query(
        f"{PROVIDER_URLS['github_stats']}/wakatime",
        {"username": username, "layout": layout, "hide_border": hide_border or None},
    )
