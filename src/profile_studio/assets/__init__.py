"""External badge and stats image URLs."""

from profile_studio.assets.urls import (
    PROVIDER_URLS,
    badge_url,
    build_query_string,
    contribution_graph_url,
    social_badge_url,
    stats_card_url,
    typing_svg_url,
    wakatime_url,
)

__all__ = [
    "PROVIDER_URLS",
    "badge_url",
    "build_query_string",
    "contribution_graph_url",
    "social_badge_url",
    "stats_card_url",
    "typing_svg_url",
    "wakatime_url",
]
