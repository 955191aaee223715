"""Tests for external image URL generators."""

import pytest

from profile_studio.assets.urls import (
    badge_url,
    build_query_string,
    contribution_graph_url,
    encode_color,
    escape_badge_text,
    social_badge_url,
    stats_card_url,
    typing_svg_url,
    wakatime_url,
)


class TestEncoding:
    """Tests for component encoding helpers."""

    def test_escape_badge_text_doubles_separators(self) -> None:
        assert escape_badge_text("test-case") == "test--case"
        assert escape_badge_text("snake_case") == "snake__case"
        assert escape_badge_text("C++ & C#") == "C%2B%2B%20%26%20C%23"

    def test_encode_color_strips_hash(self) -> None:
        assert encode_color("#0969da") == "0969da"
        assert encode_color("blue") == "blue"

    def test_query_string_keeps_order_and_drops_none(self) -> None:
        query = build_query_string({"b": 1, "a": None, "c": True, "d": False})
        assert query == "b=1&c=true&d=false"

    def test_query_string_empty(self) -> None:
        assert build_query_string({"a": None}) == ""


class TestBadgeUrl:
    """Tests for shields.io badges."""

    def test_label_and_message_are_escaped(self) -> None:
        url = badge_url(label="test-case", message="pass-ok", color="green")
        assert "test--case" in url
        assert "pass--ok" in url
        assert url == "https://img.shields.io/badge/test--case-pass--ok-green"

    def test_options_in_query(self) -> None:
        url = badge_url("build", "passing", "#4c1", style="flat", logo="github")
        assert url == "https://img.shields.io/badge/build-passing-4c1?style=flat&logo=github"

    def test_label_only(self) -> None:
        assert badge_url("Python", color="#3776AB") == "https://img.shields.io/badge/Python-3776AB"

    def test_deterministic(self) -> None:
        assert badge_url("a", "b", logo_color="#fff") == badge_url("a", "b", logo_color="#fff")


class TestStatsCardUrl:
    """Tests for GitHub stats card URLs."""

    def test_stats_card(self) -> None:
        assert stats_card_url("octocat") == (
            "https://github-readme-stats.vercel.app/api"
            "?username=octocat&theme=default&show_icons=true"
        )

    def test_stats_card_flags(self) -> None:
        url = stats_card_url("octocat", include_all_commits=True, hide_border=True)
        assert url.endswith("&include_all_commits=true&hide_border=true")

    def test_top_languages(self) -> None:
        url = stats_card_url("octocat", "top-langs", theme="dark")
        assert url == (
            "https://github-readme-stats.vercel.app/api/top-langs"
            "?username=octocat&theme=dark&layout=compact"
        )

    def test_streak_uses_user_param(self) -> None:
        url = stats_card_url("octocat", "streak")
        assert url == "https://github-readme-streak-stats.herokuapp.com?user=octocat&theme=default"

    def test_trophies(self) -> None:
        url = stats_card_url("octocat", "trophies")
        assert url.endswith("?username=octocat&theme=default&row=1&column=6")

    def test_activity_graph_maps_default_theme(self) -> None:
        assert stats_card_url("octocat", "activity-graph") == contribution_graph_url("octocat")
        assert "theme=github-compact" in contribution_graph_url("octocat")

    def test_unknown_card_type(self) -> None:
        with pytest.raises(ValueError, match="Unknown stats card type"):
            stats_card_url("octocat", "bogus")


class TestOtherUrls:
    """Tests for typing SVG, social badges and WakaTime."""

    def test_typing_svg_joins_lines(self) -> None:
        url = typing_svg_url(["Hello world", "Hi"])
        assert url == (
            "https://readme-typing-svg.herokuapp.com"
            "?lines=Hello%20world;Hi&width=500&center=true"
        )

    def test_typing_svg_widens_for_long_lines(self) -> None:
        url = typing_svg_url(["x" * 50])
        assert "width=820" in url

    def test_typing_svg_options(self) -> None:
        url = typing_svg_url(["a"], color="#F75C7E", pause=1000, width=600, center=False)
        assert url.endswith("?lines=a&width=600&color=F75C7E&pause=1000")

    def test_social_badge_known_platform(self) -> None:
        assert social_badge_url("github") == (
            "https://img.shields.io/badge/github-181717"
            "?style=for-the-badge&logo=github&logoColor=white"
        )

    def test_social_badge_unknown_platform(self) -> None:
        url = social_badge_url("mastodon", "My-Toots")
        assert url.startswith("https://img.shields.io/badge/My--Toots-gray?")
        assert "logo=link" in url

    def test_wakatime(self) -> None:
        assert wakatime_url("dev") == (
            "https://github-readme-stats.vercel.app/api/wakatime?username=dev&layout=compact"
        )
