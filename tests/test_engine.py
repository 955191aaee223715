"""Tests for the render pipeline, validation and section builders."""

import pytest

from profile_studio.core.profile import UserProfile
from profile_studio.core.sections import SectionType
from profile_studio.core.template import Section
from profile_studio.engine import (
    RenderOptions,
    analyze_template,
    render,
    render_single_section,
    validate,
    validate_template,
)
from profile_studio.engine.sections import (
    DEFAULT_BUILDERS,
    bind_placeholders,
    build_section_blocks,
    get_section_registry,
    set_section_registry,
)
from profile_studio.exceptions import SectionRenderError


def boom(section, profile, b):
    raise RuntimeError("builder exploded")


class TestRenderOrdering:
    """Tests for section ordering and determinism."""

    def test_sections_sorted_by_order(self, make_section, make_template, profile) -> None:
        template = make_template(
            [
                make_section("c", "quote", order=3, data={"quote": "C"}),
                make_section("a", "quote", order=1, data={"quote": "A"}),
                make_section("b", "quote", order=2, data={"quote": "B"}),
            ]
        )
        result = render(template, profile)
        assert result.success
        assert [s.id for s in result.output.sections] == ["a", "b", "c"]

    def test_ties_keep_array_position(self, make_section, make_template, profile) -> None:
        template = make_template(
            [
                make_section("second", "spacer", order=1),
                make_section("first", "spacer", order=0),
                make_section("third", "spacer", order=1),
            ]
        )
        result = render(template, profile)
        assert [s.id for s in result.output.sections] == ["first", "second", "third"]

    def test_render_is_deterministic(self, make_section, make_template, profile) -> None:
        template = make_template(
            [
                make_section("hero", "hero", order=0, data={"typing_texts": ["Hi"]}),
                make_section("tech", "tech-stack", order=1),
                make_section("stats", "github-stats", order=2),
            ]
        )
        assert render(template, profile) == render(template, profile)

    def test_context_uses_template_theme(self, make_section, make_template, profile) -> None:
        template = make_template([make_section("s", "spacer")])
        template = template.model_copy(
            update={"styles": template.styles.model_copy(update={"default_theme": "dark"})}
        )
        assert render(template, profile).output.context.theme == "dark"
        themed = render(template, profile, RenderOptions(theme="light"))
        assert themed.output.context.theme == "light"


class TestSectionFailures:
    """Tests for the section failure policy."""

    def three_sections(self, make_section, make_template):
        return make_template(
            [
                make_section("hero", "hero", order=0),
                make_section("about", "about", order=1, data={"content": "x"}),
                make_section("quote", "quote", order=2, data={"quote": "Ship it"}),
            ]
        )

    def test_failing_section_skipped(
        self, make_section, make_template, profile, restore_registry
    ) -> None:
        registry = get_section_registry().copy()
        registry.register("about", boom)
        set_section_registry(registry)

        result = render(self.three_sections(make_section, make_template), profile)

        assert result.success
        assert [s.id for s in result.output.sections] == ["hero", "quote"]
        assert len(result.errors) == 1
        error = result.errors[0]
        assert error.code == "SECTION_RENDER_FAILED"
        assert error.category == "section"
        assert error.recoverable is True
        assert error.section_id == "about"
        assert error.details == {"cause": "builder exploded"}
        metadata = result.output.metadata
        assert metadata.sections_rendered == 2
        assert metadata.sections_skipped == 1
        assert [w.section_id for w in metadata.warnings] == ["about"]

    def test_failure_aborts_without_continue(
        self, make_section, make_template, profile, restore_registry
    ) -> None:
        registry = get_section_registry().copy()
        registry.register("about", boom)
        set_section_registry(registry)

        result = render(
            self.three_sections(make_section, make_template),
            profile,
            RenderOptions(continue_on_error=False),
        )

        assert not result.success
        assert result.output is None
        assert [e.section_id for e in result.errors] == ["about"]

    def test_registry_copy_leaves_default_untouched(self, restore_registry) -> None:
        registry = get_section_registry().copy()
        registry.register("about", boom)
        assert get_section_registry().get("about") is DEFAULT_BUILDERS["about"]
        set_section_registry(registry)
        assert get_section_registry().get("about") is boom
        set_section_registry(None)
        assert get_section_registry().get("about") is DEFAULT_BUILDERS["about"]

    def test_disabled_sections_counted_as_skipped(
        self, make_section, make_template, profile
    ) -> None:
        template = make_template(
            [make_section("a", "spacer"), make_section("b", "spacer", enabled=False)]
        )
        metadata = render(template, profile).output.metadata
        assert metadata.sections_rendered == 1
        assert metadata.sections_skipped == 1

    def test_username_required(self, make_section, make_template) -> None:
        template = make_template([make_section("stats", "github-stats")])
        result = render(template, UserProfile())
        assert result.success
        assert result.output.sections == []
        assert result.errors[0].code == "GITHUB_USERNAME_REQUIRED"

    def test_wakatime_needs_username(self, make_section, make_template, profile) -> None:
        template = make_template([make_section("w", "wakatime")])
        result = render(template, profile)
        assert result.errors[0].code == "SECTION_RENDER_FAILED"
        assert "WakaTime" in result.errors[0].message

    def test_hooks_called(self, make_section, make_template) -> None:
        rendered, failed = [], []
        template = make_template(
            [make_section("s", "spacer", order=0), make_section("c", "contributions", order=1)]
        )
        options = RenderOptions(on_section_rendered=rendered.append, on_error=failed.append)
        render(template, UserProfile(), options)
        assert [s.id for s in rendered] == ["s"]
        assert [e.section_id for e in failed] == ["c"]


class TestValidation:
    """Tests for structural validation."""

    def test_duplicate_ids_fail(self, make_section, make_template, profile) -> None:
        template = make_template([make_section("x", "spacer"), make_section("x", "divider")])
        result = render(template, profile)
        assert not result.success
        assert result.output is None
        assert [e.code for e in result.errors] == ["DUPLICATE_SECTION_ID"]
        assert result.errors[0].category == "validation"

    def test_skip_validation_renders_duplicates(
        self, make_section, make_template, profile
    ) -> None:
        template = make_template([make_section("x", "spacer"), make_section("x", "spacer")])
        result = render(template, profile, RenderOptions(skip_validation=True))
        assert result.success
        assert len(result.output.sections) == 2

    def test_unsupported_section(self, make_section, make_template) -> None:
        template = make_template(
            [make_section("q", "quote")], supported_sections=["hero", "about"]
        )
        result = validate_template(template)
        assert not result.valid
        error = result.errors[0]
        assert error.code == "SECTION_UNSUPPORTED"
        assert error.details["supported_sections"] == ["hero", "about"]

    def test_section_limit(self, make_section, make_template) -> None:
        sections = [make_section(f"s{i}", "spacer") for i in range(3)]
        result = validate_template(make_template(sections, max_sections=2))
        assert [e.code for e in result.errors] == ["SECTION_LIMIT_EXCEEDED"]
        assert result.errors[0].details == {"max_sections": 2, "actual_sections": 3}

    def test_empty_id(self, make_section, make_template) -> None:
        result = validate_template(make_template([make_section("  ", "spacer")]))
        assert result.errors[0].code == "EMPTY_SECTION_ID"
        assert result.errors[0].details == {"index": 0}

    def test_blank_metadata(self, make_section, make_template) -> None:
        template = make_template([make_section("s", "spacer")], template_id=" ")
        (error,) = validate_template(template).errors
        assert error.code == "VALIDATION_FAILED"
        assert error.details == {"issues": ["Template id is required"]}

    def test_reports_every_problem(self, make_section, make_template) -> None:
        template = make_template(
            [make_section("", "spacer"), make_section("a", "quote"), make_section("a", "quote")],
            supported_sections=["spacer"],
        )
        codes = [e.code for e in validate_template(template).errors]
        assert codes.count("SECTION_UNSUPPORTED") == 2
        assert "EMPTY_SECTION_ID" in codes
        assert "DUPLICATE_SECTION_ID" in codes

    def test_validate_warns_about_username(self, make_section, make_template) -> None:
        template = make_template(
            [
                make_section("stats", "github-stats"),
                make_section("off", "contributions", enabled=False),
                make_section("own", "pinned-repos", data={"username": "octocat"}),
            ]
        )
        result = validate(template, UserProfile())
        assert result.valid
        assert len(result.warnings) == 1
        assert "stats" in result.warnings[0]

    def test_format_lists_errors(self, make_section, make_template) -> None:
        template = make_template([make_section("x", "spacer"), make_section("x", "spacer")])
        text = validate_template(template).format()
        assert "Template is invalid" in text
        assert "DUPLICATE_SECTION_ID" in text


class TestSectionBuilders:
    """Tests for profile fallbacks and data binding."""

    def blocks(self, make_section, make_template, profile, section_type, **fields):
        template = make_template([make_section("s", section_type, **fields)])
        result = render(template, profile)
        assert result.success, result.errors
        return result.output.sections[0].blocks

    def test_placeholders(self, profile) -> None:
        text = "Hi {name} (@{username}), {years} years"
        assert bind_placeholders(text, profile) == "Hi Mona Lisa (@octocat), 7 years"
        assert bind_placeholders("{years}", UserProfile()) == "X"

    def test_hero_binds_headline(self, make_section, make_template, profile) -> None:
        blocks = self.blocks(make_section, make_template, profile, "hero")
        assert blocks[0].kind == "heading"
        assert blocks[0].value == "Hi there, I'm Mona Lisa 👋"
        assert blocks[0].level == 1
        assert blocks[0].id == "s-heading-1"

    def test_hero_typing_timing(self, make_section, make_template, profile) -> None:
        blocks = self.blocks(
            make_section,
            make_template,
            profile,
            "hero",
            data={"typing_texts": ["I am {name}"]},
            config={"typing_pause_time": 2000},
        )
        typing = blocks[1]
        assert typing.kind == "typing-animation"
        assert typing.texts == ["I am Mona Lisa"]
        assert typing.pause_time == 2000
        assert typing.speed == 100

    def test_about_falls_back_to_bio(self, make_section, make_template, profile) -> None:
        blocks = self.blocks(make_section, make_template, profile, "about")
        assert blocks[0].value == "I build developer tools."
        assert blocks[-1].value == "📍 San Francisco"

    def test_tech_stack_falls_back_to_profile(
        self, make_section, make_template, profile
    ) -> None:
        (group,) = self.blocks(make_section, make_template, profile, "tech-stack")
        assert group.kind == "badge-group"
        assert [badge.label for badge in group.children] == ["Python", "Go", "Docker"]

    def test_tech_stack_grouped(self, make_section, make_template, profile) -> None:
        blocks = self.blocks(
            make_section, make_template, profile, "tech-stack", data={"group_by_category": True}
        )
        assert [b.kind for b in blocks] == ["heading", "badge-group", "heading", "badge-group"]
        assert [blocks[0].value, blocks[2].value] == ["Language", "Devops"]

    def test_github_stats_cards(self, make_section, make_template, profile) -> None:
        (row,) = self.blocks(make_section, make_template, profile, "github-stats")
        assert row.kind == "row"
        assert [card.card_type for card in row.children] == ["stats", "top-langs"]
        assert all(card.username == "octocat" for card in row.children)

    def test_section_username_wins(self, make_section, make_template, profile) -> None:
        (graph,) = self.blocks(
            make_section, make_template, profile, "contributions", data={"username": "hubot"}
        )
        assert graph.username == "hubot"

    def test_projects_featured_only(self, make_section, make_template, profile) -> None:
        (grid,) = self.blocks(
            make_section, make_template, profile, "projects", data={"show_featured_only": True}
        )
        assert [card.name for card in grid.children] == ["hubot"]
        assert grid.children[0].stars == 42

    def test_experience_and_education(self, make_section, make_template, profile) -> None:
        (job,) = self.blocks(make_section, make_template, profile, "experience")
        assert job.company == "GitHub"
        assert job.current
        (school,) = self.blocks(
            make_section, make_template, profile, "education", config={"show_gpa": False}
        )
        assert school.gpa is None

    def test_contact_falls_back_to_email(self, make_section, make_template, profile) -> None:
        (methods,) = self.blocks(make_section, make_template, profile, "contact")
        assert methods.items[0].content == "**email:** mona@example.com"

    def test_socials_map_unknown_platforms(self, make_section, make_template, profile) -> None:
        (group,) = self.blocks(make_section, make_template, profile, "socials")
        assert [link.platform for link in group.children] == ["github", "other"]

    def test_divider_none_has_no_blocks(self, make_section, make_template, profile) -> None:
        blocks = self.blocks(
            make_section, make_template, profile, "divider", data={"style": "none"}
        )
        assert blocks == []

    def test_custom_html_sanitized(self, make_section, make_template, profile) -> None:
        (block,) = self.blocks(
            make_section,
            make_template,
            profile,
            "custom-html",
            data={"html": "<p onclick='x()'>hi</p><script>alert(1)</script>"},
        )
        assert "script" not in block.content
        assert "onclick" not in block.content

    def test_wakatime_card_alt(self, make_section, make_template, profile) -> None:
        (block,) = self.blocks(
            make_section, make_template, profile, "wakatime", data={"username": "dev"}
        )
        assert block.data["alt"] == "dev's WakaTime stats"
        assert block.content.startswith("![dev's WakaTime stats](https://")

    def test_unexpected_exceptions_wrapped(self, restore_registry) -> None:
        registry = get_section_registry().copy()
        registry.register("spacer", boom)
        set_section_registry(registry)

        with pytest.raises(SectionRenderError, match="builder exploded"):
            build_section_blocks(Section(id="s", type="spacer"), UserProfile())


class TestConvenience:
    """Tests for single-section rendering and analysis."""

    def test_registry_covers_every_section_type(self) -> None:
        assert set(get_section_registry().list_all()) == {t.value for t in SectionType}

    def test_render_single_section(self, make_section, make_template, profile) -> None:
        template = make_template([make_section("a", "spacer"), make_section("b", "spacer")])
        section = make_section("q", "quote", data={"quote": "Hi"})
        result = render_single_section(section, profile, template)
        assert [s.id for s in result.output.sections] == ["q"]
        assert result.output.metadata.template_id == "test-template"

    def test_analyze_template(self, make_section, make_template) -> None:
        sections = [make_section(f"s{i}", "spacer", enabled=i % 2 == 0) for i in range(14)]
        sections.append(make_section("q", "quote"))
        analysis = analyze_template(make_template(sections))
        assert analysis.total_sections == 15
        assert analysis.enabled_sections == 8
        assert analysis.section_types == ["spacer", "quote"]
        assert analysis.estimated_complexity == "medium"
