"""Tests for the builder store."""

import pytest

from profile_studio.core.profile import UserProfile
from profile_studio.engine.renderer import render
from profile_studio.store import BuilderStore, deep_merge


@pytest.fixture
def template(make_section, make_template):
    return make_template(
        [
            make_section("hero", "hero", order=0),
            make_section("about", "about", order=1, data={"content": "Hello"}),
            make_section("quote", "quote", order=2, data={"quote": "Ship it"}),
        ]
    )


@pytest.fixture
def store(template, profile) -> BuilderStore:
    store = BuilderStore(profile=profile)
    store.set_template(template)
    store.flush()
    return store


def section_ids(store: BuilderStore) -> list[str]:
    return [s.id for s in store.state.template.sorted_sections()]


class TestDeepMerge:
    """Tests for nested dict merging."""

    def test_nested_dicts_merge(self) -> None:
        base = {"a": {"b": 1, "c": 2}, "d": [1]}
        assert deep_merge(base, {"a": {"c": 3}, "d": [2]}) == {"a": {"b": 1, "c": 3}, "d": [2]}
        assert base == {"a": {"b": 1, "c": 2}, "d": [1]}


class TestRendering:
    """Tests for queued actions and coalesced renders."""

    def test_actions_wait_for_flush(self, template, profile) -> None:
        store = BuilderStore(profile=profile)
        store.set_template(template)
        assert store.pending == 1
        assert store.state.template is None
        assert store.render_count == 0

    def test_burst_renders_once(self, store) -> None:
        before = store.render_count
        store.toggle_section("about")
        store.move_section_up("quote")
        store.set_preview_theme("dark")
        result = store.flush()
        assert store.render_count == before + 1
        assert result is store.state.result
        assert result.output.context.theme == "dark"
        assert [s.id for s in result.output.sections] == ["hero", "quote"]

    def test_flush_without_changes_does_not_render(self, store) -> None:
        before = store.render_count
        assert store.flush() is store.state.result
        assert store.render_count == before

    def test_set_template_applies_default_theme(self, template, profile) -> None:
        dark = template.model_copy(
            update={"styles": template.styles.model_copy(update={"default_theme": "dark"})}
        )
        store = BuilderStore(profile=profile)
        store.set_template(dark)
        store.flush()
        assert store.state.preview_theme == "dark"

    def test_no_template_no_render(self) -> None:
        store = BuilderStore()
        store.set_preview_theme("light")
        assert store.flush() is None
        assert store.render_count == 0

    def test_live_render_ignores_duplicate_ids(self, make_section, make_template) -> None:
        store = BuilderStore(profile=UserProfile())
        store.set_template(
            make_template([make_section("x", "spacer"), make_section("x", "spacer")])
        )
        result = store.flush()
        assert result.success
        assert len(result.output.sections) == 2

    def test_custom_renderer(self, template) -> None:
        calls = []

        def recording_render(*args):
            calls.append(args)
            return render(*args)

        store = BuilderStore(renderer=recording_render)
        store.set_template(template)
        store.flush()
        options = calls[0][2]
        assert options.skip_validation
        assert options.continue_on_error


class TestSectionActions:
    """Tests for toggling, moving and configuring sections."""

    def test_toggle(self, store) -> None:
        store.toggle_section("about")
        store.flush()
        assert store.state.template.get_section("about").enabled is False
        store.toggle_section("about")
        store.flush()
        assert store.state.template.get_section("about").enabled is True

    def test_toggle_unknown_section(self, store) -> None:
        template = store.state.template
        store.toggle_section("missing")
        store.flush()
        assert store.state.template == template

    def test_move_up_then_down_restores_order(self, store) -> None:
        store.move_section_up("about")
        store.flush()
        assert section_ids(store) == ["about", "hero", "quote"]
        store.move_section_down("about")
        store.flush()
        assert section_ids(store) == ["hero", "about", "quote"]

    def test_move_renumbers(self, make_section, make_template) -> None:
        store = BuilderStore()
        store.set_template(
            make_template(
                [
                    make_section("a", "spacer", order=10),
                    make_section("b", "spacer", order=20),
                    make_section("c", "spacer", order=30),
                ]
            )
        )
        store.move_section_down("a")
        store.flush()
        assert [(s.id, s.order) for s in store.state.template.sorted_sections()] == [
            ("b", 0),
            ("a", 1),
            ("c", 2),
        ]

    def test_move_past_edge_keeps_order(self, store) -> None:
        store.move_section_up("hero")
        store.move_section_down("quote")
        store.flush()
        assert section_ids(store) == ["hero", "about", "quote"]

    def test_update_section_config_merges(self, store) -> None:
        store.update_section_config("hero", {"typing_pause_time": 1500})
        store.update_section_config("hero", {"layout": "left-aligned"})
        store.flush()
        config = store.state.template.get_section("hero").config
        assert config.typing_pause_time == 1500
        assert config.layout == "left-aligned"
        heading = store.state.result.output.sections[0].blocks[0]
        assert heading.align == "left"

    def test_invalid_config_skipped_and_queue_continues(self, store) -> None:
        seen = []
        store.subscribe(seen.append)
        store.update_section_config("hero", {"typing_pause_time": "soon"})
        store.toggle_section("quote")

        result = store.flush()

        assert store.pending == 0
        assert store.state.template.get_section("hero").config.typing_pause_time is None
        assert not store.state.template.get_section("quote").enabled
        assert [s.id for s in result.output.sections] == ["hero", "about"]
        (error,) = store.state.edit_errors
        assert error.startswith("update_section_config: ")
        assert len(seen) == 1

    def test_edit_errors_cleared_by_next_flush(self, store) -> None:
        store.update_section_config("hero", {"typing_pause_time": "soon"})
        store.flush()
        store.toggle_section("about")
        store.flush()
        assert store.state.edit_errors == []


class TestProfileActions:
    """Tests for profile updates, subscribers and reset."""

    def test_update_profile_deep_merges(self, store) -> None:
        store.update_profile({"personal": {"display_name": "Hubot"}})
        store.flush()
        profile = store.state.profile
        assert profile.personal.display_name == "Hubot"
        assert profile.personal.location == "San Francisco"
        heading = store.state.result.output.sections[0].blocks[0]
        assert heading.value == "Hi there, I'm Hubot 👋"

    def test_invalid_profile_update_keeps_profile(self, store, profile) -> None:
        store.update_profile({"personal": {"display_name": ["not", "a", "name"]}})
        store.set_preview_theme("light")
        store.flush()
        assert store.state.profile == profile
        assert store.state.preview_theme == "light"
        (error,) = store.state.edit_errors
        assert error.startswith("update_profile: ")

    def test_set_profile(self, store) -> None:
        store.set_profile(UserProfile(github_username="hubot"))
        store.flush()
        heading = store.state.result.output.sections[0].blocks[0]
        assert heading.value == "Hi there, I'm hubot 👋"

    def test_subscribers_notified_once_per_flush(self, store) -> None:
        seen = []
        store.subscribe(seen.append)
        store.toggle_section("about")
        store.toggle_section("quote")
        store.flush()
        assert len(seen) == 1
        assert seen[0] is store.state

        store.unsubscribe(seen.append)
        store.toggle_section("about")
        store.flush()
        assert len(seen) == 1

    def test_clear_template(self, store) -> None:
        store.clear_template()
        assert store.flush() is None
        assert store.state.template is None
        assert store.state.result is None

    def test_reset_drops_queued_actions(self, store, profile) -> None:
        store.set_preview_theme("dark")
        store.reset()
        store.flush()
        assert store.state.template is None
        assert store.state.preview_theme == "system"
        assert store.state.profile == profile
        assert store.pending == 0
