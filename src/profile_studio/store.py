"""Builder state store for live editing.

Holds the (template, profile, preview theme) triple and the latest render
result. Actions never render directly: each one queues a state transition
and marks a render as pending. ``flush()`` folds the queued transitions
into the state in order and then renders at most once, so a burst of edits
costs a single render.

Usage:
    store = BuilderStore()
    store.subscribe(lambda state: print(state.result))
    store.set_template(template)
    store.toggle_section("about")
    store.flush()  # one render for both actions
"""

import logging
from collections import deque
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from profile_studio.core.profile import UserProfile
from profile_studio.core.template import ColorScheme, Section, Template
from profile_studio.engine.renderer import RenderOptions, RenderResult, render

logger = logging.getLogger(__name__)


class BuilderState(BaseModel):
    """Snapshot of the builder. Replaced wholesale on every change."""

    model_config = ConfigDict(frozen=True)

    template: Template | None = None
    profile: UserProfile = Field(default_factory=UserProfile)
    preview_theme: ColorScheme = "system"
    result: RenderResult | None = None
    edit_errors: list[str] = Field(default_factory=list)


Transition = Callable[[BuilderState], BuilderState]
Listener = Callable[[BuilderState], None]

# Live preview renders leniently: skip validation, keep going past failures
LIVE_RENDER_OPTIONS = {"skip_validation": True, "continue_on_error": True}


def deep_merge(base: dict[str, Any], changes: dict[str, Any]) -> dict[str, Any]:
    """Merge ``changes`` into ``base``; nested dicts merge, anything else replaces."""
    merged = dict(base)
    for key, value in changes.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _replace_section(template: Template, section_id: str, section: Section) -> Template:
    return template.with_sections(
        [section if s.id == section_id else s for s in template.sections]
    )


def _move_section(template: Template, section_id: str, offset: int) -> Template:
    """Swap a section with its neighbour in display order and renumber.

    After a move every section's ``order`` equals its display position.
    Moving past either end leaves the order unchanged.
    """
    ordered = template.sorted_sections()
    index = next((i for i, s in enumerate(ordered) if s.id == section_id), None)
    if index is None:
        logger.warning("Cannot move unknown section: %s", section_id)
        return template

    target = index + offset
    if 0 <= target < len(ordered):
        ordered[index], ordered[target] = ordered[target], ordered[index]

    return template.with_sections(
        [section.model_copy(update={"order": i}) for i, section in enumerate(ordered)]
    )


class BuilderStore:
    """Single-threaded store with queued transitions and coalesced renders."""

    def __init__(
        self,
        profile: UserProfile | None = None,
        renderer: Callable[..., RenderResult] = render,
    ) -> None:
        self._initial_profile = profile or UserProfile()
        self._state = BuilderState(profile=self._initial_profile)
        self._queue: deque[tuple[str, Transition]] = deque()
        self._render_pending = False
        self._renderer = renderer
        self._listeners: list[Listener] = []
        self.render_count = 0

    @property
    def state(self) -> BuilderState:
        return self._state

    @property
    def pending(self) -> int:
        """Number of queued transitions not yet applied."""
        return len(self._queue)

    def subscribe(self, listener: Listener) -> None:
        """Call ``listener`` with the new state after each render."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self._listeners = [existing for existing in self._listeners if existing != listener]

    def _dispatch(self, action: str, transition: Transition) -> None:
        if self._render_pending:
            logger.debug("Coalescing %s into pending render", action)
        self._queue.append((action, transition))
        self._render_pending = True

    def flush(self) -> RenderResult | None:
        """Apply queued transitions, then render once if anything changed.

        A transition whose result fails validation is skipped and reported in
        ``state.edit_errors``; the rest of the queue still applies.

        Returns:
            The new render result, or ``None`` when no template is loaded
        """
        edit_errors: list[str] = []
        while self._queue:
            action, transition = self._queue.popleft()
            logger.debug("Applying %s", action)
            try:
                self._state = transition(self._state)
            except ValidationError as e:
                # A rejected edit leaves the state as it was; later edits still apply
                logger.warning("Rejected %s: %s", action, e)
                edit_errors.append(f"{action}: {e.error_count()} validation error(s)")

        if not self._render_pending:
            return self._state.result
        self._render_pending = False

        result = None
        if self._state.template is not None:
            result = self._renderer(
                self._state.template,
                self._state.profile,
                RenderOptions(theme=self._state.preview_theme, **LIVE_RENDER_OPTIONS),
            )
            self.render_count += 1
        self._state = self._state.model_copy(
            update={"result": result, "edit_errors": edit_errors}
        )

        for listener in list(self._listeners):
            listener(self._state)
        return result

    # Template actions

    def set_template(self, template: Template) -> None:
        self._dispatch(
            "set_template",
            lambda state: state.model_copy(
                update={"template": template, "preview_theme": template.styles.default_theme}
            ),
        )

    def clear_template(self) -> None:
        self._dispatch(
            "clear_template",
            lambda state: state.model_copy(update={"template": None, "result": None}),
        )

    def toggle_section(self, section_id: str) -> None:
        def transition(state: BuilderState) -> BuilderState:
            if state.template is None:
                return state
            section = state.template.get_section(section_id)
            if section is None:
                logger.warning("Cannot toggle unknown section: %s", section_id)
                return state
            toggled = section.model_copy(update={"enabled": not section.enabled})
            return state.model_copy(
                update={"template": _replace_section(state.template, section_id, toggled)}
            )

        self._dispatch("toggle_section", transition)

    def move_section_up(self, section_id: str) -> None:
        self._dispatch("move_section_up", self._mover(section_id, -1))

    def move_section_down(self, section_id: str) -> None:
        self._dispatch("move_section_down", self._mover(section_id, 1))

    @staticmethod
    def _mover(section_id: str, offset: int) -> Transition:
        def transition(state: BuilderState) -> BuilderState:
            if state.template is None:
                return state
            return state.model_copy(
                update={"template": _move_section(state.template, section_id, offset)}
            )

        return transition

    def update_section_config(self, section_id: str, changes: dict[str, Any]) -> None:
        """Merge ``changes`` into a section's config, re-validating the result."""

        def transition(state: BuilderState) -> BuilderState:
            if state.template is None:
                return state
            section = state.template.get_section(section_id)
            if section is None:
                logger.warning("Cannot configure unknown section: %s", section_id)
                return state
            raw = section.model_dump()
            raw["config"] = deep_merge(raw["config"], changes)
            updated = Section.model_validate(raw)
            return state.model_copy(
                update={"template": _replace_section(state.template, section_id, updated)}
            )

        self._dispatch("update_section_config", transition)

    # Profile actions

    def set_profile(self, profile: UserProfile) -> None:
        self._dispatch("set_profile", lambda state: state.model_copy(update={"profile": profile}))

    def update_profile(self, changes: dict[str, Any]) -> None:
        """Deep-merge ``changes`` into the current profile."""

        def transition(state: BuilderState) -> BuilderState:
            merged = deep_merge(state.profile.model_dump(), changes)
            return state.model_copy(update={"profile": UserProfile.model_validate(merged)})

        self._dispatch("update_profile", transition)

    # Preview actions

    def set_preview_theme(self, theme: ColorScheme) -> None:
        self._dispatch(
            "set_preview_theme", lambda state: state.model_copy(update={"preview_theme": theme})
        )

    def reset(self) -> None:
        """Drop queued work and return to the initial state."""
        self._queue.clear()
        self._dispatch("reset", lambda state: BuilderState(profile=self._initial_profile))
