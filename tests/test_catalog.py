"""Tests for the built-in template catalog."""

from pathlib import Path

import pytest

from profile_studio.catalog import (
    blank_template,
    get_featured_templates,
    get_template,
    get_templates_by_category,
    list_templates,
    load_template_file,
    resolve_template,
)
from profile_studio.core.profile import UserProfile
from profile_studio.core.sections import SectionType
from profile_studio.engine import render, validate, validate_template
from profile_studio.exceptions import TemplateError, TemplateNotFoundError
from profile_studio.markdown import document_to_markdown

BUILTIN_IDS = ["academic-researcher", "fullstack-developer", "minimal-professional"]


class TestCatalog:
    """Tests for catalog lookup."""

    def test_list_featured_first(self) -> None:
        templates = list_templates()
        assert sorted(t.metadata.id for t in templates) == BUILTIN_IDS
        assert templates[0].metadata.id == "fullstack-developer"

    def test_featured(self) -> None:
        assert [t.metadata.id for t in get_featured_templates()] == ["fullstack-developer"]

    def test_by_category(self) -> None:
        assert [t.metadata.id for t in get_templates_by_category("academic")] == [
            "academic-researcher"
        ]
        assert get_templates_by_category("animated") == []

    def test_unknown_template(self) -> None:
        with pytest.raises(TemplateNotFoundError, match="nope"):
            get_template("nope")

    def test_blank_template(self) -> None:
        blank = get_template("blank")
        assert blank == blank_template()
        assert blank.sections == []
        assert all(blank.capabilities.supports(t) for t in SectionType)
        result = render(blank, UserProfile())
        assert result.success
        assert document_to_markdown(result.output) == ""


class TestBuiltinTemplates:
    """Every built-in template is valid and renders."""

    @pytest.mark.parametrize("template_id", BUILTIN_IDS)
    def test_valid(self, template_id: str) -> None:
        assert validate_template(get_template(template_id)).valid

    @pytest.mark.parametrize("template_id", BUILTIN_IDS)
    def test_renders_every_enabled_section(self, template_id: str) -> None:
        template = get_template(template_id)
        result = render(template, UserProfile(github_username="octocat"))
        assert result.success
        assert result.errors == []
        enabled = [s for s in template.sections if s.enabled]
        assert result.output.metadata.sections_rendered == len(enabled)
        assert document_to_markdown(result.output)

    def test_validate_warns_without_username(self) -> None:
        result = validate(get_template("fullstack-developer"), UserProfile())
        assert result.valid
        assert any("stats-0004" in warning for warning in result.warnings)

    def test_fullstack_binds_years(self, profile) -> None:
        result = render(get_template("fullstack-developer"), profile)
        markdown = document_to_markdown(result.output)
        assert "with 7 years of experience" in markdown
        assert "Hi there, I'm Mona Lisa 👋" in markdown


class TestTemplateFiles:
    """Tests for loading templates from disk."""

    def test_resolve_path(self, tmp_path: Path) -> None:
        path = tmp_path / "mine.yaml"
        path.write_text(
            "metadata: {id: mine, name: Mine}\n"
            "sections:\n"
            "  - {id: q, type: quote, data: {quote: Hi}}\n"
        )
        template = resolve_template(str(path))
        assert template.metadata.id == "mine"
        assert template.sections[0].data.quote == "Hi"

    def test_resolve_id(self) -> None:
        assert resolve_template("minimal-professional").metadata.name == "Minimal Pro"

    def test_invalid_template_file(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("metadata: {id: bad}\n")
        with pytest.raises(TemplateError, match="Invalid template"):
            load_template_file(path)

    def test_unknown_section_field(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text(
            "metadata: {id: bad, name: Bad}\n"
            "sections:\n"
            "  - {id: q, type: quote, data: {text: Hi}}\n"
        )
        with pytest.raises(TemplateError):
            load_template_file(path)
