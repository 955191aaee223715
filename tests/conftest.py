"""Shared pytest fixtures for Profile Studio tests.

Provides factories for sections, templates and profiles, and restores the
global section registry after tests that replace builders.
"""

from collections.abc import Callable, Iterator
from typing import Any

import pytest

from profile_studio.core.profile import UserProfile
from profile_studio.core.sections import SectionType
from profile_studio.core.template import (
    Section,
    Template,
    TemplateCapabilities,
    TemplateMetadata,
)
from profile_studio.engine.sections import set_section_registry

SectionFactory = Callable[..., Section]
TemplateFactory = Callable[..., Template]


@pytest.fixture
def make_section() -> SectionFactory:
    """Factory for sections: ``make_section("about-1", "about", order=1, data={...})``."""

    def factory(section_id: str, section_type: str, **fields: Any) -> Section:
        return Section(id=section_id, type=section_type, **fields)

    return factory


@pytest.fixture
def make_template() -> TemplateFactory:
    """Factory for templates that support every section type by default."""

    def factory(
        sections: list[Section],
        template_id: str = "test-template",
        **capabilities: Any,
    ) -> Template:
        capabilities.setdefault("supported_sections", list(SectionType))
        return Template(
            metadata=TemplateMetadata(id=template_id, name="Test Template"),
            capabilities=TemplateCapabilities(**capabilities),
            sections=sections,
        )

    return factory


@pytest.fixture
def profile() -> UserProfile:
    """A filled-in profile exercising every fallback."""
    return UserProfile.model_validate(
        {
            "github_username": "octocat",
            "personal": {
                "display_name": "Mona Lisa",
                "bio": "I build developer tools.",
                "location": "San Francisco",
                "email": "mona@example.com",
            },
            "professional": {
                "years_of_experience": 7,
                "experience": [
                    {
                        "company": "GitHub",
                        "role": "Staff Engineer",
                        "start_date": "2019",
                        "highlights": ["Led the Actions runner rewrite"],
                        "technologies": ["Go", "Rust"],
                    }
                ],
                "education": [
                    {
                        "institution": "State University",
                        "degree": "BSc",
                        "field": "Computer Science",
                        "start_date": "2010",
                        "end_date": "2014",
                        "gpa": "3.9",
                    }
                ],
            },
            "tech_stack": {
                "items": [
                    {"name": "Python", "category": "language"},
                    {"name": "Go", "category": "language"},
                    {"name": "Docker", "category": "devops"},
                ]
            },
            "projects": {
                "items": [
                    {
                        "name": "hubot",
                        "description": "Chat bot",
                        "repo_url": "https://github.com/octocat/hubot",
                        "featured": True,
                        "stars": 42,
                    },
                    {"name": "spoon-knife", "description": "Fork me"},
                ]
            },
            "social_links": {
                "links": [
                    {"platform": "github", "url": "https://github.com/octocat"},
                    {"platform": "Mastodon", "url": "https://mastodon.social/@octocat"},
                ]
            },
        }
    )


@pytest.fixture
def restore_registry() -> Iterator[None]:
    """Reset the global section registry to the defaults after the test."""
    yield
    set_section_registry(None)
