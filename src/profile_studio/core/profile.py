"""User profile schema.

The profile is read-only input to the render pipeline. It is normally
supplied by the profile fetch service; the engine never fetches it.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from profile_studio.core.sections import (
    EducationEntry,
    ExperienceEntry,
    ProjectItem,
    SocialLink,
    TechStackItem,
)


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Repository(_Frozen):
    """Subset of a GitHub repository used for pinned repo cards."""

    name: str
    description: str | None = None
    html_url: str | None = None
    language: str | None = None
    stargazers_count: int = 0
    forks_count: int = 0


class GitHubSnapshot(_Frozen):
    """Last fetched GitHub account data."""

    login: str
    name: str | None = None
    avatar_url: str | None = None
    bio: str | None = None
    pinned_repos: list[Repository] = Field(default_factory=list)


class PersonalInfo(_Frozen):
    display_name: str | None = None
    pronouns: str | None = None
    headline: str | None = None
    bio: str | None = None
    location: str | None = None
    website: str | None = None
    email: str | None = None


class ProfessionalInfo(_Frozen):
    experience: list[ExperienceEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    years_of_experience: int | None = None


class UserTechStack(_Frozen):
    items: list[TechStackItem] = Field(default_factory=list)


class UserProjects(_Frozen):
    items: list[ProjectItem] = Field(default_factory=list)


class UserSocialLinks(_Frozen):
    links: list[SocialLink] = Field(default_factory=list)


class BlogIntegration(_Frozen):
    enabled: bool = False
    platform: Literal["dev.to", "medium", "hashnode", "personal", "other"] | None = None
    feed_url: str | None = None


class SpotifyIntegration(_Frozen):
    enabled: bool = False


class WakatimeIntegration(_Frozen):
    enabled: bool = False
    username: str | None = None


class Integrations(_Frozen):
    blog: BlogIntegration = Field(default_factory=BlogIntegration)
    spotify: SpotifyIntegration = Field(default_factory=SpotifyIntegration)
    wakatime: WakatimeIntegration = Field(default_factory=WakatimeIntegration)


class UserProfile(_Frozen):
    """Everything the engine may bind into section content."""

    github_username: str = ""
    github: GitHubSnapshot | None = None
    personal: PersonalInfo = Field(default_factory=PersonalInfo)
    professional: ProfessionalInfo = Field(default_factory=ProfessionalInfo)
    tech_stack: UserTechStack = Field(default_factory=UserTechStack)
    projects: UserProjects = Field(default_factory=UserProjects)
    social_links: UserSocialLinks = Field(default_factory=UserSocialLinks)
    integrations: Integrations = Field(default_factory=Integrations)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def display_name(self) -> str:
        """Name used for ``{name}`` placeholders."""
        if self.personal.display_name:
            return self.personal.display_name
        if self.github and self.github.name:
            return self.github.name
        return self.github_username

    @property
    def avatar_url(self) -> str | None:
        return self.github.avatar_url if self.github else None
