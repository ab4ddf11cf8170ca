"""Registry schema definitions using Pydantic.

This module defines the typed form of plugins.json entries. Records are
modeled as a tagged union on the plugin type, so only app plugins carry
a ``files`` list. Field aliases keep the keys contributors write in the
registry file.
"""

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

DESCRIPTION_MAX_LENGTH = 50

REQUIRED_FIELDS = ("name", "type", "description", "license", "time", "author", "repo", "home")


class PluginType(str, Enum):
    """Supported plugin distribution kinds."""

    NPM = "npm"
    GIT = "git"
    APP = "app"


class RepositoryKind(str, Enum):
    """Supported repository hosting platforms."""

    GITHUB = "github"
    GITEE = "gitee"
    GITCODE = "gitcode"
    GITLAB = "gitlab"
    NPM = "npm"


class RegistryModel(BaseModel):
    """Base model that accepts wire keys and attribute names alike."""

    model_config = ConfigDict(populate_by_name=True)


class LicenseInfo(RegistryModel):
    """License of a plugin."""

    name: str = Field(description="License name (e.g., MIT)")
    url: str = Field(description="Link to the license text")


class AuthorInfo(RegistryModel):
    """One author of a plugin."""

    name: str = Field(description="Author display name")
    homepage: str = Field(alias="home", description="Author homepage URL")


class RepositoryInfo(RegistryModel):
    """Where a plugin's source lives."""

    kind: RepositoryKind = Field(alias="type", description="Hosting platform")
    url: str = Field(description="Repository URL")
    branch: str = Field(default="", description="Default branch, empty for npm")


class PluginBase(RegistryModel):
    """Fields shared by every plugin type."""

    name: str = Field(description="Plugin package name, unique in the registry")
    description: str = Field(
        max_length=DESCRIPTION_MAX_LENGTH,
        description="Short description",
    )
    submitted_at: str = Field(alias="time", description="Submission time, YYYY-MM-DD HH:mm:ss")
    homepage: str = Field(alias="home", description="Plugin homepage URL")
    license: LicenseInfo
    authors: list[AuthorInfo] = Field(alias="author", min_length=1)
    repositories: list[RepositoryInfo] = Field(alias="repo", min_length=1)


class NpmPlugin(PluginBase):
    """Plugin published to npm."""

    variant: Literal["npm"] = Field(alias="type")


class GitPlugin(PluginBase):
    """Plugin installed from a git repository."""

    variant: Literal["git"] = Field(alias="type")


class AppPlugin(PluginBase):
    """Single-file app plugin with direct download links."""

    variant: Literal["app"] = Field(alias="type")
    files: list[str] = Field(min_length=1, description="Direct download URLs")


PluginRecord = Annotated[NpmPlugin | GitPlugin | AppPlugin, Field(discriminator="variant")]


class RegistrySchema(RegistryModel):
    """Root schema for plugins.json files."""

    plugins: list[PluginRecord] = Field(
        default_factory=list,
        description="List of registered plugins",
    )
