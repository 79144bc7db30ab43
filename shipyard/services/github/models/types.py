"""
Shared types and models for GitHub operations.

``Package`` and ``Log`` are the artifacts handed over by the release process.
The remaining models describe the slices of GitHub API responses this service
reads.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Package(BaseModel):
    """A built artifact to attach to a release."""

    model_config = ConfigDict(populate_by_name=True)

    path: str = Field(..., description="Local path of the built file")
    name: str = Field(..., description="Asset file name shown on the release")
    description: Optional[str] = Field(default=None, description="Asset label")
    github_id: Optional[int] = Field(
        default=None, alias="githubId", description="Release asset id once uploaded"
    )


class Log(BaseModel):
    """A failure report to file as an issue."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    body: str
    github_id: Optional[int] = Field(
        default=None, alias="githubId", description="Issue id once filed"
    )


class InstallationTokenResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    token: str
    expires_at: Optional[str] = None


class Release(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    tag_name: Optional[str] = None
    upload_url: Optional[str] = None


class ReleaseAsset(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    name: Optional[str] = None
    content_type: Optional[str] = None
    size: Optional[int] = None


class Label(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    color: Optional[str] = None
    description: Optional[str] = None


class Issue(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    number: Optional[int] = None
    html_url: Optional[str] = None
