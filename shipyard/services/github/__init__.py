"""
GitHub Services Module

Repository identity, authentication, cloning and publishing for GitHub.
"""

from shipyard.services.github.github_service import (
    GitHubRepository,
    create_github_repository,
    get_default_token_manager,
)
from shipyard.services.github.models.interfaces import CodeSource, LogPublisher, PackagePublisher
from shipyard.services.github.repository.url_parser import RepositoryIdentity

__all__ = [
    "CodeSource",
    "GitHubRepository",
    "LogPublisher",
    "PackagePublisher",
    "RepositoryIdentity",
    "create_github_repository",
    "get_default_token_manager",
]
