"""
GitHub REST API Module

Authenticated client plus release asset and issue operations.
"""

from shipyard.services.github.api.client import GitHubAPIClient
from shipyard.services.github.api.issues import IssueOperations
from shipyard.services.github.api.releases import ReleaseOperations

__all__ = [
    "GitHubAPIClient",
    "IssueOperations",
    "ReleaseOperations",
]
