"""
Repository identity module.

Parses, normalizes and formats GitHub repository locations and derives the
reverse domain name used as a package namespace.
"""

from shipyard.services.github.repository.rdnn import sanitize_rdnn
from shipyard.services.github.repository.url_parser import (
    ACCESS_TOKEN_USERNAME,
    INSTALLATION_USERNAME,
    RepositoryIdentity,
    format_repository_url,
    normalize_repository_url,
    parse_repository_url,
)

__all__ = [
    "ACCESS_TOKEN_USERNAME",
    "INSTALLATION_USERNAME",
    "RepositoryIdentity",
    "format_repository_url",
    "normalize_repository_url",
    "parse_repository_url",
    "sanitize_rdnn",
]
