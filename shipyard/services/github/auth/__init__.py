"""
GitHub App Authentication Module

Handles GitHub App authentication including:
- JWT token generation for GitHub App
- Installation access token exchange and caching
- Authorization header selection for static and installation credentials
"""

from shipyard.services.github.auth.installation_token_manager import InstallationTokenManager
from shipyard.services.github.auth.jwt_generator import GitHubAppJWTGenerator

__all__ = [
    "GitHubAppJWTGenerator",
    "InstallationTokenManager",
]
