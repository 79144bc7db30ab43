"""
Configuration module.

Values are read from the environment once at import time. A ``.env`` file in
the working directory is loaded first so local setups do not need exports.
"""

import os
import tempfile

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _get_int(key: str, default: int) -> int:
    """Get an integer environment variable, falling back to default when unset."""
    value = os.getenv(key)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {value!r}")


# GitHub App configuration
GITHUB_APP_ID = os.getenv("GITHUB_APP_ID")
GITHUB_APP_PRIVATE_KEY_PATH = os.getenv("GITHUB_APP_PRIVATE_KEY_PATH")

# GitHub endpoints
GITHUB_HOST = os.getenv("GITHUB_HOST", "github.com")
GITHUB_API_URL = os.getenv("GITHUB_API_URL", "https://api.github.com").rstrip("/")

# HTTP
SHIPYARD_USER_AGENT = os.getenv("SHIPYARD_USER_AGENT", "shipyard-release")
GITHUB_HTTP_TIMEOUT_SECONDS = _get_int("GITHUB_HTTP_TIMEOUT_SECONDS", 150)
GITHUB_HTTP_CONNECT_TIMEOUT_SECONDS = _get_int("GITHUB_HTTP_CONNECT_TIMEOUT_SECONDS", 60)

# Installation tokens live for one hour on GitHub; refresh a bit earlier
INSTALLATION_TOKEN_TTL_SECONDS = _get_int("INSTALLATION_TOKEN_TTL_SECONDS", 3000)

# Git
SHIPYARD_SCRATCH_DIR = os.getenv(
    "SHIPYARD_SCRATCH_DIR", os.path.join(tempfile.gettempdir(), "shipyard")
)
SHIPYARD_CLONE_BRANCH = os.getenv("SHIPYARD_CLONE_BRANCH", "shipyard")
GIT_TIMEOUT_SECONDS = _get_int("GIT_TIMEOUT_SECONDS", 600)
DEFAULT_REFERENCE = os.getenv("DEFAULT_REFERENCE", "refs/heads/master")
