from shipyard.common.exception.exceptions import (
    GitCommandError,
    GitHubAPIError,
    InvalidRepositoryError,
    ReferenceNotFoundError,
    ReleaseNotFoundError,
    ShipyardError,
    SigningError,
    TokenExchangeError,
)

__all__ = [
    "GitCommandError",
    "GitHubAPIError",
    "InvalidRepositoryError",
    "ReferenceNotFoundError",
    "ReleaseNotFoundError",
    "ShipyardError",
    "SigningError",
    "TokenExchangeError",
]
