"""Exception hierarchy for repository operations."""

from typing import Optional, Sequence


class ShipyardError(Exception):
    """Base class for all errors raised by shipyard."""

    pass


class InvalidRepositoryError(ShipyardError, ValueError):
    """Raised when a repository URL cannot be understood."""

    pass


class ReferenceNotFoundError(ShipyardError):
    """Raised when a branch or tag does not exist in the repository."""

    def __init__(self, reference: str, repository: Optional[str] = None):
        self.reference = reference
        self.repository = repository
        where = f" in {repository}" if repository else ""
        super().__init__(f"Reference '{reference}' not found{where}")


class ReleaseNotFoundError(ShipyardError):
    """Raised when a release is missing or has no asset upload endpoint."""

    pass


class SigningError(ShipyardError):
    """Raised when the GitHub App assertion cannot be signed."""

    pass


class TokenExchangeError(ShipyardError):
    """Raised when an installation access token could not be obtained."""

    pass


class GitCommandError(ShipyardError):
    """Raised when a git command exits non-zero or times out."""

    def __init__(self, command: Sequence[str], returncode: Optional[int], stderr: str = ""):
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr
        if returncode is None:
            message = f"git {' '.join(self.command)} timed out"
        else:
            message = f"git {' '.join(self.command)} failed (exit {returncode}): {stderr.strip()}"
        super().__init__(message)


class GitHubAPIError(ShipyardError):
    """Raised when the GitHub REST API answers with a non-success status."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        method: Optional[str] = None,
        url: Optional[str] = None,
        body: Optional[str] = None,
    ):
        self.status_code = status_code
        self.method = method
        self.url = url
        self.body = body
        super().__init__(message)

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404
