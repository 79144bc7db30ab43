"""
GitHub App JWT Token Generator

Generates JSON Web Tokens (JWT) for authenticating as a GitHub App.
JWTs are only used to request installation access tokens.
"""

import logging
import time
from pathlib import Path
from typing import Optional

import jwt

from shipyard.common.config.config import GITHUB_APP_ID, GITHUB_APP_PRIVATE_KEY_PATH
from shipyard.common.exception.exceptions import SigningError

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "RS256"
JWT_EXPIRATION_SECONDS = 60


class GitHubAppJWTGenerator:
    """Generates JWT tokens for GitHub App authentication."""

    def __init__(
        self,
        app_id: Optional[str] = None,
        private_key_path: Optional[str] = None,
        private_key: Optional[str] = None,
    ):
        """
        Initialize JWT generator.

        Configuration is checked lazily so services that only ever use static
        tokens can be built without any GitHub App settings.

        Args:
            app_id: GitHub App ID (defaults to config)
            private_key_path: Path to private key .pem file (defaults to config)
            private_key: PEM content, skips reading the key file when given
        """
        self.app_id = app_id or GITHUB_APP_ID
        self.private_key_path = private_key_path or GITHUB_APP_PRIVATE_KEY_PATH
        self._private_key = private_key

    def _load_private_key(self) -> str:
        """
        Load the private key from the configured path.

        Returns:
            Private key content as string

        Raises:
            SigningError: If no key is configured or the file cannot be read
        """
        if self._private_key:
            return self._private_key

        if not self.private_key_path:
            raise SigningError(
                "GitHub App private key path is required. Set GITHUB_APP_PRIVATE_KEY_PATH in environment."
            )

        key_path = Path(self.private_key_path).expanduser()
        try:
            private_key = key_path.read_text()
        except OSError as e:
            logger.error(f"Failed to load private key from {key_path}: {e}")
            raise SigningError(f"Failed to load GitHub App private key from {key_path}: {e}") from e

        if not private_key.strip():
            raise SigningError(f"GitHub App private key file {key_path} is empty")

        logger.info(f"Loaded GitHub App private key from {key_path}")
        self._private_key = private_key
        return private_key

    def generate_jwt(self, expiration_seconds: int = JWT_EXPIRATION_SECONDS) -> str:
        """
        Generate a JWT token for GitHub App authentication.

        GitHub requires:
        - Algorithm: RS256
        - Issued at (iat): Current time
        - Expiration (exp): Max 10 minutes from now
        - Issuer (iss): GitHub App ID

        Args:
            expiration_seconds: Token lifetime in seconds

        Returns:
            JWT token as string

        Raises:
            SigningError: If configuration is missing or signing fails
        """
        if not self.app_id:
            raise SigningError("GitHub App ID is required. Set GITHUB_APP_ID in environment.")

        private_key = self._load_private_key()
        now = int(time.time())
        payload = {
            "iat": now,
            "exp": now + expiration_seconds,
            "iss": self.app_id,
        }

        try:
            token = jwt.encode(payload, private_key, algorithm=JWT_ALGORITHM)
        except Exception as e:
            logger.error(f"Failed to generate JWT token: {e}")
            raise SigningError(f"Failed to generate GitHub App JWT: {e}") from e

        logger.debug(f"Generated GitHub App JWT (expires in {expiration_seconds}s, app_id={self.app_id})")
        return token
