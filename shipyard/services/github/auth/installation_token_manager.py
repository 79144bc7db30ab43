"""
GitHub App Installation Access Token Manager

Builds the Authorization header for GitHub requests. Static credentials are
used as-is; GitHub App installations exchange a signed JWT for an
installation access token, which is cached per installation id.
"""

import asyncio
import logging
from typing import Dict, Optional

import httpx

from shipyard.common.cache.cache import MemoryCache, TokenCache
from shipyard.common.config.config import (
    GITHUB_API_URL,
    GITHUB_HTTP_CONNECT_TIMEOUT_SECONDS,
    GITHUB_HTTP_TIMEOUT_SECONDS,
    INSTALLATION_TOKEN_TTL_SECONDS,
    SHIPYARD_USER_AGENT,
)
from shipyard.common.exception.exceptions import TokenExchangeError
from shipyard.services.github.auth.jwt_generator import GitHubAppJWTGenerator
from shipyard.services.github.models.types import InstallationTokenResponse
from shipyard.services.github.repository.url_parser import RepositoryIdentity

logger = logging.getLogger(__name__)

MACHINE_MAN_ACCEPT = "application/vnd.github.machine-man-preview+json"


class InstallationTokenManager:
    """Produces Authorization header values, exchanging and caching installation tokens."""

    def __init__(
        self,
        jwt_generator: Optional[GitHubAppJWTGenerator] = None,
        cache: Optional[TokenCache] = None,
        base_url: str = GITHUB_API_URL,
        user_agent: str = SHIPYARD_USER_AGENT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize installation token manager.

        Args:
            jwt_generator: JWT generator instance (creates new if not provided)
            cache: Token store shared with the rest of the application
            base_url: GitHub API root
            user_agent: User-Agent sent with the exchange request
            transport: Optional httpx transport, mainly for tests
        """
        self.jwt_generator = jwt_generator if jwt_generator is not None else GitHubAppJWTGenerator()
        # an empty MemoryCache is falsy
        if cache is None:
            cache = MemoryCache(
                "services/github/installation_tokens", ttl_seconds=INSTALLATION_TOKEN_TTL_SECONDS
            )
        self.cache = cache
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self._transport = transport
        self._inflight: Dict[str, "asyncio.Task[str]"] = {}

    async def get_authorization_header(self, identity: RepositoryIdentity) -> Optional[str]:
        """
        Get the HTTP Authorization value for a repository.

        Args:
            identity: Repository whose credentials to use

        Returns:
            ``Bearer <token>`` for static credentials, ``token <token>`` for installations,
            None when the URL carries no credentials

        Raises:
            SigningError: If the GitHub App JWT cannot be built
            TokenExchangeError: If GitHub refuses the exchange
        """
        if not identity.is_installation:
            if identity.auth_password is None:
                return None
            return f"Bearer {identity.auth_password}"

        token = await self.get_installation_token(identity.auth_password)
        return f"token {token}"

    async def get_installation_token(self, installation_id: str) -> str:
        """
        Get an installation access token, exchanging a new one on cache miss.

        Concurrent misses for the same installation share one exchange.

        Args:
            installation_id: GitHub App installation ID

        Returns:
            Installation access token as string
        """
        installation_id = str(installation_id)

        cached_token = await self.cache.get(installation_id)
        if cached_token is not None:
            logger.debug(f"Using cached installation token for installation {installation_id}")
            return cached_token

        task = self._inflight.get(installation_id)
        if task is None:
            task = asyncio.ensure_future(self._exchange_and_store(installation_id))
            self._inflight[installation_id] = task
            task.add_done_callback(lambda _: self._inflight.pop(installation_id, None))
        else:
            logger.debug(f"Joining in-flight token exchange for installation {installation_id}")

        return await asyncio.shield(task)

    async def _exchange_and_store(self, installation_id: str) -> str:
        token = await self.request_installation_token(installation_id)
        await self.cache.set(installation_id, token)
        return token

    async def request_installation_token(self, installation_id: str) -> str:
        """
        Request a new installation access token from GitHub API.

        Args:
            installation_id: GitHub App installation ID

        Returns:
            Installation access token

        Raises:
            SigningError: If the JWT cannot be generated
            TokenExchangeError: If the API request fails
        """
        jwt_token = self.jwt_generator.generate_jwt()

        url = f"{self.base_url}/app/installations/{installation_id}/access_tokens"
        headers = {
            "Authorization": f"Bearer {jwt_token}",
            "Accept": MACHINE_MAN_ACCEPT,
            "User-Agent": self.user_agent,
        }

        logger.info(f"Requesting new installation token for installation {installation_id}")
        try:
            timeout_config = httpx.Timeout(
                GITHUB_HTTP_TIMEOUT_SECONDS, connect=GITHUB_HTTP_CONNECT_TIMEOUT_SECONDS
            )
            async with httpx.AsyncClient(
                timeout=timeout_config, trust_env=False, transport=self._transport
            ) as client:
                response = await client.post(url, headers=headers)
        except httpx.RequestError as e:
            error_msg = f"Network error requesting installation token: {e}"
            logger.error(error_msg)
            raise TokenExchangeError(error_msg) from e

        if not response.is_success:
            error_msg = (
                f"Failed to get installation token for installation {installation_id} "
                f"(status {response.status_code}): {response.text}"
            )
            logger.error(error_msg)
            raise TokenExchangeError(error_msg)

        try:
            token = InstallationTokenResponse.model_validate(response.json())
        except ValueError as e:
            error_msg = f"Malformed installation token response: {e}"
            logger.error(error_msg)
            raise TokenExchangeError(error_msg) from e

        logger.info(
            f"Obtained installation token for installation {installation_id}"
            + (f" (expires at {token.expires_at})" if token.expires_at else "")
        )
        return token.token
