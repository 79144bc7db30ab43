"""
GitHub API client for making authenticated requests.
Supports both static tokens and GitHub App installation tokens.
"""

import logging
from typing import Any, AsyncIterable, Dict, Optional, Union

import httpx

from shipyard.common.config.config import (
    GITHUB_API_URL,
    GITHUB_HTTP_CONNECT_TIMEOUT_SECONDS,
    GITHUB_HTTP_TIMEOUT_SECONDS,
    SHIPYARD_USER_AGENT,
)
from shipyard.common.exception.exceptions import GitHubAPIError
from shipyard.services.github.auth.installation_token_manager import InstallationTokenManager
from shipyard.services.github.repository.url_parser import RepositoryIdentity

logger = logging.getLogger(__name__)

V3_ACCEPT = "application/vnd.github.v3+json"


class GitHubAPIClient:
    """Base client for GitHub API interactions on behalf of a repository."""

    def __init__(
        self,
        token_manager: InstallationTokenManager,
        base_url: str = GITHUB_API_URL,
        user_agent: str = SHIPYARD_USER_AGENT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize GitHub API client.

        Args:
            token_manager: Source of Authorization header values
            base_url: GitHub API root
            user_agent: User-Agent sent with every request
            transport: Optional httpx transport, mainly for tests
        """
        self.token_manager = token_manager
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self._transport = transport

    async def get_headers(self, identity: RepositoryIdentity) -> Dict[str, str]:
        """Get headers for GitHub API requests."""
        headers = {
            "Accept": V3_ACCEPT,
            "User-Agent": self.user_agent,
        }
        authorization = await self.token_manager.get_authorization_header(identity)
        if authorization is not None:
            headers["Authorization"] = authorization
        return headers

    def repo_path(self, identity: RepositoryIdentity, *parts: str) -> str:
        """Build ``repos/{owner}/{name}/...`` API paths."""
        return "/".join(["repos", identity.owner, identity.name, *parts])

    async def request(
        self,
        identity: RepositoryIdentity,
        method: str,
        path: str,
        data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        content: Optional[Union[bytes, AsyncIterable[bytes]]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        """Make a GitHub API request.

        Args:
            identity: Repository whose credentials authorize the request
            method: HTTP method (GET, POST, ...)
            path: API path relative to the base URL, or an absolute URL
            data: JSON request body
            params: Query parameters
            content: Raw request body, used for uploads
            headers: Extra headers overriding the defaults

        Returns:
            Decoded JSON response, empty dict for empty bodies

        Raises:
            GitHubAPIError: On transport errors and non-success responses
        """
        url = path if path.startswith(("http://", "https://")) else f"{self.base_url}/{path.lstrip('/')}"
        request_headers = await self.get_headers(identity)
        request_headers.update(headers or {})

        try:
            timeout_config = httpx.Timeout(
                GITHUB_HTTP_TIMEOUT_SECONDS, connect=GITHUB_HTTP_CONNECT_TIMEOUT_SECONDS
            )
            async with httpx.AsyncClient(
                timeout=timeout_config, trust_env=False, transport=self._transport
            ) as client:
                response = await client.request(
                    method.upper(),
                    url,
                    json=data,
                    params=params,
                    content=content,
                    headers=request_headers,
                )
        except httpx.RequestError as e:
            error_msg = f"GitHub API request error ({method} {url}): {e}"
            logger.error(error_msg)
            raise GitHubAPIError(error_msg, method=method, url=url) from e

        return self._process_response(response, method, url)

    def _process_response(self, response: httpx.Response, method: str, url: str) -> Dict[str, Any]:
        """Process HTTP response and extract data.

        Raises:
            GitHubAPIError: If response status indicates failure
        """
        if not response.is_success:
            error_msg = f"GitHub API {method} {url} failed (status {response.status_code}): {response.text}"
            logger.error(error_msg)
            raise GitHubAPIError(
                error_msg,
                status_code=response.status_code,
                method=method,
                url=url,
                body=response.text,
            )

        logger.info(f"GitHub API {method} request to {url} successful (status: {response.status_code})")
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise GitHubAPIError(
                f"GitHub API {method} {url} returned invalid JSON: {e}",
                status_code=response.status_code,
                method=method,
                url=url,
                body=response.text,
            ) from e

    async def get(self, identity: RepositoryIdentity, path: str, **kwargs: Any) -> Dict[str, Any]:
        return await self.request(identity, "GET", path, **kwargs)

    async def post(self, identity: RepositoryIdentity, path: str, **kwargs: Any) -> Dict[str, Any]:
        return await self.request(identity, "POST", path, **kwargs)
