"""GitHub labels and issues API operations."""

import logging
from typing import Optional

from shipyard.common.exception.exceptions import GitHubAPIError
from shipyard.services.github.api.client import GitHubAPIClient
from shipyard.services.github.models.types import Issue, Log
from shipyard.services.github.repository.url_parser import RepositoryIdentity

logger = logging.getLogger(__name__)

LABEL_NAME = "AppCenter"
LABEL_COLOR = "4c158a"
LABEL_DESCRIPTION = "Issues related to releasing on AppCenter"


class IssueOperations:
    """Files release failure logs as labeled issues."""

    def __init__(self, client: GitHubAPIClient):
        self.client = client

    async def has_label(self, identity: RepositoryIdentity, name: str = LABEL_NAME) -> bool:
        """Check whether a label exists. Any lookup failure counts as missing."""
        try:
            await self.client.get(identity, self.client.repo_path(identity, "labels", name))
        except GitHubAPIError as e:
            if not e.is_not_found:
                logger.warning(f"Label lookup for {name} on {identity.full_name} failed, assuming missing: {e}")
            return False
        return True

    async def ensure_label(self, identity: RepositoryIdentity) -> None:
        """Create the release label unless it already exists."""
        if await self.has_label(identity):
            return

        logger.info(f"Creating label {LABEL_NAME} on {identity.full_name}")
        await self.client.post(
            identity,
            self.client.repo_path(identity, "labels"),
            data={
                "color": LABEL_COLOR,
                "description": LABEL_DESCRIPTION,
                "name": LABEL_NAME,
            },
        )

    async def upload_log(
        self, log: Log, identity: RepositoryIdentity, reference: Optional[str] = None
    ) -> Log:
        """
        Upload a log as an issue with the release label.

        Logs that already carry a ``github_id`` are returned untouched.

        Returns:
            Copy of the log with ``github_id`` set to the issue id
        """
        if log.github_id is not None:
            return log

        await self.ensure_label(identity)

        data = await self.client.post(
            identity,
            self.client.repo_path(identity, "issues"),
            data={
                "body": log.body,
                "labels": [LABEL_NAME],
                "title": log.title,
            },
        )
        issue = Issue.model_validate(data)
        logger.info(f"Filed issue {issue.number or issue.id} on {identity.full_name}: {log.title}")

        return log.model_copy(update={"github_id": issue.id})
