"""GitHub releases API operations."""

import asyncio
import logging
import os
from typing import AsyncIterator, Optional

from shipyard.common.exception.exceptions import GitHubAPIError, ReleaseNotFoundError
from shipyard.common.utils.file_type import get_file_type
from shipyard.services.github.api.client import GitHubAPIClient
from shipyard.services.github.models.types import Package, Release, ReleaseAsset
from shipyard.services.github.repository.url_parser import RepositoryIdentity

logger = logging.getLogger(__name__)

TAG_PREFIX = "refs/tags/"
UPLOAD_URL_TEMPLATE = "{?name,label}"
UPLOAD_CHUNK_SIZE = 64 * 1024


def tag_name(reference: str) -> str:
    """Tag name of a reference, ``refs/tags/1.0.0`` -> ``1.0.0``."""
    if reference.startswith(TAG_PREFIX):
        return reference[len(TAG_PREFIX):]
    return reference


async def _read_chunks(path: str) -> AsyncIterator[bytes]:
    with open(path, "rb") as handle:
        while True:
            chunk = await asyncio.to_thread(handle.read, UPLOAD_CHUNK_SIZE)
            if not chunk:
                break
            yield chunk


class ReleaseOperations:
    """Release lookup and asset upload."""

    def __init__(self, client: GitHubAPIClient):
        self.client = client

    async def get_release_by_tag(self, identity: RepositoryIdentity, reference: str) -> Release:
        """Get the release for a tag.

        Raises:
            ReleaseNotFoundError: If no release exists for the tag
        """
        tag = tag_name(reference)
        try:
            data = await self.client.get(identity, self.client.repo_path(identity, "releases", "tags", tag))
        except GitHubAPIError as e:
            if e.is_not_found:
                raise ReleaseNotFoundError(f"No GitHub release for tag {tag} in {identity.full_name}") from e
            raise
        return Release.model_validate(data)

    async def upload_package(
        self, package: Package, identity: RepositoryIdentity, reference: Optional[str] = None
    ) -> Package:
        """
        Upload a package as an asset of an existing release.

        Packages that already carry a ``github_id`` are returned untouched.

        Args:
            package: Built artifact to upload
            identity: Repository owning the release
            reference: Release tag, defaults to ``identity.reference``

        Returns:
            Copy of the package with ``github_id`` set to the asset id

        Raises:
            ReleaseNotFoundError: If the release is missing or not uploadable
            GitHubAPIError: If the upload fails
        """
        if package.github_id is not None:
            return package

        release = await self.get_release_by_tag(identity, reference or identity.reference)
        if release.upload_url is None:
            error_msg = f"No upload URL for GitHub release {tag_name(reference or identity.reference)}"
            logger.error(error_msg)
            raise ReleaseNotFoundError(error_msg)

        mime = await get_file_type(package.path)
        size = await asyncio.to_thread(os.path.getsize, package.path)

        params = {"name": package.name}
        if package.description is not None:
            params["label"] = package.description

        logger.info(f"Uploading {package.name} ({mime}, {size} bytes) to {identity.full_name}")
        chunks = _read_chunks(package.path)
        try:
            data = await self.client.post(
                identity,
                release.upload_url.replace(UPLOAD_URL_TEMPLATE, ""),
                params=params,
                content=chunks,
                headers={"Content-Type": mime, "Content-Length": str(size)},
            )
        finally:
            # releases the file handle when the upload aborts mid-stream
            await chunks.aclose()
        asset = ReleaseAsset.model_validate(data)

        return package.model_copy(update={"github_id": asset.id})
