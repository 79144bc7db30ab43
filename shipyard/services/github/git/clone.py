"""Git clone operations module.

Materializes a repository reference into a plain directory: clone, check out
the commit behind the reference, resolve submodules, drop the ``.git`` data.
"""

import asyncio
import base64
import logging
import os
import shutil
import uuid
from typing import Dict, List, Optional

from shipyard.common.config.config import (
    GIT_TIMEOUT_SECONDS,
    SHIPYARD_CLONE_BRANCH,
    SHIPYARD_SCRATCH_DIR,
)
from shipyard.common.exception.exceptions import GitCommandError, ReferenceNotFoundError
from shipyard.services.github.auth.installation_token_manager import InstallationTokenManager
from shipyard.services.github.git.local_operations import run_git
from shipyard.services.github.repository.url_parser import (
    ACCESS_TOKEN_USERNAME,
    RepositoryIdentity,
)

logger = logging.getLogger(__name__)

GIT_DIR = ".git"
GITMODULES = ".gitmodules"
BRANCH_PREFIX = "refs/heads/"
REMOTE_PREFIX = "refs/remotes/origin/"


def _remove_path(path: str) -> None:
    if os.path.isdir(path) and not os.path.islink(path):
        shutil.rmtree(path)
    elif os.path.lexists(path):
        os.remove(path)


class CloneEngine:
    """Clones repositories into metadata-free working trees."""

    def __init__(
        self,
        scratch_dir: str = SHIPYARD_SCRATCH_DIR,
        token_manager: Optional[InstallationTokenManager] = None,
        branch_name: str = SHIPYARD_CLONE_BRANCH,
        timeout: Optional[float] = GIT_TIMEOUT_SECONDS,
    ):
        """
        Initialize clone engine.

        Args:
            scratch_dir: Directory for throwaway clones, owned by the caller
            token_manager: Needed to clone as a GitHub App installation
            branch_name: Local branch created for the checked out commit
            timeout: Seconds allowed per git command
        """
        self.scratch_dir = scratch_dir
        self.token_manager = token_manager
        self.branch_name = branch_name
        self.timeout = timeout

    async def _git_config(self, identity: RepositoryIdentity) -> Dict[str, str]:
        """Extra git settings that carry installation credentials out-of-band."""
        if not identity.is_installation or self.token_manager is None:
            return {}

        token = await self.token_manager.get_installation_token(identity.auth_password)
        basic = base64.b64encode(f"{ACCESS_TOKEN_USERNAME}:{token}".encode()).decode()
        return {f"http.https://{identity.host}/.extraheader": f"Authorization: basic {basic}"}

    async def _clone(self, identity: RepositoryIdentity, destination: str, config: Dict[str, str]) -> None:
        logger.info(f"Cloning {identity.redacted_url} into {destination}")
        await run_git(
            ["clone", identity.url, destination], timeout=self.timeout, config=config
        )

    async def resolve_commit(self, path: str, reference: str) -> str:
        """
        Peel a reference down to the commit it points at.

        Branches other than the default one only exist as remote tracking
        refs after a fresh clone, so ``refs/heads/x`` also tries
        ``refs/remotes/origin/x``.

        Raises:
            ReferenceNotFoundError: If no candidate resolves to a commit
        """
        candidates = [reference]
        if reference.startswith(BRANCH_PREFIX):
            candidates.append(REMOTE_PREFIX + reference[len(BRANCH_PREFIX):])

        for candidate in candidates:
            try:
                output = await run_git(
                    ["rev-parse", "--verify", "--quiet", f"{candidate}^{{commit}}"],
                    cwd=path,
                    timeout=self.timeout,
                    quiet=True,
                )
            except GitCommandError:
                continue
            return output.strip()

        logger.error(f"Reference {reference} not found in {path}")
        raise ReferenceNotFoundError(reference, path)

    async def clone(
        self, identity: RepositoryIdentity, destination: str, reference: Optional[str] = None
    ) -> None:
        """
        Clone a repository reference into a directory without git metadata.

        Args:
            identity: Repository to clone
            destination: Directory to create, owned by the caller
            reference: Branch or tag, defaults to ``identity.reference``

        Raises:
            GitCommandError: If a git command fails
            ReferenceNotFoundError: If the reference does not exist
        """
        reference = reference or identity.reference
        config = await self._git_config(identity)

        await self._clone(identity, destination, config)

        commit = await self.resolve_commit(destination, reference)
        await run_git(
            ["checkout", "--force", "-B", self.branch_name, commit],
            cwd=destination,
            timeout=self.timeout,
        )
        logger.info(f"Checked out {reference} ({commit[:12]}) of {identity.full_name}")

        submodules = await self.recursive_clone(destination, config)

        # Submodule .git files point into the parent's .git directory
        for submodule_path in reversed(submodules):
            await asyncio.to_thread(_remove_path, os.path.join(submodule_path, GIT_DIR))
        await asyncio.to_thread(_remove_path, os.path.join(destination, GIT_DIR))

    async def _submodule_paths(self, path: str) -> List[str]:
        """Submodule paths of a checkout, in .gitmodules declaration order."""
        if not await asyncio.to_thread(os.path.exists, os.path.join(path, GITMODULES)):
            return []

        try:
            output = await run_git(
                ["config", "-z", "--file", GITMODULES, "--get-regexp", r"^submodule\..*\.path$"],
                cwd=path,
                timeout=self.timeout,
                quiet=True,
            )
        except GitCommandError as e:
            # exit 1: the file declares no paths
            if e.returncode == 1:
                return []
            raise

        # -z: "<key>\n<value>\0" per entry, so paths may contain spaces
        paths = []
        for entry in output.split("\0"):
            _, _, submodule_path = entry.partition("\n")
            if submodule_path:
                paths.append(submodule_path)
        return paths

    async def recursive_clone(self, path: str, config: Optional[Dict[str, str]] = None) -> List[str]:
        """
        Check out every submodule at its pinned commit, depth first.

        Args:
            path: Checkout whose submodules to resolve
            config: Extra git settings, e.g. credentials

        Returns:
            Directories of every materialized submodule, parents before children
        """
        materialized = []
        for submodule_path in await self._submodule_paths(path):
            await run_git(
                ["submodule", "update", "--init", "--depth", "1", "--", submodule_path],
                cwd=path,
                timeout=self.timeout,
                config=config,
            )
            full_path = os.path.join(path, submodule_path)
            logger.info(f"Updated submodule {submodule_path} in {path}")
            materialized.append(full_path)
            materialized.extend(await self.recursive_clone(full_path, config))
        return materialized

    async def references(self, identity: RepositoryIdentity) -> List[str]:
        """
        List every reference name of a repository.

        TODO: ls-remote would avoid the full clone, but reports remote names
        (refs/heads/*) rather than the refs/remotes/origin/* a clone exposes.

        Args:
            identity: Repository to inspect

        Returns:
            Reference names such as ``refs/tags/1.0.0``
        """
        config = await self._git_config(identity)
        await asyncio.to_thread(os.makedirs, self.scratch_dir, exist_ok=True)
        path = os.path.join(self.scratch_dir, uuid.uuid4().hex)

        try:
            await self._clone(identity, path, config)
            output = await run_git(
                ["for-each-ref", "--format=%(refname)"], cwd=path, timeout=self.timeout
            )
        finally:
            await asyncio.to_thread(shutil.rmtree, path, ignore_errors=True)

        return [line.strip() for line in output.splitlines() if line.strip()]
