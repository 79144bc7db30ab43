"""
Capability interfaces for hosted repositories.

A hosting provider implements whichever of these it supports; the release
process only depends on the interfaces.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from shipyard.services.github.models.types import Log, Package


class CodeSource(ABC):
    """A repository whose source can be materialized locally."""

    @abstractmethod
    async def clone(self, destination: str, reference: Optional[str] = None) -> None:
        """Clone ``reference`` into ``destination`` without VCS metadata."""
        pass

    @abstractmethod
    async def references(self) -> List[str]:
        """List every reference name in the repository."""
        pass


class PackagePublisher(ABC):
    """A repository that can host built packages."""

    @abstractmethod
    async def upload_package(
        self, package: Package, reference: Optional[str] = None
    ) -> Package:
        pass


class LogPublisher(ABC):
    """A repository that accepts failure logs."""

    @abstractmethod
    async def upload_log(self, log: Log, reference: Optional[str] = None) -> Log:
        pass
