from shipyard.services.github.models.types import (
    InstallationTokenResponse,
    Issue,
    Label,
    Log,
    Package,
    Release,
    ReleaseAsset,
)

__all__ = [
    "InstallationTokenResponse",
    "Issue",
    "Label",
    "Log",
    "Package",
    "Release",
    "ReleaseAsset",
]
