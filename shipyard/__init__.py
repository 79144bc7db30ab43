"""
shipyard - GitHub repository service for release pipelines.

Clones tagged sources, authenticates as a GitHub App installation or with a
static token, uploads release assets and files failure logs as issues.
"""

__version__ = "0.1.0"
