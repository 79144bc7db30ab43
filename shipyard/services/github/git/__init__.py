"""
Git Operations Module

Clones repository references into plain working trees and lists references.
"""

from shipyard.services.github.git.clone import CloneEngine
from shipyard.services.github.git.local_operations import redact, run_git

__all__ = [
    "CloneEngine",
    "redact",
    "run_git",
]
