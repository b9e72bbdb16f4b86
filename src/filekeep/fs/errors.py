# Snapshot error types.
# Created: 2026-10-19

from __future__ import annotations


class FilekeepError(Exception):
    """Base class for filekeep errors."""


class NotFoundError(FilekeepError):
    """Path is hidden, absent, or unreadable.

    The three cases are deliberately merged so a client cannot tell a hidden
    path from one that does not exist.
    """

    def __init__(self, path: str):
        super().__init__(f"not found: {path}")
        self.path = path


class DepthExceededError(FilekeepError):
    """Raised when a directory walk would descend past the depth bound."""

    def __init__(self, path: str, depth: int):
        super().__init__(f"depth {depth} exceeds limit at {path}")
        self.path = path
        self.depth = depth
