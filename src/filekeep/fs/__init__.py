"""Filesystem snapshot core: visibility rules, password gate, bounded directory walk."""

from __future__ import annotations

from .errors import DepthExceededError, FilekeepError, NotFoundError
from .node import ROOT_NAME, Node
from .password import (
    derive_password_digest,
    has_password,
    hash_password,
    is_protected,
    is_sidecar,
    sidecar_path,
)
from .snapshot import MAX_DEPTH, ReadReport, SnapshotBuilder
from .visibility import VisibilityPolicy, basename, extension

__all__ = [
    "FilekeepError",
    "NotFoundError",
    "DepthExceededError",
    "ROOT_NAME",
    "Node",
    "derive_password_digest",
    "has_password",
    "hash_password",
    "is_protected",
    "is_sidecar",
    "sidecar_path",
    "MAX_DEPTH",
    "ReadReport",
    "SnapshotBuilder",
    "VisibilityPolicy",
    "basename",
    "extension",
]
