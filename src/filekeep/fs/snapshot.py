# Snapshot builder: bounded-depth directory walk with visibility and password gating.
# Created: 2026-10-19

"""Listings apply the three `VisibilityPolicy` rules plus one more: a password
sidecar (`.x` next to an existing `x`) is never listed, served or counted in
`files_size`, even with ``hide_dots`` off. A plain dotfile that happens to sit
next to a same-named entry is treated as a sidecar too.
"""

from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass, field
from datetime import UTC, datetime

from filekeep.fs.errors import DepthExceededError, NotFoundError
from filekeep.fs.node import ROOT_NAME, Node
from filekeep.fs.password import derive_password_digest, is_sidecar
from filekeep.fs.visibility import VisibilityPolicy

logger = logging.getLogger(__name__)

# The requested directory plus one level of children. Grandchildren are stubs.
MAX_DEPTH = 2


@dataclass
class ReadReport:
    """Diagnostics collected during one ``read``.

    Never affects the result: skipped branches are simply absent from the tree.
    """

    skipped: list[str] = field(default_factory=list)
    hidden: int = 0

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


class SnapshotBuilder:
    """Builds a fresh ``Node`` tree for a path under *root* on every call.

    Holds no mutable state, so one builder can serve concurrent requests.
    """

    def __init__(self, root: str | os.PathLike, policy: VisibilityPolicy, max_depth: int = MAX_DEPTH):
        if max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        self.root = os.path.abspath(os.fspath(root))
        self.policy = policy
        self.max_depth = max_depth

    def logical_path(self, path: str | os.PathLike) -> str:
        """Return *path* relative to the root as a POSIX path (``"."`` for the root).

        Raises ``NotFoundError`` for paths outside the root.
        """
        rel = os.path.relpath(os.path.abspath(os.fspath(path)), self.root)
        if rel == os.curdir:
            return ROOT_NAME
        if rel == os.pardir or rel.startswith(os.pardir + os.sep):
            raise NotFoundError(os.fspath(path))
        return rel.replace(os.sep, "/")

    def is_hidden(self, logical: str) -> bool:
        """Check a logical path, each of its components, and its basename."""
        if logical == ROOT_NAME:
            return False
        return self.policy.is_hidden(logical, *logical.split("/"))

    def read(self, path: str | os.PathLike, report: ReadReport | None = None) -> Node:
        """Return the snapshot of *path*.

        Raises ``NotFoundError`` when the path is hidden, outside the root, a
        password sidecar, or cannot be stat'ed or listed. The caller cannot
        tell these cases apart.
        """
        if report is None:
            report = ReadReport()
        path = os.path.abspath(os.fspath(path))
        logical = self.logical_path(path)

        if logical != ROOT_NAME:
            name = logical.rsplit("/", 1)[-1]
            if self.is_hidden(logical) or is_sidecar(os.path.dirname(path), name):
                logger.debug("path %r is hidden, returning not found", logical)
                raise NotFoundError(logical)

        try:
            info = os.stat(path)
        except OSError:
            logger.debug("stat failed on %r, returning not found", logical)
            raise NotFoundError(logical) from None

        if not stat.S_ISDIR(info.st_mode):
            return self._new_node(path, logical, info)

        try:
            return self._walk(path, logical, info, 0, report)
        except OSError:
            logger.debug("listing failed on %r, returning not found", logical)
            raise NotFoundError(logical) from None

    def list_directory(self, path: str | os.PathLike, depth: int = 0, report: ReadReport | None = None) -> Node:
        """List a directory starting at *depth*.

        Raises ``DepthExceededError`` if *depth* is already at the bound and
        ``OSError`` if the directory cannot be stat'ed or enumerated.
        """
        path = os.path.abspath(os.fspath(path))
        if depth >= self.max_depth:
            raise DepthExceededError(path, depth)
        return self._walk(path, self.logical_path(path), os.stat(path), depth, report or ReadReport())

    def _walk(self, path: str, logical: str, info: os.stat_result, depth: int, report: ReadReport) -> Node:
        if depth >= self.max_depth:
            raise DepthExceededError(path, depth)

        node = self._new_node(path, logical, info)
        with os.scandir(path) as entries:
            for entry in entries:
                child_logical = entry.name if logical == ROOT_NAME else f"{logical}/{entry.name}"
                if self.policy.is_hidden(child_logical, entry.name) or is_sidecar(path, entry.name):
                    logger.debug("skipping hidden entry %r", child_logical)
                    report.hidden += 1
                    continue

                try:
                    child_info = entry.stat()
                except OSError:
                    logger.debug("stat failed on %r, skipping", child_logical)
                    report.skipped.append(child_logical)
                    continue

                if stat.S_ISDIR(child_info.st_mode):
                    subdir = self._child_directory(entry.path, child_logical, child_info, depth + 1, report)
                    if subdir is None:
                        continue
                    node.dirs.append(subdir)
                    node.size += subdir.size
                else:
                    file_node = self._new_node(entry.path, child_logical, child_info)
                    node.files.append(file_node)
                    node.files_size += file_node.size
                    node.size += file_node.size

        return node

    def _child_directory(
        self, path: str, logical: str, info: os.stat_result, depth: int, report: ReadReport
    ) -> Node | None:
        """Materialize a subdirectory, a stub past the bound, or None if it fails."""
        try:
            return self._walk(path, logical, info, depth, report)
        except DepthExceededError:
            # Stubs carry no children and count as zero bytes in the parent.
            return self._new_node(path, logical, info)
        except Exception:
            logger.debug("could not list %r, omitting it", logical, exc_info=True)
            report.skipped.append(logical)
            return None

    def _new_node(self, path: str, logical: str, info: os.stat_result) -> Node:
        is_dir = stat.S_ISDIR(info.st_mode)
        if logical == ROOT_NAME:
            name, parent = ROOT_NAME, ROOT_NAME
        elif "/" in logical:
            parent, name = logical.rsplit("/", 1)
        else:
            name, parent = logical, ROOT_NAME

        return Node(
            name=name,
            path=logical,
            parent=parent,
            is_dir=is_dir,
            size=0 if is_dir else info.st_size,
            mod_time=datetime.fromtimestamp(info.st_mtime, tz=UTC),
            mode=stat.filemode(info.st_mode),
            password_digest=derive_password_digest(path),
        )
