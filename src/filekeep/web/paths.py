# Request path resolution and link helpers.
# Created: 2026-10-19

from __future__ import annotations

import os
import posixpath
from dataclasses import dataclass
from urllib.parse import quote

from filekeep.fs.node import ROOT_NAME


@dataclass(frozen=True)
class Breadcrumb:
    path: str
    name: str


class PathResolver:
    """Maps URL paths to physical paths under *root* and back."""

    def __init__(self, root: str | os.PathLike):
        self.root = os.path.abspath(os.fspath(root))

    def resolve(self, request_path: str) -> str:
        """Return the physical path for an (already URL-decoded) request path.

        The path is normalized against ``/`` first, so ``..`` segments cannot
        climb above the root.
        """
        cleaned = posixpath.normpath("/" + request_path.replace("\\", "/")).lstrip("/")
        if not cleaned or cleaned == ".":
            return self.root
        return os.path.join(self.root, *cleaned.split("/"))


def href(logical: str) -> str:
    """Return the URL for a logical path."""
    logical = logical.replace("\\", "/").strip("/")
    if not logical or logical == ROOT_NAME:
        return "/"
    return "/" + quote(logical, errors="surrogateescape")


def display_name(name: str) -> str:
    """Return *name* safe for HTML output.

    Undecodable filename bytes (lone surrogates from the filesystem) are shown
    as U+FFFD.
    """
    return name.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def breadcrumbs(logical: str) -> list[Breadcrumb]:
    """Split a logical path into links, starting with the root crumb ``~``."""
    crumbs = [Breadcrumb("/", "~")]
    parts: list[str] = []
    for part in logical.replace("\\", "/").split("/"):
        if part in ("", "."):
            continue
        parts.append(part)
        crumbs.append(Breadcrumb(href("/".join(parts)), part))
    return crumbs
