"""Per-node password protection via sidecar files.

For an entry ``name`` inside directory ``D`` the password lives in ``D/.name``
as plain text (surrounding newlines are ignored). Only a sha256 digest of it
is kept on the node; verification hashes the candidate and compares digests
in constant time.

The threat model is casual browsing, so a fast hash is enough. Swap
``hash_password`` for a slow keyed hash if stronger guarantees are needed;
the rest of the module does not care.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import os

from filekeep.fs.node import Node

logger = logging.getLogger(__name__)

__all__ = [
    "derive_password_digest",
    "has_password",
    "hash_password",
    "is_protected",
    "is_sidecar",
    "sidecar_path",
]


def sidecar_path(path: str) -> str:
    """Return the password file path for *path*: ``<parent>/.<basename>``."""
    path = path.rstrip("/" + os.sep) or path
    parent, name = os.path.split(path)
    return os.path.join(parent, "." + name)


def hash_password(plaintext: str) -> str:
    return hashlib.sha256(plaintext.encode("utf-8")).hexdigest()


def derive_password_digest(path: str) -> str:
    """Return the digest of the sidecar password for *path*, or ``""`` if unprotected."""
    try:
        with open(sidecar_path(path), encoding="utf-8") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError):
        return ""

    logger.debug("password sidecar found for %r", path)
    return hash_password(content.strip("\r\n"))


def is_protected(node: Node) -> bool:
    return bool(node.password_digest)


def has_password(node: Node, candidate: str) -> bool:
    """Check *candidate* against the node's stored digest.

    Always False for an unprotected node and for an empty candidate, so an
    empty submission can never unlock anything.
    """
    if not node.password_digest or not candidate:
        return False
    return hmac.compare_digest(hash_password(candidate), node.password_digest)


def is_sidecar(directory: str, name: str) -> bool:
    """Return True if *name* inside *directory* is the password file of a sibling."""
    if len(name) < 2 or not name.startswith(".") or name == "..":
        return False
    return os.path.lexists(os.path.join(directory, name[1:]))
