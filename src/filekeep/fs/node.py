# Node: in-memory snapshot of one file or directory.
# Created: 2026-10-19

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

ROOT_NAME = "."


@dataclass
class Node:
    """A file or directory as seen at read time.

    ``path`` and ``parent`` are logical, root-relative POSIX paths; the root
    itself is ``"."``. For directories ``size`` is the sum of visible file
    sizes in the materialized part of the subtree, so stub directories
    (beyond the depth bound) contribute nothing.

    ``password_digest`` is never serialized.
    """

    name: str
    path: str
    parent: str
    is_dir: bool = False
    size: int = 0
    files_size: int = 0
    mod_time: datetime | None = None
    mode: str = ""
    password_digest: str = field(default="", repr=False)
    files: list[Node] = field(default_factory=list)
    dirs: list[Node] = field(default_factory=list)

    @property
    def is_root(self) -> bool:
        return self.path == ROOT_NAME

    @property
    def protected(self) -> bool:
        return bool(self.password_digest)

    @property
    def item_count(self) -> int:
        return len(self.files) + len(self.dirs)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "path": self.path,
            "parent": self.parent,
            "is_dir": self.is_dir,
            "size": self.size,
            "mod_time": self.mod_time.isoformat() if self.mod_time else None,
            "mode": self.mode,
            "protected": self.protected,
        }
        if self.is_dir:
            data["files_size"] = self.files_size
            data["files"] = [child.to_dict() for child in self.files]
            data["dirs"] = [child.to_dict() for child in self.dirs]
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)
