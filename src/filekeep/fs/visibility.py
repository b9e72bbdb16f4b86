"""Visibility rules for the file browser.

A path is hidden when any of three independent rules matches:

- the explicit ``hide`` list (case-insensitive, loose prefix match)
- the ``hide_extensions`` list (exact, case-sensitive)
- the dotfile rule, when ``hide_dots`` is enabled

Hidden paths are skipped during directory walks and refused on direct access.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass, field

_SEPARATORS = "/" + os.sep


def basename(path: str) -> str:
    """Return the last path component, ignoring trailing separators.

    ``basename("a/b/")`` is ``"b"``; a path made only of separators returns
    the separator itself and an empty path returns ``"."``.
    """
    if not path:
        return "."
    stripped = path.rstrip(_SEPARATORS)
    if not stripped:
        return path[0]
    for sep in _SEPARATORS:
        stripped = stripped.rsplit(sep, 1)[-1]
    return stripped


def extension(path: str) -> str:
    """Return the extension of *path*, dot included, or ``""`` when there is none.

    The extension starts at the last dot of the basename, so ``.DS_Store``
    has the extension ``.DS_Store``.
    """
    base = basename(path)
    idx = base.rfind(".")
    if idx < 0:
        return ""
    return base[idx:]


@dataclass(frozen=True)
class VisibilityPolicy:
    """Immutable set of hiding rules, built once per configuration."""

    hide: tuple[str, ...] = ()
    hide_extensions: tuple[str, ...] = ()
    hide_dots: bool = False
    _hide_normalized: tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Callers may hand in lists; keep the value hashable and frozen.
        object.__setattr__(self, "hide", tuple(self.hide))
        object.__setattr__(self, "hide_extensions", tuple(self.hide_extensions))
        normalized = []
        for entry in self.hide:
            entry = entry.rstrip(_SEPARATORS).lower()
            if entry:
                normalized.append(entry)
        object.__setattr__(self, "_hide_normalized", tuple(normalized))

    @classmethod
    def from_lists(
        cls,
        hide: Iterable[str] = (),
        hide_extensions: Iterable[str] = (),
        hide_dots: bool = False,
    ) -> VisibilityPolicy:
        return cls(tuple(hide), tuple(hide_extensions), hide_dots)

    def is_hidden(self, *candidates: str) -> bool:
        """Return True if any candidate matches any rule."""
        for path in candidates:
            if (
                self.is_hidden_by_path(path)
                or self.is_hidden_by_extension(path)
                or self.is_hidden_by_dotfile(path)
            ):
                return True
        return False

    def is_hidden_by_path(self, path: str) -> bool:
        """Match against the explicit hide list.

        An entry matches when it equals the path or its basename, or is a
        string prefix of either. The prefix test is not segment aware:
        ``tmp`` also hides ``tmp2/file``.
        """
        if not self._hide_normalized:
            return False
        lowered = path.lower()
        base = basename(lowered)
        for entry in self._hide_normalized:
            if lowered.startswith(entry) or base.startswith(entry):
                return True
        return False

    def is_hidden_by_extension(self, path: str) -> bool:
        if not self.hide_extensions:
            return False
        return extension(path) in self.hide_extensions

    def is_hidden_by_dotfile(self, path: str) -> bool:
        if not self.hide_dots or path in ("", "."):
            return False
        return path.startswith(".") or basename(path).startswith(".")
