"""Immutable records produced while resolving mod folders."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class DirectorySpec:
    """One configured source of mods.

    ``deny_list`` and ``allow_list`` hold case-folded mod names; ``None``
    means the filter is absent.  When both are present the deny list is
    checked first.
    """

    base_dir: Path
    deny_list: frozenset[str] | None = None
    allow_list: frozenset[str] | None = None
    section: str = ""

    def is_denied(self, name: str) -> bool:
        return self.deny_list is not None and name.casefold() in self.deny_list

    def is_allowed(self, name: str) -> bool:
        return self.allow_list is None or name.casefold() in self.allow_list


@dataclass(frozen=True, slots=True)
class ModDescriptor:
    mod_dir: Path
    patches_path: Path | None = None
    plugins_path: Path | None = None

    @property
    def name(self) -> str:
        return self.mod_dir.name
