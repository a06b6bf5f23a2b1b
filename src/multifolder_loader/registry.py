from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from multifolder_loader.models import ModDescriptor


class RegistryFrozenError(Exception):
    """Raised when a mod is added after the registry was frozen."""


class ModRegistry:
    """Append-only, ordered collection of discovered mods.

    Insertion order is scan order.  Once :meth:`freeze` is called the
    registry is read-only and may be shared between threads.
    """

    def __init__(self) -> None:
        self._mods: list[ModDescriptor] = []
        self._frozen = False

    def add(self, mod: ModDescriptor) -> None:
        if self._frozen:
            raise RegistryFrozenError(f"Cannot register {mod.mod_dir}: registry is frozen")
        self._mods.append(mod)

    def freeze(self) -> ModRegistry:
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def mods(self) -> tuple[ModDescriptor, ...]:
        return tuple(self._mods)

    def __iter__(self) -> Iterator[ModDescriptor]:
        return iter(self.mods)

    def __len__(self) -> int:
        return len(self._mods)

    def patch_paths(self) -> Iterator[Path]:
        return (m.patches_path for m in self.mods if m.patches_path is not None)

    def plugin_paths(self) -> Iterator[Path]:
        return (m.plugins_path for m in self.mods if m.plugins_path is not None)
