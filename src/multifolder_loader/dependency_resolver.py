"""Locate missing libraries inside registered mod folders.

The host runtime calls the resolver built by :func:`make_resolver` when it
cannot satisfy a reference on its own.  Mods are searched in registration
order and the first library the loader accepts wins.  Identity is by file
name only (``<Name>.dll``), the same probing rule the host runtime uses.
"""

from __future__ import annotations

import contextlib
import logging
import os
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path

import pefile

from multifolder_loader.constants import LIBRARY_SUFFIX
from multifolder_loader.registry import ModRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AssemblyName:
    name: str
    version: str | None = None
    culture: str | None = None
    public_key_token: str | None = None

    @classmethod
    def parse(cls, display_name: str) -> AssemblyName:
        """Parse ``Name, Version=1.0.0.0, Culture=neutral, PublicKeyToken=null``."""
        head, *parts = (p.strip() for p in display_name.split(","))
        attrs: dict[str, str] = {}
        for part in parts:
            key, sep, value = part.partition("=")
            if sep:
                attrs[key.strip().lower()] = value.strip()
        return cls(
            name=head,
            version=attrs.get("version"),
            culture=attrs.get("culture"),
            public_key_token=attrs.get("publickeytoken"),
        )

    @property
    def file_name(self) -> str:
        return f"{self.name}{LIBRARY_SUFFIX}"


@dataclass(frozen=True, slots=True)
class LoadedLibrary:
    name: str
    path: Path
    file_version: str | None = None


LibraryLoader = Callable[[Path], LoadedLibrary]
Resolver = Callable[[str], LoadedLibrary | None]


def load_library(path: Path) -> LoadedLibrary:
    """Open *path* as a PE image and read its file version.

    Raises ``pefile.PEFormatError`` when *path* is not a PE image.
    """
    pe = pefile.PE(str(path), fast_load=True)
    try:
        pe.parse_data_directories(
            directories=[pefile.DIRECTORY_ENTRY["IMAGE_DIRECTORY_ENTRY_RESOURCE"]]
        )
        version = None
        if hasattr(pe, "VS_FIXEDFILEINFO"):
            info = pe.VS_FIXEDFILEINFO[0]
            ms = info.FileVersionMS
            ls = info.FileVersionLS
            version = f"{ms >> 16}.{ms & 0xFFFF}.{ls >> 16}.{ls & 0xFFFF}"
        return LoadedLibrary(name=path.stem, path=path, file_version=version)
    finally:
        with contextlib.suppress(Exception):
            pe.close()


def _search_dirs(directory: Path) -> Iterator[Path]:
    for root, dirs, _files in os.walk(directory):
        dirs.sort()
        yield Path(root)


def find_library(
    name: AssemblyName,
    directory: Path,
    loader: LibraryLoader = load_library,
) -> LoadedLibrary | None:
    """Probe *directory* and its subdirectories for ``<name>.dll``."""
    if not directory.is_dir():
        return None
    for candidate_dir in _search_dirs(directory):
        candidate = candidate_dir / name.file_name
        if not candidate.is_file():
            continue
        try:
            return loader(candidate)
        except Exception:
            logger.debug("Could not load %s, continuing search", candidate, exc_info=True)
    return None


def resolve_from_mods(
    requested: str,
    registry: ModRegistry,
    loader: LibraryLoader = load_library,
) -> LoadedLibrary | None:
    name = AssemblyName.parse(requested)
    if not name.name:
        return None
    for mod in registry:
        found = find_library(name, mod.mod_dir, loader)
        if found is not None:
            logger.debug("Resolved %s from mod %s", requested, mod.name)
            return found
    return None


def make_resolver(
    registry_source: Callable[[], ModRegistry],
    loader: LibraryLoader = load_library,
) -> Resolver:
    """Build the callback registered with the host runtime.

    *registry_source* is read on every call, so the callback always sees
    the registry currently published by the loader.
    """

    def _resolve(requested: str) -> LoadedLibrary | None:
        try:
            return resolve_from_mods(requested, registry_source(), loader)
        except Exception:
            logger.warning("Failed to resolve %s from mod folders", requested, exc_info=True)
            return None

    return _resolve
