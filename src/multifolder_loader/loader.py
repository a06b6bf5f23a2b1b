"""Startup routine that turns the configuration into a frozen mod registry.

Resolution runs once, synchronously, before the host loads any payload.
Failures never propagate to the host: an unexpected error leaves an empty
registry and the host continues without mods.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterator, Mapping, Sequence
from pathlib import Path
from typing import Protocol

from multifolder_loader.config import Settings
from multifolder_loader.config import settings as default_settings
from multifolder_loader.dependency_resolver import (
    LibraryLoader,
    LoadedLibrary,
    Resolver,
    load_library,
    make_resolver,
)
from multifolder_loader.ini_reader import IniReadError, read_ini
from multifolder_loader.models import DirectorySpec
from multifolder_loader.paths import build_path_context
from multifolder_loader.registry import ModRegistry
from multifolder_loader.scanner import ScanResult, scan_directory
from multifolder_loader.spec_resolver import resolve_specs

logger = logging.getLogger(__name__)


class ResolverHost(Protocol):
    def register_resolver(self, resolver: Resolver) -> None: ...


class MultiFolderLoader:
    def __init__(
        self,
        host: ResolverHost,
        settings: Settings | None = None,
        argv: Sequence[str] | None = None,
        environ: Mapping[str, str] | None = None,
        library_loader: LibraryLoader = load_library,
    ) -> None:
        self.host = host
        self.settings = settings or default_settings
        self.argv = list(sys.argv if argv is None else argv)
        self.environ = dict(os.environ if environ is None else environ)
        self._registry = ModRegistry()
        self._resolver = make_resolver(lambda: self._registry, library_loader)
        self._resolver_registered = False
        self.scan_results: list[ScanResult] = []

    @property
    def registry(self) -> ModRegistry:
        return self._registry

    def init(self) -> ModRegistry:
        """Resolve every configured folder and freeze the registry."""
        if self._registry.frozen:
            return self._registry
        try:
            self._init_internal()
        except Exception:
            logger.exception("Failed to index mods, no mods will be loaded")
            self._registry = ModRegistry()
            self.scan_results = []
        self._registry.freeze()
        logger.info("Registered %d mod(s)", len(self._registry))
        return self._registry

    def _init_internal(self) -> None:
        for spec in self._read_specs():
            self.load_from(spec)

    def _read_specs(self) -> list[DirectorySpec]:
        context = build_path_context(
            root=self.settings.game_root,
            product_folder=self.settings.product_folder,
            argv=self.argv,
            environ=self.environ,
        )
        config_path = self.settings.config_path
        try:
            document = read_ini(config_path)
        except (IniReadError, OSError):
            logger.warning("Failed to read %s", config_path, exc_info=True)
            return []
        return resolve_specs(document, context)

    def load_from(self, spec: DirectorySpec) -> ScanResult:
        result = scan_directory(spec, self._registry, self.settings.marker_file)
        self.scan_results.append(result)
        if result.found:
            self._activate_resolver()
        return result

    def _activate_resolver(self) -> None:
        if self._resolver_registered:
            return
        self.host.register_resolver(self._resolver)
        self._resolver_registered = True

    def resolve_dependency(self, requested: str) -> LoadedLibrary | None:
        return self._resolver(requested)

    def patch_paths(self) -> Iterator[Path]:
        return self._registry.patch_paths()

    def plugin_paths(self) -> Iterator[Path]:
        return self._registry.plugin_paths()
