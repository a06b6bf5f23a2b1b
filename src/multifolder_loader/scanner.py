from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from multifolder_loader.constants import MARKER_FILE, PATCHERS_DIR, PLUGINS_DIR
from multifolder_loader.models import DirectorySpec, ModDescriptor
from multifolder_loader.registry import ModRegistry

logger = logging.getLogger(__name__)


class SkipReason(StrEnum):
    DISABLED = "disabled"
    NOT_ENABLED = "not_enabled"


@dataclass(frozen=True, slots=True)
class ScanResult:
    base_dir: Path
    found: bool
    mods: tuple[ModDescriptor, ...] = ()
    skipped: dict[str, SkipReason] = field(default_factory=dict)


def _child_dirs(base_dir: Path) -> list[Path]:
    # scandir order is kept as-is; it is the platform's listing order.
    with os.scandir(base_dir) as it:
        return [Path(entry.path) for entry in it if entry.is_dir()]


def _is_dir(path: Path) -> bool:
    try:
        return path.is_dir()
    except OSError:
        logger.warning("Cannot access mod folder %s", path, exc_info=True)
        return False


def describe_mod(mod_dir: Path, marker_file: str = MARKER_FILE) -> ModDescriptor | None:
    """Build a descriptor for *mod_dir*, or ``None`` if it is not a mod."""
    if not (mod_dir / marker_file).is_file():
        return None

    patches = mod_dir / PATCHERS_DIR
    plugins = mod_dir / PLUGINS_DIR
    return ModDescriptor(
        mod_dir=mod_dir,
        patches_path=patches if patches.is_dir() else None,
        plugins_path=plugins if plugins.is_dir() else None,
    )


def scan_directory(
    spec: DirectorySpec,
    registry: ModRegistry,
    marker_file: str = MARKER_FILE,
) -> ScanResult:
    """Scan the immediate children of ``spec.base_dir`` into *registry*.

    Deny filtering runs before allow filtering; directories without the
    marker file are ignored without a log record.
    """
    if not _is_dir(spec.base_dir):
        logger.info("Skipping missing mod folder %s", spec.base_dir)
        return ScanResult(base_dir=spec.base_dir, found=False)

    mods: list[ModDescriptor] = []
    skipped: dict[str, SkipReason] = {}
    for child in _child_dirs(spec.base_dir):
        name = child.name
        if spec.is_denied(name):
            logger.warning("Skipping loading [%s] because it's marked as disabled", name)
            skipped[name] = SkipReason.DISABLED
            continue
        if not spec.is_allowed(name):
            logger.warning("Skipping loading [%s] because it's not enabled", name)
            skipped[name] = SkipReason.NOT_ENABLED
            continue

        mod = describe_mod(child, marker_file)
        if mod is None:
            continue
        registry.add(mod)
        mods.append(mod)

    logger.info("Found %d mod(s) in %s", len(mods), spec.base_dir)
    return ScanResult(base_dir=spec.base_dir, found=True, mods=tuple(mods), skipped=skipped)
