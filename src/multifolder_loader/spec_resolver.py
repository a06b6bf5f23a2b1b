"""Turn configuration sections into :class:`DirectorySpec` records.

The primary ``[MultiFolderLoader]`` section always contributes a spec.
When it sets ``enableAdditionalDirectories = true``, every section whose
name starts with ``MultiFolderLoader_`` contributes one as well, in file
order.
"""

from __future__ import annotations

import logging
from pathlib import Path

from multifolder_loader.constants import (
    ADDITIONAL_SECTION_PREFIX,
    BASE_DIR_KEY,
    DISABLED_LIST_KEY,
    ENABLE_ADDITIONAL_KEY,
    ENABLED_LIST_KEY,
    MAIN_SECTION,
)
from multifolder_loader.ini_reader import IniDocument, IniSection
from multifolder_loader.models import DirectorySpec
from multifolder_loader.paths import PathContext, resolve_path

logger = logging.getLogger(__name__)


def read_mod_list(path: Path) -> frozenset[str] | None:
    """Read one mod name per line, case-folded and trimmed.

    Returns ``None`` when the file is missing or unreadable so that the
    caller treats the filter as absent.
    """
    try:
        lines = path.read_text(encoding="utf-8-sig").splitlines()
    except FileNotFoundError:
        logger.warning("Mod list %s does not exist, ignoring it", path)
        return None
    except (OSError, UnicodeDecodeError):
        logger.warning("Failed to read mod list %s", path, exc_info=True)
        return None
    return frozenset(line.strip().casefold() for line in lines if line.strip())


def _load_list(section: IniSection, key: str, context: PathContext) -> frozenset[str] | None:
    raw = section.get(key)
    if raw is None:
        return None
    logger.info("[%s].%s found, using mod list %s", section.name, key, raw)
    return read_mod_list(resolve_path(raw, context))


def resolve_section(section: IniSection, context: PathContext) -> DirectorySpec | None:
    base_dir = section.get(BASE_DIR_KEY)
    if base_dir is None or not base_dir.strip():
        logger.warning("No [%s].%s found, no mods to load from it", section.name, BASE_DIR_KEY)
        return None

    return DirectorySpec(
        base_dir=resolve_path(base_dir, context),
        deny_list=_load_list(section, DISABLED_LIST_KEY, context),
        allow_list=_load_list(section, ENABLED_LIST_KEY, context),
        section=section.name,
    )


def _is_truthy(value: str | None) -> bool:
    return value is not None and value.strip().lower() == "true"


def collect_sections(document: IniDocument) -> list[IniSection]:
    """Return the sections that describe mod folders, primary first."""
    try:
        main = document[MAIN_SECTION]
    except KeyError:
        logger.warning("No [%s] section in configuration, skipping loading mods", MAIN_SECTION)
        return []

    sections = [main]
    if _is_truthy(main.get(ENABLE_ADDITIONAL_KEY)):
        prefix = ADDITIONAL_SECTION_PREFIX.casefold()
        for candidate in document.sections():
            if candidate.name.casefold().startswith(prefix):
                logger.info("Loading additional section [%s]", candidate.name)
                sections.append(candidate)
    return sections


def resolve_specs(document: IniDocument, context: PathContext) -> list[DirectorySpec]:
    specs: list[DirectorySpec] = []
    for section in collect_sections(document):
        spec = resolve_section(section, context)
        if spec is not None:
            specs.append(spec)
    return specs
