"""Adapter over ``configparser`` for the loader's INI configuration.

The loader only needs an ordered mapping of section name to key/value
entries.  Interpolation is disabled because values carry ``%VAR%``
placeholders that are expanded later against an explicit context.
"""

from __future__ import annotations

import configparser
import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


class IniReadError(Exception):
    """Raised when a configuration file exists but cannot be parsed."""


@dataclass(frozen=True, slots=True)
class IniSection:
    name: str
    entries: Mapping[str, str] = field(default_factory=dict)

    def get(self, key: str) -> str | None:
        """Look up *key* ignoring case, as configparser stores keys lowercased."""
        return self.entries.get(key.lower())


class IniDocument(Mapping[str, IniSection]):
    """Sections in file order, addressable by case-insensitive name."""

    def __init__(self, sections: list[IniSection] | None = None) -> None:
        self._sections: dict[str, IniSection] = {}
        for section in sections or []:
            self._sections[section.name] = section

    def __getitem__(self, name: str) -> IniSection:
        section = self._sections.get(name)
        if section is not None:
            return section
        wanted = name.casefold()
        for key, candidate in self._sections.items():
            if key.casefold() == wanted:
                return candidate
        raise KeyError(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self._sections)

    def __len__(self) -> int:
        return len(self._sections)

    def sections(self) -> list[IniSection]:
        return list(self._sections.values())


def parse_ini(text: str, source: str = "<string>") -> IniDocument:
    parser = configparser.ConfigParser(interpolation=None, strict=False)
    try:
        parser.read_string(text, source=source)
    except configparser.Error as exc:
        raise IniReadError(f"Failed to parse {source}: {exc}") from exc

    return IniDocument(
        [IniSection(name=name, entries=dict(parser.items(name))) for name in parser.sections()]
    )


def read_ini(path: str | Path) -> IniDocument:
    """Read *path* into an :class:`IniDocument`.

    A missing file reads as an empty document.
    """
    path = Path(path)
    if not path.is_file():
        logger.info("Configuration file %s not found", path)
        return IniDocument()
    text = path.read_text(encoding="utf-8-sig")
    return parse_ini(text, source=str(path))
