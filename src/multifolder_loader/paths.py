"""Placeholder expansion and absolute path conversion.

Configuration values may reference ``%NAME%`` placeholders.  Instead of
writing into ``os.environ`` the values are looked up in an explicit
:class:`PathContext`, so resolution is deterministic for a given context.
"""

from __future__ import annotations

import os
import re
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

from multifolder_loader.constants import USER_DATA_FLAG, USER_DATA_VARIABLE

_PLACEHOLDER_RE = re.compile(r"%([^%\s]+)%")


@dataclass(frozen=True, slots=True)
class PathContext:
    variables: Mapping[str, str]
    root: Path

    def lookup(self, name: str) -> str | None:
        if name in self.variables:
            return self.variables[name]
        wanted = name.casefold()
        for key, value in self.variables.items():
            if key.casefold() == wanted:
                return value
        return None


def expand_placeholders(value: str, context: PathContext) -> str:
    """Replace ``%NAME%`` tokens; unknown names are left untouched."""

    def _sub(match: re.Match[str]) -> str:
        replacement = context.lookup(match.group(1))
        return match.group(0) if replacement is None else replacement

    return _PLACEHOLDER_RE.sub(_sub, value)


def to_absolute(value: str | Path, root: Path) -> Path:
    """Make *value* absolute against *root* without following symlinks."""
    return Path(os.path.normpath(root / Path(value)))


def resolve_path(value: str, context: PathContext) -> Path:
    return to_absolute(expand_placeholders(value, context), context.root)


def extract_user_data_folder(argv: Sequence[str]) -> str | None:
    """Return the value of the last ``-userDataFolder=`` argument, if any."""
    found: str | None = None
    for arg in argv:
        if arg.lower().startswith(USER_DATA_FLAG):
            found = arg[len(USER_DATA_FLAG):]
    return found


def default_app_data_dir(environ: Mapping[str, str]) -> Path:
    if sys.platform == "win32":
        if appdata := environ.get("APPDATA"):
            return Path(appdata)
        return Path.home() / "AppData" / "Roaming"
    if xdg := environ.get("XDG_CONFIG_HOME"):
        return Path(xdg)
    return Path.home() / ".config"


def build_path_context(
    root: Path,
    product_folder: str,
    argv: Sequence[str],
    environ: Mapping[str, str],
) -> PathContext:
    """Snapshot *environ* and settle ``USERDATAFOLDER``.

    Precedence: command-line override, then an existing non-empty
    environment value, then the platform application-data folder joined
    with *product_folder*.
    """
    variables = dict(environ)
    override = extract_user_data_folder(argv)
    if override:
        variables[USER_DATA_VARIABLE] = override
    elif not variables.get(USER_DATA_VARIABLE):
        variables[USER_DATA_VARIABLE] = str(default_app_data_dir(environ) / product_folder)
    return PathContext(variables=MappingProxyType(variables), root=Path(root))
