from pathlib import Path

import pytest

from multifolder_loader.config import Settings
from multifolder_loader.paths import PathContext


@pytest.fixture
def make_mod():
    def _make(
        base: Path,
        name: str,
        *,
        marker: bool = True,
        patchers: bool = False,
        plugins: bool = False,
    ) -> Path:
        mod_dir = base / name
        mod_dir.mkdir(parents=True, exist_ok=True)
        if marker:
            (mod_dir / "ModInfo.xml").write_text("<xml/>")
        if patchers:
            (mod_dir / "patchers").mkdir()
        if plugins:
            (mod_dir / "plugins").mkdir()
        return mod_dir

    return _make


@pytest.fixture
def path_context(tmp_path):
    return PathContext(variables={"USERDATAFOLDER": str(tmp_path / "userdata")}, root=tmp_path)


@pytest.fixture
def game_root(tmp_path):
    d = tmp_path / "game"
    d.mkdir()
    return d


@pytest.fixture
def loader_settings(game_root):
    return Settings(game_root=game_root)


@pytest.fixture
def write_config(game_root):
    def _write(text: str) -> Path:
        path = game_root / "doorstop_config.ini"
        path.write_text(text, encoding="utf-8")
        return path

    return _write
