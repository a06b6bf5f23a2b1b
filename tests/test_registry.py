import pytest

from multifolder_loader.models import ModDescriptor
from multifolder_loader.registry import ModRegistry, RegistryFrozenError


def _mod(tmp_path, name, *, patches=False, plugins=False):
    mod_dir = tmp_path / name
    return ModDescriptor(
        mod_dir=mod_dir,
        patches_path=mod_dir / "patchers" if patches else None,
        plugins_path=mod_dir / "plugins" if plugins else None,
    )


class TestModRegistry:
    def test_starts_empty(self):
        registry = ModRegistry()
        assert len(registry) == 0
        assert list(registry.patch_paths()) == []

    def test_insertion_order(self, tmp_path):
        registry = ModRegistry()
        mods = [_mod(tmp_path, n) for n in ("c", "a", "b")]
        for m in mods:
            registry.add(m)
        assert registry.mods == tuple(mods)

    def test_duplicates_kept(self, tmp_path):
        registry = ModRegistry()
        registry.add(ModDescriptor(mod_dir=tmp_path / "A" / "Shared"))
        registry.add(ModDescriptor(mod_dir=tmp_path / "B" / "Shared"))
        assert [m.name for m in registry] == ["Shared", "Shared"]

    def test_paths_omit_absent(self, tmp_path):
        registry = ModRegistry()
        registry.add(_mod(tmp_path, "one", patches=True))
        registry.add(_mod(tmp_path, "two", plugins=True))
        registry.add(_mod(tmp_path, "three", patches=True, plugins=True))
        assert list(registry.patch_paths()) == [
            tmp_path / "one" / "patchers",
            tmp_path / "three" / "patchers",
        ]
        assert list(registry.plugin_paths()) == [
            tmp_path / "two" / "plugins",
            tmp_path / "three" / "plugins",
        ]

    def test_views_reflect_current_contents(self, tmp_path):
        registry = ModRegistry()
        registry.add(_mod(tmp_path, "one", plugins=True))
        assert len(list(registry.plugin_paths())) == 1
        registry.add(_mod(tmp_path, "two", plugins=True))
        assert len(list(registry.plugin_paths())) == 2

    def test_add_after_freeze_raises(self, tmp_path):
        registry = ModRegistry().freeze()
        assert registry.frozen
        with pytest.raises(RegistryFrozenError):
            registry.add(_mod(tmp_path, "late"))
        assert len(registry) == 0
