"""Entry point: resolve mod folders and print the result as JSON."""

import logging
import sys

from multifolder_loader.dependency_resolver import Resolver
from multifolder_loader.loader import MultiFolderLoader
from multifolder_loader.registry import ModRegistry
from multifolder_loader.schemas import LoaderReport, ModOut


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


class _RecordingHost:
    def __init__(self) -> None:
        self.resolver: Resolver | None = None

    def register_resolver(self, resolver: Resolver) -> None:
        self.resolver = resolver


def build_report(registry: ModRegistry, resolver_registered: bool = False) -> LoaderReport:
    return LoaderReport(
        mods=[
            ModOut(
                name=mod.name,
                mod_dir=str(mod.mod_dir),
                patches_path=str(mod.patches_path) if mod.patches_path is not None else None,
                plugins_path=str(mod.plugins_path) if mod.plugins_path is not None else None,
            )
            for mod in registry
        ],
        patch_paths=[str(p) for p in registry.patch_paths()],
        plugin_paths=[str(p) for p in registry.plugin_paths()],
        resolver_registered=resolver_registered,
    )


def main(argv: list[str] | None = None) -> None:
    _configure_logging()
    host = _RecordingHost()
    loader = MultiFolderLoader(host, argv=sys.argv[1:] if argv is None else argv)
    registry = loader.init()
    report = build_report(registry, resolver_registered=host.resolver is not None)
    print(report.model_dump_json(indent=2))


if __name__ == "__main__":
    main()
