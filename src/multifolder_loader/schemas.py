from pydantic import BaseModel


class ModOut(BaseModel):
    name: str
    mod_dir: str
    patches_path: str | None = None
    plugins_path: str | None = None


class LoaderReport(BaseModel):
    mods: list[ModOut] = []
    patch_paths: list[str] = []
    plugin_paths: list[str] = []
    resolver_registered: bool = False
