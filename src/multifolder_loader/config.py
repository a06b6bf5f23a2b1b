from pathlib import Path

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from multifolder_loader.constants import CONFIG_NAME, MARKER_FILE, PRODUCT_FOLDER


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="MFL_",
        extra="ignore",
    )

    game_root: Path = Path("")
    config_name: str = CONFIG_NAME
    product_folder: str = PRODUCT_FOLDER
    marker_file: str = MARKER_FILE

    @model_validator(mode="after")
    def _resolve_game_root(self) -> "Settings":
        if self.game_root == Path(""):
            self.game_root = Path.cwd()
        self.game_root = self.game_root.absolute()
        return self

    @property
    def config_path(self) -> Path:
        return self.game_root / self.config_name


settings = Settings()
