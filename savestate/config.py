from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, PositiveInt
from pydantic_settings import BaseSettings, SettingsConfigDict

from .paths import default_save_dir


class Settings(BaseSettings):
    """Runtime configuration for the save store.

    Values are loaded from ``SAVESTATE_*`` environment variables by default
    and may be overridden by the host or by CLI flags.
    """

    # Location
    save_dir: Path = Field(default_factory=default_save_dir)
    save_file_name: str = "SaveGame.sav"

    # Encoding
    # Obscuring is XOR masking only; it does not protect the data.
    obscure_save: bool = True

    # Schema generation stamped into every save. Compared on load, never migrated.
    format_version: PositiveInt = 1

    # What start() does with a file that fails to decode.
    on_corrupt: Literal["raise", "reset"] = "raise"

    # pydantic-settings v2 configuration
    model_config = SettingsConfigDict(
        env_prefix="SAVESTATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @property
    def save_path(self) -> Path:
        return self.save_dir / self.save_file_name


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
