from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RuntimeConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SHELF_", case_sensitive=False)

    editor: str = Field(
        default="vi",
        validation_alias=AliasChoices("SHELF_EDITOR", "EDITOR"),
    )
    log_level: str = "info"
    log_format: str = "json"
    log_dir: Path | None = None
    device_list_tool: str = "lsblk"
    mount_tool: str = "udisksctl"

    @field_validator("editor")
    @classmethod
    def _default_blank_editor(cls, value: str) -> str:
        return value.strip() or "vi"


@lru_cache
def get_runtime_config() -> RuntimeConfig:
    return RuntimeConfig()
