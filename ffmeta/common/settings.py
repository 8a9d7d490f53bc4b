# ffmeta/common/settings.py
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import AliasChoices, BaseModel, Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _to_bool(v: str | bool | int | None, default: bool = False) -> bool:
    if isinstance(v, bool):
        return v
    if v is None:
        return default
    s = str(v).strip().lower()
    return s in {"1", "true", "yes", "y", "on"}


class APIConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8080


class FFProbeConfig(BaseModel):
    timeout_sec: int = 60
    log_level: str = "error"  # quiet|panic|fatal|error|warning|info|verbose|debug|trace
    bin: str = "ffprobe"


class CacheConfig(BaseModel):
    enabled: bool = True
    backend: Literal["file", "db"] = "file"
    dir: Path = Path("/var/cache/ffmeta")

    @field_validator("enabled", mode="before")
    @classmethod
    def _boolify(cls, v):
        return _to_bool(v, default=True)


class DBConfig(BaseModel):
    # Only used by the "db" cache backend
    url: str = "sqlite:///./ffmeta-cache.db"
    echo: bool = False
    pool_size: int = 5
    max_overflow: int = 10
    pool_pre_ping: bool = True
    pool_recycle: int = 1800


class ConcurrencyConfig(BaseModel):
    process_workers: int = 4
    process_queue_maxsize: int = 64


class StoreConfig(BaseModel):
    timeout_sec: float = 30.0
    callback_timeout_sec: float = 10.0


class Settings(BaseSettings):
    # -------- App / Env --------
    app_name: str = "ffmeta"
    app_env: str = "development"  # development|test|staging|production
    log_level: str = "INFO"

    # -------- Existing-metadata keys read by the guards --------
    file_type_key: str = "fileType"
    content_hash_key: str = "cid_midhash256"

    # -------- Flat overrides (plain env names used by the container image) --------
    host_override: Optional[str] = Field(default=None, validation_alias=AliasChoices("HOST"))
    port_override: Optional[int] = Field(default=None, validation_alias=AliasChoices("PORT"))
    ffprobe_bin_override: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("FFPROBE_BIN", "FFPROBE_PATH")
    )
    cache_dir_override: Optional[Path] = Field(default=None, validation_alias=AliasChoices("CACHE_DIR"))
    cache_backend_override: Optional[Literal["file", "db"]] = Field(
        default=None, validation_alias=AliasChoices("CACHE_BACKEND")
    )
    database_url_override: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("DATABASE_URL")
    )

    # -------- Sub-configs --------
    api: APIConfig = APIConfig()
    ffprobe: FFProbeConfig = FFProbeConfig()
    cache: CacheConfig = CacheConfig()
    db: DBConfig = DBConfig()
    concurrency: ConcurrencyConfig = ConcurrencyConfig()
    store: StoreConfig = StoreConfig()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # ===== Effective values =====
    @computed_field  # type: ignore[misc]
    @property
    def listen_host(self) -> str:
        return self.host_override or self.api.host

    @computed_field  # type: ignore[misc]
    @property
    def listen_port(self) -> int:
        return self.port_override or self.api.port

    @computed_field  # type: ignore[misc]
    @property
    def ffprobe_bin(self) -> str:
        return self.ffprobe_bin_override or self.ffprobe.bin

    @computed_field  # type: ignore[misc]
    @property
    def cache_dir(self) -> Path:
        return Path(self.cache_dir_override) if self.cache_dir_override else self.cache.dir

    @computed_field  # type: ignore[misc]
    @property
    def cache_backend(self) -> str:
        return self.cache_backend_override or self.cache.backend

    @computed_field  # type: ignore[misc]
    @property
    def database_url(self) -> str:
        return self.database_url_override or self.db.url


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Global settings accessor (cached). Use this everywhere you need config:
        from ffmeta.common.settings import get_settings
        cfg = get_settings()
    """
    return Settings()  # pydantic_settings will read from .env automatically
