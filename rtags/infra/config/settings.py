from functools import cached_property
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from rtags.infra.config.groups import IndexConfig, StoreConfig


class Settings(BaseSettings):
    """
    rtags Settings

    Environment variables should use RTAGS_ prefix.
    Example: RTAGS_REDIS_HOST, RTAGS_REMOVE_MAX_RETRIES

    그룹화된 설정 접근:
        settings.store   # StoreConfig
        settings.index   # IndexConfig
    """

    # `.env` may be present but unreadable; fall back to process env vars.
    _dotenv_path = Path(".env")
    _env_file = ".env" if _dotenv_path.is_file() else None
    try:
        if _env_file is not None:
            _dotenv_path.open("r", encoding="utf-8").close()
    except OSError:
        _env_file = None

    model_config = SettingsConfigDict(
        env_file=_env_file,
        env_file_encoding="utf-8",
        env_prefix="RTAGS_",
        extra="ignore",
    )

    @cached_property
    def store(self) -> StoreConfig:
        """Redis 설정 그룹."""
        return StoreConfig(
            host=self.redis_host,
            port=self.redis_port,
            db=self.redis_db,
            password=self.redis_password,
            socket_timeout=self.redis_socket_timeout,
        )

    @cached_property
    def index(self) -> IndexConfig:
        """Tag index 설정 그룹."""
        return IndexConfig(
            guarded_remove=self.guarded_remove,
            remove_max_retries=self.remove_max_retries,
        )

    # ========================================================================
    # Redis
    # ========================================================================
    redis_host: str = "localhost"
    redis_port: int = Field(default=6379, ge=1, le=65535)
    redis_db: int = Field(default=0, ge=0, le=15)
    redis_password: str | None = None
    redis_socket_timeout: float | None = None

    # ========================================================================
    # Tag index
    # ========================================================================
    guarded_remove: bool = True
    remove_max_retries: int = Field(default=3, ge=0, le=100)


settings = Settings()
