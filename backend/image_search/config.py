from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    search_registries: Optional[list[str]] = Field(default=None, alias="SEARCH_REGISTRIES")
    registries_conf: str = Field(
        default="/etc/containers/registries.conf", alias="REGISTRIES_CONF"
    )
    registries_conf_dir: str = Field(
        default="/etc/containers/registries.conf.d", alias="REGISTRIES_CONF_DIR"
    )
    auth_file: Optional[str] = Field(default=None, alias="REGISTRY_AUTH_FILE")
    insecure_skip_tls_verify: Optional[bool] = Field(
        default=None, alias="REGISTRY_INSECURE_SKIP_TLS_VERIFY"
    )  # None keeps the registry client's own default
    search_max_parallel: int = Field(default=6, gt=0, alias="SEARCH_MAX_PARALLEL")
    search_max_queries: int = Field(default=25, gt=0, alias="SEARCH_MAX_QUERIES")
    search_trunc_length: int = Field(default=44, ge=0, alias="SEARCH_TRUNC_LENGTH")
    search_timeout: Optional[float] = Field(default=None, alias="SEARCH_TIMEOUT")
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        populate_by_name = True
        extra = "ignore"  # ignore unrelated env vars to avoid validation errors


@lru_cache
def get_settings() -> Settings:
    return Settings()
