"""Catalog Configuration.

- 저장소 백엔드 선택: CATALOG_BACKEND ("cassandra" | "mongo")
- 비밀번호/API Key → SecretStr (로깅 마스킹)
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Catalog 설정."""

    # Environment
    environment: str = "local"

    backend: str = Field(
        "cassandra",
        description="저장소 백엔드 (cassandra | mongo)",
    )

    # Cassandra
    cassandra_contact_points: list[str] = ["localhost"]
    cassandra_port: int = 9042
    cassandra_keyspace: str = "catalog"
    cassandra_username: str | None = None
    cassandra_password: SecretStr | None = None

    # MongoDB
    mongo_url: str = "mongodb://localhost:27017"
    mongo_database: str = "catalog"

    # YouTube Data API
    youtube_api_key: SecretStr | None = None
    youtube_api_timeout: float = 10.0

    # Redis (설정 시 카테고리 갱신 분산 락 사용)
    redis_url: str | None = None
    category_lock_ttl: int = Field(30, ge=1, description="갱신 락 TTL (초)")
    category_lock_wait: float = Field(0.5, ge=0, description="락 경합 시 대기 (초)")

    # 페이지네이션
    default_limit: int = Field(10, ge=1)
    max_limit: int = Field(50, ge=1)

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="CATALOG_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """설정 싱글톤."""
    return Settings()
