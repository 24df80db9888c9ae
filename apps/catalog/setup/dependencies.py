"""Dependency Injection.

드라이버 클라이언트, 저장소 백엔드, 카테고리 Command, CatalogService 싱글톤 팩토리.
CATALOG_BACKEND 설정으로 Cassandra/MongoDB 중 하나를 선택.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager

import httpx
from cassandra.cluster import Cluster, Session
from cassandra.query import dict_factory
from pymongo import AsyncMongoClient
from redis.asyncio import Redis

from catalog.application.commands import ResolveCategoriesCommand
from catalog.application.exceptions import UnsupportedBackendError
from catalog.application.ports import (
    CatalogBackendPort,
    CategorySourcePort,
    CategoryStorePort,
    RefreshLockPort,
)
from catalog.application.services import CatalogService
from catalog.infrastructure.cache import RedisRefreshLock
from catalog.infrastructure.integrations import YoutubeCategoryClient
from catalog.infrastructure.persistence_cassandra import (
    CassandraCatalogBackend,
    CassandraCategoryStore,
    create_cluster,
)
from catalog.infrastructure.persistence_mongo import (
    MongoCatalogBackend,
    MongoCategoryStore,
)
from catalog.setup.config import get_settings
from catalog.setup.logging import setup_logging

SUPPORTED_BACKENDS = ["cassandra", "mongo"]

# 싱글톤
_cluster: Cluster | None = None
_session: Session | None = None
_mongo: AsyncMongoClient | None = None
_redis: Redis | None = None
_http_client: httpx.AsyncClient | None = None
_backend: CatalogBackendPort | None = None
_category_source: CategorySourcePort | None = None
_catalog_service: CatalogService | None = None


async def get_cassandra_session() -> Session:
    """Cassandra 세션 (싱글톤).

    connect()는 블로킹 호출이므로 스레드에서 실행.
    """
    global _cluster, _session
    if _session is None:
        settings = get_settings()
        _cluster = create_cluster(
            settings.cassandra_contact_points,
            port=settings.cassandra_port,
            username=settings.cassandra_username,
            password=(
                settings.cassandra_password.get_secret_value()
                if settings.cassandra_password
                else None
            ),
        )
        _session = await asyncio.to_thread(_cluster.connect, settings.cassandra_keyspace)
        _session.row_factory = dict_factory
    return _session


def get_mongo_client() -> AsyncMongoClient:
    """MongoDB client (싱글톤)."""
    global _mongo
    if _mongo is None:
        settings = get_settings()
        _mongo = AsyncMongoClient(settings.mongo_url)
    return _mongo


def get_redis() -> Redis | None:
    """Redis client (싱글톤). redis_url이 없으면 None."""
    global _redis
    settings = get_settings()
    if not settings.redis_url:
        return None
    if _redis is None:
        _redis = Redis.from_url(settings.redis_url, decode_responses=True)
    return _redis


def get_http_client() -> httpx.AsyncClient:
    """HTTP client (싱글톤)."""
    global _http_client
    if _http_client is None:
        settings = get_settings()
        _http_client = httpx.AsyncClient(timeout=settings.youtube_api_timeout)
    return _http_client


async def get_storage() -> tuple[CatalogBackendPort, CategoryStorePort]:
    """설정된 백엔드의 카탈로그 저장소와 카테고리 저장소.

    Raises:
        UnsupportedBackendError: 지원하지 않는 백엔드
    """
    settings = get_settings()
    backend = settings.backend.lower()

    if backend == "cassandra":
        session = await get_cassandra_session()
        return CassandraCatalogBackend(session), CassandraCategoryStore(session)
    if backend == "mongo":
        database = get_mongo_client()[settings.mongo_database]
        return MongoCatalogBackend(database), MongoCategoryStore(database)

    raise UnsupportedBackendError(settings.backend, SUPPORTED_BACKENDS)


async def get_catalog_service() -> CatalogService:
    """CatalogService (싱글톤)."""
    global _backend, _category_source, _catalog_service
    if _catalog_service is None:
        settings = get_settings()
        _backend, store = await get_storage()

        redis = get_redis()
        refresh_lock: RefreshLockPort | None = RedisRefreshLock(redis) if redis else None

        _category_source = YoutubeCategoryClient(
            api_key=(
                settings.youtube_api_key.get_secret_value()
                if settings.youtube_api_key
                else ""
            ),
            http_client=get_http_client(),
        )
        categories = ResolveCategoriesCommand(
            store=store,
            source=_category_source,
            refresh_lock=refresh_lock,
            lock_ttl=settings.category_lock_ttl,
            lock_wait=settings.category_lock_wait,
        )
        _catalog_service = CatalogService(
            backend=_backend,
            categories=categories,
            default_limit=settings.default_limit,
            max_limit=settings.max_limit,
        )
    return _catalog_service


async def cleanup() -> None:
    """리소스 정리."""
    global _cluster, _session, _mongo, _redis, _http_client
    global _backend, _category_source, _catalog_service

    _catalog_service = None

    # 어댑터 먼저 정리한 뒤 드라이버 클라이언트 종료
    if _backend:
        await _backend.close()
        _backend = None

    if _category_source:
        await _category_source.close()
        _category_source = None

    if _cluster:
        await asyncio.to_thread(_cluster.shutdown)
        _cluster = None
        _session = None

    if _mongo:
        await _mongo.close()
        _mongo = None

    if _redis:
        await _redis.aclose()
        _redis = None

    if _http_client:
        await _http_client.aclose()
        _http_client = None


@asynccontextmanager
async def lifespan_context():
    """애플리케이션 lifespan context manager.

    로깅 설정 후 CatalogService를 제공하고 종료 시 리소스 정리.
    """
    # Startup
    setup_logging(get_settings().log_level)
    yield await get_catalog_service()
    # Shutdown
    await cleanup()
