"""
設定からストアとカタログサービスを組み立てる
"""

import logging
from typing import Optional

from aware.catalog.service import CatalogService
from aware.config.catalog_config import CatalogConfig
from aware.db.connection import DatabaseConnection
from aware.store.base import AgentStore
from aware.store.json_file_store import JsonFileAgentStore
from aware.store.postgres_store import PostgresAgentStore

logger = logging.getLogger(__name__)


def build_store(config: CatalogConfig) -> AgentStore:
    """設定に従ってストアを生成

    Raises:
        ValueError: 設定が不正な場合
    """
    config.validate()

    if config.store_backend == "postgres":
        db = DatabaseConnection(
            database_url=config.database_url,
            min_connections=config.min_connections,
            max_connections=config.max_connections,
            connect_timeout=config.connect_timeout,
            statement_timeout_ms=config.statement_timeout_ms,
        )
        logger.info("ストア初期化: backend=postgres")
        return PostgresAgentStore(db)

    logger.info(f"ストア初期化: backend=file, path={config.agents_file}")
    return JsonFileAgentStore(
        config.agents_file,
        lock_timeout=config.lock_timeout,
        tolerate_corrupt_bootstrap=config.tolerate_corrupt_bootstrap,
    )


def build_catalog_service(config: Optional[CatalogConfig] = None) -> CatalogService:
    """設定に従ってカタログサービスを生成"""
    return CatalogService(build_store(config or CatalogConfig()))
