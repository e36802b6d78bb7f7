# カタログサービス
"""
エージェントカタログのビジネスロジック（検索・取得・作成、ID採番）
"""

from aware.catalog.filters import filter_agents, parse_tag_filter
from aware.catalog.id_policy import IdPolicy, SequentialIdPolicy, StoreAssignedIdPolicy
from aware.catalog.service import CatalogService, default_id_policy
from aware.catalog.factory import build_catalog_service, build_store

__all__ = [
    "CatalogService",
    "IdPolicy",
    "SequentialIdPolicy",
    "StoreAssignedIdPolicy",
    "build_catalog_service",
    "build_store",
    "default_id_policy",
    "filter_agents",
    "parse_tag_filter",
]
