# 永続化ストア
"""
エージェントコレクションの永続化ストア

- AgentStore: CatalogService が依存する抽象インターフェース
- JsonFileAgentStore: 1ファイルにコレクション全体を保存（IDはカタログが採番）
- PostgresAgentStore: PostgreSQLに保存（IDはDBが採番）
"""

from aware.store.base import AgentStore, IdAllocator
from aware.store.json_file_store import JsonFileAgentStore, decode_agents, encode_agents
from aware.store.postgres_store import PostgresAgentStore

__all__ = [
    "AgentStore",
    "IdAllocator",
    "JsonFileAgentStore",
    "PostgresAgentStore",
    "decode_agents",
    "encode_agents",
]
