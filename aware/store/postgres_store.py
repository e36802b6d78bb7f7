# PostgreSQLストア
# agents テーブルに対する挿入・全件取得・ID検索を提供
"""
PostgreSQLストアモジュール

IDはバックエンドが挿入時に採番する（BIGSERIAL）。採番はシーケンスにより原子的なので、
同時に create されてもIDは重複しない。

設計方針:
- エラー変換: psycopg2.Error はすべて StoreUnavailable として送出（元の例外を連鎖）
- トランザクション: 単一操作の原子性は DatabaseConnection のコンテキストマネージャーで保証
- 順序: list_all は id 昇順（挿入順）で安定
"""

import logging
from typing import Any, List, Optional

import psycopg2

from aware.db.connection import DatabaseConnection
from aware.errors import InvalidIdentifier, StoreUnavailable
from aware.models.agent import AgentId, AgentRecord
from aware.store.base import AgentStore, IdAllocator

logger = logging.getLogger(__name__)

# BIGINT の上限
_MAX_ID = 2 ** 63 - 1


class PostgresAgentStore(AgentStore):
    """PostgreSQL上のエージェントストア

    使用例:
        db = DatabaseConnection()
        store = PostgresAgentStore(db)
        store.ensure_schema()
        service = CatalogService(store)

    Attributes:
        db: DatabaseConnection インスタンス
    """

    backend_name = "postgres"
    assigns_ids = True

    # SQL定義（可読性のために定数として定義）
    _COLUMNS = "id, name, description, tags"

    _CREATE_TABLE_SQL = """
        CREATE TABLE IF NOT EXISTS agents (
            id BIGSERIAL PRIMARY KEY,
            name TEXT NOT NULL CHECK (name <> ''),
            description TEXT NOT NULL DEFAULT '',
            tags TEXT[] NOT NULL DEFAULT '{}'
        )
    """

    _INSERT_SQL = """
        INSERT INTO agents (name, description, tags)
        VALUES (%s, %s, %s)
        RETURNING {columns}
    """.format(columns=_COLUMNS)

    _SELECT_ALL_SQL = """
        SELECT {columns}
        FROM agents
        ORDER BY id
    """.format(columns=_COLUMNS)

    _SELECT_BY_ID_SQL = """
        SELECT {columns}
        FROM agents
        WHERE id = %s
    """.format(columns=_COLUMNS)

    def __init__(self, db: DatabaseConnection):
        self.db = db

    def ensure_schema(self) -> None:
        """agents テーブルが無ければ作成"""
        try:
            with self.db.get_cursor() as cur:
                cur.execute(self._CREATE_TABLE_SQL)
        except psycopg2.Error as e:
            raise self._unavailable("failed to create agents table", e) from e

    def list_all(self) -> List[AgentRecord]:
        try:
            with self.db.get_cursor() as cur:
                cur.execute(self._SELECT_ALL_SQL)
                rows = cur.fetchall()
        except psycopg2.Error as e:
            raise self._unavailable("failed to list agents", e) from e
        return [AgentRecord.from_row(row) for row in rows]

    def create(
        self,
        record: AgentRecord,
        allocate_id: Optional[IdAllocator] = None,
    ) -> AgentRecord:
        """レコードを挿入し、採番されたID付きで返す

        Raises:
            ValueError: allocate_id が指定された場合（IDはバックエンドが採番する）
            StoreUnavailable: DB障害
        """
        if allocate_id is not None:
            raise ValueError("PostgresAgentStore assigns ids itself")

        try:
            with self.db.get_cursor() as cur:
                cur.execute(
                    self._INSERT_SQL,
                    (record.name, record.description, list(record.tags)),
                )
                row = cur.fetchone()
        except psycopg2.Error as e:
            raise self._unavailable("failed to insert agent", e) from e

        if row is None:
            raise StoreUnavailable(
                "insert returned no row", backend=self.backend_name
            )

        created = AgentRecord.from_row(row)
        logger.info(f"エージェント作成: id={created.id}, name={created.name!r}")
        return created

    def get(self, agent_id: AgentId) -> Optional[AgentRecord]:
        try:
            with self.db.get_cursor() as cur:
                cur.execute(self._SELECT_BY_ID_SQL, (agent_id,))
                row = cur.fetchone()
        except psycopg2.Error as e:
            raise self._unavailable(f"failed to fetch agent {agent_id}", e) from e
        if row is None:
            return None
        return AgentRecord.from_row(row)

    def parse_id(self, raw_id: Any) -> AgentId:
        if isinstance(raw_id, bool):
            raise InvalidIdentifier(raw_id, expected="integer")
        if isinstance(raw_id, int):
            value = raw_id
        elif isinstance(raw_id, str) and raw_id.strip().isascii() and raw_id.strip().isdigit():
            value = int(raw_id.strip())
        else:
            raise InvalidIdentifier(raw_id, expected="integer")

        if value < 0 or value > _MAX_ID:
            raise InvalidIdentifier(raw_id, expected="non-negative integer in BIGINT range")
        return value

    def _unavailable(self, message: str, error: Exception) -> StoreUnavailable:
        logger.error(f"PostgreSQL操作失敗: {message}, error={error}")
        return StoreUnavailable(message, backend=self.backend_name)
