# カタログサービス
# 検索・ID取得・作成を提供するステートレスなビジネスロジック層
"""
カタログサービスモジュール

アダプター（ツールブリッジ・CLI）はこのクラスの公開操作だけを呼び出す。

設計方針:
- キャッシュなし: すべての操作でストアを読み直す（他プロセスの書き込みも反映される）
- ID採番: ポリシーで切り替え（ファイルストアはカタログ側、PostgreSQLはストア側）
- エラー: ストア障害は StoreUnavailable のまま呼び出し元に伝播する
"""

import logging
from typing import Any, List, Mapping, Optional

from aware.catalog.filters import TagFilter, filter_agents
from aware.catalog.id_policy import IdPolicy, SequentialIdPolicy, StoreAssignedIdPolicy
from aware.errors import NotFound
from aware.models.agent import AgentRecord, validate_new_agent
from aware.store.base import AgentStore

logger = logging.getLogger(__name__)


def default_id_policy(store: AgentStore) -> IdPolicy:
    """ストアの性質に合った採番ポリシーを返す"""
    if store.assigns_ids:
        return StoreAssignedIdPolicy()
    return SequentialIdPolicy()


class CatalogService:
    """エージェントカタログサービス

    使用例:
        store = JsonFileAgentStore("agents.json")
        service = CatalogService(store)

        created = service.create({
            "name": "Web Researcher",
            "description": "Searches the web",
            "tags": ["Search", "web"],
        })
        service.search(query="research", tags="search,WEB")
        service.get_by_id(created.id)

    Attributes:
        store: 永続化ストア
        id_policy: ID採番ポリシー
    """

    def __init__(self, store: AgentStore, id_policy: Optional[IdPolicy] = None):
        """CatalogService を初期化

        Raises:
            ValueError: ポリシーとストアの採番方式が一致しない場合
        """
        policy = id_policy or default_id_policy(store)
        if policy.store_assigned != store.assigns_ids:
            raise ValueError(
                f"{type(policy).__name__} cannot be used with {type(store).__name__}"
            )
        self.store = store
        self.id_policy = policy

    def search(
        self,
        query: Optional[str] = None,
        tags: Optional[TagFilter] = None,
    ) -> List[AgentRecord]:
        """エージェントを検索

        Args:
            query: name / description に対する部分一致（大文字小文字無視）。
                   空白のみは指定なしと同じ
            tags: カンマ区切りのタグ、またはタグのリスト。すべてを持つものだけ残す

        Returns:
            条件に一致する AgentRecord のリスト（ストアの順序を保持）

        Raises:
            StoreUnavailable: ストア障害
        """
        records = self.store.list_all()
        result = filter_agents(records, query=query, tags=tags)
        logger.debug(
            f"検索: query={query!r}, tags={tags!r}, total={len(records)}, matched={len(result)}"
        )
        return result

    def get_by_id(self, agent_id: Any) -> AgentRecord:
        """IDでエージェントを取得

        Raises:
            InvalidIdentifier: IDがバックエンドの形式でない場合
            NotFound: 該当するエージェントが存在しない場合
            StoreUnavailable: ストア障害
        """
        parsed = self.store.parse_id(agent_id)
        record = self.store.get(parsed)
        if record is None:
            raise NotFound(agent_id)
        return record

    def create(self, data: Mapping[str, Any]) -> AgentRecord:
        """エージェントを作成

        Args:
            data: name / description / tags を含むマッピング（id は指定不可）

        Returns:
            IDが付与された AgentRecord

        Raises:
            ValidationError: 入力が不正な場合
            StoreUnavailable: ストア障害
        """
        record = validate_new_agent(data)
        return self.store.create(record, allocate_id=self.id_policy.allocator())
