# 永続化ストアの抽象インターフェース
"""
永続化ストア基底モジュール

CatalogService はこのインターフェースにのみ依存し、
具体的なバックエンド（JSONファイル / PostgreSQL）を知らない。

ID採番の責務はバックエンドによって異なる:
- assigns_ids=False: CatalogService が allocate_id を渡し、ストアはロック内で呼び出す
- assigns_ids=True: ストアが挿入時に採番する（allocate_id は受け付けない）
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional

from aware.models.agent import AgentId, AgentRecord

# 既存レコード一覧から次のIDを返す関数
IdAllocator = Callable[[List[AgentRecord]], AgentId]


class AgentStore(ABC):
    """エージェントストアの抽象基底クラス

    Attributes:
        backend_name: ログ・エラー表示用のバックエンド名
        assigns_ids: バックエンド自身がIDを採番するかどうか
    """

    backend_name: str = "abstract"
    assigns_ids: bool = False

    @abstractmethod
    def list_all(self) -> List[AgentRecord]:
        """全レコードを取得

        書き込みがなければ、繰り返し呼び出しても順序は変わらない。

        Raises:
            StoreUnavailable: I/O・バックエンド障害
        """

    @abstractmethod
    def create(
        self,
        record: AgentRecord,
        allocate_id: Optional[IdAllocator] = None,
    ) -> AgentRecord:
        """レコードを1件保存し、ID付きで返す

        Args:
            record: id=None のレコード
            allocate_id: 採番関数（assigns_ids=False のストアでのみ使用）

        Raises:
            StoreUnavailable: I/O・バックエンド障害
        """

    @abstractmethod
    def parse_id(self, raw_id: Any) -> AgentId:
        """アダプターから渡されたIDをバックエンドのID型に変換

        Raises:
            InvalidIdentifier: 変換できない場合
        """

    def get(self, agent_id: AgentId) -> Optional[AgentRecord]:
        """IDでレコードを取得（デフォルトは全件走査）

        Args:
            agent_id: parse_id 済みのID

        Returns:
            AgentRecord、見つからない場合は None
        """
        for record in self.list_all():
            if record.id == agent_id:
                return record
        return None
