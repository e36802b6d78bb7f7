# ID採番ポリシー
"""
ID採番ポリシーモジュール

バックエンドによって採番の責務が異なるため、CatalogService は
ポリシーオブジェクトを介して採番する。1つのデプロイで2種類のIDを混在させない。

- SequentialIdPolicy: 既存IDの最大値 + 1 を10進文字列で返す（ファイルストア用）
- StoreAssignedIdPolicy: 採番をストアに委譲する（PostgreSQLストア用）
"""

import re
from typing import List, Optional

from aware.models.agent import AgentRecord
from aware.store.base import IdAllocator

_NUMERIC_ID = re.compile(r"^-?[0-9]+$")


class IdPolicy:
    """採番ポリシーの基底クラス

    Attributes:
        store_assigned: ストアが採番する場合 True
    """

    store_assigned: bool = False

    def allocator(self) -> Optional[IdAllocator]:
        """ストアの create に渡す採番関数（委譲する場合は None）"""
        raise NotImplementedError


class SequentialIdPolicy(IdPolicy):
    """既存IDの最大値 + 1 で採番するポリシー

    数値として解釈できないIDは最大値の計算から除外する（エラーにしない）。
    コレクションが空の場合は "1"。

    削除操作を追加した場合でも、最大値より小さい欠番は再利用されないが、
    最大IDのレコードを削除すると同じIDが再び採番される点に注意。
    """

    store_assigned = False

    def allocator(self) -> IdAllocator:
        return self.next_id

    def next_id(self, records: List[AgentRecord]) -> str:
        max_id = 0
        for record in records:
            value = _numeric(record.id)
            if value is not None and value > max_id:
                max_id = value
        return str(max_id + 1)


class StoreAssignedIdPolicy(IdPolicy):
    """ストアに採番を委譲するポリシー"""

    store_assigned = True

    def allocator(self) -> None:
        return None


def _numeric(value) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    # parse_id と同じ ASCII 10進数のみ（"1_000" や全角数字は除外）
    text = str(value).strip()
    if not _NUMERIC_ID.match(text):
        return None
    return int(text)
