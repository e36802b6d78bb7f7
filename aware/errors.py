# カタログ共通の例外定義
"""
エージェントカタログの例外モジュール

アダプター（ツールブリッジ・CLI）はこの分類に従って
エラーを自分の表現（終了コード、構造化エラー等）に変換する。

- ValidationError: 作成時の入力が不足・不正
- NotFound: 指定IDのエージェントが存在しない
- InvalidIdentifier: IDがバックエンドの識別子型として解釈できない
- StoreUnavailable: ストアのI/O・バックエンド障害
"""

from typing import Any, Optional


class CatalogError(Exception):
    """カタログ操作のエラー基底クラス

    Attributes:
        message: エラーメッセージ
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CatalogError):
    """入力検証エラー

    Attributes:
        field: 問題のあったフィールド名（特定できる場合）
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field

    def __str__(self) -> str:
        if self.field:
            return f"{self.message} field={self.field}"
        return self.message


class NotFound(CatalogError):
    """エージェントが存在しない

    Attributes:
        agent_id: 検索したID
    """

    def __init__(self, agent_id: Any):
        super().__init__(f"Agent not found: {agent_id}")
        self.agent_id = agent_id


class InvalidIdentifier(CatalogError):
    """識別子の形式が不正

    Attributes:
        raw_id: 呼び出し元が渡した値
    """

    def __init__(self, raw_id: Any, expected: str = "decimal identifier"):
        super().__init__(f"Invalid agent id {raw_id!r}: expected {expected}")
        self.raw_id = raw_id


class StoreUnavailable(CatalogError):
    """ストア障害

    元の例外は __cause__ に連鎖される（raise ... from e）。

    Attributes:
        backend: 障害が発生したバックエンド名（"file" / "postgres"）
    """

    def __init__(self, message: str, backend: Optional[str] = None):
        super().__init__(message)
        self.backend = backend

    def __str__(self) -> str:
        parts = [self.message]
        if self.backend:
            parts.append(f"backend={self.backend}")
        if self.__cause__ is not None:
            parts.append(f"原因: {self.__cause__}")
        return " ".join(parts)
