# カタログ設定
"""
エージェントカタログの設定モジュール

環境変数:
    AWARE_STORE_BACKEND: "file" または "postgres"（デフォルト: file）
    AWARE_AGENTS_FILE: ファイルストアの保存先（デフォルト: agents.json）
    AWARE_LOCK_TIMEOUT: ファイルロック取得のタイムアウト秒数
    AWARE_TOLERATE_CORRUPT_BOOTSTRAP: "true" で初回読み込み時の壊れたファイルを空として扱う
    DATABASE_URL: PostgreSQL接続文字列（postgres バックエンドで必須）
"""

import os
from dataclasses import dataclass, field
from typing import Optional

VALID_BACKENDS = {"file", "postgres"}


@dataclass
class CatalogConfig:
    """カタログ設定

    使用例:
        config = CatalogConfig()  # 環境変数から自動取得
        config = CatalogConfig(store_backend="postgres", database_url="postgresql://...")
        config.validate()
    """

    store_backend: str = "file"
    """ストアバックエンド（file / postgres）"""

    agents_file: str = "agents.json"
    """ファイルストアの保存先"""

    lock_timeout: float = 10.0
    """ファイルロック取得のタイムアウト（秒）"""

    tolerate_corrupt_bootstrap: bool = False
    """初回読み込み時の壊れたファイルを空のコレクションとして扱うか"""

    database_url: Optional[str] = field(default=None, repr=False)
    """PostgreSQL接続文字列（repr=Falseでログ出力時に非表示）"""

    min_connections: int = 1
    """プール内の最小接続数"""

    max_connections: int = 10
    """プール内の最大接続数"""

    connect_timeout: int = 5
    """接続確立のタイムアウト（秒）"""

    statement_timeout_ms: int = 5000
    """1文あたりの実行タイムアウト（ミリ秒）"""

    def __post_init__(self) -> None:
        """初期化後の処理: 環境変数から設定を取得"""
        env_backend = os.getenv("AWARE_STORE_BACKEND")
        if env_backend:
            self.store_backend = env_backend.strip().lower()

        env_file = os.getenv("AWARE_AGENTS_FILE")
        if env_file:
            self.agents_file = env_file

        env_timeout = os.getenv("AWARE_LOCK_TIMEOUT")
        if env_timeout:
            try:
                self.lock_timeout = float(env_timeout)
            except ValueError:
                raise ValueError(
                    f"AWARE_LOCK_TIMEOUT は数値である必要があります: {env_timeout}"
                ) from None

        if os.getenv("AWARE_TOLERATE_CORRUPT_BOOTSTRAP") == "true":
            self.tolerate_corrupt_bootstrap = True

        if self.database_url is None:
            self.database_url = os.getenv("DATABASE_URL")

    def validate(self) -> None:
        """設定値を検証

        Raises:
            ValueError: 必須設定が欠けている場合、または値が無効な場合
        """
        if self.store_backend not in VALID_BACKENDS:
            raise ValueError(
                f"store_backend は file/postgres のいずれかです: {self.store_backend}"
            )

        if self.store_backend == "file" and not self.agents_file:
            raise ValueError("agents_file が設定されていません")

        if self.store_backend == "postgres" and not self.database_url:
            raise ValueError(
                "DATABASE_URL が設定されていません。"
                "DATABASE_URL 環境変数を設定するか、database_url 引数を指定してください。"
            )

        if self.lock_timeout <= 0:
            raise ValueError(f"lock_timeout は正の数である必要があります: {self.lock_timeout}")

        if self.min_connections < 1 or self.max_connections < self.min_connections:
            raise ValueError(
                "接続数の設定が不正です: "
                f"min_connections={self.min_connections}, max_connections={self.max_connections}"
            )

        if self.connect_timeout <= 0:
            raise ValueError(f"connect_timeout は正の整数である必要があります: {self.connect_timeout}")

        if self.statement_timeout_ms < 0:
            raise ValueError(
                f"statement_timeout_ms は非負の整数である必要があります: {self.statement_timeout_ms}"
            )
