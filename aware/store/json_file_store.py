# JSONファイルストア
# コレクション全体を1つのJSON配列として保存する
"""
JSONファイルストアモジュール

agents.json にエージェント一覧全体を保存する。作成のたびにファイル全体を書き直し、
list_all のたびにファイル全体を読み直す（メモリ上にキャッシュしない）。

設計方針:
- 書き込みの直列化: read-modify-write 全体を threading.Lock と FileLock で保護
  （同一プロセス内のスレッド、別プロセスの両方から同時に create されても
  IDの重複・書き込み消失が起きない）
- 原子的な置き換え: 一時ファイルに書いてから os.replace で差し替える
- ID採番: ストアは行わず、CatalogService から渡された採番関数をロック内で呼ぶ

起動時の扱い（意図的に限定した挙動）:
- まだ一度もファイルを観測していない状態でファイルが存在しない -> 空のコレクション
- 空ファイル -> 空のコレクション
- 壊れたファイル -> StoreUnavailable
  （tolerate_corrupt_bootstrap=True の場合のみ、初回読み込みに限り空として扱う）
- 一度観測したファイルが消えた -> StoreUnavailable
"""

import json
import logging
import os
import re
import tempfile
import threading
from pathlib import Path
from typing import Any, List, Optional, Union

from filelock import FileLock, Timeout

from aware.errors import InvalidIdentifier, StoreUnavailable
from aware.models.agent import AgentId, AgentRecord
from aware.store.base import AgentStore, IdAllocator

logger = logging.getLogger(__name__)

_DECIMAL_ID = re.compile(r"^[0-9]+$")


def encode_agents(records: List[AgentRecord]) -> str:
    """レコード一覧をファイル保存形式（インデント2のJSON配列）に変換"""
    payload = []
    for record in records:
        data = record.to_dict()
        data["id"] = str(record.id) if record.id is not None else None
        payload.append(data)
    return json.dumps(payload, ensure_ascii=False, indent=2)


def decode_agents(text: str) -> List[AgentRecord]:
    """ファイル保存形式の文字列をレコード一覧に変換

    空文字（空白のみ）は空のコレクションとして扱う。

    Raises:
        ValueError: JSONとして不正、またはルートが配列でない、要素が不正な場合
    """
    if not text.strip():
        return []

    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError("agents file root must be a JSON array")

    records = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise ValueError(f"agents[{index}] must be an object")
        if not isinstance(item.get("name"), str):
            raise ValueError(f"agents[{index}].name must be a string")
        description = item.get("description")
        if description is not None and not isinstance(description, str):
            raise ValueError(f"agents[{index}].description must be a string")
        agent_id = item.get("id")
        if agent_id is not None and (isinstance(agent_id, bool) or not isinstance(agent_id, (str, int))):
            raise ValueError(f"agents[{index}].id must be a string or integer")
        tags = item.get("tags") or []
        if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
            raise ValueError(f"agents[{index}].tags must be a list of strings")
        record = AgentRecord.from_dict(item)
        if record.id is not None:
            record.id = str(record.id)
        records.append(record)
    return records


def _canonical_id(value: Any) -> Optional[str]:
    """数値として解釈できるIDを正規形（先頭ゼロなし10進文字列）に変換"""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value) if value >= 0 else None
    if isinstance(value, str) and _DECIMAL_ID.match(value.strip()):
        return str(int(value.strip()))
    return None


class JsonFileAgentStore(AgentStore):
    """JSONファイルに保存するエージェントストア

    使用例:
        store = JsonFileAgentStore("agents.json")
        service = CatalogService(store)
        service.create({"name": "Researcher", "description": "", "tags": []})

    Attributes:
        path: 保存先ファイルパス
        lock_timeout: ファイルロック取得のタイムアウト（秒）
        tolerate_corrupt_bootstrap: 初回読み込み時の壊れたファイルを空として扱うか
    """

    backend_name = "file"
    assigns_ids = False

    def __init__(
        self,
        path: Union[str, Path],
        lock_timeout: float = 10.0,
        tolerate_corrupt_bootstrap: bool = False,
    ):
        self.path = Path(path)
        self.lock_timeout = lock_timeout
        self.tolerate_corrupt_bootstrap = tolerate_corrupt_bootstrap

        self._lock = threading.Lock()
        self._file_lock = FileLock(f"{self.path}.lock", timeout=lock_timeout)
        self._observed = False
        self._read_once = False

    def list_all(self) -> List[AgentRecord]:
        """ファイル全体を読み込んで全レコードを返す"""
        return self._read_records(strict=False)

    def create(
        self,
        record: AgentRecord,
        allocate_id: Optional[IdAllocator] = None,
    ) -> AgentRecord:
        """レコードを追加してファイル全体を書き直す

        Raises:
            ValueError: allocate_id が指定されていない場合
            StoreUnavailable: ロック取得タイムアウト、読み書き失敗
        """
        if allocate_id is None:
            raise ValueError("JsonFileAgentStore requires an id allocator")

        with self._lock:
            try:
                with self._file_lock:
                    # 書き込み時は壊れたファイルを上書きしない
                    records = self._read_records(strict=True)
                    created = record.with_id(str(allocate_id(records)))
                    records.append(created)
                    self._write_records(records)
            except Timeout as e:
                logger.error(f"ファイルロック取得タイムアウト: path={self.path}")
                raise StoreUnavailable(
                    f"timed out after {self.lock_timeout}s waiting for {self.path}.lock",
                    backend=self.backend_name,
                ) from e

        logger.info(f"エージェント作成: id={created.id}, name={created.name!r}")
        return created

    def parse_id(self, raw_id: Any) -> AgentId:
        canonical = _canonical_id(raw_id)
        if canonical is None:
            raise InvalidIdentifier(raw_id, expected="non-negative decimal string")
        return canonical

    def get(self, agent_id: AgentId) -> Optional[AgentRecord]:
        # "007" と "7" を同一視する
        for record in self.list_all():
            if _canonical_id(record.id) == agent_id:
                return record
        return None

    def _read_records(self, strict: bool) -> List[AgentRecord]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            if self._observed:
                logger.error(f"エージェントファイルが消失しました: path={self.path}")
                raise StoreUnavailable(
                    f"agents file {self.path} disappeared", backend=self.backend_name
                ) from e
            logger.info(f"エージェントファイルが未作成のため空として扱います: path={self.path}")
            self._read_once = True
            return []
        except OSError as e:
            logger.error(f"エージェントファイル読み込み失敗: path={self.path}, error={e}")
            raise StoreUnavailable(
                f"failed to read {self.path}", backend=self.backend_name
            ) from e

        first_read = not self._read_once
        self._read_once = True
        self._observed = True

        try:
            return decode_agents(text)
        except ValueError as e:
            if first_read and not strict and self.tolerate_corrupt_bootstrap:
                logger.warning(
                    f"壊れたエージェントファイルを空として扱います（初回読み込み）: "
                    f"path={self.path}, error={e}"
                )
                return []
            logger.error(f"エージェントファイルが壊れています: path={self.path}, error={e}")
            raise StoreUnavailable(
                f"agents file {self.path} is corrupt", backend=self.backend_name
            ) from e

    def _write_records(self, records: List[AgentRecord]) -> None:
        content = encode_agents(records)
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=str(self.path.parent),
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(content)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            logger.error(f"エージェントファイル書き込み失敗: path={self.path}, error={e}")
            raise StoreUnavailable(
                f"failed to write {self.path}", backend=self.backend_name
            ) from e

        self._observed = True
