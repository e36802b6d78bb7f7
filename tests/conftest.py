# テスト共通フィクスチャ
"""
カタログテスト用の共通フィクスチャ

- 環境変数による設定上書きを各テストで無効化する
- tmp_path 上のファイルストアとカタログサービスを提供する
"""

import json
from pathlib import Path

import pytest

from aware.catalog.service import CatalogService
from aware.store.json_file_store import JsonFileAgentStore

_CONFIG_ENV_VARS = [
    "AWARE_STORE_BACKEND",
    "AWARE_AGENTS_FILE",
    "AWARE_LOCK_TIMEOUT",
    "AWARE_TOLERATE_CORRUPT_BOOTSTRAP",
    "DATABASE_URL",
]


@pytest.fixture(autouse=True)
def clean_config_env(monkeypatch):
    """設定用の環境変数をクリア"""
    for name in _CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def agents_path(tmp_path) -> Path:
    """エージェントファイルのパス（未作成）"""
    return tmp_path / "agents.json"


@pytest.fixture
def file_store(agents_path) -> JsonFileAgentStore:
    """tmp_path 上のファイルストア"""
    return JsonFileAgentStore(agents_path, lock_timeout=5.0)


@pytest.fixture
def file_service(file_store) -> CatalogService:
    """ファイルストアを使うカタログサービス"""
    return CatalogService(file_store)


SAMPLE_AGENTS = [
    {
        "id": "1",
        "name": "Web Researcher",
        "description": "Searches the web and summarizes findings",
        "tags": ["Search", "web"],
    },
    {
        "id": "2",
        "name": "Code Reviewer",
        "description": "Reviews pull requests for style issues",
        "tags": ["code", "review"],
    },
    {
        "id": "3",
        "name": "Travel Planner",
        "description": "Books flights and searches hotels",
        "tags": ["travel", "SEARCH"],
    },
]


@pytest.fixture
def seeded_path(agents_path) -> Path:
    """SAMPLE_AGENTS を書き込んだエージェントファイル"""
    agents_path.write_text(json.dumps(SAMPLE_AGENTS, indent=2), encoding="utf-8")
    return agents_path


@pytest.fixture
def seeded_service(seeded_path) -> CatalogService:
    """SAMPLE_AGENTS 登録済みのカタログサービス"""
    return CatalogService(JsonFileAgentStore(seeded_path, lock_timeout=5.0))
