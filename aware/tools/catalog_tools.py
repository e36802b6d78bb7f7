# カタログ操作ツール
"""
カタログ操作ツール: list-agents, add-agent, get-agent

自動クライアントから CatalogService を呼び出すためのツール定義とハンドラー。
結果はインデント2のJSON文字列で返す。
"""

import json
import logging
from typing import Any, Dict

from aware.catalog.service import CatalogService
from aware.errors import ValidationError
from aware.tools.tool_executor import Tool, ToolExecutor, ToolHandler

logger = logging.getLogger(__name__)


LIST_AGENTS_TOOL = Tool(
    name="list-agents",
    description=(
        "登録済みエージェントを一覧する。query は name/description の部分一致、"
        "tags はカンマ区切りで、指定したタグをすべて持つエージェントのみ返す。"
    ),
    input_schema={
        "type": "object",
        "properties": {
            "query": {
                "type": "string",
                "description": "検索クエリ（大文字小文字を区別しない部分一致）"
            },
            "tags": {
                "type": "string",
                "description": "タグ（カンマ区切り、AND条件）"
            }
        },
        "required": []
    }
)

ADD_AGENT_TOOL = Tool(
    name="add-agent",
    description="エージェントを新規登録する。IDは自動で採番される。",
    input_schema={
        "type": "object",
        "properties": {
            "name": {
                "type": "string",
                "description": "エージェント名"
            },
            "description": {
                "type": "string",
                "description": "エージェントの説明"
            },
            "tags": {
                "type": "array",
                "items": {"type": "string"},
                "description": "タグのリスト"
            }
        },
        "required": ["name", "description", "tags"]
    }
)

GET_AGENT_TOOL = Tool(
    name="get-agent",
    description="IDを指定してエージェントを1件取得する。",
    input_schema={
        "type": "object",
        "properties": {
            "id": {
                "type": ["string", "integer"],
                "description": "エージェントID"
            }
        },
        "required": ["id"]
    }
)

CATALOG_TOOLS = [
    LIST_AGENTS_TOOL,
    ADD_AGENT_TOOL,
    GET_AGENT_TOOL,
]


def _optional_str(input_data: Dict[str, Any], key: str):
    value = input_data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{key} must be a string", field=key)
    return value


def _to_json(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2)


def create_list_agents_handler(service: CatalogService) -> ToolHandler:
    """list-agents ツールのハンドラーを生成"""
    def handler(input_data: Dict[str, Any]) -> str:
        query = _optional_str(input_data, "query")
        tags = _optional_str(input_data, "tags")
        agents = service.search(query=query, tags=tags)
        return _to_json([agent.to_dict() for agent in agents])

    return handler


def create_add_agent_handler(service: CatalogService) -> ToolHandler:
    """add-agent ツールのハンドラーを生成"""
    def handler(input_data: Dict[str, Any]) -> str:
        created = service.create(input_data)
        return _to_json(created.to_dict())

    return handler


def create_get_agent_handler(service: CatalogService) -> ToolHandler:
    """get-agent ツールのハンドラーを生成"""
    def handler(input_data: Dict[str, Any]) -> str:
        if "id" not in input_data:
            raise ValidationError("id is required", field="id")
        agent = service.get_by_id(input_data["id"])
        return _to_json(agent.to_dict())

    return handler


def create_catalog_tool_executor(service: CatalogService) -> ToolExecutor:
    """カタログ操作ツールが登録済みの ToolExecutor を生成"""
    executor = ToolExecutor()
    executor.register_tool(LIST_AGENTS_TOOL, create_list_agents_handler(service))
    executor.register_tool(ADD_AGENT_TOOL, create_add_agent_handler(service))
    executor.register_tool(GET_AGENT_TOOL, create_get_agent_handler(service))

    logger.info(f"カタログツール登録完了: {executor.list_tools()}")
    return executor
