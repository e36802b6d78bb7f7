# カタログ操作ツールのテスト
# 対象: aware/tools/catalog_tools.py

import json

import pytest

from aware.tools.catalog_tools import (
    ADD_AGENT_TOOL,
    CATALOG_TOOLS,
    GET_AGENT_TOOL,
    LIST_AGENTS_TOOL,
    create_catalog_tool_executor,
)
from aware.tools.tool_executor import ToolExecutionError


@pytest.fixture
def executor(seeded_service):
    return create_catalog_tool_executor(seeded_service)


@pytest.fixture
def empty_executor(file_service):
    return create_catalog_tool_executor(file_service)


class TestToolDefinitions:
    """ツール定義のテスト"""

    def test_registered_tools(self, executor):
        assert executor.list_tools() == ["list-agents", "add-agent", "get-agent"]
        assert executor.get_tools_for_llm() == [tool.to_dict() for tool in CATALOG_TOOLS]

    def test_schemas(self):
        assert LIST_AGENTS_TOOL.input_schema["required"] == []
        assert ADD_AGENT_TOOL.input_schema["required"] == ["name", "description", "tags"]
        assert ADD_AGENT_TOOL.input_schema["properties"]["tags"]["type"] == "array"
        assert GET_AGENT_TOOL.input_schema["required"] == ["id"]


class TestListAgents:
    """list-agents のテスト"""

    def test_without_filters(self, executor):
        result = json.loads(executor.execute_tool("list-agents", {}))

        assert [a["id"] for a in result] == ["1", "2", "3"]

    def test_with_query_and_tags(self, executor):
        result = json.loads(
            executor.execute_tool("list-agents", {"query": "WEB", "tags": "search"})
        )

        assert [a["name"] for a in result] == ["Web Researcher"]

    def test_pretty_printed(self, executor):
        result = executor.execute_tool("list-agents", {"tags": "review"})

        assert result == json.dumps(json.loads(result), ensure_ascii=False, indent=2)

    def test_non_string_query(self, executor):
        with pytest.raises(ToolExecutionError) as exc_info:
            executor.execute_tool("list-agents", {"query": 5})

        assert exc_info.value.error_type == "ValidationError"


class TestAddAgent:
    """add-agent のテスト"""

    def test_creates_agent(self, empty_executor):
        created = json.loads(
            empty_executor.execute_tool(
                "add-agent",
                {"name": "Summarizer", "description": "Summarizes text", "tags": ["NLP"]},
            )
        )

        assert created == {
            "id": "1",
            "name": "Summarizer",
            "description": "Summarizes text",
            "tags": ["NLP"],
        }
        listed = json.loads(empty_executor.execute_tool("list-agents", {"tags": "nlp"}))
        assert listed == [created]

    def test_missing_tags(self, empty_executor):
        result = empty_executor.execute_tool_safe(
            "add-agent", {"name": "A", "description": ""}
        )

        assert result.success is False
        assert result.error_type == "ValidationError"

    def test_supplied_id_is_rejected(self, empty_executor):
        result = empty_executor.execute_tool_safe(
            "add-agent", {"id": "9", "name": "A", "description": "", "tags": []}
        )

        assert result.error_type == "ValidationError"


class TestGetAgent:
    """get-agent のテスト"""

    @pytest.mark.parametrize("agent_id", ["2", 2])
    def test_found(self, executor, agent_id):
        agent = json.loads(executor.execute_tool("get-agent", {"id": agent_id}))

        assert agent["name"] == "Code Reviewer"

    def test_not_found(self, executor):
        result = executor.execute_tool_safe("get-agent", {"id": "42"})

        assert result.error_type == "NotFound"

    def test_invalid_id(self, executor):
        result = executor.execute_tool_safe("get-agent", {"id": "two"})

        assert result.error_type == "InvalidIdentifier"

    def test_missing_id(self, executor):
        result = executor.execute_tool_safe("get-agent", {})

        assert result.error_type == "ValidationError"

    def test_store_failure(self, executor, seeded_path):
        seeded_path.write_text("{broken", encoding="utf-8")

        result = executor.execute_tool_safe("get-agent", {"id": "1"})

        assert result.error_type == "StoreUnavailable"
