# ツール呼び出しブリッジ
"""
自動クライアント向けのツール呼び出しインターフェース
"""

from aware.tools.catalog_tools import (
    ADD_AGENT_TOOL,
    CATALOG_TOOLS,
    GET_AGENT_TOOL,
    LIST_AGENTS_TOOL,
    create_catalog_tool_executor,
)
from aware.tools.tool_executor import (
    Tool,
    ToolExecutionError,
    ToolExecutionResult,
    ToolExecutor,
    ToolHandler,
)

__all__ = [
    "ADD_AGENT_TOOL",
    "CATALOG_TOOLS",
    "GET_AGENT_TOOL",
    "LIST_AGENTS_TOOL",
    "Tool",
    "ToolExecutionError",
    "ToolExecutionResult",
    "ToolExecutor",
    "ToolHandler",
    "create_catalog_tool_executor",
]
