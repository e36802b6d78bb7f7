# ツール定義・実行フレームワーク
"""
ツール定義・実行モジュール

自動クライアント（LLMエージェント）がカタログを操作するためのツール定義と実行を管理する。
Claude API および MCP（Model Context Protocol）互換の形式を採用。

設計方針:
- API設計: Claude API互換のツール形式を提供
- エラー処理: カタログの例外は種別（error_type）を保ったまま ToolExecutionError に変換
- テスト容易性: ハンドラーを依存性注入で受け取り、モック差し替え可能

使用例:
    executor = ToolExecutor()
    executor.register_tool(tool, handler)
    result = executor.execute_tool("list-agents", {"tags": "search"})
    tools_for_llm = executor.get_tools_for_llm()
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from aware.errors import CatalogError

logger = logging.getLogger(__name__)


class ToolExecutionError(Exception):
    """ツール実行時のエラー

    ツールが存在しない、ハンドラーが失敗した場合などに発生。

    Attributes:
        message: エラーメッセージ
        tool_name: 対象のツール名（存在する場合）
        error_type: エラー種別（カタログ例外のクラス名、または "ToolNotFound" 等）
        original_error: 元の例外（あれば）
    """

    def __init__(
        self,
        message: str,
        tool_name: Optional[str] = None,
        error_type: str = "ToolError",
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.tool_name = tool_name
        self.error_type = error_type
        self.original_error = original_error

    def __str__(self) -> str:
        parts = [self.message]
        if self.tool_name:
            parts.append(f"tool={self.tool_name}")
        if self.original_error:
            parts.append(f"原因: {self.original_error}")
        return " ".join(parts)


@dataclass
class Tool:
    """ツール定義

    Attributes:
        name: ツール名（一意識別子）
        description: ツールの説明（LLMがツール選択時に参照）
        input_schema: 入力パラメータのJSON Schema形式定義
    """

    name: str
    description: str
    input_schema: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        """Claude API 形式の辞書に変換"""
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self.input_schema,
        }


@dataclass
class ToolExecutionResult:
    """ツール実行結果

    Attributes:
        tool_name: 実行されたツール名
        success: 実行が成功したかどうか
        result: 実行結果（文字列）
        error: エラーメッセージ（失敗時）
        error_type: エラー種別（失敗時）
    """

    tool_name: str
    success: bool
    result: str = ""
    error: Optional[str] = None
    error_type: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "tool_name": self.tool_name,
            "success": self.success,
            "result": self.result,
        }
        if self.error:
            data["error"] = self.error
            data["error_type"] = self.error_type
        return data


# ツールハンドラーの型定義
ToolHandler = Callable[[Dict[str, Any]], Any]


class ToolExecutor:
    """ツール実行管理クラス

    Attributes:
        _tools: 登録されたツール定義（name -> Tool）
        _handlers: ツールハンドラー（name -> Callable）
    """

    def __init__(self) -> None:
        self._tools: Dict[str, Tool] = {}
        self._handlers: Dict[str, ToolHandler] = {}

    def register_tool(self, tool: Tool, handler: ToolHandler) -> None:
        """ツールを登録

        同じ名前のツールが既に登録されている場合は上書きします。

        Raises:
            ValueError: ツール名が空の場合
        """
        if not tool.name or not tool.name.strip():
            raise ValueError("ツール名は空にできません")

        if tool.name in self._tools:
            logger.warning(f"ツール '{tool.name}' を上書き登録します")

        self._tools[tool.name] = tool
        self._handlers[tool.name] = handler

        logger.info(f"ツール登録: name={tool.name}")

    def unregister_tool(self, name: str) -> bool:
        """ツールを登録解除

        Returns:
            True: 登録解除成功、False: ツールが存在しなかった場合
        """
        if name not in self._tools:
            logger.warning(f"登録解除対象のツールが見つかりません: {name}")
            return False

        del self._tools[name]
        del self._handlers[name]
        return True

    def execute_tool(self, name: str, input_data: Dict[str, Any]) -> str:
        """ツールを実行

        ハンドラーの戻り値が文字列でない場合はインデント2のJSONに変換する。

        Raises:
            ToolExecutionError: ツールが存在しない、入力が不正、または実行に失敗した場合
        """
        if name not in self._tools:
            raise ToolExecutionError(
                f"ツール '{name}' が登録されていません",
                tool_name=name,
                error_type="ToolNotFound",
            )
        if not isinstance(input_data, dict):
            raise ToolExecutionError(
                "ツール入力はオブジェクトである必要があります",
                tool_name=name,
                error_type="ValidationError",
            )

        handler = self._handlers[name]

        logger.info(f"ツール実行開始: name={name}, input_keys={list(input_data.keys())}")

        try:
            result = handler(input_data)
        except CatalogError as e:
            logger.warning(f"ツール実行失敗: name={name}, error_type={type(e).__name__}, error={e}")
            raise ToolExecutionError(
                e.message,
                tool_name=name,
                error_type=type(e).__name__,
                original_error=e,
            ) from e
        except Exception as e:
            logger.error(f"ツール実行失敗: name={name}, error={e}")
            raise ToolExecutionError(
                f"ツール '{name}' の実行に失敗しました",
                tool_name=name,
                original_error=e,
            ) from e

        if not isinstance(result, str):
            result = json.dumps(result, ensure_ascii=False, indent=2, default=str)

        logger.info(f"ツール実行成功: name={name}, result_length={len(result)}")
        return result

    def execute_tool_safe(self, name: str, input_data: Dict[str, Any]) -> ToolExecutionResult:
        """ツールを安全に実行（例外をスローしない）"""
        try:
            result = self.execute_tool(name, input_data)
            return ToolExecutionResult(tool_name=name, success=True, result=result)
        except ToolExecutionError as e:
            return ToolExecutionResult(
                tool_name=name,
                success=False,
                error=str(e),
                error_type=e.error_type,
            )

    def get_tools_for_llm(self) -> List[Dict[str, Any]]:
        """Claude API 形式でツール一覧を取得"""
        return [tool.to_dict() for tool in self._tools.values()]

    def get_tool(self, name: str) -> Optional[Tool]:
        return self._tools.get(name)

    def has_tool(self, name: str) -> bool:
        return name in self._tools

    def list_tools(self) -> List[str]:
        return list(self._tools.keys())
