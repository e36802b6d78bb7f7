"""
ツール呼び出しコマンド実装

自動クライアントと同じツールインターフェースをターミナルから試すためのコマンド。
"""

import json
import sys
from typing import Optional

import click

from aware.cli.utils.output import echo_json
from aware.tools.catalog_tools import CATALOG_TOOLS, create_catalog_tool_executor


def tools_command(agent_group, pass_context):
    """tools コマンドグループを aware グループに追加"""

    @agent_group.group()
    def tools():
        """カタログ操作ツールの一覧表示・実行"""
        pass

    @tools.command('list')
    def list_tools():
        """ツール定義を Claude API 形式で表示する"""
        echo_json([tool.to_dict() for tool in CATALOG_TOOLS])

    @tools.command()
    @click.argument('name')
    @click.option('--input', 'input_json', help='ツール入力（JSONオブジェクト）')
    @pass_context
    def call(ctx, name: str, input_json: Optional[str]):
        """ツールを実行して結果を表示する"""
        try:
            input_data = json.loads(input_json) if input_json else {}
        except json.JSONDecodeError as e:
            click.echo(f"[エラー] --input はJSONで指定してください: {e}", err=True)
            sys.exit(2)

        ctx.initialize()
        executor = create_catalog_tool_executor(ctx.service)
        result = executor.execute_tool_safe(name, input_data)

        if result.success:
            click.echo(result.result)
            return

        click.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2), err=True)
        bad_input = result.error_type in ("ValidationError", "InvalidIdentifier", "ToolNotFound")
        sys.exit(2 if bad_input else 1)
