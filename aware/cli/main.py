"""
Aware CLI メインエントリーポイント

エージェントカタログの検索・取得・登録をターミナルから行うための CLI インターフェース。
"""

import logging
import sys
from typing import Optional

import click

from aware import __version__
from aware.catalog.factory import build_catalog_service
from aware.catalog.service import CatalogService
from aware.cli.utils.output import echo_agent, echo_json, echo_table, fail_with_catalog_error
from aware.config.catalog_config import CatalogConfig
from aware.errors import CatalogError
from aware.store.postgres_store import PostgresAgentStore

# コマンドモジュールインポート
from aware.cli.commands.add import add_agent_command
from aware.cli.commands.tools import tools_command


class CLIContext:
    """CLI共通コンテキスト（依存関係を保持）"""

    def __init__(self):
        self.config: Optional[CatalogConfig] = None
        self.service: Optional[CatalogService] = None
        self._initialized = False

    def initialize(self):
        """遅延初期化（必要時に呼び出される）"""
        if self._initialized:
            return

        try:
            self.config = CatalogConfig()
            self.service = build_catalog_service(self.config)
            self._initialized = True

        except ValueError as e:
            click.echo(f"[初期化エラー] 設定が不正です: {e}", err=True)
            sys.exit(1)


# click の pass_context でCLIContextを共有
pass_context = click.make_pass_decorator(CLIContext, ensure=True)


@click.group()
@click.version_option(version=__version__, prog_name="aware")
@click.option('--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']), default='WARNING', help='ログレベル')
@pass_context
def aware(ctx: CLIContext, log_level: str):
    """
    Aware エージェントカタログ CLI

    エージェントの検索・取得・登録をターミナルから行えます。
    """
    logging.basicConfig(
        level=getattr(logging, log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@aware.command()
@click.option('--check-only', is_flag=True, help='接続確認のみ（変更なし）')
@pass_context
def init(ctx: CLIContext, check_only: bool):
    """ストアに接続できるか確認し、必要ならテーブルを作成する"""
    ctx.initialize()
    store = ctx.service.store

    try:
        if isinstance(store, PostgresAgentStore):
            if not store.db.health_check():
                click.echo("[エラー] データベースに接続できません", err=True)
                sys.exit(1)
            click.echo("✓ データベースに接続しました")
            if not check_only:
                store.ensure_schema()
                click.echo("✓ agents テーブルを確認しました")
        else:
            click.echo(f"✓ エージェントファイル: {store.path}")

        count = len(store.list_all())
        click.echo(f"✓ 登録済みエージェント: {count}件")

    except CatalogError as e:
        fail_with_catalog_error(e)

    click.echo("\nカタログは使用可能です。")


@aware.command('list')
@click.option('--query', help='name/description の部分一致検索')
@click.option('--tags', help='タグ（カンマ区切り、すべてを持つものに絞り込み）')
@click.option('--format', 'output_format', type=click.Choice(['table', 'json']), default='table', help='出力形式')
@pass_context
def list_agents(ctx: CLIContext, query: Optional[str], tags: Optional[str], output_format: str):
    """登録済みエージェントを検索・一覧表示する"""
    ctx.initialize()

    try:
        agents = ctx.service.search(query=query, tags=tags)
    except CatalogError as e:
        fail_with_catalog_error(e)
        return

    if output_format == 'json':
        echo_json([agent.to_dict() for agent in agents])
        return

    if not agents:
        click.echo("該当するエージェントはありません。")
        return

    click.echo(f"エージェント ({len(agents)}件):\n")
    headers = ["ID", "名前", "説明", "タグ"]
    rows = [
        [agent.id, agent.name, agent.description[:40], ", ".join(agent.tags)]
        for agent in agents
    ]
    echo_table(headers, rows)


@aware.command()
@click.argument('agent_id')
@click.option('--format', 'output_format', type=click.Choice(['table', 'json']), default='table', help='出力形式')
@pass_context
def show(ctx: CLIContext, agent_id: str, output_format: str):
    """IDを指定してエージェントを表示する"""
    ctx.initialize()

    try:
        agent = ctx.service.get_by_id(agent_id)
    except CatalogError as e:
        fail_with_catalog_error(e)
        return

    if output_format == 'json':
        echo_json(agent.to_dict())
        return

    echo_agent(agent)


add_agent_command(aware, pass_context)
tools_command(aware, pass_context)


if __name__ == '__main__':
    aware()
