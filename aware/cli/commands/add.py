"""
エージェント登録コマンド実装
"""

import sys
from typing import List, Optional

import click

from aware.cli.utils.output import echo_agent, echo_json, fail_with_catalog_error
from aware.cli.utils.yaml_loader import YamlValidationError, extract_agent_definitions, load_yaml
from aware.errors import CatalogError
from aware.models.agent import validate_new_agent


def add_agent_command(agent_group, pass_context):
    """add コマンドを aware グループに追加"""

    @agent_group.command()
    @click.option('-f', '--file', 'files', multiple=True, type=click.Path(exists=True), help='エージェント定義YAMLファイル')
    @click.option('--name', help='エージェント名（CLI登録用）')
    @click.option('--description', help='説明（CLI登録用）')
    @click.option('--tags', help='タグ（カンマ区切り）')
    @click.option('--format', 'output_format', type=click.Choice(['table', 'json']), default='table', help='出力形式')
    @click.option('--dry-run', is_flag=True, help='登録内容を確認（実行しない）')
    @pass_context
    def add(ctx, files: List[str], name: Optional[str], description: Optional[str],
            tags: Optional[str], output_format: str, dry_run: bool):
        """エージェントを登録する"""
        if files and any(v is not None for v in (name, description, tags)):
            click.echo("[エラー] --file とCLI直接指定は同時に使用できません", err=True)
            sys.exit(2)

        try:
            if files:
                definitions = []
                for file_path in files:
                    definitions.extend(extract_agent_definitions(load_yaml(file_path)))
            else:
                if not name:
                    click.echo("[エラー] CLI登録は --name が必須です", err=True)
                    sys.exit(2)
                definitions = [{
                    "name": name,
                    "description": description or "",
                    "tags": _split_csv(tags) if tags else [],
                }]

            if dry_run:
                for definition in definitions:
                    _display_definition(definition)
                click.echo("\n[DRY RUN] 実際の登録は行いませんでした")
                return

            # 1件でも不正なら何も登録しない
            for definition in definitions:
                validate_new_agent(definition)

            ctx.initialize()
            created = [ctx.service.create(definition) for definition in definitions]

        except YamlValidationError as e:
            click.echo(f"[エラー] YAML検証に失敗しました: {e}", err=True)
            sys.exit(2)
        except CatalogError as e:
            fail_with_catalog_error(e)
            return

        if output_format == 'json':
            echo_json([agent.to_dict() for agent in created] if files else created[0].to_dict())
            return

        for agent in created:
            click.echo(f"エージェントを登録しました: {agent.id}")
            echo_agent(agent)


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _display_definition(definition: dict) -> None:
    """登録予定のエージェントを表示する（dry-run用）"""
    record = validate_new_agent(definition)
    click.echo("登録予定のエージェント:")
    click.echo(f"  名前: {record.name}")
    click.echo(f"  説明: {record.description[:100]}{'...' if len(record.description) > 100 else ''}")
    click.echo(f"  タグ: {', '.join(record.tags)}")
