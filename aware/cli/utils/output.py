"""Output formatting helpers for CLI."""

from __future__ import annotations

import json
import sys
from typing import Iterable, List, Sequence

import click

from aware.errors import CatalogError, InvalidIdentifier, NotFound, ValidationError
from aware.models.agent import AgentRecord


def format_table(headers: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
    """Format a simple table with padded columns."""
    rows_list: List[List[str]] = [list(map(str, row)) for row in rows]
    widths = [len(str(h)) for h in headers]
    for row in rows_list:
        for idx, cell in enumerate(row):
            if idx >= len(widths):
                widths.append(len(cell))
            else:
                widths[idx] = max(widths[idx], len(cell))

    header_line = " ".join(str(h).ljust(widths[i]) for i, h in enumerate(headers))
    separator = "-" * len(header_line)
    body_lines = [
        " ".join(str(cell).ljust(widths[i]) for i, cell in enumerate(row))
        for row in rows_list
    ]
    return "\n".join([header_line, separator] + body_lines)


def echo_table(headers: Sequence[str], rows: Iterable[Sequence[str]]) -> None:
    """Echo a simple table."""
    click.echo(format_table(headers, rows))


def echo_json(data) -> None:
    """Echo JSON with UTF-8 characters preserved."""
    click.echo(json.dumps(data, ensure_ascii=False, indent=2))


def echo_agent(agent: AgentRecord) -> None:
    """エージェント1件をラベル付きの行で表示"""
    click.echo(f"  ID: {agent.id}")
    click.echo(f"  名前: {agent.name}")
    click.echo(f"  説明: {agent.description}")
    click.echo(f"  タグ: {', '.join(agent.tags)}")


def exit_code_for(error: CatalogError) -> int:
    """カタログ例外を終了コードに変換（入力不正は 2、それ以外は 1）"""
    if isinstance(error, (ValidationError, InvalidIdentifier)):
        return 2
    return 1


def fail_with_catalog_error(error: CatalogError) -> None:
    """カタログ例外を標準エラーに表示して終了"""
    if isinstance(error, NotFound):
        click.echo(f"[エラー] エージェントが見つかりません: {error.agent_id}", err=True)
    else:
        click.echo(f"[エラー] {type(error).__name__}: {error}", err=True)
    sys.exit(exit_code_for(error))
