# CLI commands module
"""
CLIコマンド実装パッケージ

各コマンドは独立したモジュールとして実装され、
main.py から登録されます。
"""

from .add import add_agent_command
from .tools import tools_command

__all__ = [
    "add_agent_command",
    "tools_command",
]
