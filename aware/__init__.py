"""
Aware エージェントカタログ

エージェントレコード（name, description, tags）の登録・検索を提供する。
ファイルストアとPostgreSQLストアを切り替え可能。
"""

__version__ = "1.0.0"
