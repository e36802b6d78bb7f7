# エージェントレコード
# カタログが扱うエンティティ（id, name, description, tags）
"""
エージェントレコードモジュール

エージェントカタログの1件を表すデータクラスと、作成時の入力検証を提供。

設計方針:
- 不変性: レコードは作成操作でのみ生成され、更新操作は持たない
- ID表現: ファイルストアでは10進文字列、PostgreSQLストアでは整数
- タグ: 保存時は大文字小文字と順序を保持し、比較時のみ小文字化
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from aware.errors import ValidationError

AgentId = Union[int, str]


@dataclass
class AgentRecord:
    """エージェントレコード

    Attributes:
        name: 表示名（空文字不可）
        description: 説明文（空文字可）
        tags: タグのリスト（表示のため順序を保持）
        id: 識別子。作成前は None
    """

    name: str
    description: str = ""
    tags: List[str] = field(default_factory=list)
    id: Optional[AgentId] = None

    @classmethod
    def from_row(cls, row: tuple) -> "AgentRecord":
        """DBの行からインスタンス生成

        Args:
            row: (id, name, description, tags) の順の行

        Returns:
            AgentRecord インスタンス
        """
        return cls(
            id=row[0],
            name=row[1],
            description=row[2] if row[2] is not None else "",
            tags=list(row[3]) if row[3] else [],
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AgentRecord":
        """保存形式の辞書からインスタンス生成

        Raises:
            KeyError: name が存在しない場合
        """
        return cls(
            id=data.get("id"),
            name=data["name"],
            description=data.get("description") or "",
            tags=list(data.get("tags") or []),
        )

    def to_dict(self) -> Dict[str, Any]:
        """辞書に変換（ファイル保存・ツール応答で共通の形式）"""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "tags": list(self.tags),
        }

    def lowered_tags(self) -> List[str]:
        """比較用に小文字化したタグ"""
        return [tag.lower() for tag in self.tags]

    def with_id(self, agent_id: AgentId) -> "AgentRecord":
        """IDを付与した新しいレコードを返す"""
        return AgentRecord(
            id=agent_id,
            name=self.name,
            description=self.description,
            tags=list(self.tags),
        )


def validate_new_agent(data: Mapping[str, Any]) -> AgentRecord:
    """作成リクエストを検証して ID なしのレコードに変換

    Args:
        data: name / description / tags を含むマッピング

    Returns:
        id=None の AgentRecord

    Raises:
        ValidationError: 必須フィールド不足、型不正、id 指定ありの場合
    """
    if not isinstance(data, Mapping):
        raise ValidationError("agent must be an object")

    # IDは常にカタログ側またはストア側で採番する
    if "id" in data:
        raise ValidationError("id must not be supplied on create", field="id")

    missing = [key for key in ("name", "description", "tags") if key not in data]
    if missing:
        raise ValidationError(
            f"missing required fields: {', '.join(missing)}", field=missing[0]
        )

    name = data["name"]
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("name must be a non-empty string", field="name")

    description = data["description"]
    if not isinstance(description, str):
        raise ValidationError("description must be a string", field="description")

    tags = data["tags"]
    if not isinstance(tags, (list, tuple)):
        raise ValidationError("tags must be a list of strings", field="tags")
    if not all(isinstance(tag, str) for tag in tags):
        raise ValidationError("tags must be a list of strings", field="tags")

    return AgentRecord(name=name, description=description, tags=list(tags))
