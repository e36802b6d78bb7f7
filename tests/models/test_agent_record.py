# エージェントレコードのテスト
"""
AgentRecord と validate_new_agent の単体テスト

テスト観点:
- AgentRecord のシリアライズ/デシリアライズ
- 作成入力の検証（必須フィールド、型、id 指定の拒否）
"""

import pytest

from aware.errors import ValidationError
from aware.models.agent import AgentRecord, validate_new_agent


class TestAgentRecordDataclass:
    """AgentRecord データクラスのテスト"""

    def test_create_with_defaults(self):
        """デフォルト値での作成"""
        agent = AgentRecord(name="Researcher")

        assert agent.name == "Researcher"
        assert agent.description == ""
        assert agent.tags == []
        assert agent.id is None

    def test_from_row(self):
        """DBの行からインスタンス生成"""
        agent = AgentRecord.from_row((7, "Planner", "Plans trips", ["Travel", "plan"]))

        assert agent.id == 7
        assert agent.name == "Planner"
        assert agent.description == "Plans trips"
        assert agent.tags == ["Travel", "plan"]

    def test_from_row_with_none_values(self):
        """None値を含む行からインスタンス生成"""
        agent = AgentRecord.from_row((1, "Planner", None, None))

        assert agent.description == ""
        assert agent.tags == []

    def test_to_dict(self):
        """辞書に変換"""
        agent = AgentRecord(id="3", name="A", description="d", tags=["X", "y"])

        assert agent.to_dict() == {
            "id": "3",
            "name": "A",
            "description": "d",
            "tags": ["X", "y"],
        }

    def test_from_dict_roundtrip_preserves_tag_order(self):
        """辞書との相互変換でタグ順序が保持される"""
        original = AgentRecord(id="9", name="A", description="", tags=["b", "A", "c"])

        restored = AgentRecord.from_dict(original.to_dict())

        assert restored == original

    def test_lowered_tags(self):
        """比較用タグは小文字化されるが元のタグは変わらない"""
        agent = AgentRecord(name="A", tags=["Search", "WEB"])

        assert agent.lowered_tags() == ["search", "web"]
        assert agent.tags == ["Search", "WEB"]

    def test_with_id_returns_copy(self):
        """with_id は元のレコードを変更しない"""
        agent = AgentRecord(name="A", tags=["x"])

        created = agent.with_id("1")

        assert created.id == "1"
        assert agent.id is None
        created.tags.append("y")
        assert agent.tags == ["x"]


class TestValidateNewAgent:
    """validate_new_agent() のテスト"""

    def test_valid_input(self):
        """正常な入力は id なしのレコードになる"""
        record = validate_new_agent(
            {"name": "Researcher", "description": "", "tags": ["a", "B"]}
        )

        assert record == AgentRecord(name="Researcher", description="", tags=["a", "B"])

    def test_rejects_supplied_id(self):
        """id 指定は拒否される"""
        with pytest.raises(ValidationError) as exc_info:
            validate_new_agent({"id": "5", "name": "A", "description": "", "tags": []})

        assert exc_info.value.field == "id"

    @pytest.mark.parametrize("missing", ["name", "description", "tags"])
    def test_missing_field(self, missing):
        """必須フィールドが不足している場合"""
        data = {"name": "A", "description": "d", "tags": []}
        del data[missing]

        with pytest.raises(ValidationError) as exc_info:
            validate_new_agent(data)

        assert exc_info.value.field == missing

    @pytest.mark.parametrize("name", ["", "   ", None, 42])
    def test_invalid_name(self, name):
        """name が空または文字列でない場合"""
        with pytest.raises(ValidationError):
            validate_new_agent({"name": name, "description": "", "tags": []})

    def test_non_string_description(self):
        """description が文字列でない場合"""
        with pytest.raises(ValidationError):
            validate_new_agent({"name": "A", "description": None, "tags": []})

    @pytest.mark.parametrize("tags", ["a,b", ["a", None], [1, 2]])
    def test_invalid_tags(self, tags):
        """tags が文字列リストでない場合"""
        with pytest.raises(ValidationError):
            validate_new_agent({"name": "A", "description": "", "tags": tags})

    def test_non_mapping_input(self):
        """オブジェクト以外の入力"""
        with pytest.raises(ValidationError):
            validate_new_agent(["A"])
