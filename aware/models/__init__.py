# データモデル
"""
エージェントカタログのデータモデル
"""

from aware.models.agent import AgentId, AgentRecord, validate_new_agent

__all__ = ["AgentId", "AgentRecord", "validate_new_agent"]
