"""
検索フィルタ

単純な部分一致検索とタグのAND検索。ランキングやトークン分割は行わない。
"""

from typing import Iterable, List, Optional, Sequence, Union

from aware.models.agent import AgentRecord

TagFilter = Union[str, Sequence[str]]


def normalize_query(query: Optional[str]) -> Optional[str]:
    """クエリを trim + 小文字化。空白のみの場合は None"""
    if query is None:
        return None
    normalized = query.strip().lower()
    return normalized or None


def parse_tag_filter(tags: Optional[TagFilter]) -> List[str]:
    """タグ指定を小文字化したタグのリストに変換

    文字列の場合はカンマ区切りとして分割する。リストの場合は分割済みとして扱う。
    各要素は trim + 小文字化し、空要素は除外する。

    Examples:
        >>> parse_tag_filter(" Search, ,WEB ")
        ['search', 'web']
    """
    if tags is None:
        return []
    if isinstance(tags, str):
        parts: Iterable[str] = tags.split(",")
    else:
        parts = tags
    return [part.strip().lower() for part in parts if part and part.strip()]


def matches_query(record: AgentRecord, query: str) -> bool:
    """name または description に query（小文字化済み）が含まれるか"""
    return query in record.name.lower() or query in record.description.lower()


def matches_tags(record: AgentRecord, tags: List[str]) -> bool:
    """要求されたタグ（小文字化済み）をすべて持っているか"""
    own = set(record.lowered_tags())
    return all(tag in own for tag in tags)


def filter_agents(
    records: List[AgentRecord],
    query: Optional[str] = None,
    tags: Optional[TagFilter] = None,
) -> List[AgentRecord]:
    """クエリとタグの両方で絞り込む（順序は保持）"""
    result = records

    q = normalize_query(query)
    if q is not None:
        result = [record for record in result if matches_query(record, q)]

    tag_list = parse_tag_filter(tags)
    if tag_list:
        result = [record for record in result if matches_tags(record, tag_list)]

    return result
