"""SQL 拼装辅助函数"""

from datetime import datetime

from ..models.query import DueDateRange, ensure_utc


def to_db_datetime(value: datetime | None) -> str | None:
    """统一以 UTC ISO 8601 文本落库，保证按文本比较即按时间比较"""
    value = ensure_utc(value)
    return value.isoformat() if value is not None else None


def from_db_datetime(value: str | None) -> datetime | None:
    if value is None:
        return None
    return ensure_utc(datetime.fromisoformat(value))


def placeholders(values) -> str:
    return ", ".join("?" for _ in values)


def due_range_clause(
    column: str,
    due_range: DueDateRange | None,
) -> tuple[str, list[str]]:
    """把截止时间范围翻译成追加的 WHERE 片段（闭区间）

    Returns:
        (sql 片段, 参数列表)；无范围时返回 ("", [])
    """
    if due_range is None or due_range.is_empty:
        return "", []
    clauses: list[str] = []
    params: list[str] = []
    if due_range.start is not None:
        clauses.append(f"{column} >= ?")
        params.append(to_db_datetime(due_range.start))
    if due_range.end is not None:
        clauses.append(f"{column} <= ?")
        params.append(to_db_datetime(due_range.end))
    return " AND " + " AND ".join(clauses), params
