"""优先级归一化 -- 数据源紧急度信号 -> TaskPriority"""

from ..models.enums import ConflictSeverity, Severity, SlaStatus, TaskPriority


def severity_to_priority(severity: Severity | str | None) -> TaskPriority:
    """案件严重程度：HIGH->HIGH，MEDIUM->MEDIUM，其余（含缺失）->LOW"""
    if severity == Severity.HIGH:
        return TaskPriority.HIGH
    if severity == Severity.MEDIUM:
        return TaskPriority.MEDIUM
    return TaskPriority.LOW


def sla_status_to_priority(sla_status: SlaStatus | str | None) -> TaskPriority:
    """SLA 状态：OVERDUE/WARNING->HIGH，其余->MEDIUM"""
    if sla_status in (SlaStatus.OVERDUE, SlaStatus.WARNING):
        return TaskPriority.HIGH
    return TaskPriority.MEDIUM


def conflict_severity_to_priority(
    severity: ConflictSeverity | str | None,
) -> TaskPriority:
    """冲突严重程度：CRITICAL/HIGH->HIGH，MEDIUM->MEDIUM，其余->LOW"""
    if severity in (ConflictSeverity.CRITICAL, ConflictSeverity.HIGH):
        return TaskPriority.HIGH
    if severity == ConflictSeverity.MEDIUM:
        return TaskPriority.MEDIUM
    return TaskPriority.LOW
