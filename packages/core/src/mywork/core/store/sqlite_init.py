"""SQLite 数据库初始化

PRAGMA 配置 + 各数据源表 DDL + 索引创建。
这些表由各自所属模块拥有，此处的 DDL 只覆盖聚合器读取与任务操作需要的列。
"""

import aiosqlite

_CASES_DDL = """
CREATE TABLE IF NOT EXISTS cases (
    id                TEXT PRIMARY KEY,
    organization_id   TEXT NOT NULL,
    reference_number  TEXT NOT NULL,
    status            TEXT NOT NULL DEFAULT 'NEW',
    severity          TEXT,
    summary           TEXT,
    details           TEXT,
    source_channel    TEXT,
    case_type         TEXT,
    category_name     TEXT,
    created_at        TEXT NOT NULL,
    created_by_id     TEXT,
    updated_by_id     TEXT,
    is_merged         INTEGER NOT NULL DEFAULT 0
);
"""

_INVESTIGATIONS_DDL = """
CREATE TABLE IF NOT EXISTS investigations (
    id                       TEXT PRIMARY KEY,
    organization_id          TEXT NOT NULL,
    case_id                  TEXT NOT NULL,
    status                   TEXT NOT NULL DEFAULT 'NEW',
    due_date                 TEXT,
    sla_status               TEXT NOT NULL DEFAULT 'ON_TRACK',
    primary_investigator_id  TEXT,
    investigation_type       TEXT,
    department               TEXT,
    findings_summary         TEXT,
    assigned_at              TEXT,
    created_at               TEXT NOT NULL,
    closed_at                TEXT,
    closed_by_id             TEXT,
    updated_by_id            TEXT,

    FOREIGN KEY (case_id) REFERENCES cases(id)
);
"""

_REMEDIATION_PLANS_DDL = """
CREATE TABLE IF NOT EXISTS remediation_plans (
    id               TEXT PRIMARY KEY,
    organization_id  TEXT NOT NULL,
    case_id          TEXT NOT NULL,
    title            TEXT NOT NULL DEFAULT '',
    completed_steps  INTEGER NOT NULL DEFAULT 0,

    FOREIGN KEY (case_id) REFERENCES cases(id)
);
"""

_REMEDIATION_STEPS_DDL = """
CREATE TABLE IF NOT EXISTS remediation_steps (
    id                    TEXT PRIMARY KEY,
    organization_id       TEXT NOT NULL,
    plan_id               TEXT NOT NULL,
    title                 TEXT NOT NULL DEFAULT '',
    description           TEXT,
    due_date              TEXT,
    status                TEXT NOT NULL DEFAULT 'PENDING',
    assignee_user_id      TEXT,
    step_order            INTEGER NOT NULL DEFAULT 0,
    requires_co_approval  INTEGER NOT NULL DEFAULT 0,
    created_at            TEXT NOT NULL,
    completed_at          TEXT,
    completed_by_id       TEXT,
    completion_notes      TEXT,

    FOREIGN KEY (plan_id) REFERENCES remediation_plans(id)
);
"""

_CONFLICT_ALERTS_DDL = """
CREATE TABLE IF NOT EXISTS conflict_alerts (
    id                TEXT PRIMARY KEY,
    organization_id   TEXT NOT NULL,
    disclosure_id     TEXT NOT NULL,
    summary           TEXT NOT NULL DEFAULT '',
    conflict_type     TEXT NOT NULL,
    matched_entity    TEXT NOT NULL DEFAULT '',
    severity          TEXT NOT NULL DEFAULT 'MEDIUM',
    match_confidence  REAL NOT NULL DEFAULT 0,
    status            TEXT NOT NULL DEFAULT 'OPEN',
    created_at        TEXT NOT NULL
);
"""

_CAMPAIGNS_DDL = """
CREATE TABLE IF NOT EXISTS campaigns (
    id               TEXT PRIMARY KEY,
    organization_id  TEXT NOT NULL,
    name             TEXT NOT NULL,
    type             TEXT NOT NULL
);
"""

_CAMPAIGN_ASSIGNMENTS_DDL = """
CREATE TABLE IF NOT EXISTS campaign_assignments (
    id               TEXT PRIMARY KEY,
    organization_id  TEXT NOT NULL,
    campaign_id      TEXT NOT NULL,
    due_date         TEXT NOT NULL,
    status           TEXT NOT NULL DEFAULT 'PENDING',
    employee_id      TEXT NOT NULL,
    assigned_at      TEXT NOT NULL,
    reminder_count   INTEGER NOT NULL DEFAULT 0,

    FOREIGN KEY (campaign_id) REFERENCES campaigns(id)
);
"""

_WORKFLOW_TEMPLATES_DDL = """
CREATE TABLE IF NOT EXISTS workflow_templates (
    id               TEXT PRIMARY KEY,
    organization_id  TEXT NOT NULL,
    name             TEXT NOT NULL
);
"""

_WORKFLOW_INSTANCES_DDL = """
CREATE TABLE IF NOT EXISTS workflow_instances (
    id               TEXT PRIMARY KEY,
    organization_id  TEXT NOT NULL,
    template_id      TEXT NOT NULL,
    entity_type      TEXT NOT NULL,
    entity_id        TEXT NOT NULL,
    due_date         TEXT,
    status           TEXT NOT NULL DEFAULT 'ACTIVE',
    current_stage    TEXT NOT NULL DEFAULT '',
    current_step     TEXT,
    sla_status       TEXT NOT NULL DEFAULT 'ON_TRACK',
    created_at       TEXT NOT NULL,

    FOREIGN KEY (template_id) REFERENCES workflow_templates(id)
);
"""

# 租户列总是索引前缀
_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_cases_org_creator ON cases(organization_id, created_by_id, status);",
    "CREATE INDEX IF NOT EXISTS idx_investigations_org_investigator ON investigations(organization_id, primary_investigator_id, status);",
    "CREATE INDEX IF NOT EXISTS idx_remediation_steps_org_assignee ON remediation_steps(organization_id, assignee_user_id, status);",
    "CREATE INDEX IF NOT EXISTS idx_conflict_alerts_org_status ON conflict_alerts(organization_id, status);",
    "CREATE INDEX IF NOT EXISTS idx_campaign_assignments_org_employee ON campaign_assignments(organization_id, employee_id, status);",
    "CREATE INDEX IF NOT EXISTS idx_workflow_instances_org_status ON workflow_instances(organization_id, status);",
]


async def init_db(conn: aiosqlite.Connection) -> None:
    """初始化数据库：设置 PRAGMA + 创建表 + 创建索引

    Args:
        conn: aiosqlite 数据库连接
    """
    conn.row_factory = aiosqlite.Row

    await conn.execute("PRAGMA journal_mode = WAL;")
    await conn.execute("PRAGMA foreign_keys = ON;")
    await conn.execute("PRAGMA busy_timeout = 5000;")

    for ddl in (
        _CASES_DDL,
        _INVESTIGATIONS_DDL,
        _REMEDIATION_PLANS_DDL,
        _REMEDIATION_STEPS_DDL,
        _CONFLICT_ALERTS_DDL,
        _CAMPAIGNS_DDL,
        _CAMPAIGN_ASSIGNMENTS_DDL,
        _WORKFLOW_TEMPLATES_DDL,
        _WORKFLOW_INSTANCES_DDL,
    ):
        await conn.execute(ddl)

    for idx_sql in _INDEXES:
        await conn.execute(idx_sql)

    await conn.commit()
