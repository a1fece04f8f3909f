"""
並發控制工具

提供 Database-level 的原子性 insert-or-update，取代行級鎖

SQLite 與 PostgreSQL 都支援 INSERT ... ON CONFLICT DO UPDATE：
寫入者不需要「先查再寫」，由 unique constraint 決定勝負，
輸掉的那一筆會變成同一列的 update
"""
from typing import Any, Dict, List

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def insert_or_update(
    db: Session,
    model,
    values: Dict[str, Any],
    conflict_columns: List[str],
    update_columns: List[str],
) -> None:
    """
    原子性地新增一列，或覆寫既有列的指定欄位

    使用場景：
    - 每次看到參與者時更新顯示名稱
    - 對同一個 (session, participant) 重新提交估點

    範例：
        insert_or_update(
            db, Estimation,
            {"session_id": 1, "participant_id": 2, "value": "5"},
            conflict_columns=["session_id", "participant_id"],
            update_columns=["value"],
        )

    參數：
        db: SQLAlchemy Session
        model: 要寫入的 ORM class
        values: 新增列的欄位值
        conflict_columns: 識別該列的 unique constraint 欄位
        update_columns: 該列已存在時要覆寫的欄位

    注意：
        - 既有列保留原本的 primary key，因此插入順序不變
        - 不會 commit，必須在 transaction 內使用
    """
    dialect = db.get_bind().dialect.name
    make_insert = _INSERTS.get(dialect)
    if make_insert is None:
        raise NotImplementedError(f"Atomic upsert is not supported on {dialect}")

    stmt = make_insert(model.__table__).values(**values)
    stmt = stmt.on_conflict_do_update(
        index_elements=conflict_columns,
        set_={column: stmt.excluded[column] for column in update_columns}
    )
    db.execute(stmt)
