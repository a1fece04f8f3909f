"""
估點儲存：每個 (session, participant) 只有一列估點

(session_id, participant_id) 的 unique constraint 是唯一的仲裁者，
不論有多少寫入者，同一個 key 都不會出現兩列
"""
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from models import Estimation
from schemas import EstimationSnapshot, ParticipantName
from core.upsert import insert_or_update


def find_value(db: Session, session_id: int, participant_id: int) -> Optional[str]:
    row = db.query(Estimation.value).filter(
        Estimation.session_id == session_id,
        Estimation.participant_id == participant_id
    ).first()
    return row[0] if row else None


def upsert(db: Session, session_id: int, participant_id: int, value: str) -> None:
    """
    新增估點，或覆寫既有估點的值

    既有列保留原本的 id，列表順序維持首次投票的順序
    不會 commit
    """
    insert_or_update(
        db,
        Estimation,
        {"session_id": session_id, "participant_id": participant_id, "value": value},
        conflict_columns=["session_id", "participant_id"],
        update_columns=["value"]
    )


def list_estimations(db: Session, session_id: int) -> List[EstimationSnapshot]:
    """
    Session 的所有估點與投票者，依插入順序
    """
    estimations = (
        db.query(Estimation)
        .options(joinedload(Estimation.participant))
        .filter(Estimation.session_id == session_id)
        .order_by(Estimation.id)
        .all()
    )

    return [
        EstimationSnapshot(
            participant_id=estimation.participant_id,
            value=estimation.value,
            participant=ParticipantName(
                first_name=estimation.participant.first_name,
                last_name=estimation.participant.last_name,
                username=estimation.participant.username
            )
        )
        for estimation in estimations
    ]


def clear(db: Session, session_id: int) -> int:
    """刪除 Session 的所有估點，返回刪除的列數"""
    return db.query(Estimation).filter(
        Estimation.session_id == session_id
    ).delete(synchronize_session=False)
