"""
身分解析：把聊天室使用者對應到內部的參與者 id

每次看到使用者都會覆寫顯示欄位（以最新名稱為準），
external_id 的 unique constraint 保證同時的首次出現只會留下一列
"""
from typing import Optional
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models import Participant
from core.exceptions import IdentityConflict
from core.upsert import insert_or_update

logger = logging.getLogger(__name__)

MAX_LOOKUP_ATTEMPTS = 3


def resolve_participant(
    db: Session,
    external_id: int,
    first_name: str,
    last_name: Optional[str] = None,
    username: Optional[str] = None,
) -> int:
    """
    新增或更新參與者，並返回內部 id

    流程：
    1. 以 external_id 為 key 做 insert-or-update（顯示欄位整組覆寫，不合併）
    2. 查詢內部 id
    3. 若寫入輸給同時的新增，重試查詢

    參數：
        db: SQLAlchemy Session
        external_id: 聊天室提供的使用者 id
        first_name, last_name, username: 同一事件中的顯示欄位

    返回：
        內部參與者 id

    異常：
        IdentityConflict: 始終查不到該列（理論上不會發生）
        SQLAlchemyError: 儲存層錯誤，原樣往上拋
    """
    values = {
        "external_id": external_id,
        "first_name": first_name,
        "last_name": last_name,
        "username": username,
    }

    for attempt in range(1, MAX_LOOKUP_ATTEMPTS + 1):
        try:
            insert_or_update(
                db,
                Participant,
                values,
                conflict_columns=["external_id"],
                update_columns=["first_name", "last_name", "username"]
            )
            db.commit()
        except IntegrityError:
            # 同時的首次出現已先新增該列
            db.rollback()
            logger.warning(
                f"Participant {external_id} insert raced another writer "
                f"(attempt {attempt}/{MAX_LOOKUP_ATTEMPTS})"
            )

        participant_id = find_participant_id(db, external_id)
        if participant_id is not None:
            return participant_id

    raise IdentityConflict(external_id)


def find_participant_id(db: Session, external_id: int) -> Optional[int]:
    row = db.query(Participant.id).filter(Participant.external_id == external_id).first()
    return row[0] if row else None
