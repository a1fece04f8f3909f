"""
Session 儲存：Session 資料列、生命週期旗標與標題/描述

資料列不會被刪除，重新開始只會清除 finished 旗標
"""
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from models import PokerSession
from schemas import ParticipantName, SessionSnapshot
from core.exceptions import SessionAlreadyExists, SessionNotFound


def insert_session(
    db: Session,
    chat_id: int,
    message_id: int,
    title: str,
    description: str,
    initiator_id: int,
) -> int:
    """
    新增 Session 並返回 id

    異常：
        SessionAlreadyExists: (chat_id, message_id) 錨點已被使用

    注意：
        只 flush，不 commit
    """
    session = PokerSession(
        chat_id=chat_id,
        message_id=message_id,
        title=title,
        description=description,
        finished=False,
        initiator_id=initiator_id
    )
    db.add(session)
    try:
        db.flush()
    except IntegrityError as e:
        raise SessionAlreadyExists(chat_id, message_id) from e
    return session.id


def find_session(db: Session, chat_id: int, message_id: int) -> SessionSnapshot:
    """
    以錨點查詢 Session

    異常：
        SessionNotFound: 該錨點沒有 Session
    """
    session = (
        db.query(PokerSession)
        .options(joinedload(PokerSession.initiator))
        .filter(PokerSession.chat_id == chat_id, PokerSession.message_id == message_id)
        .first()
    )
    if not session:
        raise SessionNotFound(chat_id, message_id)
    return to_snapshot(session)


def get_session(db: Session, session_id: int) -> SessionSnapshot:
    session = (
        db.query(PokerSession)
        .options(joinedload(PokerSession.initiator))
        .filter(PokerSession.id == session_id)
        .first()
    )
    if not session:
        raise SessionNotFound(session_id=session_id)
    return to_snapshot(session)


def set_finished(db: Session, session_id: int, finished: bool) -> None:
    db.query(PokerSession).filter(PokerSession.id == session_id).update(
        {PokerSession.finished: finished},
        synchronize_session=False
    )


def to_snapshot(session: PokerSession) -> SessionSnapshot:
    initiator = session.initiator
    return SessionSnapshot(
        id=session.id,
        chat_id=session.chat_id,
        message_id=session.message_id,
        title=session.title,
        description=session.description or "",
        finished=bool(session.finished),
        initiator_id=session.initiator_id,
        initiator=ParticipantName(
            first_name=initiator.first_name,
            last_name=initiator.last_name,
            username=initiator.username
        )
    )
