"""
Session Engine：管理估點 Session 的完整生命週期

職責：
1. 在聊天室錨點建立 Session
2. 接受（並去重）估點提交
3. 結束（公開）與重新開始（清空）Session

狀態機：
    OPEN --finish--> FINISHED
    OPEN/FINISHED --restart--> OPEN（刪除所有估點）

並發：
- Engine 不持有任何鎖，唯一的仲裁者是資料庫的 unique constraint
- 每個操作都是一到兩個短 transaction
- 權限不在這裡檢查，見 core.policy
"""
from typing import List
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from schemas import EstimationSnapshot, SessionSnapshot, SubmitResult
from core import estimation_store, session_store
from database import transactional

logger = logging.getLogger(__name__)


class SessionEngine:
    """Session 生命週期管理器"""

    @staticmethod
    @transactional
    def create_session(
        db: Session,
        chat_id: int,
        message_id: int,
        title: str,
        description: str,
        initiator_id: int,
    ) -> SessionSnapshot:
        """
        在 (chat_id, message_id) 開啟新的 Session

        參數：
            db: SQLAlchemy Session
            chat_id, message_id: 顯示訊息所在的錨點
            title: 指令內容的第一行
            description: 其餘各行，可以是空字串
            initiator_id: 發起者的內部 id

        返回：
            新 Session 的 snapshot（OPEN，沒有估點）

        異常：
            SessionAlreadyExists: 錨點已被使用，不重試
        """
        session_id = session_store.insert_session(
            db, chat_id, message_id, title, description, initiator_id
        )
        logger.info(
            f"Created session {session_id} at chat {chat_id}, message {message_id} "
            f"(initiator={initiator_id})"
        )
        return session_store.get_session(db, session_id)

    @staticmethod
    def get_session(db: Session, chat_id: int, message_id: int) -> SessionSnapshot:
        """
        異常：
            SessionNotFound: (chat_id, message_id) 沒有 Session
        """
        return session_store.find_session(db, chat_id, message_id)

    @staticmethod
    def list_estimations(db: Session, session_id: int) -> List[EstimationSnapshot]:
        return estimation_store.list_estimations(db, session_id)

    @staticmethod
    def submit_estimate(
        db: Session,
        session_id: int,
        participant_id: int,
        value: str,
    ) -> SubmitResult:
        """
        記錄參與者的估點（冪等）

        流程：
        1. 讀取參與者目前的估點
        2. 值相同 -> NO_OP，不寫入（呼叫者略過重繪）
        3. 否則以 (session, participant) 為 key 做原子性 upsert -> APPLIED

        讀取與寫入之間不是原子性的。兩個同時寫入者會經由 ON CONFLICT
        落在同一列；若資料庫仍拒絕寫入，重新讀取該列並依此決定結果

        返回：
            SubmitResult.APPLIED 或 SubmitResult.NO_OP

        異常：
            IntegrityError: 衝突後重讀，該列的值與提交的值不同
        """
        current = estimation_store.find_value(db, session_id, participant_id)
        if current == value:
            logger.debug(
                f"Participant {participant_id} resubmitted {value} in session {session_id}"
            )
            return SubmitResult.NO_OP

        try:
            estimation_store.upsert(db, session_id, participant_id, value)
            db.commit()
        except IntegrityError:
            db.rollback()
            current = estimation_store.find_value(db, session_id, participant_id)
            logger.warning(
                f"Estimate write for participant {participant_id} in session {session_id} "
                f"conflicted; stored value is now {current}"
            )
            if current == value:
                return SubmitResult.NO_OP
            raise

        logger.info(
            f"Participant {participant_id} estimated {value} in session {session_id} "
            f"(previous={current})"
        )
        return SubmitResult.APPLIED

    @staticmethod
    @transactional
    def finish_session(db: Session, session_id: int) -> List[EstimationSnapshot]:
        """
        公開 Session（OPEN -> FINISHED）

        冪等：對已結束的 Session 再呼叫不會改變狀態，返回相同的 snapshot

        返回：
            目前的估點（依插入順序）
        """
        session_store.set_finished(db, session_id, True)
        estimations = estimation_store.list_estimations(db, session_id)
        logger.info(f"Finished session {session_id} with {len(estimations)} estimations")
        return estimations

    @staticmethod
    @transactional
    def restart_session(db: Session, session_id: int) -> None:
        """
        重新開始：刪除所有估點並清除 finished 旗標

        任何狀態都可以重新開始；Session 本身與錨點保留
        """
        removed = estimation_store.clear(db, session_id)
        session_store.set_finished(db, session_id, False)
        logger.info(f"Restarted session {session_id}, removed {removed} estimations")
