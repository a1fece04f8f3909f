"""
Session Message API Endpoints

重點：
1. 每次按鈕都是獨立的工作單元，程式內不持有鎖
2. 所有生命週期邏輯集中在 SessionEngine
3. 是否更新畫面由 core.policy.may_broadcast 決定
4. 重複提交相同估點（NO_OP）不會更新畫面
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
import logging

from constants import FINISH, RESTART
from database import get_db
from schemas import ButtonPress, ButtonPressResponse, DisplayPayload, SubmitResult
from core.chat_config_store import get_sequence
from core.exceptions import InvalidButtonToken, SessionNotFound
from core.identity import resolve_participant
from core.policy import LifecycleAction, may_broadcast
from core.session_engine import SessionEngine
from services.render_service import render

router = APIRouter(prefix="/api/chats", tags=["messages"])
logger = logging.getLogger(__name__)


@router.post(
    "/{chat_id}/messages/{message_id}/buttons",
    response_model=ButtonPressResponse
)
def press_button(
    chat_id: int,
    message_id: int,
    press: ButtonPress,
    db: Session = Depends(get_db)
):
    """
    處理 Session 訊息上的按鈕

    按鈕值：
    - 估點序列中的值：提交（或修改）按下者的估點
    - "finish"：公開所有估點
    - "restart"：刪除所有估點並重新開始

    流程：
    1. 解析按下者身分
    2. 找到錨點 (chat_id, message_id) 的 Session
    3. 執行生命週期操作（不論誰按下都會執行）
    4. 判斷是否更新畫面：NO_OP 投票、非發起者的 finish/restart 返回 edit=false
    5. 產生新的顯示內容

    返回：
        - edit: 是否要替換訊息
        - display: edit 為 true 時的新顯示內容
    """
    try:
        # 1. 解析按下者
        sender = press.sender
        actor_id = resolve_participant(
            db, sender.external_id, sender.first_name, sender.last_name, sender.username
        )

        # 2. 找到 Session
        session = SessionEngine.get_session(db, chat_id, message_id)
        sequence, _ = get_sequence(db, chat_id)
        token = press.token

        # 3-5. 依按鈕值分派
        if token == RESTART:
            SessionEngine.restart_session(db, session.id)
            if not may_broadcast(actor_id, session.initiator_id, LifecycleAction.RESTART):
                logger.info(
                    f"Restart of session {session.id} by non-initiator {actor_id}, display unchanged"
                )
                return ButtonPressResponse(edit=False)

            session = SessionEngine.get_session(db, chat_id, message_id)
            display = render(session, None, reveal=False, restarting=True, sequence=sequence)

        elif token == FINISH:
            estimations = SessionEngine.finish_session(db, session.id)
            if not may_broadcast(actor_id, session.initiator_id, LifecycleAction.FINISH):
                logger.info(
                    f"Finish of session {session.id} by non-initiator {actor_id}, display unchanged"
                )
                return ButtonPressResponse(edit=False)

            session = SessionEngine.get_session(db, chat_id, message_id)
            display = render(session, estimations, reveal=True, sequence=sequence)

        elif token in sequence:
            result = SessionEngine.submit_estimate(db, session.id, actor_id, token)
            if result == SubmitResult.NO_OP:
                return ButtonPressResponse(edit=False)

            estimations = SessionEngine.list_estimations(db, session.id)
            display = render(session, estimations, reveal=session.finished, sequence=sequence)

        else:
            raise InvalidButtonToken(token)

        return ButtonPressResponse(edit=True, display=display)

    except SessionNotFound:
        raise HTTPException(status_code=404, detail="Session not found")
    except InvalidButtonToken as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to handle button press: {e}", exc_info=True)
        db.rollback()
        raise HTTPException(status_code=500, detail="Internal error")


@router.get("/{chat_id}/messages/{message_id}", response_model=DisplayPayload)
def get_display(chat_id: int, message_id: int, db: Session = Depends(get_db)):
    """
    取得 Session 目前的顯示內容

    Session 未結束時估點會被遮蔽
    """
    try:
        session = SessionEngine.get_session(db, chat_id, message_id)
        sequence, _ = get_sequence(db, chat_id)
        estimations = SessionEngine.list_estimations(db, session.id)
        return render(session, estimations, reveal=session.finished, sequence=sequence)

    except SessionNotFound:
        raise HTTPException(status_code=404, detail="Session not found")
    except Exception as e:
        logger.error(f"Failed to render session: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")
