"""
Command API Endpoints

職責：
1. 解析聊天室指令（/help、/poker）
2. 開啟 Session 並返回第一個顯示內容
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
import logging

from constants import MISSING_PAYLOAD_TEXT, UNKNOWN_COMMAND_TEXT
from database import get_db, get_settings
from schemas import CommandMessage, CommandResponse
from core.chat_config_store import get_sequence
from core.exceptions import EmptyTitle, SessionAlreadyExists
from core.identity import resolve_participant
from core.session_engine import SessionEngine
from services.command_service import help_text, parse_command, parse_start_payload
from services.render_service import render

router = APIRouter(prefix="/api/chats", tags=["commands"])
logger = logging.getLogger(__name__)


@router.post("/{chat_id}/commands", response_model=CommandResponse)
def handle_command(chat_id: int, command: CommandMessage, db: Session = Depends(get_db)):
    """
    處理一個聊天室指令

    指令：
    - /help：回覆指令列表
    - /poker <標題>[\\n<描述>]：開啟 Session

    /poker 流程：
    1. 驗證內容（標題不可為空）
    2. 解析發起者身分
    3. 在錨點建立 Session（未指定時為 message_id + 1）
    4. 產生開啟狀態的顯示內容（無估點、完整鍵盤）

    返回：
        - reply_text: 純文字回覆（說明、錯誤）
        - display: 新 Session 訊息的顯示內容
    """
    try:
        parsed = parse_command(command.text, get_settings().bot_username)
        if parsed is None:
            return CommandResponse(reply_text=UNKNOWN_COMMAND_TEXT)

        name, payload = parsed
        if name == "help":
            return CommandResponse(reply_text=help_text())
        if name != "poker":
            return CommandResponse(reply_text=UNKNOWN_COMMAND_TEXT)

        # 1. 驗證內容（尚未碰到資料庫）
        try:
            title, description = parse_start_payload(payload)
        except EmptyTitle:
            return CommandResponse(reply_text=MISSING_PAYLOAD_TEXT)

        # 2. 解析發起者
        sender = command.sender
        initiator_id = resolve_participant(
            db, sender.external_id, sender.first_name, sender.last_name, sender.username
        )

        # 3. 建立 Session
        anchor = command.anchor_message_id
        if anchor is None:
            anchor = command.message_id + 1

        session = SessionEngine.create_session(
            db, chat_id, anchor, title, description, initiator_id
        )

        # 4. 產生顯示內容
        sequence, _ = get_sequence(db, chat_id)
        display = render(session, None, reveal=False, sequence=sequence)

        return CommandResponse(display=display, session_id=session.id)

    except SessionAlreadyExists as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to handle command: {e}", exc_info=True)
        db.rollback()
        raise HTTPException(status_code=500, detail="Internal error")
