"""
Chat Config API Endpoints

每個聊天室自訂鍵盤上的估點序列
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
import logging

from database import get_db
from schemas import ChatConfigResponse, ChatConfigUpdate
from core.chat_config_store import get_sequence, set_sequence
from core.exceptions import InvalidSequence

router = APIRouter(prefix="/api/chats", tags=["chat_configs"])
logger = logging.getLogger(__name__)


@router.get("/{chat_id}/config", response_model=ChatConfigResponse)
def get_chat_config(chat_id: int, db: Session = Depends(get_db)):
    try:
        sequence, is_default = get_sequence(db, chat_id)
        return ChatConfigResponse(chat_id=chat_id, sequence=sequence, is_default=is_default)

    except Exception as e:
        logger.error(f"Failed to get chat config: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.put("/{chat_id}/config", response_model=ChatConfigResponse)
def update_chat_config(chat_id: int, config: ChatConfigUpdate, db: Session = Depends(get_db)):
    """
    替換聊天室的估點序列

    既有估點保留，不在鍵盤上的值只是無法再被選擇
    """
    try:
        sequence = set_sequence(db, chat_id, config.sequence)
        db.commit()
        return ChatConfigResponse(chat_id=chat_id, sequence=sequence, is_default=False)

    except InvalidSequence as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to update chat config: {e}", exc_info=True)
        db.rollback()
        raise HTTPException(status_code=500, detail="Internal error")
