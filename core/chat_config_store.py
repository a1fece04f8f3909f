"""
聊天室設定儲存：每個聊天室可覆寫估點序列

沒有設定的聊天室使用 DEFAULT_SEQ
"""
from typing import List, Tuple
import logging

from sqlalchemy.orm import Session

from constants import DEFAULT_SEQ, FINISH, MAX_SEQUENCE_VALUE_LENGTH, RESTART
from models import ChatConfig
from core.exceptions import InvalidSequence
from core.upsert import insert_or_update

logger = logging.getLogger(__name__)

SEPARATOR = ","


def get_sequence(db: Session, chat_id: int) -> Tuple[List[str], bool]:
    """
    返回聊天室的 (sequence, is_default)
    """
    row = db.query(ChatConfig.sequence).filter(ChatConfig.chat_id == chat_id).first()
    if not row or not row[0]:
        return list(DEFAULT_SEQ), True
    return row[0].split(SEPARATOR), False


def set_sequence(db: Session, chat_id: int, sequence: List[str]) -> List[str]:
    """
    儲存聊天室的估點序列並返回正規化後的值

    異常：
        InvalidSequence: 見 validate_sequence
    """
    values = validate_sequence(sequence)
    insert_or_update(
        db,
        ChatConfig,
        {"chat_id": chat_id, "sequence": SEPARATOR.join(values)},
        conflict_columns=["chat_id"],
        update_columns=["sequence"]
    )
    logger.info(f"Chat {chat_id} estimation sequence set to {values}")
    return values


def validate_sequence(sequence: List[str]) -> List[str]:
    """
    去除前後空白，拒絕無法做成按鈕的序列

    規則：
    - 至少一個值
    - 不可有空值、重複值或過長的值
    - 值內不可包含分隔符號
    - 不可與生命週期按鈕值相同
    """
    values = [value.strip() for value in sequence]

    if not values:
        raise InvalidSequence("Sequence must contain at least one value")

    for value in values:
        if not value:
            raise InvalidSequence("Sequence values must not be empty")
        if len(value) > MAX_SEQUENCE_VALUE_LENGTH:
            raise InvalidSequence(
                f"Sequence value {value!r} is longer than {MAX_SEQUENCE_VALUE_LENGTH} characters"
            )
        if SEPARATOR in value:
            raise InvalidSequence(f"Sequence value {value!r} must not contain {SEPARATOR!r}")
        if value in (RESTART, FINISH):
            raise InvalidSequence(f"Sequence value {value!r} is reserved")

    if len(set(values)) != len(values):
        raise InvalidSequence("Sequence values must be unique")

    return values
