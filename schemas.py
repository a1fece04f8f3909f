"""
Pydantic 模型

三組：
- 聊天室送進來的事件（指令、按鈕）
- 儲存層交給 renderer 的 snapshot
- 返回的顯示內容
"""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


# ============ Inbound ============

class ParticipantIdentity(BaseModel):
    external_id: int
    first_name: str
    last_name: Optional[str] = None
    username: Optional[str] = None


class CommandMessage(BaseModel):
    message_id: int
    text: str
    sender: ParticipantIdentity
    # Session 顯示訊息的位置，預設為 bot 的回覆 (message_id + 1)
    anchor_message_id: Optional[int] = None


class ButtonPress(BaseModel):
    token: str
    sender: ParticipantIdentity


class ChatConfigUpdate(BaseModel):
    sequence: List[str] = Field(..., min_length=1)


# ============ Snapshots ============

class ParticipantName(BaseModel):
    first_name: str
    last_name: Optional[str] = None
    username: Optional[str] = None


class SessionSnapshot(BaseModel):
    id: int
    chat_id: int
    message_id: int
    title: str
    description: str = ""
    finished: bool = False
    initiator_id: int
    initiator: ParticipantName


class EstimationSnapshot(BaseModel):
    participant_id: int
    value: str
    participant: ParticipantName


class SubmitResult(str, Enum):
    APPLIED = "applied"
    NO_OP = "no_op"


# ============ Outbound ============

class ActionButton(BaseModel):
    label: str
    token: str


class DisplayPayload(BaseModel):
    text: str
    parse_mode: str = "MarkdownV2"
    keyboard: List[List[ActionButton]]


class CommandResponse(BaseModel):
    reply_text: Optional[str] = None
    display: Optional[DisplayPayload] = None
    session_id: Optional[int] = None


class ButtonPressResponse(BaseModel):
    edit: bool
    display: Optional[DisplayPayload] = None


class ChatConfigResponse(BaseModel):
    chat_id: int
    sequence: List[str]
    is_default: bool
