"""
ORM 模型

四個資料表：
- participants：每個聊天室使用者一列，external id 唯一
- sessions：每次估點一列，(chat, 錨點訊息) 唯一
- estimations：每個 (session, participant) 一個估點
- chat_configs：每個聊天室自訂的估點序列

unique constraint 是唯一的並發控制，寫入者不使用應用層的鎖
"""
from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from database import Base


class Participant(Base):
    __tablename__ = "participants"

    id = Column(Integer, primary_key=True)
    external_id = Column(BigInteger, nullable=False, unique=True)
    first_name = Column(String(64), nullable=False)
    last_name = Column(String(64), nullable=True)
    username = Column(String(32), nullable=True)


class PokerSession(Base):
    __tablename__ = "sessions"
    __table_args__ = (
        UniqueConstraint("chat_id", "message_id", name="uq_sessions_anchor"),
    )

    id = Column(Integer, primary_key=True)
    chat_id = Column(BigInteger, nullable=False)
    message_id = Column(BigInteger, nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(String(1000), nullable=False, default="")
    finished = Column(Boolean, nullable=False, default=False)
    initiator_id = Column(Integer, ForeignKey("participants.id"), nullable=False)

    initiator = relationship("Participant")


class Estimation(Base):
    __tablename__ = "estimations"
    __table_args__ = (
        UniqueConstraint("session_id", "participant_id", name="uq_estimations_vote"),
    )

    id = Column(Integer, primary_key=True)
    value = Column(String(16), nullable=False)
    session_id = Column(Integer, ForeignKey("sessions.id"), nullable=False)
    participant_id = Column(Integer, ForeignKey("participants.id"), nullable=False)

    participant = relationship("Participant")


class ChatConfig(Base):
    __tablename__ = "chat_configs"

    id = Column(Integer, primary_key=True)
    chat_id = Column(BigInteger, nullable=False, unique=True)
    # 逗號分隔的估點值，依鍵盤順序
    sequence = Column(String(255), nullable=False)
