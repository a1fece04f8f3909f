"""
自定義異常類別

集中管理所有業務邏輯異常，方便 API 層統一處理
儲存層錯誤（SQLAlchemy 異常）不包裝，直接往上拋
"""


class PlanningPokerException(Exception):
    """所有估點異常的基類"""
    pass


# ============ Session 相關異常 ============

class SessionNotFound(PlanningPokerException):
    """指定的 (chat, message) 錨點或 id 沒有對應的 Session"""
    def __init__(self, chat_id=None, message_id=None, session_id=None):
        self.chat_id = chat_id
        self.message_id = message_id
        self.session_id = session_id
        if session_id is not None:
            super().__init__(f"Session {session_id} not found")
        else:
            super().__init__(f"Session at chat {chat_id}, message {message_id} not found")


class SessionAlreadyExists(PlanningPokerException):
    """錨點已被使用（通常是開始指令被重複派送）"""
    def __init__(self, chat_id, message_id):
        self.chat_id = chat_id
        self.message_id = message_id
        super().__init__(f"Session at chat {chat_id}, message {message_id} already exists")


# ============ Participant 相關異常 ============

class IdentityConflict(PlanningPokerException):
    """insert-or-update 之後仍查不到參與者"""
    def __init__(self, external_id):
        self.external_id = external_id
        super().__init__(f"Could not resolve participant {external_id}")


# ============ Payload 相關異常 ============

class EmptyTitle(PlanningPokerException):
    """開始指令沒有標題"""
    pass


class InvalidButtonToken(PlanningPokerException):
    """按鈕值既不是估點序列中的值，也不是生命週期操作"""
    def __init__(self, token):
        self.token = token
        super().__init__(f"Unknown button token {token!r}")


class InvalidSequence(PlanningPokerException):
    """聊天室自訂的估點序列無法使用"""
    pass
