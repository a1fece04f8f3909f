"""
廣播政策：誰的操作會更新畫面

生命週期操作一定會執行，這裡只決定是否替換顯示內容
"""
from enum import Enum


class LifecycleAction(str, Enum):
    SUBMIT = "submit"
    FINISH = "finish"
    RESTART = "restart"


def may_broadcast(actor_id: int, initiator_id: int, action: LifecycleAction) -> bool:
    """
    任何人的投票都會更新畫面，finish/restart 只有發起者會
    """
    if action == LifecycleAction.SUBMIT:
        return True
    return actor_id == initiator_id
