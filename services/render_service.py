"""
顯示服務：Session 狀態 -> 顯示內容（文字 + 鍵盤）

純計算邏輯：
- 不存取資料庫，沒有副作用
- 除了遮蔽估點的符號之外結果固定，符號由傳入的亂數來源抽取
  （預設為 `random` 模組）

版面：
    Оценка задачи: <title>
    _<description>_

    Инициатор: <name>

    Оценки:

    <symbol or value> - <name>
    ...
"""
from typing import List, Optional, Sequence
import random
import re

from constants import (
    DEFAULT_SEQ,
    EMOJI_SET,
    FUNC_BUTTONS,
    INITIATOR_PREFIX,
    ISSUE_ID_REGEX,
    KEYBOARD_ROW_SIZE,
    RESTART,
    TITLE_PREFIX,
    URL_REGEX,
    VOTES_HEADER,
)
from schemas import ActionButton, DisplayPayload, EstimationSnapshot, SessionSnapshot
from services.markdown_service import escape, italic, link
from services.naming_service import make_username_line

_URL_RE = re.compile(URL_REGEX)
_ISSUE_ID_RE = re.compile(ISSUE_ID_REGEX)


def is_url_valid(text: str) -> bool:
    return _URL_RE.search(text) is not None


def extract_issue_id(text: str) -> Optional[str]:
    """文字中第一個 "ABC-123" 格式的 token，沒有則返回 None"""
    match = _ISSUE_ID_RE.search(text)
    return match.group(0) if match else None


def render_title(title: str) -> str:
    """
    Issue URL 變成短連結：顯示文字是 issue id，連結目標是標題

    其他情況（純文字、沒有 issue id 的 URL）原樣跳脫

    範例：
        "https://jira.example.com/browse/ABC-42"
            -> "[ABC\\-42](https://jira.example.com/browse/ABC-42)"
    """
    if is_url_valid(title):
        issue_id = extract_issue_id(title)
        if issue_id:
            return link(title, escape(issue_id))
    return escape(title)


def render_vote_lines(
    estimations: Sequence[EstimationSnapshot],
    reveal: bool,
    rng=random,
) -> str:
    """
    每個估點一行 "<vote> - <name>"，依傳入順序

    未公開時每行各自抽一個符號取代估點值，每次呼叫都重新抽
    """
    lines = []
    for estimation in estimations:
        vote = estimation.value if reveal else rng.choice(EMOJI_SET)
        name = make_username_line(
            estimation.participant.first_name,
            estimation.participant.last_name,
            estimation.participant.username
        )
        lines.append(f"{vote} - {name}\n")
    return "".join(lines)


def render_text(
    session: SessionSnapshot,
    estimations: Optional[Sequence[EstimationSnapshot]],
    reveal: bool,
    rng=random,
) -> str:
    description = ""
    if session.description:
        description = "\n" + italic(escape(session.description))

    initiator = make_username_line(
        session.initiator.first_name,
        session.initiator.last_name,
        session.initiator.username
    )

    initiator_block = escape(f"\n{INITIATOR_PREFIX}{initiator}\n")

    votes = ""
    if estimations:
        votes = f"{VOTES_HEADER}\n\n" + escape(render_vote_lines(estimations, reveal, rng))

    return f"{TITLE_PREFIX}{render_title(session.title)}{description}\n{initiator_block}\n{votes}"


def make_keyboard(
    finished: bool,
    restarting: bool = False,
    sequence: Optional[Sequence[str]] = None,
) -> List[List[ActionButton]]:
    """
    開啟中（或剛重新開始）：估點值每 KEYBOARD_ROW_SIZE 個一列，最後是 restart/finish
    已結束：只有 restart
    """
    if finished and not restarting:
        return [[
            ActionButton(label=label, token=token)
            for label, token in FUNC_BUTTONS
            if token == RESTART
        ]]

    values = list(sequence) if sequence else list(DEFAULT_SEQ)
    keyboard = [
        [ActionButton(label=value, token=value) for value in values[i:i + KEYBOARD_ROW_SIZE]]
        for i in range(0, len(values), KEYBOARD_ROW_SIZE)
    ]
    keyboard.append([ActionButton(label=label, token=token) for label, token in FUNC_BUTTONS])
    return keyboard


def render(
    session: SessionSnapshot,
    estimations: Optional[Sequence[EstimationSnapshot]],
    reveal: bool,
    restarting: bool = False,
    sequence: Optional[Sequence[str]] = None,
    rng=random,
) -> DisplayPayload:
    """
    產生 Session 的完整顯示內容

    參數：
        session: Session snapshot（標題、描述、發起者、finished 旗標）
        estimations: 依插入順序的估點，None 表示不顯示估點區塊
        reveal: 顯示實際估點值而非遮蔽符號
        restarting: 即使 snapshot 是 finished 也使用開啟中的鍵盤
        sequence: 鍵盤上的估點值（聊天室自訂或預設）
        rng: 遮蔽符號的亂數來源，測試時傳入 random.Random(seed)

    返回：
        DisplayPayload（MarkdownV2 文字與分組按鈕）
    """
    return DisplayPayload(
        text=render_text(session, estimations, reveal, rng),
        keyboard=make_keyboard(session.finished, restarting, sequence)
    )
