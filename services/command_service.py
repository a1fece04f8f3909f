"""
指令服務：解析聊天室指令

純計算邏輯，不存取資料庫
"""
from typing import Optional, Tuple
import re

from constants import COMMAND_DESCRIPTIONS, HELP_HEADER
from core.exceptions import EmptyTitle

_COMMAND_RE = re.compile(r"^/(?P<name>[A-Za-z0-9_]+)(?:@(?P<bot>[A-Za-z0-9_]+))?(?:\s+|$)")


def parse_command(text: str, bot_username: str = "") -> Optional[Tuple[str, str]]:
    """
    把 "/name[@bot] args" 拆成 (name, args)

    規則：
    - name 轉成小寫
    - args 是第一段空白之後的所有內容（包含換行）
    - 有設定 bot_username 且不同時，"/name@other_bot" 返回 None

    返回：
        (name, args)，不是給這個 bot 的指令時返回 None

    範例：
        parse_command("/poker ABC-1") -> ("poker", "ABC-1")
        parse_command("/help") -> ("help", "")
        parse_command("hello") -> None
    """
    match = _COMMAND_RE.match(text)
    if not match:
        return None

    addressed_to = match.group("bot")
    if addressed_to and bot_username and addressed_to.lower() != bot_username.lower():
        return None

    return match.group("name").lower(), text[match.end():]


def parse_title_and_description(payload: str) -> Tuple[str, str]:
    """
    第一行是標題，其餘（可能多行）是描述

    範例：
        "Fix login bug" -> ("Fix login bug", "")
        "ABC-1\\nSteps\\nmore" -> ("ABC-1", "Steps\\nmore")
    """
    parts = payload.split("\n", 1)
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1]


def parse_start_payload(payload: str) -> Tuple[str, str]:
    """
    /poker 內容的標題與描述，先拆行再各自去除空白

    異常：
        EmptyTitle: 第一行是空白（即使後面幾行有內容）
    """
    title, description = parse_title_and_description(payload)
    title = title.strip()
    if not title:
        raise EmptyTitle("Session title must not be empty")
    return title, description.strip()


def help_text() -> str:
    lines = [HELP_HEADER]
    for name, description in COMMAND_DESCRIPTIONS:
        lines.append(f"/{name} - {description}")
    return "\n".join(lines)
