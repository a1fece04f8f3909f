"""
Telegram MarkdownV2 工具

所有使用者提供的文字放進訊息前都要經過 escape()，
標題、描述與名稱都無法開啟或關閉格式
"""
from telegram.helpers import escape_markdown


def escape(text: str) -> str:
    return escape_markdown(text, version=2)


def escape_link_url(url: str) -> str:
    """inline link 的 (...) 內只需跳脫 ')' 和 '\\'"""
    return escape_markdown(url, version=2, entity_type="text_link")


def link(url: str, text: str) -> str:
    """
    Inline link：`text` 原樣放入（須先跳脫），`url` 在這裡跳脫
    """
    return f"[{text}]({escape_link_url(url)})"


def italic(text: str) -> str:
    """`text` 必須已經跳脫"""
    return f"_{text}_"
