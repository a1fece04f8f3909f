"""
命名服務：參與者的顯示名稱

純計算邏輯，不存取資料庫
"""
from typing import Optional


def make_username_line(
    first_name: str,
    last_name: Optional[str] = None,
    username: Optional[str] = None,
) -> str:
    """
    產生估點旁或 "Инициатор:" 後面顯示的名稱

    格式："first [last] [(@username)]"

    範例：
        make_username_line("Alice") -> "Alice"
        make_username_line("Bob", "Smith", "bobs") -> "Bob Smith (@bobs)"
        make_username_line("Carol", None, "carol") -> "Carol (@carol)"

    注意：
        結果是純文字，放進 markup 前要先跳脫
    """
    line = first_name

    if last_name:
        line += f" {last_name}"

    if username:
        line += f" (@{username})"

    return line
