"""
Tests for naming, markdown and command parsing helpers.
"""
import pytest

from core.exceptions import EmptyTitle
from services.command_service import (
    help_text,
    parse_command,
    parse_start_payload,
    parse_title_and_description,
)
from services.markdown_service import escape, italic, link
from services.naming_service import make_username_line


@pytest.mark.parametrize("parts, expected", [
    (("Alice", None, None), "Alice"),
    (("Alice", "", ""), "Alice"),
    (("Bob", "Smith", None), "Bob Smith"),
    (("Carol", None, "carol"), "Carol (@carol)"),
    (("Bob", "Smith", "bobs"), "Bob Smith (@bobs)"),
])
def test_make_username_line(parts, expected):
    assert make_username_line(*parts) == expected


def test_escape_markdown():
    assert escape("a_b*c") == "a\\_b\\*c"
    assert escape("1.5 (approx)!") == "1\\.5 \\(approx\\)\\!"
    assert escape("Привет") == "Привет"


def test_link_and_italic():
    assert link("https://x.io/a)b", "A\\-1") == "[A\\-1](https://x.io/a\\)b)"
    assert italic("text") == "_text_"


# ============ commands ============

def test_parse_command_with_args():
    assert parse_command("/poker Fix login bug") == ("poker", "Fix login bug")


def test_parse_command_keeps_multiline_args():
    assert parse_command("/poker ABC-1\nline one\nline two") == ("poker", "ABC-1\nline one\nline two")


def test_parse_command_without_args():
    assert parse_command("/help") == ("help", "")
    assert parse_command("/HELP") == ("help", "")


def test_parse_command_rejects_plain_text():
    assert parse_command("hello /poker") is None
    assert parse_command("") is None


def test_parse_command_bot_addressing():
    assert parse_command("/poker@PokerBot X", "pokerbot") == ("poker", "X")
    assert parse_command("/poker@OtherBot X", "pokerbot") is None
    assert parse_command("/poker@OtherBot X") == ("poker", "X")


def test_parse_title_and_description():
    assert parse_title_and_description("Fix login bug") == ("Fix login bug", "")
    assert parse_title_and_description("T\nline 1\nline 2") == ("T", "line 1\nline 2")


def test_parse_start_payload_strips():
    assert parse_start_payload("  Title  \n  desc \n") == ("Title", "desc")


@pytest.mark.parametrize("payload", ["", "   ", "\t\n ", "   \nOnly description", "\nABC-1"])
def test_parse_start_payload_rejects_empty_title(payload):
    with pytest.raises(EmptyTitle):
        parse_start_payload(payload)


def test_help_text_lists_commands():
    text = help_text()
    assert text.startswith("Команды бота:")
    assert "/help" in text
    assert "/poker" in text
