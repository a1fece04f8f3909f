"""
Tests for the display renderer.
"""
import random

import pytest

from constants import EMOJI_SET, FINISH, RESTART
from schemas import EstimationSnapshot, ParticipantName, SessionSnapshot
from services.markdown_service import escape
from services.render_service import (
    extract_issue_id,
    is_url_valid,
    make_keyboard,
    render,
    render_title,
)

SPECIALS = set("_*[]()~`>#+-=|{}.!")


def make_session(title="Fix login bug", description="", finished=False, **initiator):
    return SessionSnapshot(
        id=1,
        chat_id=100,
        message_id=11,
        title=title,
        description=description,
        finished=finished,
        initiator_id=1,
        initiator=ParticipantName(**(initiator or {"first_name": "Alice"}))
    )


def vote(participant_id, name, value, **extra):
    return EstimationSnapshot(
        participant_id=participant_id,
        value=value,
        participant=ParticipantName(first_name=name, **extra)
    )


def unescaped_specials(text):
    """Markup characters in text that are not preceded by a backslash."""
    found = []
    i = 0
    while i < len(text):
        if text[i] == "\\":
            i += 2
            continue
        if text[i] in SPECIALS:
            found.append(text[i])
        i += 1
    return found


def tokens(keyboard):
    return [[button.token for button in row] for row in keyboard]


# ============ text ============

def test_new_session_display():
    payload = render(make_session(), None, reveal=False)

    assert payload.text == "Оценка задачи: Fix login bug\n\nИнициатор: Alice\n\n"
    assert "Оценки" not in payload.text
    assert payload.parse_mode == "MarkdownV2"
    assert tokens(payload.keyboard) == [
        ["0", "1", "2", "3"],
        ["5", "8", "13", "21"],
        ["34", "55", "89"],
        [RESTART, FINISH],
    ]


def test_initiator_line_includes_last_name_and_handle():
    session = make_session(first_name="Alice", last_name="Smith", username="alice_s")
    payload = render(session, None, reveal=False)

    assert "Инициатор: Alice Smith \\(@alice\\_s\\)" in payload.text


def test_description_is_italic_and_escaped():
    payload = render(make_session(description="Steps: 1. open\n2. click"), None, reveal=False)

    assert "Fix login bug\n_Steps: 1\\. open\n2\\. click_\n" in payload.text


def test_empty_estimation_list_renders_no_votes_section():
    payload = render(make_session(), [], reveal=False)
    assert "Оценки" not in payload.text


def test_hidden_votes_never_show_values():
    estimations = [vote(2, "Bob", "5"), vote(3, "Carol", "8")]

    for seed in range(20):
        payload = render(make_session(), estimations, reveal=False, rng=random.Random(seed))
        votes = payload.text.split("Оценки:\n\n", 1)[1]
        assert "5" not in votes
        assert "8" not in votes
        lines = votes.splitlines()
        assert len(lines) == 2
        assert lines[0].split(" \\- ")[0] in EMOJI_SET
        assert lines[0].endswith("Bob")
        assert lines[1].endswith("Carol")


def test_hidden_symbols_come_from_the_injected_source():
    estimations = [vote(2, "Bob", "5"), vote(3, "Carol", "8")]

    first = render(make_session(), estimations, reveal=False, rng=random.Random(3))
    second = render(make_session(), estimations, reveal=False, rng=random.Random(3))

    assert first == second


def test_revealed_votes_in_submission_order():
    estimations = [vote(2, "Bob", "5"), vote(3, "Carol", "8")]
    payload = render(make_session(finished=True), estimations, reveal=True)

    assert payload.text.endswith("Оценки:\n\n5 \\- Bob\n8 \\- Carol\n")
    assert tokens(payload.keyboard) == [[RESTART]]


@pytest.mark.parametrize("title", [
    "*bold* _it_ [x](http://y)",
    "a`b`c ~d~ >e #f +g -h =i |j| {k} .l !m",
    "back\\slash",
])
def test_markup_in_user_text_is_escaped(title):
    estimations = [vote(2, "B*o_b", "5", last_name="[x]", username="u_1")]
    session = make_session(title=title, description=title, first_name="A_l*i[c]e")

    for reveal in (False, True):
        payload = render(session, estimations, reveal=reveal)
        body = payload.text.replace("\n_", "\n").replace("_\n", "\n")
        assert unescaped_specials(body) == []


def test_escape_is_injective_on_backslashes():
    assert escape("\\*") != escape("*")
    assert escape("\\*") == "\\\\\\*"


# ============ title ============

def test_issue_url_title_links_issue_id_to_url():
    title = "https://jira.example.com/browse/ABC-42"
    assert render_title(title) == "[ABC\\-42](https://jira.example.com/browse/ABC-42)"


def test_link_target_escapes_closing_paren():
    title = "https://jira.example.com/browse/ABC-42?q=(x)"
    assert render_title(title) == "[ABC\\-42](https://jira.example.com/browse/ABC-42?q=(x\\))"


def test_url_without_issue_id_is_plain_text():
    title = "https://example.com/page"
    assert render_title(title) == "https://example\\.com/page"


def test_issue_id_without_url_is_plain_text():
    assert render_title("ABC-42 login") == "ABC\\-42 login"


def test_url_and_issue_helpers():
    assert is_url_valid("see https://tracker.io/T-1")
    assert not is_url_valid("not a link")
    assert extract_issue_id("https://tracker.io/browse/PROJ-123/x") == "PROJ-123"
    assert extract_issue_id("lowercase abc-1") is None


# ============ keyboard ============

def test_finished_keyboard_has_only_restart():
    assert tokens(make_keyboard(finished=True)) == [[RESTART]]


def test_restarting_forces_open_keyboard():
    keyboard = make_keyboard(finished=True, restarting=True)
    assert keyboard[-1][0].token == RESTART
    assert keyboard[-1][1].token == FINISH
    assert keyboard[0][0].token == "0"


def test_keyboard_uses_custom_sequence_and_labels():
    keyboard = make_keyboard(finished=False, sequence=["XS", "S", "M", "L", "XL"])

    assert tokens(keyboard) == [["XS", "S", "M", "L"], ["XL"], [RESTART, FINISH]]
    assert [button.label for button in keyboard[-1]] == ["Перезапустить", "Завершить"]
