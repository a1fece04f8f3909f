"""
Engine、renderer 與 API 層共用的固定值

面向使用者的文字是俄文
"""

# Default estimation values, in keyboard order
DEFAULT_SEQ = ["0", "1", "2", "3", "5", "8", "13", "21", "34", "55", "89"]

RESTART = "restart"
FINISH = "finish"

# (label, token) pairs for the lifecycle buttons, in keyboard order
FUNC_BUTTONS = [("Перезапустить", RESTART), ("Завершить", FINISH)]

# Sequence values per keyboard row
KEYBOARD_ROW_SIZE = 4

# Masked-vote placeholders; one is drawn per vote line on every render
EMOJI_SET = ["♦️", "♠️", "♣️", "♥️"]

URL_REGEX = (
    r"https?://(www\.)?[-a-zA-Z0-9@:%._\+~#=]{2,256}\.[a-z]{2,4}\b"
    r"([-a-zA-Z0-9@:%_\+.~#?&//=]*)"
)
ISSUE_ID_REGEX = r"[A-Z]+-\d+"

TITLE_PREFIX = "Оценка задачи: "
INITIATOR_PREFIX = "Инициатор: "
VOTES_HEADER = "Оценки:"

HELP_HEADER = "Команды бота:"
COMMAND_DESCRIPTIONS = [
    ("help", "Вывести это сообщение"),
    ("poker", "Начать"),
]
MISSING_PAYLOAD_TEXT = "Отсутствует ссылка или ID задачи."
UNKNOWN_COMMAND_TEXT = "Command not found!"

MAX_SEQUENCE_VALUE_LENGTH = 8
