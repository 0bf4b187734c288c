from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import List, Optional


class Mode(enum.Enum):
    SELECTING = "selecting"
    TYPING = "typing"


class KeyKind(enum.Enum):
    CHAR = "char"
    BACKSPACE = "backspace"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    CONFIRM = "confirm"
    NEXT_PASSAGE = "next_passage"
    PREV_PASSAGE = "prev_passage"
    ESCAPE = "escape"
    TOGGLE_LIST = "toggle_list"


class Handled(enum.Enum):
    CONSUMED = "consumed"
    NOT_CONSUMED = "not_consumed"

    @classmethod
    def of(cls, handled: bool) -> "Handled":
        return cls.CONSUMED if handled else cls.NOT_CONSUMED


@dataclass(frozen=True)
class KeyEvent:
    kind: KeyKind
    char: Optional[str] = None

    @classmethod
    def char_key(cls, char: str) -> "KeyEvent":
        if len(char) != 1:
            raise ValueError(f"character key needs exactly one character, got {char!r}")
        return cls(KeyKind.CHAR, char)


class InputBuffer:
    """What has been typed so far for the current passage, capped at `limit`."""

    def __init__(self, limit: int = 0) -> None:
        self.limit = limit
        self._chars: List[str] = []

    @property
    def content(self) -> str:
        return "".join(self._chars)

    def __len__(self) -> int:
        return len(self._chars)

    def push(self, char: str) -> bool:
        # keys past the end of the passage are dropped
        if len(self._chars) >= self.limit:
            return False
        self._chars.append(char)
        return True

    def pop(self) -> bool:
        if not self._chars:
            return False
        self._chars.pop()
        return True

    def reset(self, limit: int) -> None:
        self.limit = limit
        self._chars.clear()


class Navigator:
    """
    Selecting/Typing mode plus the two indices into the passage set.

    `current_index` is the passage being typed; `selection_cursor` is the
    highlighted row in the list and only becomes current on confirm. Every
    move saturates at the ends of the set, so neither index can leave
    0..count-1. With an empty set nothing moves.

    The navigator never touches the input buffer. A True from confirm,
    next_passage or prev_passage tells the caller to start typing afresh.
    """

    def __init__(self, count: int) -> None:
        self.count = count
        self.mode = Mode.SELECTING
        self.current_index = 0
        self.selection_cursor = 0
        self.list_visible = True

    @property
    def empty(self) -> bool:
        return self.count == 0

    def move_down(self) -> bool:
        if self.mode is not Mode.SELECTING or self.empty:
            return False
        if self.selection_cursor + 1 < self.count:
            self.selection_cursor += 1
        return True

    def move_up(self) -> bool:
        if self.mode is not Mode.SELECTING or self.empty:
            return False
        if self.selection_cursor > 0:
            self.selection_cursor -= 1
        return True

    def confirm(self) -> bool:
        if self.mode is not Mode.SELECTING or self.empty:
            return False
        self.current_index = self.selection_cursor
        self.list_visible = False
        self.mode = Mode.TYPING
        return True

    def escape(self) -> bool:
        if self.mode is not Mode.TYPING:
            return False
        self.mode = Mode.SELECTING
        self.list_visible = True
        return True

    def next_passage(self) -> Optional[bool]:
        """True when the passage changed, False at the last one, None if not typing."""
        if self.mode is not Mode.TYPING:
            return None
        if self.current_index < self.count - 1:
            self.current_index += 1
            self.selection_cursor = self.current_index
            return True
        return False

    def prev_passage(self) -> Optional[bool]:
        """True when the passage changed, False at the first one, None if not typing."""
        if self.mode is not Mode.TYPING:
            return None
        if self.current_index > 0:
            self.current_index -= 1
            self.selection_cursor = self.current_index
            return True
        return False

    def toggle_list(self) -> bool:
        self.list_visible = not self.list_visible
        return True
