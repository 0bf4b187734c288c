from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterator

from .models import split_lines

# Drawn in place of a target space the user got wrong, so the miss stays visible.
SPACE_PLACEHOLDER = "_"


class Classification(enum.Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    PENDING = "pending"


@dataclass(frozen=True)
class ClassifiedChar:
    index: int  # position in the typed stream
    line: int
    column: int
    char: str  # what to draw
    classification: Classification


class Diff:
    """
    Per-character verdicts for one passage against what has been typed.

    Iterating walks the passage line by line and yields one entry per
    character; line breaks only advance `line`. Every iteration is a fresh
    pass, so the same Diff can be drawn as often as needed.
    """

    def __init__(self, text: str, typed: str) -> None:
        self.text = text
        self.typed = typed

    def __iter__(self) -> Iterator[ClassifiedChar]:
        typed = self.typed
        n_typed = len(typed)
        index = 0
        for line_no, line in enumerate(split_lines(self.text)):
            for column, target in enumerate(line):
                if index < n_typed:
                    written = typed[index]
                    if written == target:
                        yield ClassifiedChar(index, line_no, column, written, Classification.CORRECT)
                    else:
                        shown = SPACE_PLACEHOLDER if target == " " else target
                        yield ClassifiedChar(index, line_no, column, shown, Classification.INCORRECT)
                else:
                    yield ClassifiedChar(index, line_no, column, target, Classification.PENDING)
                index += 1


def classify(text: str, typed: str) -> Diff:
    return Diff(text, typed)
