from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .diff import Classification, classify
from .models import Config, Passage, PassageSet, Rgba, Style
from .navigation import Handled, InputBuffer, KeyEvent, KeyKind, Mode, Navigator

# Passage text starts this many rows below the label.
TOP_MARGIN = 10
# Gap between the longest label in the list and the passage text.
LIST_PADDING = 4

EMPTY_MESSAGE = "No passages left to type. Add some to the config file."


@dataclass(frozen=True)
class Cell:
    column: int
    row: int
    char: str
    classification: Classification


@dataclass(frozen=True)
class ListEntry:
    label: str
    row: int
    selected: bool


@dataclass(frozen=True)
class Progress:
    typed: int
    correct: int
    total: int


@dataclass(frozen=True)
class RenderModel:
    mode: Mode
    background: Rgba
    label: Optional[str]
    entries: Tuple[ListEntry, ...]
    left_margin: int
    cells: Tuple[Cell, ...]
    progress: Progress
    message: Optional[str] = None


class TypingSession:
    """
    Owns the passages, the input buffer and the navigator for one run.

    The host feeds key events to handle_key() and draws whatever
    render_model() returns; nothing else touches this state.
    """

    def __init__(self, config: Config) -> None:
        self.style: Style = config.style
        self.passages = PassageSet.from_passages(config.passages)
        self.navigator = Navigator(len(self.passages))
        self.buffer = InputBuffer()
        self._reset_buffer()

    # ---------------------------
    # State
    # ---------------------------

    @property
    def mode(self) -> Mode:
        return self.navigator.mode

    @property
    def current_index(self) -> int:
        return self.navigator.current_index

    @property
    def selection_cursor(self) -> int:
        return self.navigator.selection_cursor

    @property
    def list_visible(self) -> bool:
        return self.navigator.list_visible

    @property
    def typed(self) -> str:
        return self.buffer.content

    @property
    def current_passage(self) -> Optional[Passage]:
        return self.passages.get(self.navigator.current_index)

    def _reset_buffer(self) -> None:
        passage = self.current_passage
        self.buffer.reset(len(passage.typeable) if passage else 0)

    # ---------------------------
    # Input
    # ---------------------------

    def handle_key(self, event: KeyEvent) -> Handled:
        nav = self.navigator
        kind = event.kind

        if kind is KeyKind.TOGGLE_LIST:
            return Handled.of(nav.toggle_list())

        if nav.mode is Mode.SELECTING:
            if kind is KeyKind.MOVE_DOWN:
                return Handled.of(nav.move_down())
            if kind is KeyKind.MOVE_UP:
                return Handled.of(nav.move_up())
            if kind is KeyKind.CONFIRM:
                if nav.confirm():
                    self._reset_buffer()
                    return Handled.CONSUMED
            return Handled.NOT_CONSUMED

        if kind is KeyKind.CHAR and event.char is not None:
            self.buffer.push(event.char)
            return Handled.CONSUMED
        if kind is KeyKind.BACKSPACE:
            self.buffer.pop()
            return Handled.CONSUMED
        if kind in (KeyKind.NEXT_PASSAGE, KeyKind.PREV_PASSAGE):
            step = nav.next_passage if kind is KeyKind.NEXT_PASSAGE else nav.prev_passage
            if step():
                self._reset_buffer()
            return Handled.CONSUMED
        if kind is KeyKind.ESCAPE:
            return Handled.of(nav.escape())
        return Handled.NOT_CONSUMED

    # ---------------------------
    # Output
    # ---------------------------

    def render_model(self) -> RenderModel:
        nav = self.navigator
        background = self.style.background()
        passage = self.current_passage

        if passage is None:
            return RenderModel(
                mode=nav.mode,
                background=background,
                label=None,
                entries=(),
                left_margin=0,
                cells=(),
                progress=Progress(0, 0, 0),
                message=EMPTY_MESSAGE,
            )

        entries: Tuple[ListEntry, ...] = ()
        left_margin = 0
        if nav.list_visible:
            entries = tuple(
                ListEntry(label=label, row=row, selected=(row == nav.selection_cursor))
                for row, label in enumerate(self.passages.labels())
            )
            left_margin = self.passages.longest_label() + LIST_PADDING

        typed = self.buffer.content
        cells = tuple(
            Cell(
                column=left_margin + c.column,
                row=TOP_MARGIN + c.line,
                char=c.char,
                classification=c.classification,
            )
            for c in classify(passage.text, typed)
        )
        correct = sum(1 for c in cells if c.classification is Classification.CORRECT)
        progress = Progress(typed=len(typed), correct=correct, total=len(cells))

        return RenderModel(
            mode=nav.mode,
            background=background,
            label=passage.label,
            entries=entries,
            left_margin=left_margin,
            cells=cells,
            progress=progress,
        )
