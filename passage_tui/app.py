from __future__ import annotations

from typing import Dict, List, Optional, Tuple

try:
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Container
    from textual.widget import Widget
except ModuleNotFoundError as exc:
    missing = getattr(exc, "name", "")
    hint = "python3 -m pip install -U rich textual"
    print(f"Missing dependency '{missing}'. Install with: {hint}")
    raise SystemExit(1) from exc

from .diff import Classification
from .models import Config, Rgba, Style
from .navigation import Handled, KeyEvent, KeyKind, Mode
from .session import RenderModel, TypingSession


# ---------------------------
# Input source
# ---------------------------

KEY_MAP: Dict[str, KeyKind] = {
    "up": KeyKind.MOVE_UP,
    "down": KeyKind.MOVE_DOWN,
    "enter": KeyKind.CONFIRM,
    "tab": KeyKind.NEXT_PASSAGE,
    "shift+tab": KeyKind.PREV_PASSAGE,
    "escape": KeyKind.ESCAPE,
    "ctrl+l": KeyKind.TOGGLE_LIST,
    "backspace": KeyKind.BACKSPACE,
    "delete": KeyKind.BACKSPACE,
}


def key_event_from_textual(event: events.Key) -> Optional[KeyEvent]:
    kind = KEY_MAP.get(event.key)
    if kind is not None:
        return KeyEvent(kind)
    if event.is_printable and event.character:
        return KeyEvent.char_key(event.character)
    return None


# ---------------------------
# Renderer
# ---------------------------

def _styles(style: Style) -> Dict[str, str]:
    bg = style.background()

    def fg(color: Rgba) -> str:
        return color.over(bg).hex

    return {
        Classification.CORRECT.value: fg(style.spell_correct_color),
        Classification.INCORRECT.value: fg(style.spell_error_color),
        Classification.PENDING.value: fg(style.shadow_text_color),
        "label": f"bold {fg(style.word_color)}",
        "entry": fg(style.shadow_text_color),
        "selected": f"bold reverse {fg(style.word_color)}",
        "hint": fg(style.shadow_text_color),
    }


def render_text(model: RenderModel, style: Style) -> Text:
    """Lay the model's cells out on a grid and turn it into rich Text."""
    theme = _styles(style)
    grid: Dict[int, Dict[int, Tuple[str, str]]] = {}

    def put(column: int, row: int, chars: str, cell_style: str) -> None:
        line = grid.setdefault(row, {})
        for offset, char in enumerate(chars):
            line[column + offset] = (char, cell_style)

    if model.message is not None:
        put(0, 0, model.message, theme["hint"])

    for entry in model.entries:
        put(0, entry.row, entry.label, theme["selected" if entry.selected else "entry"])

    if model.label is not None:
        put(model.left_margin, 0, model.label, theme["label"])
        progress = model.progress
        status = f"{progress.correct}/{progress.total} correct"
        if model.mode is Mode.SELECTING:
            status += "  |  up/down choose, enter type"
        else:
            status += "  |  tab next, shift+tab prev, esc list"
        put(model.left_margin, 1, status, theme["hint"])

    for cell in model.cells:
        put(cell.column, cell.row, cell.char, theme[cell.classification.value])

    text = Text()
    if not grid:
        return text
    for row in range(max(grid) + 1):
        line = grid.get(row, {})
        if line:
            chars: List[Tuple[str, str]] = [(" ", "")] * (max(line) + 1)
            for column, cell in line.items():
                chars[column] = cell
            for char, cell_style in chars:
                text.append(char, style=cell_style)
        if row < max(grid):
            text.append("\n")
    return text


# ---------------------------
# App
# ---------------------------

class PassageView(Widget, can_focus=True):
    """Draws the session and feeds it key presses."""

    def __init__(self, session: TypingSession, **kwargs) -> None:
        super().__init__(**kwargs)
        self.session = session

    def render(self) -> Text:
        return render_text(self.session.render_model(), self.session.style)

    def on_key(self, event: events.Key) -> None:
        key = key_event_from_textual(event)
        if key is None:
            return
        if self.session.handle_key(key) is Handled.CONSUMED:
            # tab/shift+tab must not reach the screen focus bindings
            event.stop()
            event.prevent_default()
            self.refresh()


class PassageTUI(App):
    CSS = """
    Screen {
        background: transparent;
    }

    #root {
        height: 100%;
        padding: 1 2;
    }

    PassageView {
        height: 1fr;
    }
    """

    TITLE = "Passage TUI"
    SUB_TITLE = "passage practice, local only"

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, config: Config) -> None:
        super().__init__()
        self.session = TypingSession(config)

    def compose(self) -> ComposeResult:
        with Container(id="root"):
            self.view = PassageView(self.session)
            yield self.view

    def on_mount(self) -> None:
        self.screen.styles.background = self.session.style.background().hex
        self.view.focus()
