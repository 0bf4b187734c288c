"""Tests for TypingSession key dispatch and the render model."""

from conftest import make_session

from passage_tui.diff import Classification
from passage_tui.models import Passage
from passage_tui.navigation import Handled, KeyEvent, KeyKind, Mode
from passage_tui.session import EMPTY_MESSAGE, LIST_PADDING, TOP_MARGIN

C = Classification

DOWN = KeyEvent(KeyKind.MOVE_DOWN)
UP = KeyEvent(KeyKind.MOVE_UP)
ENTER = KeyEvent(KeyKind.CONFIRM)
TAB = KeyEvent(KeyKind.NEXT_PASSAGE)
SHIFT_TAB = KeyEvent(KeyKind.PREV_PASSAGE)
ESC = KeyEvent(KeyKind.ESCAPE)
BACKSPACE = KeyEvent(KeyKind.BACKSPACE)
TOGGLE = KeyEvent(KeyKind.TOGGLE_LIST)


def type_text(session, text):
    return [session.handle_key(KeyEvent.char_key(c)) for c in text]


class TestScenarios:
    def test_typing_past_the_end_is_dropped(self):
        session = make_session(Passage("a", "hi"))
        session.handle_key(ENTER)
        type_text(session, "hx")
        cells = session.render_model().cells
        assert [(c.char, c.classification) for c in cells] == [("h", C.CORRECT), ("i", C.INCORRECT)]
        assert session.typed == "hx"

        assert type_text(session, "more") == [Handled.CONSUMED] * 4
        assert session.typed == "hx"

    def test_move_down_then_confirm(self, two_passages):
        session = two_passages
        assert session.handle_key(DOWN) is Handled.CONSUMED
        assert session.handle_key(ENTER) is Handled.CONSUMED
        assert session.mode is Mode.TYPING
        assert session.current_index == 1
        assert session.typed == ""

    def test_placeholder_only_for_missed_space(self):
        session = make_session(Passage("a", "a b"))
        session.handle_key(ENTER)
        type_text(session, "a x")
        cells = session.render_model().cells
        assert cells[1].classification is C.CORRECT
        assert cells[2].classification is C.INCORRECT
        assert cells[2].char == "b"

        session.handle_key(BACKSPACE)
        session.handle_key(BACKSPACE)
        type_text(session, "x")
        cells = session.render_model().cells
        assert cells[1].char == "_"

    def test_finished_passages_unreachable(self):
        session = make_session(
            Passage("keep", "one"),
            Passage("gone", "two", finished=True),
            Passage("also", "three"),
        )
        assert len(session.passages) == 2
        for _ in range(5):
            session.handle_key(DOWN)
        session.handle_key(TOGGLE)
        session.handle_key(TOGGLE)
        labels = [e.label for e in session.render_model().entries]
        assert labels == ["keep", "also"]

        session.handle_key(ENTER)
        assert session.current_passage.label == "also"
        for _ in range(5):
            session.handle_key(SHIFT_TAB)
            assert session.current_passage.label != "gone"
        for _ in range(5):
            session.handle_key(TAB)
            assert session.current_passage.label != "gone"


class TestTyping:
    def test_backspace_shrinks_by_one(self, two_passages):
        session = two_passages
        session.handle_key(ENTER)
        type_text(session, "hel")
        assert session.handle_key(BACKSPACE) is Handled.CONSUMED
        assert session.typed == "he"

    def test_backspace_on_empty_is_consumed_noop(self, two_passages):
        session = two_passages
        session.handle_key(ENTER)
        assert session.handle_key(BACKSPACE) is Handled.CONSUMED
        assert session.typed == ""

    def test_buffer_never_exceeds_passage(self, two_passages):
        session = two_passages
        session.handle_key(ENTER)
        type_text(session, "x" * 50)
        assert len(session.typed) == len("hello world")

    def test_multiline_limit_ignores_line_breaks(self):
        session = make_session(Passage("a", "ab\ncd"))
        session.handle_key(ENTER)
        type_text(session, "abcdef")
        assert session.typed == "abcd"
        cells = session.render_model().cells
        assert all(c.classification is C.CORRECT for c in cells)
        assert [c.row for c in cells] == [TOP_MARGIN, TOP_MARGIN, TOP_MARGIN + 1, TOP_MARGIN + 1]

    def test_tab_switches_passage_and_clears(self, two_passages):
        session = two_passages
        session.handle_key(ENTER)
        type_text(session, "hel")
        assert session.handle_key(TAB) is Handled.CONSUMED
        assert session.current_index == 1
        assert session.selection_cursor == 1
        assert session.typed == ""

    def test_tab_at_last_passage_keeps_input(self, two_passages):
        session = two_passages
        session.handle_key(DOWN)
        session.handle_key(ENTER)
        type_text(session, "la")
        assert session.handle_key(TAB) is Handled.CONSUMED
        assert session.current_index == 1
        assert session.typed == "la"

    def test_shift_tab_at_first_passage_keeps_input(self, two_passages):
        session = two_passages
        session.handle_key(ENTER)
        type_text(session, "he")
        session.handle_key(SHIFT_TAB)
        assert session.current_index == 0
        assert session.typed == "he"

    def test_enter_while_typing_not_consumed(self, two_passages):
        session = two_passages
        session.handle_key(ENTER)
        assert session.handle_key(ENTER) is Handled.NOT_CONSUMED

    def test_reentering_typing_clears_buffer(self, two_passages):
        session = two_passages
        session.handle_key(ENTER)
        type_text(session, "hel")
        session.handle_key(ESC)
        assert session.typed == "hel"
        session.handle_key(ENTER)
        assert session.typed == ""


class TestSelecting:
    def test_char_keys_not_consumed(self, two_passages):
        assert two_passages.handle_key(KeyEvent.char_key("a")) is Handled.NOT_CONSUMED
        assert two_passages.typed == ""

    def test_tab_not_consumed(self, two_passages):
        assert two_passages.handle_key(TAB) is Handled.NOT_CONSUMED

    def test_clamped_moves_still_consumed(self, two_passages):
        assert two_passages.handle_key(UP) is Handled.CONSUMED
        assert two_passages.selection_cursor == 0

    def test_list_visibility_follows_mode(self, two_passages):
        session = two_passages
        session.handle_key(ENTER)
        assert not session.list_visible
        session.handle_key(TOGGLE)
        assert session.list_visible
        session.handle_key(ESC)
        assert session.list_visible
        session.handle_key(TOGGLE)
        session.handle_key(ENTER)
        assert not session.list_visible

    def test_current_lags_cursor(self, two_passages):
        session = two_passages
        session.handle_key(DOWN)
        assert session.current_index == 0
        assert session.render_model().label == "first"


class TestRenderModel:
    def test_idempotent(self, two_passages):
        session = two_passages
        session.handle_key(ENTER)
        type_text(session, "hxl")
        assert session.render_model() == session.render_model()

    def test_list_and_margin(self, two_passages):
        model = two_passages.render_model()
        assert [(e.label, e.row, e.selected) for e in model.entries] == [
            ("first", 0, True),
            ("second", 1, False),
        ]
        assert model.left_margin == len("second") + LIST_PADDING
        assert model.cells[0].column == model.left_margin
        assert model.cells[0].row == TOP_MARGIN

    def test_hidden_list_has_no_margin(self, two_passages):
        session = two_passages
        session.handle_key(ENTER)
        model = session.render_model()
        assert model.entries == ()
        assert model.left_margin == 0
        assert model.cells[0].column == 0

    def test_progress(self, two_passages):
        session = two_passages
        session.handle_key(ENTER)
        type_text(session, "hxllo")
        progress = session.render_model().progress
        assert (progress.typed, progress.correct, progress.total) == (5, 4, len("hello world"))

    def test_progress_counts_correct_cells(self):
        session = make_session(Passage("a", "ab\ncd"))
        session.handle_key(ENTER)
        type_text(session, "axc")
        model = session.render_model()
        correct = [c for c in model.cells if c.classification is C.CORRECT]
        assert model.progress.correct == len(correct) == 2
        assert model.progress.total == len(model.cells) == 4

    def test_background_is_lightened(self, two_passages):
        model = two_passages.render_model()
        assert model.background == two_passages.style.background()


class TestEmptyPassageSet:
    def test_everything_finished(self):
        session = make_session(Passage("a", "x", finished=True))
        for key in (DOWN, UP, ENTER, TAB, SHIFT_TAB, ESC, BACKSPACE):
            assert session.handle_key(key) is Handled.NOT_CONSUMED
        assert session.handle_key(KeyEvent.char_key("x")) is Handled.NOT_CONSUMED
        assert session.mode is Mode.SELECTING

        model = session.render_model()
        assert model.cells == ()
        assert model.entries == ()
        assert model.label is None
        assert model.message == EMPTY_MESSAGE

    def test_toggle_still_works(self):
        session = make_session()
        assert session.handle_key(TOGGLE) is Handled.CONSUMED
        assert not session.list_visible
        assert session.render_model().message == EMPTY_MESSAGE
