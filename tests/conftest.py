import pytest

from passage_tui.models import Config, Passage
from passage_tui.session import TypingSession


def make_session(*passages: Passage) -> TypingSession:
    return TypingSession(Config(passages=passages))


@pytest.fixture
def two_passages() -> TypingSession:
    return make_session(
        Passage("first", "hello world"),
        Passage("second", "lazy dog"),
    )
