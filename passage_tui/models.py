from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple


# ---------------------------
# Colours and style
# ---------------------------

@dataclass(frozen=True)
class Rgba:
    red: int
    green: int
    blue: int
    alpha: int = 255

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue", "alpha"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 255:
                raise ValueError(f"{name} channel must be an integer in 0..255, got {value!r}")

    @classmethod
    def from_sequence(cls, values: Sequence[int]) -> "Rgba":
        if isinstance(values, (str, bytes)) or len(values) != 4:
            raise ValueError(f"expected four colour channels, got {values!r}")
        red, green, blue, alpha = values
        return cls(red, green, blue, alpha)

    def lighten(self, amount: float) -> "Rgba":
        scale = 1.0 + amount

        def channel(value: int) -> int:
            return max(0, min(255, int(round(value * scale))))

        return Rgba(channel(self.red), channel(self.green), channel(self.blue), self.alpha)

    def over(self, background: "Rgba") -> "Rgba":
        """Composite this colour onto an opaque background using its alpha."""
        a = self.alpha / 255.0

        def channel(fg: int, bg: int) -> int:
            return int(round(fg * a + bg * (1.0 - a)))

        return Rgba(
            channel(self.red, background.red),
            channel(self.green, background.green),
            channel(self.blue, background.blue),
        )

    @property
    def hex(self) -> str:
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"


@dataclass(frozen=True)
class Style:
    spell_error_color: Rgba = Rgba(200, 30, 20, 90)
    spell_correct_color: Rgba = Rgba(40, 200, 50, 90)
    shadow_text_color: Rgba = Rgba(169, 169, 169, 100)
    background_color: Rgba = Rgba(65, 105, 225, 100)
    word_color: Rgba = Rgba(40, 200, 50, 90)
    background_lighten: float = 0.9

    def background(self) -> Rgba:
        """Fill colour for the whole frame."""
        return self.background_color.lighten(self.background_lighten)


# ---------------------------
# Passages
# ---------------------------

def split_lines(text: str) -> List[str]:
    """
    Split on line feeds only, dropping the carriage return of a CRLF pair.
    A trailing line break does not start an extra empty line.
    """
    parts = text.split("\n")
    tail = parts.pop()
    lines = [p[:-1] if p.endswith("\r") else p for p in parts]
    if tail:
        lines.append(tail)
    return lines


@dataclass(frozen=True)
class Passage:
    label: str
    text: str
    finished: bool = False

    @property
    def lines(self) -> List[str]:
        return split_lines(self.text)

    @property
    def typeable(self) -> str:
        """
        The characters a user actually types: the text with line breaks
        removed. Line breaks only decide where the next character is drawn.
        """
        return "".join(self.lines)


class PassageSet:
    """Ordered, read-only collection of unfinished passages."""

    def __init__(self, passages: Iterable[Passage] = ()) -> None:
        self._passages: Tuple[Passage, ...] = tuple(passages)

    @classmethod
    def from_passages(cls, passages: Iterable[Passage]) -> "PassageSet":
        # finished passages are dropped here, once, and never come back
        return cls(p for p in passages if not p.finished)

    def __len__(self) -> int:
        return len(self._passages)

    def __iter__(self) -> Iterator[Passage]:
        return iter(self._passages)

    def __getitem__(self, index: int) -> Passage:
        return self._passages[index]

    def get(self, index: int) -> Optional[Passage]:
        if 0 <= index < len(self._passages):
            return self._passages[index]
        return None

    def labels(self) -> List[str]:
        return [p.label for p in self._passages]

    def longest_label(self) -> int:
        return max((len(p.label) for p in self._passages), default=0)


@dataclass(frozen=True)
class Config:
    style: Style = field(default_factory=Style)
    passages: Tuple[Passage, ...] = ()
