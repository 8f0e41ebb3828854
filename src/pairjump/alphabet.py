from __future__ import annotations
from typing import Iterator

from .config import LABELS


class LabelOutOfRange(IndexError):
    """A label was requested past the end of the alphabet."""


class LabelAlphabet:
    """
    Fixed, ordered set of single-character labels.
    Upper and lower case are distinct labels; the size N is the cap on how
    many occurrences one two-character key can hold.
    """
    __slots__ = ("_chars",)

    def __init__(self, chars: str = LABELS) -> None:
        entries = list(chars)
        for e in entries:
            if not isinstance(e, str) or len(e) != 1:
                raise ValueError(f"label {e!r} must be a single character")
        chars = "".join(entries)
        if not chars:
            raise ValueError("label alphabet must not be empty")
        seen = set()
        for ch in chars:
            if ch in seen:
                raise ValueError(f"duplicate label {ch!r} in alphabet")
            seen.add(ch)
        self._chars = chars

    def label_at(self, index: int) -> str:
        if index < 0 or index >= len(self._chars):
            raise LabelOutOfRange(f"label index {index} outside alphabet of size {len(self._chars)}")
        return self._chars[index]

    def index_of(self, label: str) -> int:
        i = self._chars.find(label) if len(label) == 1 else -1
        if i == -1:
            raise ValueError(f"{label!r} is not a label")
        return i

    def __len__(self) -> int:
        return len(self._chars)

    def __iter__(self) -> Iterator[str]:
        return iter(self._chars)

    def __contains__(self, ch: object) -> bool:
        return isinstance(ch, str) and len(ch) == 1 and ch in self._chars

    def __eq__(self, other: object) -> bool:
        return isinstance(other, LabelAlphabet) and other._chars == self._chars

    def __hash__(self) -> int:
        return hash(self._chars)

    def __repr__(self) -> str:
        return f"LabelAlphabet({self._chars!r})"

    def __str__(self) -> str:
        return self._chars


DEFAULT_ALPHABET = LabelAlphabet(LABELS)
