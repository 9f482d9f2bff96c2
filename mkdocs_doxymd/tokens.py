"""Character cursor used by the Doxygen tag transform."""

from __future__ import annotations

WORD_SEPARATORS = frozenset(" \t\r\n[")

# ASCII whitespace, without vertical tab
ASCII_WHITESPACE = frozenset(" \t\n\x0c\r")


class TokenStream:
    """Forward-only cursor over a string.

    Iterating yields one character at a time; the ``take_*``/``skip_*``
    helpers consume from the same position, so they can be called from
    inside a ``for`` loop over the stream.
    """

    def __init__(self, text: str):
        self._text = text
        self._pos = 0

    def __iter__(self):
        return self

    def __next__(self) -> str:
        char = self.next_char()
        if char is None:
            raise StopIteration
        return char

    def peek(self) -> str | None:
        if self._pos < len(self._text):
            return self._text[self._pos]
        return None

    def next_char(self) -> str | None:
        char = self.peek()
        if char is not None:
            self._pos += 1
        return char

    def take_while(self, predicate) -> str:
        start = self._pos
        end = len(self._text)
        while self._pos < end and predicate(self._text[self._pos]):
            self._pos += 1
        return self._text[start : self._pos]

    def skip_while(self, predicate) -> None:
        self.take_while(predicate)

    def take_word(self) -> str:
        return self.take_while(lambda c: c not in WORD_SEPARATORS)

    def skip_whitespace(self) -> None:
        self.skip_while(lambda c: c in ASCII_WHITESPACE)
