"""
Token cursor: a linear, rewindable pointer over the raw argument list.

The cursor starts logically *before* the first token (index -1). Matchers pull
tokens with next(); combinators that need to backtrack save `cursor.index`
before an attempt and write it back on failure. That save/restore is the only
undo mechanism, there is no mark/commit API on top of it.

Clamping rules
- next() past the last token keeps the index on the last position and yields `absent`.
- previous() before the first token keeps the index on 0 and yields `absent`.
  On an empty stream both keep the index at -1, the only valid position.
Neither ever raises or indexes out of bounds.

Example
    >>> cursor = Cursor(["add", "3"])
    >>> cursor.next(), cursor.next(), cursor.next()
    ('add', '3', absent)
    >>> cursor.index
    1
"""
from collections.abc import Iterable

from .absence import absent


class Cursor:
    """
    Rewindable pointer over an immutable snapshot of tokens.

    Properties
    - tokens: the tokens as a tuple (the source iterable is never mutated or re-read).
    - index: current zero-based position; -1 means “before the first token”.
    - exhausted: whether next() would yield `absent`.
    """

    __slots__ = ("_tokens", "_index")

    def __init__(self, tokens=(), /):
        if isinstance(tokens, str) or not isinstance(tokens, Iterable):
            raise TypeError("Cursor() argument must be an iterable of strings")
        self._tokens = tuple(tokens)
        if not all(isinstance(token, str) for token in self._tokens):
            raise TypeError("Cursor() argument must be an iterable of strings")
        self._index = -1

    @property
    def tokens(self):
        return self._tokens

    @property
    def index(self):
        return self._index

    @index.setter
    def index(self, index):
        if not isinstance(index, int) or isinstance(index, bool):
            raise TypeError("cursor index must be an integer")
        if not -1 <= index < len(self._tokens):
            raise ValueError("cursor index %d is out of range" % index)
        self._index = index

    @property
    def exhausted(self):
        return self._index + 1 >= len(self._tokens)

    def next(self):
        """
        Advance one position and return the token there, or `absent` past the end.
        """
        self._index += 1
        if self._index >= len(self._tokens):
            # Clamp on the last token; an empty stream stays before the start.
            self._index = len(self._tokens) - 1
            return absent
        return self._tokens[self._index]

    def previous(self):
        """
        Retreat one position and return the token there, or `absent` before the start.

        An empty stream has no position 0, so the index stays at -1 there.
        """
        self._index -= 1
        if self._index < 0:
            self._index = 0 if self._tokens else -1
            return absent
        return self._tokens[self._index]

    def __len__(self):
        return len(self._tokens)

    def __repr__(self):
        return "cursor(tokens=%r, index=%d)" % (self._tokens, self._index)

    def __rich_repr__(self):
        yield "tokens", self._tokens
        yield "index", self._index


__all__ = (
    "Cursor",
)
