"""Whitespace tokenizer over a line-oriented text stream."""

from __future__ import annotations

from collections import deque
from typing import TextIO


class TokenReader:
    """Pull whitespace-separated tokens from *stream*, one line at a time.

    Lines are read lazily so an interactive stdin is answered command by
    command. A token sequence may span several lines. Raises ``EOFError``
    when the stream runs out.
    """

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._pending: deque[str] = deque()

    def _fill(self) -> None:
        while not self._pending:
            line = self._stream.readline()
            if not line:
                raise EOFError("end of input")
            self._pending.extend(line.split())

    def next_token(self) -> str:
        self._fill()
        return self._pending.popleft()

    def next_int(self) -> int:
        """Read the next token as an int; raises ``ValueError`` if it isn't one.

        The offending token is consumed either way.
        """
        return int(self.next_token())

    def next_line(self) -> str:
        """Return the rest of the current line, or the next whole line."""
        if self._pending:
            rest = " ".join(self._pending)
            self._pending.clear()
            return rest
        line = self._stream.readline()
        if not line:
            raise EOFError("end of input")
        return line.strip()

    def discard_line(self) -> None:
        self._pending.clear()
