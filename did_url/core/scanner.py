"""A character cursor over an immutable string."""

from typing import Optional


class Scanner:
    """Cursor over `text` which never moves past the end of the input."""

    __slots__ = ("_text", "_index")

    def __init__(self, text: str):
        self._text = text
        self._index = 0

    def peek(self) -> Optional[str]:
        """Return the current character without advancing."""
        if self._index < len(self._text):
            return self._text[self._index]
        return None

    def next(self) -> Optional[int]:
        """Advance past the current character and return its offset."""
        if self._index >= len(self._text):
            return None
        self._index += 1
        return self._index - 1

    def take(self, count: int) -> Optional[str]:
        """Consume the next `count` characters, if that many remain."""
        end = self._index + count
        if end > len(self._text):
            return None
        chunk = self._text[self._index : end]
        self._index = end
        return chunk

    def index(self) -> int:
        return self._index

    def exhausted(self) -> bool:
        return self._index == len(self._text)
