"""The DID URL value type."""

from dataclasses import replace
from functools import total_ordering
from typing import ClassVar, Optional
from urllib.parse import parse_qsl

from .core import parser
from .core.resolution import transform_references


@total_ordering
class DID:
    """A Decentralized Identifier, optionally with a path, query and fragment.

    The serialized string is stored alongside the offsets of each component,
    so converting back to a string is free. Equality, ordering and hashing
    use the serialized string only.

    [More Info (W3C DID Core)](https://www.w3.org/TR/did-core/)
    """

    SCHEME: ClassVar[str] = parser.SCHEME

    __slots__ = ("_data", "_core")

    def __init__(self, data: str):
        """Parse a DID URL.

        Raises:
            ParseError: if any DID URL component is invalid

        """
        self._core = parser.parse(data)
        self._data = data

    @classmethod
    def parse(cls, data: str) -> "DID":
        """Parse a DID URL. See `DID.__init__`."""
        return cls(data)

    def clone(self) -> "DID":
        """Return an independent copy of this DID URL."""
        other = object.__new__(DID)
        other._data = self._data
        other._core = replace(self._core)
        return other

    __copy__ = clone

    def __deepcopy__(self, memo) -> "DID":
        return self.clone()

    def as_str(self) -> str:
        """Access the serialized DID URL."""
        return self._data

    @property
    def scheme(self) -> str:
        return DID.SCHEME

    @property
    def authority(self) -> str:
        """Access the DID authority, `<method>:<method-specific-id>`."""
        return f"{self.method}:{self.method_id}"

    @property
    def method(self) -> str:
        return self._core.method_slice(self._data)

    @property
    def method_id(self) -> str:
        return self._core.method_id_slice(self._data)

    @property
    def path(self) -> str:
        """Access the path, an empty string when there is none."""
        return self._core.path_slice(self._data)

    @property
    def query(self) -> Optional[str]:
        """Access the query without its leading '?', if any."""
        return self._core.query_slice(self._data)

    @property
    def fragment(self) -> Optional[str]:
        """Access the fragment without its leading '#', if any."""
        return self._core.fragment_slice(self._data)

    @property
    def query_pairs(self) -> list[tuple[str, str]]:
        """Decode the query into (key, value) pairs, in order of appearance."""
        return parse_qsl(self.query or "", keep_blank_values=True)

    @property
    def root(self) -> "DID":
        """Access this DID URL without any path, query or fragment."""
        return DID(f"{DID.SCHEME}:{self.authority}")

    def set_method(self, value: str):
        """Replace the method name.

        The new value is not validated against the DID grammar.
        """
        core = self._core
        delta = self._splice(core.method, core.method_id - 1, value)
        self._shift(delta, "method_id", "path", "query", "fragment")

    def set_method_id(self, value: str):
        """Replace the method-specific ID.

        The new value is not validated against the DID grammar.
        """
        core = self._core
        delta = self._splice(core.method_id, core.path, value)
        self._shift(delta, "path", "query", "fragment")

    def set_path(self, value: str):
        """Replace the path.

        The new value is not validated against the DID grammar.
        """
        core = self._core
        delta = self._splice(core.path, core.path_end(self._data), value)
        self._shift(delta, "query", "fragment")

    def set_query(self, value: Optional[str]):
        """Replace, add or remove (with `None`) the query.

        The new value is not validated against the DID grammar.
        """
        core = self._core
        query, fragment = core.query, core.fragment

        if value is None:
            if query is None:
                return
            end = len(self._data) if fragment is None else fragment
            self._splice(query, end, "")
            core.query = None
            if fragment is not None:
                # the fragment delimiter takes the place of the query delimiter
                core.fragment = fragment - (fragment - query)
        elif query is not None:
            end = len(self._data) if fragment is None else fragment
            delta = self._splice(query + 1, end, value)
            self._shift(delta, "fragment")
        elif fragment is not None:
            self._splice(fragment, fragment, "?" + value)
            core.query = fragment
            core.fragment = fragment + len(value) + 1
        else:
            core.query = len(self._data)
            self._data += "?" + value

    def set_fragment(self, value: Optional[str]):
        """Replace, add or remove (with `None`) the fragment.

        The new value is not validated against the DID grammar.
        """
        core = self._core
        start = len(self._data) if core.fragment is None else core.fragment
        if value is None:
            core.fragment = None
            self._data = self._data[:start]
        else:
            core.fragment = start
            self._data = self._data[:start] + "#" + value

    def join(self, other: str) -> "DID":
        """Resolve the relative DID URL `other` against this DID URL.

        Raises:
            ParseError: if `other` is not a valid relative reference
            JoinError: if this DID has no authority to resolve against

        """
        core = parser.parse_relative(other)
        return transform_references(self, other, core)

    def _splice(self, start: int, end: int, value: str) -> int:
        """Replace `data[start:end]` and return the change in length."""
        self._data = self._data[:start] + value + self._data[end:]
        return len(value) - (end - start)

    def _shift(self, delta: int, *names: str):
        core = self._core
        for name in names:
            offset = getattr(core, name)
            if offset is not None:
                setattr(core, name, offset + delta)

    def __str__(self) -> str:
        return self._data

    def __repr__(self) -> str:
        return (
            f"DID(method={self.method!r}, method_id={self.method_id!r}, "
            f"path={self.path!r}, query={self.query!r}, fragment={self.fragment!r})"
        )

    def __eq__(self, other) -> bool:
        if isinstance(other, DID):
            return self._data == other._data
        if isinstance(other, str):
            return self._data == other
        return NotImplemented

    def __lt__(self, other: "DID") -> bool:
        if not isinstance(other, DID):
            return NotImplemented
        return self._data < other._data

    def __hash__(self) -> int:
        return hash(self._data)
