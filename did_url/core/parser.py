"""Single-pass parser locating the components of a DID URL.

Grammar::

    did                = "did:" method-name ":" method-specific-id
    method-name        = 1*method-char
    method-char        = %x61-7A / DIGIT
    method-specific-id = *( *idchar ":" ) 1*idchar
    idchar             = ALPHA / DIGIT / "." / "-" / "_"

    did-url            = did path-abempty [ "?" query ] [ "#" fragment ]

    path-abempty       = *( "/" segment )
    segment            = *pchar
    pchar              = unreserved / sub-delims / ":" / "@"
    unreserved         = ALPHA / DIGIT / "-" / "." / "_" / "~"
    sub-delims         = "!" / "$" / "&" / "'" / "(" / ")" / "*" / "+" / "," / ";" / "="

    query              = *( pchar / "/" / "?" )
    fragment           = *( pchar / "/" / "?" )

Percent-encoded triplets are not recognized: "%" is rejected everywhere.
"""

import string
from dataclasses import dataclass
from typing import Optional

from ..error import Field, ParseError
from .scanner import Scanner

SCHEME = "did"

METHOD_CHARS = frozenset(string.ascii_lowercase + string.digits)
ID_CHARS = frozenset(string.ascii_letters + string.digits + ".-_")
PCHARS = frozenset(string.ascii_letters + string.digits + "-._~" + "!$&'()*+,;=" + ":@")
PATH_CHARS = PCHARS | {"/"}
QUERY_CHARS = PCHARS | {"/", "?"}
FRAGMENT_CHARS = QUERY_CHARS


@dataclass
class Core:
    """Offsets of the DID URL components within a serialized string.

    `query` and `fragment` point at the delimiter character itself.
    """

    method: int = 0
    method_id: int = 0
    path: int = 0
    query: Optional[int] = None
    fragment: Optional[int] = None

    def path_end(self, data: str) -> int:
        """The offset where the path component stops."""
        if self.query is not None:
            return self.query
        if self.fragment is not None:
            return self.fragment
        return len(data)

    def method_slice(self, data: str) -> str:
        return data[self.method : self.method_id - 1]

    def method_id_slice(self, data: str) -> str:
        return data[self.method_id : self.path]

    def path_slice(self, data: str) -> str:
        return data[self.path : self.path_end(data)]

    def query_slice(self, data: str) -> Optional[str]:
        if self.query is None:
            return None
        end = len(data) if self.fragment is None else self.fragment
        return data[self.query + 1 : end]

    def fragment_slice(self, data: str) -> Optional[str]:
        if self.fragment is None:
            return None
        return data[self.fragment + 1 :]


def parse(text: str) -> Core:
    """Parse an absolute DID URL into its component offsets.

    Raises:
        ParseError: on the first character violating the grammar

    """
    core = Core()
    scanner = Scanner(text)
    _parse_scheme(scanner)
    _parse_method(core, scanner)
    _parse_method_id(core, scanner)
    _parse_path(core, scanner)
    _parse_query(core, scanner)
    _parse_fragment(core, scanner)
    return core


def parse_relative(text: str) -> Core:
    """Parse a relative reference: path, query and fragment only."""
    core = Core()
    scanner = Scanner(text)
    _parse_path(core, scanner)
    _parse_query(core, scanner)
    _parse_fragment(core, scanner)
    return core


def _parse_scheme(scanner: Scanner):
    if scanner.exhausted() or scanner.take(len(SCHEME)) != SCHEME:
        raise ParseError(Field.SCHEME)
    if scanner.peek() != ":":
        raise ParseError(Field.SCHEME)
    scanner.next()


def _parse_method(core: Core, scanner: Scanner):
    core.method = scanner.index()
    while True:
        ch = scanner.peek()
        if ch is None or ch == ":":
            break
        if ch not in METHOD_CHARS:
            raise ParseError(Field.METHOD_NAME)
        scanner.next()
    if scanner.index() == core.method:
        raise ParseError(Field.METHOD_NAME)
    # a missing separator leaves an empty method-id, rejected below
    scanner.next()


def _parse_method_id(core: Core, scanner: Scanner):
    core.method_id = scanner.index()
    while True:
        ch = scanner.peek()
        if ch is None or ch in "/?#":
            break
        if ch not in ID_CHARS and not (ch == ":" and scanner.index() > core.method_id):
            raise ParseError(Field.METHOD_ID)
        scanner.next()
    if scanner.index() == core.method_id:
        raise ParseError(Field.METHOD_ID)


def _parse_path(core: Core, scanner: Scanner):
    core.path = scanner.index()
    while True:
        ch = scanner.peek()
        if ch is None or ch in "?#":
            break
        if ch not in PATH_CHARS:
            raise ParseError(Field.PATH)
        scanner.next()


def _parse_query(core: Core, scanner: Scanner):
    ch = scanner.peek()
    if ch is None or ch == "#":
        return
    if ch != "?":
        raise ParseError(Field.QUERY)
    core.query = scanner.index()
    scanner.next()
    while True:
        ch = scanner.peek()
        if ch is None or ch == "#":
            break
        if ch not in QUERY_CHARS:
            raise ParseError(Field.QUERY)
        scanner.next()


def _parse_fragment(core: Core, scanner: Scanner):
    if scanner.exhausted():
        return
    if scanner.peek() != "#":
        raise ParseError(Field.FRAGMENT)
    core.fragment = scanner.index()
    scanner.next()
    while True:
        ch = scanner.peek()
        if ch is None:
            break
        if ch not in FRAGMENT_CHARS:
            raise ParseError(Field.FRAGMENT)
        scanner.next()
