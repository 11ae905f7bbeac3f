"""Parsing, mutation and resolution of Decentralized Identifier URLs."""

from .did import DID
from .error import DIDError, Field, JoinError, ParseError

__all__ = ["DID", "DIDError", "Field", "JoinError", "ParseError", "parse"]


def parse(data: str) -> DID:
    """Parse a DID URL.

    Raises:
        ParseError: if any DID URL component is invalid

    """
    return DID.parse(data)
