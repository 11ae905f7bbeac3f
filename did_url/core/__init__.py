"""Parsing and resolution internals for DID URLs."""

from . import parser, resolution, scanner

__all__ = ["parser", "resolution", "scanner"]
