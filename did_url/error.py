"""Error types for DID URL parsing and resolution."""

from enum import Enum


class Field(Enum):
    """The DID URL component which failed to parse or join."""

    AUTHORITY = "Authority"
    FRAGMENT = "Fragment"
    METHOD_ID = "Method Id"
    METHOD_NAME = "Method Name"
    PATH = "Path"
    QUERY = "Query"
    SCHEME = "Scheme"

    def __str__(self) -> str:
        return self.value


class DIDError(ValueError):
    """Base class for DID URL errors."""

    kind: str = "Error"

    def __init__(self, field: Field):
        super().__init__(f"{self.kind}: Invalid {field}")
        self.field = field

    def __eq__(self, other) -> bool:
        if not isinstance(other, DIDError):
            return NotImplemented
        return type(self) is type(other) and self.field == other.field

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.field))

    def __reduce__(self):
        return (type(self), (self.field,))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.field.name})"


class ParseError(DIDError):
    """A component of the input did not match the DID URL grammar."""

    kind = "Parse Error"


class JoinError(DIDError):
    """A relative reference could not be resolved against a base DID."""

    kind = "Join Error"
