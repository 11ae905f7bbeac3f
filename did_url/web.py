"""Conversion between did:web identifiers and their document locations.

    web-did = "did:web:" domain-name *( ":" path )

[Web DID Method](https://w3c-ccg.github.io/did-method-web/)
"""

from .did import DID
from .error import Field, ParseError

METHOD_NAME = "web"

DOCUMENT_FILENAME = "did.json"


def make(domain_path: str) -> DID:
    """Create a did:web DID from a domain name and optional path.

    `example.com/user/alice` becomes `did:web:example.com:user:alice`.
    """
    domain, path = _split(domain_path, "/")
    if path:
        return DID.parse(f"did:{METHOD_NAME}:{domain}{path.replace('/', ':')}")
    return DID.parse(f"did:{METHOD_NAME}:{domain}")


def url(did: DID) -> str:
    """Determine the HTTPS URL of the DID document for a did:web DID."""
    if did.method != METHOD_NAME:
        raise ParseError(Field.METHOD_NAME)
    domain, path = _split(did.method_id, ":")
    if path:
        return f"https://{domain}{path.replace(':', '/')}/{DOCUMENT_FILENAME}"
    return f"https://{domain}/.well-known/{DOCUMENT_FILENAME}"


def _split(data: str, sep: str) -> tuple[str, str]:
    pos = data.find(sep)
    if pos < 0:
        domain, path = data, ""
    else:
        domain, path = data[:pos], data[pos:]
    if not domain:
        raise ParseError(Field.METHOD_ID)
    return domain, path.rstrip("/")
