"""Resolution of did:web DIDs and dereferencing of their fragments."""

import argparse
import asyncio
import json
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Union

import aiofiles
import aiohttp

from .did import DID
from .error import DIDError
from .web import url as web_url

logger = logging.getLogger(__name__)

RESOLUTION_CONTEXT = "https://w3id.org/did-resolution/v1"
CONTENT_TYPE = "application/did+ld+json"

FetchDocument = Callable[[str], Awaitable[str]]


class ResolutionFailure(Exception):
    """A DID or DID URL could not be resolved.

    `code` is a DID resolution error code such as `invalidDid` or `notFound`.
    """

    def __init__(self, code: str, did: str, reason: str):
        super().__init__(f"{did}: {reason}")
        self.code = code
        self.did = did
        self.reason = reason

    @property
    def metadata(self) -> dict:
        return {"error": self.code, "errorMessage": self.reason}


@dataclass
class Resolution:
    """A DID together with its resolved document, or the reason it has none."""

    did: str
    document: Optional[dict] = None
    failure: Optional[ResolutionFailure] = None

    def serialize(self) -> dict:
        if self.failure:
            metadata = self.failure.metadata
        else:
            metadata = {"contentType": CONTENT_TYPE}
        return {
            "@context": RESOLUTION_CONTEXT,
            "didDocument": self.document,
            "didDocumentMetadata": {} if self.document is not None else None,
            "didResolutionMetadata": metadata,
        }


@dataclass
class Dereference:
    """The document node identified by an absolute DID URL with a fragment."""

    didurl: Optional[DID]
    node: Optional[dict] = None
    failure: Optional[ResolutionFailure] = None

    def serialize(self) -> dict:
        return {
            "@context": RESOLUTION_CONTEXT,
            "dereferencingMetadata": self.failure.metadata if self.failure else {},
            "content": self.node,
            "contentMetadata": {"contentType": CONTENT_TYPE} if self.node else {},
        }


def index_document(document: dict) -> dict[DID, dict]:
    """Map the DID URL of every identified top-level node to the node.

    Relative identifiers such as `#key-1` are joined onto the document id.
    """
    doc_id = document.get("id")
    if not isinstance(doc_id, str):
        raise ValueError("Missing document id")
    base = DID.parse(doc_id)
    index = {}
    for value in document.values():
        for node in value if isinstance(value, list) else (value,):
            if not isinstance(node, dict) or not isinstance(node.get("id"), str):
                continue
            node_id = node["id"]
            if "#" not in node_id:
                continue
            try:
                didurl = base.join(node_id) if node_id.startswith("#") else DID.parse(node_id)
            except DIDError:
                # identifiers outside the DID URL grammar cannot be dereferenced
                continue
            if didurl in index:
                raise ValueError(f"Duplicate node id: {didurl}")
            index[didurl] = node
    return index


def dereference(document: dict, fragment: str) -> Dereference:
    """Select the node of `document` identified by `fragment`."""
    try:
        index = index_document(document)
        target = DID.parse(document["id"]).join(f"#{fragment}")
    except ValueError as err:
        return Dereference(
            didurl=None,
            failure=ResolutionFailure("notFound", str(document.get("id")), str(err)),
        )
    node = index.get(target)
    if node is None:
        return Dereference(
            didurl=target,
            failure=ResolutionFailure("notFound", str(target), "No such node"),
        )
    if "@context" in document and "@context" not in node:
        node = {"@context": document["@context"], **node}
    return Dereference(didurl=target, node=node)


async def fetch_document(url: str) -> str:
    """Download a DID document over HTTPS."""
    async with aiohttp.ClientSession(raise_for_status=True) as session:
        async with session.get(url, headers={"Accept": "application/json"}) as response:
            return await response.text()


async def read_document(path: Union[str, Path]) -> str:
    async with aiofiles.open(path) as document:
        return await document.read()


async def resolve_did(
    did: Union[DID, str],
    *,
    local_document: Optional[Path] = None,
    fetch: Optional[FetchDocument] = None,
) -> Resolution:
    """Resolve the DID of a did:web DID URL to its document.

    Any path, query or fragment of the DID URL is ignored.
    """
    try:
        didurl = DID.parse(did) if isinstance(did, str) else did
        location = web_url(didurl)
    except DIDError as err:
        return Resolution(
            did=str(did), failure=ResolutionFailure("invalidDid", str(did), str(err))
        )
    root = str(didurl.root)

    try:
        if local_document:
            logger.debug("Reading DID document for %s from %s", root, local_document)
            text = await read_document(local_document)
        else:
            logger.debug("Fetching DID document for %s from %s", root, location)
            text = await (fetch or fetch_document)(location)
        document = json.loads(text)
    except (aiohttp.ClientError, OSError, ValueError) as err:
        logger.warning("Could not load DID document for %s: %s", root, err)
        return Resolution(did=root, failure=ResolutionFailure("notFound", root, str(err)))

    if not isinstance(document, dict) or document.get("id") != root:
        logger.warning("DID document id does not match %s", root)
        return Resolution(
            did=root,
            failure=ResolutionFailure("invalidDid", root, "Document id mismatch"),
        )
    return Resolution(did=root, document=document)


async def resolve(
    didurl: Union[DID, str],
    *,
    local_document: Optional[Path] = None,
    fetch: Optional[FetchDocument] = None,
) -> Union[Resolution, Dereference]:
    """Resolve a did:web DID URL, dereferencing its fragment if it has one."""
    resolution = await resolve_did(didurl, local_document=local_document, fetch=fetch)
    if resolution.document is None:
        return resolution
    fragment = (DID.parse(didurl) if isinstance(didurl, str) else didurl).fragment
    if fragment is None:
        return resolution
    return dereference(resolution.document, fragment)


def main(argv: Optional[Sequence[str]] = None):
    parser = argparse.ArgumentParser(description="resolve a did:web DID URL")
    parser.add_argument("-f", "--file", type=Path, help="read the DID document from a file")
    parser.add_argument("-v", "--verbose", action="store_true", help="log fetch details")
    parser.add_argument("didurl", help="the DID URL to resolve")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    result = asyncio.run(resolve(args.didurl, local_document=args.file))
    print(json.dumps(result.serialize(), indent=2))


if __name__ == "__main__":
    main()
