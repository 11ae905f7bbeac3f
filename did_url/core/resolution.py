"""Reference resolution for DID URLs.

See RFC 3986, section 5: https://www.rfc-editor.org/rfc/rfc3986#section-5
"""

from typing import TYPE_CHECKING

from ..error import Field, JoinError
from .parser import Core

if TYPE_CHECKING:
    from ..did import DID


def transform_references(base: "DID", data: str, core: Core) -> "DID":
    """Transform a relative reference into its target DID.

    The method and method-specific ID always come from `base`, the fragment
    always comes from the reference.

    [RFC 3986 5.2.2](https://www.rfc-editor.org/rfc/rfc3986#section-5.2.2)
    """
    path = core.path_slice(data)
    query = core.query_slice(data)

    target = base.clone()

    if not path:
        target.set_path(base.path)
        target.set_query(query if query is not None else base.query)
    else:
        if path.startswith("/"):
            target.set_path(remove_dot_segments(path))
        else:
            target.set_path(remove_dot_segments(merge_paths(base, path)))
        target.set_query(query)

    target.set_fragment(core.fragment_slice(data))
    return target


def merge_paths(base: "DID", path: str) -> str:
    """Merge a relative-path reference with the path of the base DID.

    [RFC 3986 5.2.3](https://www.rfc-editor.org/rfc/rfc3986#section-5.2.3)
    """
    # the DID authority is <method>:<method-specific-id>
    if not base.method or not base.method_id:
        raise JoinError(Field.AUTHORITY)

    base_path = base.path
    if not base_path:
        return path

    pos = base_path.rfind("/")
    if pos >= 0:
        base_path = base_path[: pos + 1]
    return base_path + path


def remove_dot_segments(path: str) -> str:
    """Remove "." and ".." segments from a path.

    A ".." with no earlier "/" in the output drops the whole first segment,
    so "a/../b" becomes "/b".

    [RFC 3986 5.2.4](https://www.rfc-editor.org/rfc/rfc3986#section-5.2.4)
    """
    output: list[str] = []
    pos = 0
    end = len(path)

    while pos < end:
        remaining = end - pos
        if path.startswith("../", pos):
            pos += 3
        elif path.startswith("./", pos):
            pos += 2
        elif path.startswith("/./", pos):
            pos += 2
        elif remaining == 2 and path.startswith("/.", pos):
            output.append("/")
            break
        elif path.startswith("/../", pos):
            pos += 3
            if output:
                output.pop()
        elif remaining == 3 and path.startswith("/..", pos):
            if output:
                output.pop()
            output.append("/")
            break
        elif remaining <= 2 and path[pos:] in (".", ".."):
            break
        else:
            # copy one segment, including its leading "/"
            stop = path.find("/", pos + 1)
            if stop < 0:
                stop = end
            output.append(path[pos:stop])
            pos = stop

    return "".join(output)
