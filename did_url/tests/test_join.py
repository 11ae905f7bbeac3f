import pytest

from did_url import DID, Field, JoinError, ParseError
from did_url.core.resolution import merge_paths, remove_dot_segments

BASE = "did:example:123/a/b/c/d?q"

JOIN_CHECKS = {
    "g": "did:example:123/a/b/c/g",
    "./g": "did:example:123/a/b/c/g",
    "g/": "did:example:123/a/b/c/g/",
    "/g": "did:example:123/g",
    "?y": "did:example:123/a/b/c/d?y",
    "g?y": "did:example:123/a/b/c/g?y",
    "#s": "did:example:123/a/b/c/d?q#s",
    "g#s": "did:example:123/a/b/c/g#s",
    "g?y#s": "did:example:123/a/b/c/g?y#s",
    ";x": "did:example:123/a/b/c/;x",
    "g;x?y#s": "did:example:123/a/b/c/g;x?y#s",
    "": "did:example:123/a/b/c/d?q",
    ".": "did:example:123/a/b/c/",
    "./": "did:example:123/a/b/c/",
    "..": "did:example:123/a/b/",
    "../": "did:example:123/a/b/",
    "../g": "did:example:123/a/b/g",
    "../..": "did:example:123/a/",
    "../../": "did:example:123/a/",
    "../../g": "did:example:123/a/g",
    "../../../g": "did:example:123/g",
    "/./g": "did:example:123/g",
    "/../g": "did:example:123/g",
    "g.": "did:example:123/a/b/c/g.",
    ".g": "did:example:123/a/b/c/.g",
    "g..": "did:example:123/a/b/c/g..",
    "..g": "did:example:123/a/b/c/..g",
    "./../g": "did:example:123/a/b/g",
    "./g/.": "did:example:123/a/b/c/g/",
    "g/./h": "did:example:123/a/b/c/g/h",
    "g/../h": "did:example:123/a/b/c/h",
}


@pytest.mark.parametrize("relative,expect", JOIN_CHECKS.items())
def test_join(relative: str, expect: str):
    base = DID.parse(BASE)
    joined = base.join(relative)
    assert joined == expect
    assert DID.parse(str(joined)) == joined
    assert base == BASE


def test_join_identity():
    for did in (
        "did:example:123",
        "did:example:123/a/b",
        "did:example:123/a/b?q=1",
        "did:example:123/a/b?q=1#frag",
    ):
        base = DID.parse(did)
        joined = base.join("")
        # the base fragment is never inherited
        assert joined == did.split("#")[0]
        assert joined.method == base.method
        assert joined.method_id == base.method_id


def test_join_fragment_and_query():
    did = DID.parse("did:example:alice")
    assert did.join("?query=true").join("#key-1") == "did:example:alice?query=true#key-1"
    assert did.join("#key-1").fragment == "key-1"

    did = DID.parse("did:example:alice?a=1#old")
    joined = did.join("#new")
    assert joined == "did:example:alice?a=1#new"
    assert joined.query == "a=1"
    assert did.join("?b=2") == "did:example:alice?b=2"


def test_join_empty_base_path():
    did = DID.parse("did:example:123?q")
    joined = did.join("/g")
    assert joined == "did:example:123/g"
    assert joined.query is None


def test_join_invalid_relative():
    did = DID.parse(BASE)
    with pytest.raises(ParseError) as err:
        did.join("a b")
    assert err.value.field == Field.PATH
    with pytest.raises(ParseError) as err:
        did.join("?a b")
    assert err.value.field == Field.QUERY
    with pytest.raises(ParseError) as err:
        did.join("#a#b")
    assert err.value.field == Field.FRAGMENT


def test_merge_paths():
    assert merge_paths(DID.parse("did:example:123/a/b"), "g") == "/a/g"
    assert merge_paths(DID.parse("did:example:123/a/b/"), "g") == "/a/b/g"
    assert merge_paths(DID.parse("did:example:123"), "g") == "g"


def test_merge_paths_missing_authority():
    did = DID.parse("did:example:123/a")
    did.set_method_id("")
    with pytest.raises(JoinError) as err:
        merge_paths(did, "g")
    assert err.value.field == Field.AUTHORITY
    assert str(err.value) == "Join Error: Invalid Authority"
    with pytest.raises(JoinError):
        did.join("g")


@pytest.mark.parametrize(
    "path,expect",
    [
        ("", ""),
        ("/", "/"),
        ("/a/b/c/./../../g", "/a/g"),
        ("mid/content=5/../6", "mid/6"),
        ("/a/./b", "/a/b"),
        ("/a/.", "/a/"),
        ("/a/..", "/"),
        ("/..", "/"),
        ("/.", "/"),
        (".", ""),
        ("..", ""),
        ("../a", "a"),
        ("./a", "a"),
        ("a/../b", "/b"),
        ("/a//b/../c", "/a//c"),
        ("/a/b/../../../../c", "/c"),
    ],
)
def test_remove_dot_segments(path: str, expect: str):
    assert remove_dot_segments(path) == expect


def test_remove_dot_segments_long_input():
    path = "/a" * 5000 + "/.." * 5000 + "/g"
    assert remove_dot_segments(path) == "/g"


def test_join_dot_segments_against_empty_base_path():
    did = DID.parse("did:example:123")
    joined = did.join("a/../b")
    assert joined == "did:example:123/b"
    assert joined.path == "/b"
