import pytest

from json_source_validator.utils.json_pointer import (
    escape_token,
    join_pointer,
    path_to_pointer,
    pointer_to_path,
    unescape_token,
)


def test_escape_and_unescape():
    assert escape_token("a/b~c") == "a~1b~0c"
    assert unescape_token("a~1b~0c") == "a/b~c"
    # "~01" is an escaped "~" followed by "1", not a "/".
    assert unescape_token("~01") == "~1"


def test_join_pointer():
    assert join_pointer("", "a") == "/a"
    assert join_pointer(None, 0) == "/0"
    assert join_pointer("/a", "b/c") == "/a/b~1c"
    assert join_pointer("/a", "") == "/a/"


def test_path_to_pointer():
    assert path_to_pointer([]) == ""
    assert path_to_pointer(None) == ""
    assert path_to_pointer(("items", 0, "name")) == "/items/0/name"
    assert path_to_pointer(["m~n"]) == "/m~0n"


def test_pointer_to_path():
    assert pointer_to_path("") == []
    assert pointer_to_path("/items/0/a~1b") == ["items", "0", "a/b"]
    assert pointer_to_path("/") == [""]
    with pytest.raises(ValueError):
        pointer_to_path("items/0")
