import httpx
import pytest

from objstore._helpers import build_query, decode_list_response, is_json_content_type, slash


@pytest.mark.parametrize(
    "path, expected",
    [
        ("", "/"),
        ("foo", "/foo"),
        ("/foo", "/foo"),
        ("//foo/bar.jpg", "/foo/bar.jpg"),
        ("foo/bar/", "/foo/bar/"),
    ],
)
def test_slash(path, expected):
    assert slash(path) == expected


def test_build_query():
    assert build_query(None) == ""
    assert build_query({}) == ""
    assert build_query({"limit": 2, "marker": "a b"}) == "?limit=2&marker=a+b"


@pytest.mark.parametrize(
    "content_type, expected",
    [
        ("application/json", True),
        ("application/json; charset=utf-8", True),
        ("application/json;charset=utf-8", True),
        ("application/jsonp", False),
        ("text/plain", False),
        ("", False),
        (None, False),
    ],
)
def test_is_json_content_type(content_type, expected):
    assert is_json_content_type(content_type) is expected


def test_decode_list_response():
    body = b'["a","b"]'
    as_json = httpx.Response(200, content=body, headers={"content-type": "application/json"})
    as_text = httpx.Response(200, content=body, headers={"content-type": "text/plain"})

    assert decode_list_response(as_json) == ["a", "b"]
    assert decode_list_response(as_text) == '["a","b"]'
