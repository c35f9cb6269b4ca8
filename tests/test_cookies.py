import pytest

from humakit.cookies import (
    Cookie,
    CookieNotFoundError,
    is_cookie_name_valid,
    parse_cookie_lines,
    parse_cookie_value,
    read_cookie,
    read_cookies,
)


def test_read_cookies_from_mapping():
    headers = {"Cookie": "session=token; theme=placeholder", "Accept": "x"}
    assert read_cookies(headers) == [
        Cookie("session", "token"),
        Cookie("theme", "placeholder"),
    ]


def test_read_cookies_from_pairs_is_case_insensitive():
    headers = [
        ("cookie", "a=token"),
        ("X-Other", "b=secret"),
        ("COOKIE", "c=placeholder"),
    ]
    assert read_cookies(headers) == [Cookie("a", "token"), Cookie("c", "placeholder")]


def test_read_cookies_without_headers_is_empty():
    assert read_cookies({}) == []


def test_read_cookie_returns_first_match():
    headers = [("Cookie", "a=token; b=secret; a=placeholder")]
    assert read_cookie(headers, "a") == Cookie("a", "token")
    assert read_cookie(headers, "b").value == "secret"


def test_read_cookie_missing_raises():
    with pytest.raises(CookieNotFoundError) as info:
        read_cookie([("Cookie", "a=token")], "missing")
    assert info.value.name == "missing"
    assert isinstance(info.value, LookupError)


def test_quoted_value_is_unquoted():
    assert read_cookies({"Cookie": 'a="token"'}) == [Cookie("a", "token")]


def test_invalid_entries_are_skipped():
    lines = ['bad name=token; ok=secret; q=to"ken; e=tok\\en; ;   ']
    assert parse_cookie_lines(lines) == [Cookie("ok", "secret")]


def test_name_is_trimmed_but_value_keeps_leading_space():
    assert parse_cookie_lines(["  a = token ; "]) == [Cookie("a", " token")]


def test_parse_cookie_lines_filter():
    lines = ["a=token; b=secret", "b=placeholder"]
    assert parse_cookie_lines(lines, "b") == [
        Cookie("b", "secret"),
        Cookie("b", "placeholder"),
    ]


def test_parse_cookie_value_rules():
    assert parse_cookie_value('"token"', True) == "token"
    with pytest.raises(ValueError):
        parse_cookie_value('"token"', False)
    with pytest.raises(ValueError):
        parse_cookie_value("tok;en", True)
    with pytest.raises(ValueError):
        parse_cookie_value("tökén", True)


def test_is_cookie_name_valid():
    assert is_cookie_name_valid("session")
    assert is_cookie_name_valid("a-b.c_d")
    assert not is_cookie_name_valid("")
    assert not is_cookie_name_valid("a b")
    assert not is_cookie_name_valid("a;b")
    assert not is_cookie_name_valid("é")