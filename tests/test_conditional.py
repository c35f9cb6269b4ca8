from datetime import datetime, timezone

import pytest

from humakit.conditional import Params, trim_etag

NOW = datetime(2021, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
BEFORE = datetime(2020, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
AFTER = datetime(2022, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "params,expected",
    [
        (Params(), False),
        (Params(if_match=["test"]), True),
        (Params(if_none_match=["test"]), True),
        (Params(if_modified_since=datetime.now()), True),
        (Params(if_unmodified_since=datetime.now()), True),
    ],
)
def test_has_conditional(params, expected):
    assert params.has_conditional_params() is expected


def test_if_match():
    p = Params()
    p.if_match = ['"abc123"', 'W/"def456"']
    p.resolve("GET")
    assert p.precondition_failed("abc123") is None
    assert p.precondition_failed("def456") is None

    err = p.precondition_failed("bad")
    assert err.status == 304
    err = p.precondition_failed("")
    assert err.status == 304

    p.resolve("PUT")
    assert p.precondition_failed("abc123") is None
    err = p.precondition_failed("bad")
    assert err.status == 412
    assert err.errors[0].location == "headers.If-Match"
    assert err.errors[0].message == (
        "If-Match precondition failed, found resource with ETag bad"
    )


def test_if_none_match():
    p = Params()
    p.if_none_match = ['"abc123"', 'W/"def456"']
    p.resolve("GET")
    assert p.precondition_failed("bad") is None
    assert p.precondition_failed("") is None

    assert p.precondition_failed("abc123").status == 304
    assert p.precondition_failed("def456").status == 304

    p.resolve("PUT")
    assert p.precondition_failed("abc123").status == 412
    assert p.precondition_failed("bad") is None

    p.if_none_match = ["*"]
    assert p.precondition_failed("") is None
    err = p.precondition_failed("abc123")
    assert err.status == 412
    assert err.errors[0].message == (
        "If-None-Match: * precondition failed, found resource with ETag abc123"
    )


def test_if_modified_since():
    p = Params(if_modified_since=NOW)
    p.resolve("GET")
    assert p.precondition_failed("", BEFORE).status == 304
    assert p.precondition_failed("", NOW).status == 304
    assert p.precondition_failed("", AFTER) is None

    p.resolve("PUT")
    err = p.precondition_failed("", BEFORE)
    assert err.status == 412
    assert err.errors[0].value == "Fri, 01 Jan 2021 12:00:00 GMT"


def test_if_unmodified_since():
    p = Params(if_unmodified_since=NOW)
    p.resolve("GET")
    assert p.precondition_failed("", BEFORE) is None
    assert p.precondition_failed("", NOW) is None
    assert p.precondition_failed("", AFTER).status == 304

    p.resolve("PUT")
    err = p.precondition_failed("", AFTER)
    assert err.status == 412
    assert err.errors[0].location == "headers.If-Unmodified-Since"


def test_resolve_returns_no_errors():
    assert Params().resolve("DELETE") == []