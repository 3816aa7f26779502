#!/usr/bin/env python3
"""
Tests for RestTableClient - validates request building and error mapping.
"""

from unittest.mock import MagicMock

import pytest
import requests

from storyvine.core import BackendError, StoryStatus
from storyvine.io import Order, RestTableClient, eq, in_

BASE_URL = "https://project.example.co"


def _response(status_code=200, json_body=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.content = b"" if json_body is None and not text else b"x"
    response.text = text
    response.reason = "Bad Request"
    if json_body is None:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = json_body
    return response


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def rest(session):
    return RestTableClient(base_url=BASE_URL + "/", api_key="anon-key", session=session)


def _call(session):
    args, kwargs = session.request.call_args
    return args, kwargs


def test_requires_url_and_key():
    with pytest.raises(RuntimeError, match="Backend URL required"):
        RestTableClient(base_url="", api_key="key", session=MagicMock())
    with pytest.raises(RuntimeError, match="Backend API key required"):
        RestTableClient(base_url=BASE_URL, api_key="", session=MagicMock())


def test_select_builds_query_parameters(rest, session):
    session.request.return_value = _response(json_body=[{"id": "s1"}])

    rows = rest.select(
        "stories",
        filters=[eq("status", "published")],
        order=Order("created_at", descending=True),
        limit=5,
    )

    assert rows == [{"id": "s1"}]
    args, kwargs = _call(session)
    assert args == ("GET", f"{BASE_URL}/rest/v1/stories")
    assert kwargs["params"] == [
        ("select", "*"),
        ("status", "eq.published"),
        ("order", "created_at.desc"),
        ("limit", "5"),
    ]
    assert kwargs["headers"]["apikey"] == "anon-key"
    assert kwargs["headers"]["Authorization"] == "Bearer anon-key"
    assert "Prefer" not in kwargs["headers"]


def test_select_columns_and_in_filter(rest, session):
    session.request.return_value = _response(json_body=[])

    rest.select("profiles", columns=("user_id", "username"), filters=[in_("user_id", ["a", 'b"c'])])

    _, kwargs = _call(session)
    assert kwargs["params"] == [
        ("select", "user_id,username"),
        ("user_id", 'in.("a","b\\"c")'),
    ]


def test_eq_null_and_booleans(rest, session):
    session.request.return_value = _response(json_body=[])

    rest.select("reads", filters=[eq("chapter_id", None), eq("archived", True)])

    _, kwargs = _call(session)
    assert ("chapter_id", "is.null") in kwargs["params"]
    assert ("archived", "eq.true") in kwargs["params"]


def test_insert_requests_representation(rest, session):
    session.request.return_value = _response(status_code=201, json_body=[{"id": "new"}])

    rows = rest.insert("stories", [{"title": "T", "status": StoryStatus.DRAFT}])

    assert rows == [{"id": "new"}]
    args, kwargs = _call(session)
    assert args[0] == "POST"
    assert kwargs["json"] == [{"title": "T", "status": "draft"}]
    assert kwargs["headers"]["Prefer"] == "return=representation"


def test_insert_nothing_makes_no_request(rest, session):
    assert rest.insert("stories", []) == []
    session.request.assert_not_called()


def test_update_and_delete_send_filters(rest, session):
    session.request.return_value = _response(json_body=[{"id": "s1"}])

    rest.update("stories", {"status": "published"}, [eq("id", "s1")])
    args, kwargs = _call(session)
    assert args[0] == "PATCH"
    assert kwargs["params"] == [("id", "eq.s1")]
    assert kwargs["json"] == {"status": "published"}

    rest.delete("library", [eq("story_id", "s1"), eq("user_id", "u1")])
    args, kwargs = _call(session)
    assert args[0] == "DELETE"
    assert kwargs["params"] == [("story_id", "eq.s1"), ("user_id", "eq.u1")]


def test_unfiltered_writes_refused_without_request(rest, session):
    with pytest.raises(BackendError, match="without a filter"):
        rest.update("stories", {"title": "x"}, [])
    with pytest.raises(BackendError, match="without a filter"):
        rest.delete("stories", [])
    session.request.assert_not_called()


def test_error_response_raises_backend_error_with_message(rest, session):
    session.request.return_value = _response(
        status_code=409, json_body={"message": "duplicate key value"}
    )

    with pytest.raises(BackendError, match="duplicate key value"):
        rest.insert("library", [{"user_id": "u", "story_id": "s"}])


def test_error_response_without_json_uses_text(rest, session):
    session.request.return_value = _response(status_code=502, text="Bad gateway")

    with pytest.raises(BackendError, match="Bad gateway"):
        rest.select("stories")


def test_transport_failure_chained(rest, session):
    session.request.side_effect = requests.ConnectionError("offline")

    with pytest.raises(BackendError, match="GET stories failed") as exc_info:
        rest.select("stories")

    assert isinstance(exc_info.value.__cause__, requests.ConnectionError)


def test_no_content_returns_empty_list(rest, session):
    session.request.return_value = _response(status_code=204)

    assert rest.delete("stories", [eq("id", "s1")]) == []


def test_non_json_success_body_raises_backend_error(rest, session):
    session.request.return_value = _response(status_code=200, text="<html>gateway</html>")

    with pytest.raises(BackendError, match="invalid JSON") as exc_info:
        rest.select("stories")

    assert isinstance(exc_info.value.__cause__, ValueError)


def test_authorization_uses_api_key(rest, session):
    session.request.return_value = _response(json_body=[])

    rest.select("library")

    _, kwargs = _call(session)
    assert kwargs["headers"]["apikey"] == "anon-key"
    assert kwargs["headers"]["Authorization"] == "Bearer anon-key"
