"""
Tests for the TMDb poster lookup client.
"""

import json
from unittest.mock import MagicMock

import pytest
import requests

from cineclient.api.errors import RejectedError
from cineclient.api.poster_client import PosterClient


def _response(status_code: int, body) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response._content = json.dumps(body).encode("utf-8")
    return response


def test_search_passes_key_and_title():
    http_session = MagicMock(spec=requests.Session)
    http_session.request.return_value = _response(
        200,
        {"results": [{"id": 1, "title": "Alpha", "poster_path": "/a.jpg"}, {"id": 2}]},
    )
    client = PosterClient("key", session=http_session)

    results = client.search("Alpha")

    assert [candidate.poster_path for candidate in results] == ["/a.jpg", None]
    kwargs = http_session.request.call_args.kwargs
    assert kwargs["params"] == {"api_key": "key", "query": "Alpha"}
    assert http_session.request.call_args.args == (
        "GET",
        "https://api.themoviedb.org/3/search/movie",
    )


def test_search_rejection_raises():
    http_session = MagicMock(spec=requests.Session)
    http_session.request.return_value = _response(
        401, {"status_message": "Invalid API key"}
    )
    client = PosterClient("bad", session=http_session)

    with pytest.raises(RejectedError):
        client.search("Alpha")


def test_enabled_requires_api_key():
    assert PosterClient("key").enabled is True
    assert PosterClient(None).enabled is False
    assert PosterClient("").enabled is False
