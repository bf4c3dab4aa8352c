"""Unit tests for the GitHub issue state client (mocked session)."""

from __future__ import annotations

from unittest.mock import Mock

import pytest
import requests
from pydantic import ValidationError

from valesc_tools.github.client import IssueReference, IssueTrackerClient

REF = IssueReference(owner="NixOS", repo="nix", number="10683")


def _session(payload: object | None = None, *, status_error: Exception | None = None) -> Mock:
    session = Mock(spec=requests.Session)
    session.headers = {}
    resp = Mock(spec=requests.Response)
    if status_error is not None:
        resp.raise_for_status.side_effect = status_error
    resp.json.return_value = payload
    session.get.return_value = resp
    return session


def test_issue_url_has_no_double_slash() -> None:
    client = IssueTrackerClient(base_url="https://api.github.com/", session=_session())

    assert client.issue_url(REF) == "https://api.github.com/repos/NixOS/nix/issues/10683"


def test_get_issue_state_uses_timeout_and_headers() -> None:
    session = _session({"state": "closed", "title": "ignored"})
    client = IssueTrackerClient(token="secret", timeout_seconds=3.0, session=session)

    assert client.get_issue_state(REF) == "closed"
    session.get.assert_called_once_with(
        "https://api.github.com/repos/NixOS/nix/issues/10683", timeout=3.0
    )
    assert session.headers["Authorization"] == "Bearer secret"
    assert session.headers["Accept"] == "application/vnd.github+json"


def test_anonymous_client_sends_no_authorization() -> None:
    session = _session({"state": "open"})
    IssueTrackerClient(session=session)

    assert "Authorization" not in session.headers


def test_get_issue_state_propagates_http_errors() -> None:
    session = _session(status_error=requests.HTTPError("404 Client Error: Not Found"))
    client = IssueTrackerClient(session=session)

    with pytest.raises(requests.HTTPError):
        client.get_issue_state(REF)


@pytest.mark.parametrize("payload", [{}, {"state": None}, ["open"]])
def test_get_issue_state_rejects_malformed_payload(payload: object) -> None:
    client = IssueTrackerClient(session=_session(payload))

    with pytest.raises(ValidationError):
        client.get_issue_state(REF)


def test_timeout_must_be_positive() -> None:
    with pytest.raises(ValueError):
        IssueTrackerClient(timeout_seconds=0, session=_session())
