"""GitHub REST client for issue status lookups.

Only the one read call the tracking listing needs. Issue lookups on public
repositories work without a token.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import requests
from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class IssueReference:
    """An issue addressed by a GitHub web URL."""

    owner: str
    repo: str
    number: str

    @property
    def repository(self) -> str:
        return f"{self.owner}/{self.repo}"

    @property
    def api_path(self) -> str:
        return f"repos/{self.owner}/{self.repo}/issues/{self.number}"


class IssueStatePayload(BaseModel):
    """The part of the issue REST response we rely on."""

    model_config = ConfigDict(extra="ignore")

    state: str


class IssueTrackerClient:
    """Small wrapper around a `requests.Session` for the GitHub issues endpoint."""

    def __init__(
        self,
        *,
        base_url: str = "https://api.github.com",
        token: str = "",
        timeout_seconds: float = 5.0,
        session: requests.Session | None = None,
    ) -> None:
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")

        self._rest_base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": "valesc-tools",
            }
        )
        if token:
            self._session.headers["Authorization"] = f"Bearer {token}"

    def issue_url(self, ref: IssueReference) -> str:
        return f"{self._rest_base_url}/{ref.api_path}"

    def get_issue_state(self, ref: IssueReference) -> str:
        """Fetch the state ("open" or "closed") of an issue.

        Raises:
            requests.RequestException: On network failure, timeout or non-2xx status.
            pydantic.ValidationError: If the body has no string `state` field.
            ValueError: If the body is not JSON.
        """

        url = self.issue_url(ref)
        logger.debug(f"Fetching issue state: {url}")
        resp = self._session.get(url, timeout=self._timeout)
        resp.raise_for_status()
        data: Any = resp.json()
        payload = IssueStatePayload.model_validate(data)
        return payload.state

    def close(self) -> None:
        """Close the underlying HTTP session."""

        self._session.close()
