"""Live issue status for tracked URLs.

Annotation never fails the listing: anything unexpected (unparseable URL,
unknown host, network or API trouble) leaves the URL as it was.
"""

from __future__ import annotations

import logging
import re
from urllib.parse import urlparse

import requests
from pydantic import ValidationError

from valesc_tools.github.client import IssueReference, IssueTrackerClient

logger = logging.getLogger(__name__)

OPEN_LABEL = "Github Issue (Open)"
CLOSED_LABEL = "Github Issue (Closed!)"

_ISSUE_PATH = re.compile(r"^/(?P<owner>[^/]+)/(?P<repo>[^/]+)/issues/(?P<number>\d+)/?$")


def parse_issue_reference(url: str, tracker_host: str = "github.com") -> IssueReference | None:
    """Return the issue addressed by `url`, or None if it is not a tracker issue URL."""

    try:
        parsed = urlparse(url.strip())
        host = parsed.hostname
    except ValueError:
        return None

    if host is None or host != tracker_host.lower():
        return None

    match = _ISSUE_PATH.match(parsed.path)
    if match is None:
        return None

    return IssueReference(
        owner=match.group("owner"),
        repo=match.group("repo"),
        number=match.group("number"),
    )


def format_annotation(url: str, state: str) -> str:
    label = CLOSED_LABEL if state == "closed" else OPEN_LABEL
    return f"{label}: {url}"


class IssueAnnotator:
    """Prefix tracker issue URLs with their live open/closed state."""

    def __init__(self, client: IssueTrackerClient, *, tracker_host: str = "github.com") -> None:
        self._client = client
        self._tracker_host = tracker_host

    def annotate(self, url: str) -> str:
        ref = parse_issue_reference(url, self._tracker_host)
        if ref is None:
            return url

        try:
            state = self._client.get_issue_state(ref)
        except (requests.RequestException, ValidationError, ValueError) as e:
            logger.warning(f"Could not fetch status of {ref.repository}#{ref.number}: {e}")
            return url

        return format_annotation(url, state)
