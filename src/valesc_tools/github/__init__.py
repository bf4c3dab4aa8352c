"""GitHub integration."""

from valesc_tools.github.client import IssueReference, IssueStatePayload, IssueTrackerClient

__all__ = ["IssueReference", "IssueStatePayload", "IssueTrackerClient"]
