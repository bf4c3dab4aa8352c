"""Marker scanning and tracked-URL annotation."""

from valesc_tools.tracking.annotator import IssueAnnotator, parse_issue_reference
from valesc_tools.tracking.scanner import TRACK_MARKER, MarkerMatch, MarkerScanner, scan

__all__ = [
    "TRACK_MARKER",
    "IssueAnnotator",
    "MarkerMatch",
    "MarkerScanner",
    "parse_issue_reference",
    "scan",
]
