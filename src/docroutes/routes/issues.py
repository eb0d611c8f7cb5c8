"""Collection of non-fatal issues raised while processing documents."""

from __future__ import annotations

import logging
from typing import Iterator, List

from docroutes.models import ValidationIssue

LOGGER = logging.getLogger(__name__)


class IssueCollector:
    """Issue sink that keeps every registered issue in arrival order."""

    def __init__(self) -> None:
        self.issues: List[ValidationIssue] = []

    def register_issue(self, issue: ValidationIssue) -> None:
        LOGGER.warning(
            "%s (%s) in %s:%s-%s",
            issue.kind,
            issue.disposition,
            issue.provenance,
            issue.start_line,
            issue.end_line,
        )
        LOGGER.debug("%s", issue.message)
        self.issues.append(issue)

    @property
    def errors(self) -> List[ValidationIssue]:
        return [issue for issue in self.issues if issue.disposition == "error"]

    def __len__(self) -> int:
        return len(self.issues)

    def __iter__(self) -> Iterator[ValidationIssue]:
        return iter(self.issues)
