"""Constructors for readiness issues.

Issue ids are derived from the issue kind and its subject (step or price id)
so that re-evaluating unchanged input yields identical issue sets.
"""

from funnel_readiness.config import IssueScope, Severity
from funnel_readiness.models import FixAction, ReadinessIssue


def step_issue(
    issue_id: str,
    step_id: str,
    severity: Severity,
    title: str,
    description: str,
    fix_action: FixAction | None = None,
) -> ReadinessIssue:
    """Build an issue scoped to a single step."""
    return ReadinessIssue(
        id=issue_id,
        severity=severity,
        scope=IssueScope.STEP,
        step_id=step_id,
        title=title,
        description=description,
        fix_action=fix_action,
    )


def global_issue(
    issue_id: str,
    severity: Severity,
    title: str,
    description: str,
    fix_action: FixAction | None = None,
) -> ReadinessIssue:
    """Build an issue that applies to the whole funnel."""
    return ReadinessIssue(
        id=issue_id,
        severity=severity,
        scope=IssueScope.GLOBAL,
        title=title,
        description=description,
        fix_action=fix_action,
    )
