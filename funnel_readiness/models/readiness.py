"""Readiness result schemas.

Issues are the authoritative output of an evaluation. Badges and checklist
rows are derived views for the UI and must never be used to decide whether a
funnel may be published.
"""

from typing import Literal

from pydantic import Field

from funnel_readiness.config import (
    ChecklistStatus,
    IssueScope,
    PublishStatus,
    Severity,
    SyncStatus,
)

from .actions import FixAction
from .base import WireModel


class ReadinessIssue(WireModel):
    """A configuration problem found in a funnel."""

    id: str = Field(description="Deterministic id derived from issue kind and subject")
    severity: Severity
    scope: IssueScope
    step_id: str | None = None
    title: str
    description: str
    fix_action: FixAction | None = None

    @property
    def is_blocker(self) -> bool:
        return self.severity == Severity.BLOCKER

    @property
    def is_fixable(self) -> bool:
        """Whether a fix action can be dispatched for this issue."""
        return self.fix_action is not None


class StepBadges(WireModel):
    """Best-effort UI hints summarizing a step."""

    mode: str | None = None
    sync: SyncStatus | None = None
    env: Literal["test", "live"] | None = None
    charge: Literal["immediate", "deferred"] | None = None


class ChecklistItem(WireModel):
    id: str
    status: ChecklistStatus
    label: str
    fix_action: FixAction | None = None


class StepReadiness(WireModel):
    """Readiness of a single step."""

    step_id: str
    badges: StepBadges = Field(default_factory=StepBadges)
    checklist: list[ChecklistItem] = Field(default_factory=list)
    issues: list[ReadinessIssue] = Field(default_factory=list)

    @property
    def has_blockers(self) -> bool:
        return any(issue.is_blocker for issue in self.issues)

    @property
    def has_warnings(self) -> bool:
        return any(issue.severity == Severity.WARNING for issue in self.issues)

    @property
    def issue_count(self) -> int:
        """Blockers plus warnings, as shown on the step badge indicator."""
        return sum(
            1 for issue in self.issues if issue.severity in (Severity.BLOCKER, Severity.WARNING)
        )


class FunnelReadiness(WireModel):
    """Aggregated readiness of a funnel.

    ``publish_blocked`` is true exactly when any global or step issue is a
    blocker. ``steps`` preserves the funnel's step order.
    """

    publish_blocked: bool
    global_issues: list[ReadinessIssue] = Field(default_factory=list)
    steps: dict[str, StepReadiness] = Field(default_factory=dict)

    @property
    def all_issues(self) -> list[ReadinessIssue]:
        """Global issues followed by each step's issues in step order."""
        issues = list(self.global_issues)
        for step in self.steps.values():
            issues.extend(step.issues)
        return issues

    @property
    def blockers(self) -> list[ReadinessIssue]:
        return [i for i in self.all_issues if i.severity == Severity.BLOCKER]

    @property
    def warnings(self) -> list[ReadinessIssue]:
        return [i for i in self.all_issues if i.severity == Severity.WARNING]

    @property
    def infos(self) -> list[ReadinessIssue]:
        return [i for i in self.all_issues if i.severity == Severity.INFO]

    @property
    def publish_status(self) -> PublishStatus:
        """Publish decision: blocked, ready with warnings, or ready."""
        if self.publish_blocked:
            return PublishStatus.BLOCKED
        if self.warnings:
            return PublishStatus.READY_WITH_WARNINGS
        return PublishStatus.READY

    def get_step(self, step_id: str) -> StepReadiness | None:
        return self.steps.get(step_id)

    def to_summary(self) -> str:
        """Format the readiness result as a human-readable summary."""
        status_text = {
            PublishStatus.BLOCKED: "BLOCKED",
            PublishStatus.READY_WITH_WARNINGS: "READY (with warnings)",
            PublishStatus.READY: "READY",
        }
        lines = ["## Funnel Readiness"]
        lines.append(f"**Status:** {status_text[self.publish_status]}")

        if self.publish_blocked:
            lines.append("Fix all blockers before publishing your funnel.")

        if self.global_issues:
            lines.append(f"\n**Global Issues ({len(self.global_issues)}):**")
            for issue in self.global_issues:
                lines.append(_format_issue(issue))

        # Global issues are listed above; these sections cover steps only
        step_blockers = [i for i in self.blockers if i.scope == IssueScope.STEP]
        if step_blockers:
            lines.append(f"\n**Blockers ({len(step_blockers)}):**")
            for issue in step_blockers:
                lines.append(_format_issue(issue))

        step_warnings = [i for i in self.warnings if i.scope == IssueScope.STEP]
        if step_warnings:
            lines.append(f"\n**Warnings ({len(step_warnings)}):**")
            for issue in step_warnings:
                lines.append(_format_issue(issue))

        if not self.blockers and not self.warnings:
            lines.append("\nYour funnel is properly configured and ready to publish.")

        return "\n".join(lines)


def _format_issue(issue: ReadinessIssue) -> str:
    marker = "[BLOCKER]" if issue.is_blocker else f"[{issue.severity.value}]"
    where = f" (step {issue.step_id})" if issue.step_id else ""
    line = f"- {marker} **{issue.title}**{where}: {issue.description}"
    if issue.fix_action is not None:
        line += f"\n  - Fix: {issue.fix_action.type}"
    return line
