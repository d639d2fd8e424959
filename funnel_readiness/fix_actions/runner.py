"""Caller-side runner for issue fix buttons.

Tracks which issues have a fix in flight so a second click does not
dispatch the same action again (for example, splitting a checkout twice).
Optionally bounds each run with a timeout so a handler that never resolves
does not leave the issue busy forever.
"""

import asyncio
import logging

from funnel_readiness.config import ReadinessConfig
from funnel_readiness.models import ReadinessIssue

from .dispatcher import FixActionHandlers, FixActionResult, execute_fix_action

logger = logging.getLogger(__name__)


class FixActionRunner:
    """Runs issue fix actions with a per-issue in-flight guard.

    Intended for a single event loop; the check-and-mark happens before the
    first await, so two runs for the same issue cannot both dispatch.
    """

    def __init__(
        self,
        handlers: FixActionHandlers,
        config: ReadinessConfig | None = None,
        timeout: float | None = None,
    ):
        """Initialize the runner.

        Args:
            handlers: Host application callbacks
            config: Optional configuration passed to the dispatcher
            timeout: Seconds to wait for a fix before giving up, None for no limit
        """
        self.handlers = handlers
        self.config = config
        self.timeout = timeout
        self._in_flight: set[str] = set()

    def is_executing(self, issue_id: str) -> bool:
        """Whether a fix for this issue is currently running."""
        return issue_id in self._in_flight

    @property
    def in_flight(self) -> frozenset[str]:
        return frozenset(self._in_flight)

    async def run(self, issue: ReadinessIssue) -> FixActionResult:
        """Dispatch the issue's fix action unless one is already running."""
        if issue.fix_action is None:
            return FixActionResult(False, "No automatic fix available for this issue")
        if issue.id in self._in_flight:
            logger.info(f"Fix for {issue.id} already in progress, ignoring")
            return FixActionResult(False, "Fix already in progress")

        self._in_flight.add(issue.id)
        try:
            dispatch = execute_fix_action(issue.fix_action, self.handlers, self.config)
            if self.timeout is None:
                return await dispatch
            return await asyncio.wait_for(dispatch, self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Fix for {issue.id} timed out after {self.timeout}s")
            return FixActionResult(False, f"Fix action timed out after {self.timeout:g}s")
        finally:
            self._in_flight.discard(issue.id)
