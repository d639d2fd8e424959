"""Funnel readiness validation.

Evaluates a checkout/offer funnel against its price catalog, decides whether
it may be published, and dispatches automated fixes for the issues found.
"""

from .config import ReadinessConfig
from .exceptions import CheckoutSplitError, FunnelReadinessError, SnapshotLoadError
from .fix_actions import (
    FixActionHandlers,
    FixActionResult,
    FixActionRunner,
    SplitCheckoutResult,
    execute_fix_action,
    make_split_checkout_handler,
    plan_checkout_split,
    split_checkout_by_billing,
)
from .models import Funnel, FunnelReadiness, Price, ReadinessIssue, StepReadiness
from .readiness import evaluate

__all__ = [
    "ReadinessConfig",
    "CheckoutSplitError",
    "FunnelReadinessError",
    "SnapshotLoadError",
    "FixActionHandlers",
    "FixActionResult",
    "FixActionRunner",
    "SplitCheckoutResult",
    "execute_fix_action",
    "make_split_checkout_handler",
    "plan_checkout_split",
    "split_checkout_by_billing",
    "Funnel",
    "FunnelReadiness",
    "Price",
    "ReadinessIssue",
    "StepReadiness",
    "evaluate",
]
