"""Fix actions: dispatch, checkout splitting and the caller-side runner."""

from .dispatcher import (
    FixActionHandlers,
    FixActionResult,
    execute_fix_action,
    supported_action_types,
)
from .runner import FixActionRunner
from .splitter import (
    CheckoutSplitPlan,
    SplitCheckoutResult,
    make_split_checkout_handler,
    new_step_id,
    plan_checkout_split,
    split_checkout_by_billing,
)

__all__ = [
    "FixActionHandlers",
    "FixActionResult",
    "FixActionRunner",
    "execute_fix_action",
    "supported_action_types",
    "CheckoutSplitPlan",
    "SplitCheckoutResult",
    "make_split_checkout_handler",
    "new_step_id",
    "plan_checkout_split",
    "split_checkout_by_billing",
]
