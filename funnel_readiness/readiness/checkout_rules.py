"""Checkout step rules.

Checks a checkout step's items and order bumps against the price snapshot:
- Mixed billing types in one checkout (blocker, fixable by splitting)
- Prices not yet synced to Stripe (one blocker per distinct price)
- Empty checkout (warning)

Price ids missing from the snapshot are skipped rather than reported.
"""

import logging

from funnel_readiness.config import BillingType, Severity
from funnel_readiness.models import (
    CheckoutStep,
    Price,
    PriceLookup,
    ReadinessIssue,
    SplitCheckoutByBillingAction,
    SyncOptionsAction,
)

from .issues import step_issue

logger = logging.getLogger(__name__)


def resolve_checkout_prices(step: CheckoutStep, prices: PriceLookup) -> list[Price]:
    """Resolve the unified item list of a checkout to prices, in item order.

    Unresolved price ids are dropped. A price referenced by several items
    appears once per item.
    """
    resolved: list[Price] = []
    for item in step.config.unified_items():
        price = prices.get(item.price_id)
        if price is None:
            logger.debug(f"Step {step.id}: price {item.price_id} not in snapshot, skipping")
            continue
        resolved.append(price)
    return resolved


def billing_types_of(resolved: list[Price]) -> set[BillingType]:
    return {price.billing_type for price in resolved}


def check_checkout_step(step: CheckoutStep, prices: PriceLookup) -> list[ReadinessIssue]:
    """Run all checkout rules for one step.

    Args:
        step: The checkout step to check
        prices: Price snapshot indexed by id

    Returns:
        Issues in rule order: mixed billing, unsynced prices, empty checkout
    """
    issues: list[ReadinessIssue] = []
    resolved = resolve_checkout_prices(step, prices)

    if len(billing_types_of(resolved)) > 1:
        issues.append(
            step_issue(
                f"mixed-billing-{step.id}",
                step.id,
                Severity.BLOCKER,
                "Mixed Billing Types",
                "Cannot mix one-time and subscription items in the same checkout",
                SplitCheckoutByBillingAction(step_id=step.id),
            )
        )

    # One issue per distinct unsynced price, in first-seen order
    seen: set[str] = set()
    for price in resolved:
        if price.is_synced or price.id in seen:
            continue
        seen.add(price.id)
        issues.append(
            step_issue(
                f"unsync-{price.id}",
                step.id,
                Severity.BLOCKER,
                "Unsynced Price",
                "Price needs to be synced to Stripe before checkout can work",
                SyncOptionsAction(price_ids=[price.id]),
            )
        )

    if not step.config.unified_items():
        issues.append(
            step_issue(
                f"empty-checkout-{step.id}",
                step.id,
                Severity.WARNING,
                "Empty Checkout",
                "No items selected for checkout",
            )
        )

    return issues
