"""Offer step rules.

The checks form a short-circuiting pipeline: an offer without a price gets a
single blocker and nothing else is checked.
"""

from funnel_readiness.config import BillingType, Severity
from funnel_readiness.models import (
    OfferStep,
    PriceLookup,
    ReadinessIssue,
    RepairOfferRoutingAction,
    SyncOptionsAction,
)

from .issues import step_issue


def check_offer_step(step: OfferStep, prices: PriceLookup) -> list[ReadinessIssue]:
    """Run the offer rules for one step.

    Returns:
        Issues in rule order: missing price (alone), unsynced price,
        subscription price, incomplete routing
    """
    config = step.config

    if not config.catalog_price_id:
        return [
            step_issue(
                f"no-price-{step.id}",
                step.id,
                Severity.BLOCKER,
                "No Price Selected",
                "Offer needs a price to be selected",
            )
        ]

    issues: list[ReadinessIssue] = []
    price = prices.get(config.catalog_price_id)

    if price is not None and not price.is_synced:
        issues.append(
            step_issue(
                f"unsync-offer-{step.id}",
                step.id,
                Severity.BLOCKER,
                "Unsynced Offer Price",
                "Offer price must be synced to Stripe",
                SyncOptionsAction(price_ids=[config.catalog_price_id]),
            )
        )

    # One-click charges reuse the saved card, which only works for one-time prices
    if price is not None and price.billing_type != BillingType.ONE_TIME:
        issues.append(
            step_issue(
                f"subscription-offer-{step.id}",
                step.id,
                Severity.BLOCKER,
                "Subscription Offer Not Supported",
                "One-click offers only support one-time payments",
            )
        )

    if not config.routing.is_complete:
        issues.append(
            step_issue(
                f"incomplete-routing-{step.id}",
                step.id,
                Severity.WARNING,
                "Incomplete Routing",
                "Offer needs both accept and decline routes configured",
                RepairOfferRoutingAction(step_id=step.id),
            )
        )

    return issues
