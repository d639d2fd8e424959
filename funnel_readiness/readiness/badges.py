"""Badge and checklist derivation.

Both are UI conveniences computed from a step's config and issues. Publish
decisions are made from issues only.
"""

from funnel_readiness.config import (
    CHECKOUT_CHARGE,
    OFFER_MODE,
    ChecklistStatus,
    ReadinessConfig,
    SyncStatus,
)
from funnel_readiness.models import (
    ChecklistItem,
    CheckoutStep,
    OfferStep,
    PriceLookup,
    ReadinessIssue,
    Step,
    StepBadges,
)

from .checkout_rules import billing_types_of, resolve_checkout_prices


def checkout_badges(step: CheckoutStep, prices: PriceLookup, config: ReadinessConfig) -> StepBadges:
    """Badges for a checkout step.

    ``mode`` is set only when exactly one billing type resolved. ``sync`` is
    ``synced`` only when every item resolves to a synced price.
    """
    billing_types = billing_types_of(resolve_checkout_prices(step, prices))
    mode = next(iter(billing_types)).badge_label if len(billing_types) == 1 else None

    all_synced = True
    for item in step.config.unified_items():
        price = prices.get(item.price_id)
        if price is None or not price.is_synced:
            all_synced = False
            break

    return StepBadges(
        mode=mode,
        sync=SyncStatus.SYNCED if all_synced else SyncStatus.NEEDS_SYNC,
        env=config.environment,
        charge=CHECKOUT_CHARGE,
    )


def offer_badges(step: OfferStep, prices: PriceLookup, config: ReadinessConfig) -> StepBadges:
    """Badges for an offer step."""
    price = prices.get(step.config.catalog_price_id) if step.config.catalog_price_id else None
    synced = price is not None and price.is_synced

    return StepBadges(
        mode=OFFER_MODE,
        sync=SyncStatus.SYNCED if synced else SyncStatus.NEEDS_SYNC,
        env=config.environment,
        charge="immediate" if step.config.one_click_enabled else "deferred",
    )


def build_badges(step: Step, prices: PriceLookup, config: ReadinessConfig) -> StepBadges:
    """Badges for any step; thank-you and page steps get none."""
    if isinstance(step, CheckoutStep):
        return checkout_badges(step, prices, config)
    if isinstance(step, OfferStep):
        return offer_badges(step, prices, config)
    return StepBadges()


def build_checklist(issues: list[ReadinessIssue]) -> list[ChecklistItem]:
    """Project issues 1:1 into checklist rows."""
    return [
        ChecklistItem(
            id=issue.id,
            status=ChecklistStatus.from_severity(issue.severity),
            label=issue.title,
            fix_action=issue.fix_action,
        )
        for issue in issues
    ]
