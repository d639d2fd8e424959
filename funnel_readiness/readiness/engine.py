"""Funnel readiness evaluation.

Pure, synchronous evaluation of a funnel against a price snapshot:
- Per-step rules (checkout, offer) produce step-scoped issues
- Workspace rules produce global issues
- Badges and checklist rows are derived from each step
- Publishing is blocked when any issue is a blocker

Nothing here performs I/O or keeps state between calls; the price lookup is
rebuilt from the snapshot on every evaluation.
"""

import logging
from collections.abc import Callable

from funnel_readiness.config import DEFAULT_CONFIG, ReadinessConfig, Severity, StepKind
from funnel_readiness.models import (
    Funnel,
    FunnelReadiness,
    OpenPaymentsSettingsAction,
    Price,
    PriceLookup,
    ReadinessIssue,
    Step,
    StepReadiness,
    build_price_lookup,
)

from .badges import build_badges, build_checklist
from .checkout_rules import check_checkout_step
from .issues import global_issue
from .offer_rules import check_offer_step

logger = logging.getLogger(__name__)

StepRule = Callable[[Step, PriceLookup], list[ReadinessIssue]]


def _no_rules(step: Step, prices: PriceLookup) -> list[ReadinessIssue]:
    return []


# Registry of per-kind rules
_STEP_RULES: dict[StepKind, StepRule] = {
    StepKind.CHECKOUT: check_checkout_step,
    StepKind.OFFER: check_offer_step,
    StepKind.THANK_YOU: _no_rules,
    StepKind.PAGE: _no_rules,
}


def check_step(step: Step, prices: PriceLookup) -> list[ReadinessIssue]:
    """Run the rules registered for the step's kind.

    Raises:
        ValueError: If no rules are registered for the step kind
    """
    rule = _STEP_RULES.get(StepKind(step.kind))
    if rule is None:
        raise ValueError(f"No readiness rules registered for step kind: {step.kind}")
    return rule(step, prices)


def check_workspace_setup(funnel: Funnel, prices: PriceLookup) -> list[ReadinessIssue]:
    """Workspace-level checks that apply to the funnel as a whole.

    Stripe counts as configured when any price in the snapshot is synced,
    whether or not the funnel references it.
    """
    issues: list[ReadinessIssue] = []

    has_synced_prices = any(price.is_synced for price in prices.values())
    if not has_synced_prices and funnel.has_payment_steps:
        issues.append(
            global_issue(
                "no-stripe-sync",
                Severity.BLOCKER,
                "No Stripe Integration",
                "No products have been synced to Stripe yet",
                OpenPaymentsSettingsAction(),
            )
        )

    return issues


def evaluate_step(step: Step, prices: PriceLookup, config: ReadinessConfig) -> StepReadiness:
    """Evaluate one step into its issues, badges and checklist."""
    issues = check_step(step, prices)
    if issues:
        logger.debug(f"Step {step.id} ({step.kind}): {len(issues)} issue(s)")
    return StepReadiness(
        step_id=step.id,
        badges=build_badges(step, prices, config),
        checklist=build_checklist(issues),
        issues=issues,
    )


def evaluate(
    funnel: Funnel,
    prices: list[Price],
    config: ReadinessConfig | None = None,
) -> FunnelReadiness:
    """Evaluate whether a funnel is ready to publish.

    Args:
        funnel: Funnel snapshot to check
        prices: Price catalog snapshot, trusted as current
        config: Optional configuration (badge placeholders)

    Returns:
        FunnelReadiness with global issues, per-step readiness in step order,
        and the publish decision
    """
    config = config or DEFAULT_CONFIG
    price_lookup = build_price_lookup(prices)

    steps: dict[str, StepReadiness] = {}
    for step in funnel.steps:
        steps[step.id] = evaluate_step(step, price_lookup, config)

    global_issues = check_workspace_setup(funnel, price_lookup)

    publish_blocked = any(issue.severity == Severity.BLOCKER for issue in global_issues) or any(
        readiness.has_blockers for readiness in steps.values()
    )

    readiness = FunnelReadiness(
        publish_blocked=publish_blocked,
        global_issues=global_issues,
        steps=steps,
    )
    logger.info(
        f"Evaluated funnel {funnel.id}: {len(readiness.blockers)} blocker(s), "
        f"{len(readiness.warnings)} warning(s), publish_blocked={publish_blocked}"
    )
    return readiness
