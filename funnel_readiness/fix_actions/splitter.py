"""Checkout splitter.

Repairs a "mixed billing types" blocker by moving a checkout's recurring
items and bumps into a new subscription checkout inserted right after it.
The original step keeps its one-time entries and has one-click offers
enabled.

Splitting is a state transition, not an idempotent fix: running it twice on a
stale funnel creates two subscription steps. Re-evaluate readiness before
allowing another split.
"""

import logging
import uuid
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from funnel_readiness.config import DEFAULT_CONFIG, GENERATED_STEP_PREFIX, ReadinessConfig
from funnel_readiness.exceptions import CheckoutSplitError
from funnel_readiness.models import (
    CheckoutConfig,
    CheckoutItem,
    CheckoutStep,
    Funnel,
    OrderBump,
    Price,
    PriceLookup,
    Step,
    SubscriptionSettings,
    build_price_lookup,
)

logger = logging.getLogger(__name__)

_Entry = TypeVar("_Entry", CheckoutItem, OrderBump)


@dataclass(frozen=True)
class SplitCheckoutResult:
    """Outcome of a split.

    Attributes:
        one_time_step_id: The original step, now one-time only
        subscription_step_id: The new subscription step, or None if nothing moved
        moved_items_count: Number of items and bumps moved to the new step
    """

    one_time_step_id: str
    subscription_step_id: str | None
    moved_items_count: int


@dataclass(frozen=True)
class CheckoutSplitPlan:
    """The full updated step list plus the split result."""

    updated_steps: list[Step]
    result: SplitCheckoutResult


def new_step_id() -> str:
    """Generate a fresh step id."""
    return f"{GENERATED_STEP_PREFIX}{uuid.uuid4().hex[:12]}"


def _partition(entries: list[_Entry], prices: PriceLookup) -> tuple[list[_Entry], list[_Entry]]:
    """Split entries into (one-time, subscription) by their price's billing type.

    Entries whose price is missing from the snapshot stay one-time.
    """
    one_time: list[_Entry] = []
    subscription: list[_Entry] = []
    for entry in entries:
        price = prices.get(entry.price_id)
        if price is not None and price.is_recurring:
            subscription.append(entry)
        else:
            one_time.append(entry)
    return one_time, subscription


def _require_checkout(funnel: Funnel, step_id: str) -> CheckoutStep:
    step = funnel.find_step(step_id)
    if step is None:
        raise CheckoutSplitError(f"Step {step_id} not found", step_id)
    if not isinstance(step, CheckoutStep):
        raise CheckoutSplitError(f"Step {step_id} is not a checkout", step_id)
    return step


def _unique_step_id(funnel: Funnel, id_factory: Callable[[], str]) -> str:
    step_id = id_factory()
    while funnel.find_step(step_id) is not None:
        step_id = id_factory()
    return step_id


def plan_checkout_split(
    funnel: Funnel,
    step_id: str,
    prices: list[Price],
    *,
    id_factory: Callable[[], str] = new_step_id,
    config: ReadinessConfig | None = None,
) -> CheckoutSplitPlan:
    """Compute the step list that results from splitting a checkout.

    Args:
        funnel: Current funnel snapshot
        step_id: Id of the checkout step to split
        prices: Price snapshot used to classify items
        id_factory: Generates the id of the new subscription step
        config: Optional configuration (return path, step name)

    Returns:
        CheckoutSplitPlan; the funnel itself is not modified

    Raises:
        CheckoutSplitError: If the step is missing or not a checkout
    """
    config = config or DEFAULT_CONFIG

    step = _require_checkout(funnel, step_id)

    lookup = build_price_lookup(prices)
    one_time_items, subscription_items = _partition(step.config.items, lookup)
    one_time_bumps, subscription_bumps = _partition(step.config.order_bumps, lookup)

    updated_original = step.model_copy(
        update={
            "config": step.config.model_copy(
                update={
                    "items": one_time_items,
                    "order_bumps": one_time_bumps,
                    "one_click_offers_enabled": True,
                }
            )
        }
    )

    index = funnel.step_index(step_id)
    updated_steps: list[Step] = list(funnel.steps)
    updated_steps[index] = updated_original

    moved = len(subscription_items) + len(subscription_bumps)
    subscription_step_id: str | None = None

    if moved > 0:
        subscription_step_id = _unique_step_id(funnel, id_factory)
        subscription_step = CheckoutStep(
            id=subscription_step_id,
            name=config.subscription_step_name,
            config=CheckoutConfig(
                items=subscription_items,
                order_bumps=subscription_bumps,
                screens_mode=1,
                one_click_offers_enabled=False,
                subscription=SubscriptionSettings(
                    experience="embedded_checkout",
                    collect_shipping=False,
                    return_path=config.return_path(funnel.id),
                ),
                on_success_step_id=step.config.on_success_step_id,
            ),
        )
        updated_steps.insert(index + 1, subscription_step)

    return CheckoutSplitPlan(
        updated_steps=updated_steps,
        result=SplitCheckoutResult(
            one_time_step_id=step_id,
            subscription_step_id=subscription_step_id,
            moved_items_count=moved,
        ),
    )


async def split_checkout_by_billing(
    step_id: str,
    get_funnel: Callable[[], Awaitable[Funnel]],
    get_prices: Callable[[list[str]], Awaitable[list[Price]]],
    update_steps: Callable[[list[Step]], Awaitable[None]],
    *,
    id_factory: Callable[[], str] = new_step_id,
    config: ReadinessConfig | None = None,
) -> SplitCheckoutResult:
    """Split a checkout step by billing type and persist the result.

    Args:
        step_id: Id of the checkout step to split
        get_funnel: Loads the current funnel
        get_prices: Loads prices for the given price ids
        update_steps: Persists the full updated step list
        id_factory: Generates the id of the new subscription step
        config: Optional configuration

    Returns:
        SplitCheckoutResult

    Raises:
        CheckoutSplitError: If the step is missing or not a checkout
    """
    funnel = await get_funnel()
    step = _require_checkout(funnel, step_id)

    price_ids = list(dict.fromkeys(item.price_id for item in step.config.unified_items()))
    prices = await get_prices(price_ids)

    plan = plan_checkout_split(funnel, step_id, prices, id_factory=id_factory, config=config)
    await update_steps(plan.updated_steps)

    logger.info(
        f"Split checkout {step_id}: moved {plan.result.moved_items_count} item(s) "
        f"to {plan.result.subscription_step_id or 'no new step'}"
    )
    return plan.result


def make_split_checkout_handler(
    get_funnel: Callable[[], Awaitable[Funnel]],
    get_prices: Callable[[list[str]], Awaitable[list[Price]]],
    update_steps: Callable[[list[Step]], Awaitable[None]],
    *,
    id_factory: Callable[[], str] = new_step_id,
    config: ReadinessConfig | None = None,
) -> Callable[[str], Awaitable[None]]:
    """Bind the splitter to the host's loaders for use as ``on_split_checkout``."""

    async def on_split_checkout(step_id: str) -> None:
        await split_checkout_by_billing(
            step_id,
            get_funnel,
            get_prices,
            update_steps,
            id_factory=id_factory,
            config=config,
        )

    return on_split_checkout
