"""Fix action dispatch.

Turns a FixAction into a call on one of the host application's handlers:
- Navigation actions call ``on_navigate`` with a router path
- Mutation actions await the matching async handler

Every outcome is reported as a FixActionResult. A missing handler, an
unknown action type or a handler that raises all yield ``success=False``;
nothing propagates to the caller.
"""

import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from funnel_readiness.config import DEFAULT_CONFIG, ReadinessConfig
from funnel_readiness.models import (
    FIX_ACTION_KINDS,
    EnableOneClickAction,
    InsertOfferButtonsAction,
    OpenCatalogProductAction,
    OpenPaymentsSettingsAction,
    RepairOfferRoutingAction,
    SplitCheckoutByBillingAction,
    SyncOptionsAction,
    parse_fix_action,
)

logger = logging.getLogger(__name__)

NavigateHandler = Callable[[str], Any]
StepHandler = Callable[[str], Awaitable[None]]
SyncPricesHandler = Callable[[list[str]], Awaitable[None]]


@dataclass
class FixActionHandlers:
    """Callbacks supplied by the host application.

    Attributes:
        on_navigate: Router navigation, called with a path
        on_sync_prices: Starts the Stripe sync job for the given price ids
        on_split_checkout: Splits a checkout step by billing type
        on_enable_one_click: Enables one-click offers on a step
        on_repair_routing: Opens or repairs an offer's accept/decline routing
        on_insert_buttons: Inserts accept/decline buttons into an offer page
    """

    on_navigate: NavigateHandler | None = None
    on_sync_prices: SyncPricesHandler | None = None
    on_split_checkout: StepHandler | None = None
    on_enable_one_click: StepHandler | None = None
    on_repair_routing: StepHandler | None = None
    on_insert_buttons: StepHandler | None = None


@dataclass(frozen=True)
class FixActionResult:
    """Outcome of a fix action, shown to the user."""

    success: bool
    message: str


async def _call(handler: Callable[..., Any], *args: Any) -> None:
    """Call a handler, awaiting it when it returns an awaitable."""
    result = handler(*args)
    if inspect.isawaitable(result):
        await result


# =============================================================================
# Per-action handlers
# =============================================================================


async def _open_payments_settings(
    action: OpenPaymentsSettingsAction, handlers: FixActionHandlers, config: ReadinessConfig
) -> FixActionResult:
    if handlers.on_navigate is None:
        return FixActionResult(False, "Cannot open payments settings - navigation handler not provided")
    await _call(handlers.on_navigate, config.payments_settings_path)
    return FixActionResult(True, "Opening payments settings...")


async def _open_catalog_product(
    action: OpenCatalogProductAction, handlers: FixActionHandlers, config: ReadinessConfig
) -> FixActionResult:
    if not action.product_id:
        return FixActionResult(False, "Product ID not provided")
    if handlers.on_navigate is None:
        return FixActionResult(False, "Cannot open product - navigation handler not provided")
    await _call(handlers.on_navigate, config.product_path(action.product_id))
    return FixActionResult(True, "Opening product in catalog...")


async def _sync_options(
    action: SyncOptionsAction, handlers: FixActionHandlers, config: ReadinessConfig
) -> FixActionResult:
    if handlers.on_sync_prices is None:
        return FixActionResult(False, "Cannot sync prices - handler not provided")
    await _call(handlers.on_sync_prices, list(action.price_ids))
    return FixActionResult(True, f"Syncing {len(action.price_ids)} price(s) to Stripe...")


async def _run_step_handler(
    handler: StepHandler | None,
    step_id: str,
    missing_message: str,
    success_message: str,
) -> FixActionResult:
    if handler is None:
        return FixActionResult(False, missing_message)
    await _call(handler, step_id)
    return FixActionResult(True, success_message)


async def _enable_one_click(
    action: EnableOneClickAction, handlers: FixActionHandlers, config: ReadinessConfig
) -> FixActionResult:
    return await _run_step_handler(
        handlers.on_enable_one_click,
        action.step_id,
        "Cannot enable one-click - handler not provided",
        "One-click offers enabled",
    )


async def _repair_offer_routing(
    action: RepairOfferRoutingAction, handlers: FixActionHandlers, config: ReadinessConfig
) -> FixActionResult:
    return await _run_step_handler(
        handlers.on_repair_routing,
        action.step_id,
        "Cannot repair routing - handler not provided",
        "Opening offer routing configuration...",
    )


async def _insert_offer_buttons(
    action: InsertOfferButtonsAction, handlers: FixActionHandlers, config: ReadinessConfig
) -> FixActionResult:
    return await _run_step_handler(
        handlers.on_insert_buttons,
        action.step_id,
        "Cannot insert buttons - handler not provided",
        "Inserting offer buttons into page...",
    )


async def _split_checkout_by_billing(
    action: SplitCheckoutByBillingAction, handlers: FixActionHandlers, config: ReadinessConfig
) -> FixActionResult:
    return await _run_step_handler(
        handlers.on_split_checkout,
        action.step_id,
        "Cannot split checkout - handler not provided",
        "Splitting checkout by billing type...",
    )


# Registry of dispatch functions, one per FixAction variant
_DISPATCH: dict[type, Callable[..., Awaitable[FixActionResult]]] = {
    OpenPaymentsSettingsAction: _open_payments_settings,
    OpenCatalogProductAction: _open_catalog_product,
    SyncOptionsAction: _sync_options,
    EnableOneClickAction: _enable_one_click,
    RepairOfferRoutingAction: _repair_offer_routing,
    InsertOfferButtonsAction: _insert_offer_buttons,
    SplitCheckoutByBillingAction: _split_checkout_by_billing,
}


def supported_action_types() -> frozenset[type]:
    """FixAction variant classes that have a dispatch function."""
    return frozenset(_DISPATCH)


# =============================================================================
# Entry point
# =============================================================================


async def execute_fix_action(
    action: Any,
    handlers: FixActionHandlers,
    config: ReadinessConfig | None = None,
) -> FixActionResult:
    """Execute a fix action through the supplied handlers.

    Args:
        action: A FixAction variant, or its wire payload as a dict
        handlers: Host application callbacks
        config: Optional configuration (navigation paths)

    Returns:
        FixActionResult; never raises for handler failures
    """
    config = config or DEFAULT_CONFIG

    if isinstance(action, dict):
        kind = action.get("type")
        if not isinstance(kind, str) or kind not in FIX_ACTION_KINDS:
            logger.warning(f"Unknown fix action type: {kind!r}")
            return FixActionResult(False, "Unknown fix action type")
        try:
            action = parse_fix_action(action)
        except ValidationError as e:
            logger.warning(f"Invalid {kind} fix action: {e}")
            return FixActionResult(False, f"Invalid {kind} action: {e.error_count()} field error(s)")

    dispatch = _DISPATCH.get(type(action))
    if dispatch is None:
        logger.warning(f"Unknown fix action: {action!r}")
        return FixActionResult(False, "Unknown fix action type")

    logger.info(f"Executing fix action {action.type}")
    try:
        result = await dispatch(action, handlers, config)
    except Exception as e:
        logger.error(f"Fix action {action.type} failed: {e}", exc_info=True)
        return FixActionResult(False, str(e) or "Fix action failed")

    if not result.success:
        logger.warning(f"Fix action {action.type} not executed: {result.message}")
    return result
