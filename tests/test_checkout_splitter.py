"""Tests for splitting a mixed-billing checkout into two steps."""

import asyncio
from unittest import mock

import pytest

from factories import make_checkout, make_funnel, make_offer, make_price, make_thank_you
from funnel_readiness.config import ReadinessConfig
from funnel_readiness.exceptions import CheckoutSplitError
from funnel_readiness.fix_actions import (
    FixActionHandlers,
    execute_fix_action,
    make_split_checkout_handler,
    new_step_id,
    plan_checkout_split,
    split_checkout_by_billing,
)
from funnel_readiness.models import CheckoutStep, SplitCheckoutByBillingAction
from funnel_readiness.readiness import evaluate


def _fixed_ids(*ids: str):
    iterator = iter(ids)
    return lambda: next(iterator)


def _mixed_funnel():
    """Checkout S1 (one-time P1, recurring R1 + bump R2) -> offer -> ty."""
    checkout = make_checkout(
        "S1",
        item_ids=("P1", "R1"),
        bump_ids=("R2",),
        on_success_step_id="O1",
        screens_mode=3,
    )
    return make_funnel(checkout, make_offer("O1", price_id="P1"), make_thank_you("ty"))


PRICES = [
    make_price("P1"),
    make_price("R1", "recurring"),
    make_price("R2", "recurring"),
]


class TestPlanCheckoutSplit:
    def test_moves_recurring_entries_to_new_step(self):
        funnel = _mixed_funnel()

        plan = plan_checkout_split(funnel, "S1", PRICES, id_factory=_fixed_ids("step_new"))

        assert plan.result.one_time_step_id == "S1"
        assert plan.result.subscription_step_id == "step_new"
        assert plan.result.moved_items_count == 2
        assert [s.id for s in plan.updated_steps] == ["S1", "step_new", "O1", "ty"]

    def test_original_step_keeps_one_time_entries(self):
        plan = plan_checkout_split(_mixed_funnel(), "S1", PRICES, id_factory=_fixed_ids("step_new"))
        original = plan.updated_steps[0]

        assert [item.price_id for item in original.config.items] == ["P1"]
        assert original.config.order_bumps == []
        assert original.config.one_click_offers_enabled is True
        assert original.config.screens_mode == 3
        assert original.name == "Checkout S1"

    def test_new_step_configuration(self):
        config = ReadinessConfig(subscription_return_path="/done/{funnel_id}")
        plan = plan_checkout_split(
            _mixed_funnel(), "S1", PRICES, id_factory=_fixed_ids("step_new"), config=config
        )
        new_step = plan.updated_steps[1]

        assert isinstance(new_step, CheckoutStep)
        assert new_step.name == "Subscription Checkout"
        assert [item.price_id for item in new_step.config.items] == ["R1"]
        assert [bump.price_id for bump in new_step.config.order_bumps] == ["R2"]
        assert new_step.config.screens_mode == 1
        assert new_step.config.one_click_offers_enabled is False
        assert new_step.config.on_success_step_id == "O1"
        assert new_step.config.subscription.experience == "embedded_checkout"
        assert new_step.config.subscription.collect_shipping is False
        assert new_step.config.subscription.return_path == "/done/F1"

    def test_split_resolves_mixed_billing_blocker(self):
        plan = plan_checkout_split(_mixed_funnel(), "S1", PRICES, id_factory=_fixed_ids("step_new"))
        funnel = _mixed_funnel().model_copy(update={"steps": plan.updated_steps})

        readiness = evaluate(funnel, PRICES)

        assert not any(issue.id.startswith("mixed-billing") for issue in readiness.all_issues)
        assert readiness.steps["S1"].badges.mode == "one-time"
        assert readiness.steps["step_new"].badges.mode == "subscription"

    def test_funnel_is_not_mutated(self):
        funnel = _mixed_funnel()
        plan_checkout_split(funnel, "S1", PRICES, id_factory=_fixed_ids("step_new"))

        assert [s.id for s in funnel.steps] == ["S1", "O1", "ty"]
        assert len(funnel.steps[0].config.items) == 2

    def test_nothing_recurring_adds_no_step(self):
        funnel = make_funnel(make_checkout("S1", item_ids=("P1",)), make_thank_you("ty"))
        factory = mock.Mock(return_value="step_new")

        plan = plan_checkout_split(funnel, "S1", PRICES, id_factory=factory)

        assert plan.result.subscription_step_id is None
        assert plan.result.moved_items_count == 0
        assert [s.id for s in plan.updated_steps] == ["S1", "ty"]
        assert plan.updated_steps[0].config.one_click_offers_enabled is True
        factory.assert_not_called()

    def test_unresolved_prices_stay_one_time(self):
        funnel = make_funnel(make_checkout("S1", item_ids=("GHOST", "R1")))

        plan = plan_checkout_split(funnel, "S1", PRICES, id_factory=_fixed_ids("step_new"))

        assert [i.price_id for i in plan.updated_steps[0].config.items] == ["GHOST"]
        assert [i.price_id for i in plan.updated_steps[1].config.items] == ["R1"]

    def test_new_id_avoids_existing_steps(self):
        plan = plan_checkout_split(
            _mixed_funnel(), "S1", PRICES, id_factory=_fixed_ids("O1", "ty", "step_new")
        )
        assert plan.result.subscription_step_id == "step_new"

    def test_missing_step(self):
        with pytest.raises(CheckoutSplitError, match="Step NOPE not found") as exc_info:
            plan_checkout_split(_mixed_funnel(), "NOPE", PRICES)
        assert exc_info.value.step_id == "NOPE"

    def test_non_checkout_step(self):
        with pytest.raises(CheckoutSplitError, match="is not a checkout"):
            plan_checkout_split(_mixed_funnel(), "O1", PRICES)


class TestNewStepId:
    def test_format(self):
        step_id = new_step_id()
        assert step_id.startswith("step_")
        assert len(step_id) == len("step_") + 12

    def test_unique(self):
        assert len({new_step_id() for _ in range(50)}) == 50


class TestSplitCheckoutByBilling:
    def _loaders(self, funnel):
        get_funnel = mock.AsyncMock(return_value=funnel)
        get_prices = mock.AsyncMock(return_value=PRICES)
        update_steps = mock.AsyncMock()
        return get_funnel, get_prices, update_steps

    def test_persists_full_step_list(self):
        get_funnel, get_prices, update_steps = self._loaders(_mixed_funnel())

        result = asyncio.run(
            split_checkout_by_billing(
                "S1", get_funnel, get_prices, update_steps, id_factory=_fixed_ids("step_new")
            )
        )

        assert result.subscription_step_id == "step_new"
        update_steps.assert_awaited_once()
        [steps] = update_steps.await_args.args
        assert [s.id for s in steps] == ["S1", "step_new", "O1", "ty"]

    def test_loads_prices_for_unique_entry_ids(self):
        funnel = make_funnel(make_checkout("S1", item_ids=("P1", "R1"), bump_ids=("R1",)))
        get_funnel, get_prices, update_steps = self._loaders(funnel)

        asyncio.run(split_checkout_by_billing("S1", get_funnel, get_prices, update_steps))

        get_prices.assert_awaited_once_with(["P1", "R1"])

    def test_missing_step_does_not_persist(self):
        get_funnel, get_prices, update_steps = self._loaders(_mixed_funnel())

        with pytest.raises(CheckoutSplitError):
            asyncio.run(split_checkout_by_billing("NOPE", get_funnel, get_prices, update_steps))

        get_prices.assert_not_awaited()
        update_steps.assert_not_awaited()

    def test_handler_through_dispatcher(self):
        get_funnel, get_prices, update_steps = self._loaders(_mixed_funnel())
        handlers = FixActionHandlers(
            on_split_checkout=make_split_checkout_handler(
                get_funnel, get_prices, update_steps, id_factory=_fixed_ids("step_new")
            )
        )

        result = asyncio.run(
            execute_fix_action(SplitCheckoutByBillingAction(step_id="S1"), handlers)
        )

        assert result.success is True
        update_steps.assert_awaited_once()

    def test_handler_error_surfaces_as_failed_result(self):
        get_funnel, get_prices, update_steps = self._loaders(_mixed_funnel())
        handlers = FixActionHandlers(
            on_split_checkout=make_split_checkout_handler(get_funnel, get_prices, update_steps)
        )

        result = asyncio.run(
            execute_fix_action(SplitCheckoutByBillingAction(step_id="ty"), handlers)
        )

        assert result.success is False
        assert result.message == "Step ty is not a checkout"
        update_steps.assert_not_awaited()

