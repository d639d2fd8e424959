"""Funnel and step models.

A funnel is an ordered list of steps. Each step is tagged by ``kind`` and
carries the configuration for that kind; the order of steps matters to the
checkout splitter, which inserts new steps directly after the one it splits.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import AliasChoices, Field

from funnel_readiness.config import StepKind

from .base import WireModel

# =============================================================================
# Checkout Configuration
# =============================================================================


class CheckoutItem(WireModel):
    """A product price sold on a checkout step."""

    price_id: str = Field(validation_alias=AliasChoices("priceId", "catalogPriceId", "price_id"))
    quantity: int = Field(default=1, ge=1)


class OrderBump(WireModel):
    """A one-box add-on offered on the checkout form."""

    bump_id: str = ""
    price_id: str = Field(validation_alias=AliasChoices("priceId", "catalogPriceId", "price_id"))
    headline: str = ""
    description: str = ""
    image_id: str | None = None


class SubscriptionSettings(WireModel):
    """How a checkout collects payment for recurring prices."""

    experience: Literal["embedded_checkout", "custom_checkout", "hosted_redirect"] = (
        "embedded_checkout"
    )
    collect_shipping: bool = False
    allowed_shipping_countries: list[str] | None = None
    return_path: str = ""


class CheckoutConfig(WireModel):
    """Configuration of a checkout step."""

    items: list[CheckoutItem] = Field(default_factory=list)
    order_bumps: list[OrderBump] = Field(default_factory=list)
    # 1 = all-in-one, 2 = details -> payment, 3 = products -> details -> payment
    screens_mode: Literal[1, 2, 3] = 1
    one_click_offers_enabled: bool = False
    subscription: SubscriptionSettings = Field(default_factory=SubscriptionSettings)
    on_success_step_id: str | None = None

    def unified_items(self) -> list[CheckoutItem]:
        """Items followed by order bumps, each bump counted as quantity 1."""
        bumps = [CheckoutItem(price_id=bump.price_id, quantity=1) for bump in self.order_bumps]
        return [*self.items, *bumps]


# =============================================================================
# Offer Configuration
# =============================================================================


class OfferRouting(WireModel):
    """Where an offer sends the customer after accepting or declining."""

    on_accept_step_id: str | None = None
    on_decline_step_id: str | None = None

    @property
    def is_complete(self) -> bool:
        return bool(self.on_accept_step_id) and bool(self.on_decline_step_id)


class OfferTemplate(WireModel):
    has_accept_button: bool = True
    has_decline_button: bool = True


class OfferConfig(WireModel):
    """Configuration of a post-purchase offer step."""

    offer_kind: Literal["oto", "upsell", "downsell"] = Field(
        default="oto",
        validation_alias=AliasChoices("kind", "offerKind", "offer_kind"),
        serialization_alias="kind",
    )
    catalog_price_id: str | None = None
    one_click_enabled: bool = False
    routing: OfferRouting = Field(default_factory=OfferRouting)
    template: OfferTemplate = Field(default_factory=OfferTemplate)


# =============================================================================
# Steps
# =============================================================================


class _StepBase(WireModel):
    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    name: str = ""


class CheckoutStep(_StepBase):
    kind: Literal["checkout"] = "checkout"
    config: CheckoutConfig


class OfferStep(_StepBase):
    kind: Literal["offer"] = "offer"
    config: OfferConfig


class ThankYouStep(_StepBase):
    kind: Literal["thank_you"] = "thank_you"
    config: dict[str, Any] = Field(default_factory=dict)


class PageStep(_StepBase):
    kind: Literal["page"] = "page"
    config: dict[str, Any] = Field(default_factory=dict)


Step = Annotated[
    Union[CheckoutStep, OfferStep, ThankYouStep, PageStep],
    Field(discriminator="kind"),
]


class Funnel(WireModel):
    """An ordered multi-step checkout/offer flow."""

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    name: str = ""
    steps: list[Step] = Field(default_factory=list)
    published_at: int | None = Field(default=None, description="Publish time in epoch millis")

    def find_step(self, step_id: str) -> Step | None:
        """Return the step with the given id, or None."""
        for step in self.steps:
            if step.id == step_id:
                return step
        return None

    def step_index(self, step_id: str) -> int:
        """Position of a step in the funnel, -1 when absent."""
        for index, step in enumerate(self.steps):
            if step.id == step_id:
                return index
        return -1

    @property
    def has_payment_steps(self) -> bool:
        """True when any step charges the customer."""
        return any(StepKind(step.kind).takes_payment for step in self.steps)
