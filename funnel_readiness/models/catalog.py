"""Price catalog snapshot models.

Prices are owned by the catalog service. The readiness engine only reads
them; a price counts as synced when it carries a Stripe price id.
"""

from typing import Literal

from pydantic import AliasChoices, Field

from funnel_readiness.config import BillingType

from .base import WireModel


class PriceBilling(WireModel):
    """Billing terms of a price. Recurring prices carry an interval."""

    type: BillingType
    interval: Literal["day", "week", "month", "year"] | None = None
    interval_count: int | None = Field(default=None, ge=1)


class Price(WireModel):
    """A catalog price with its payment-provider sync state."""

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    product_id: str | None = None
    nickname: str = ""
    currency: str = "usd"
    amount: int = Field(default=0, ge=0, description="Amount in the currency's minor unit")
    billing: PriceBilling
    active: bool = True
    stripe_price_id: str | None = None

    @property
    def billing_type(self) -> BillingType:
        return self.billing.type

    @property
    def is_synced(self) -> bool:
        """True once the price exists on Stripe."""
        return bool(self.stripe_price_id)

    @property
    def is_recurring(self) -> bool:
        return self.billing.type == BillingType.RECURRING


PriceLookup = dict[str, Price]


def build_price_lookup(prices: list[Price]) -> PriceLookup:
    """Index a price snapshot by id.

    Built fresh for every evaluation and passed explicitly. When the snapshot
    repeats an id, the last entry wins.
    """
    return {price.id: price for price in prices}
