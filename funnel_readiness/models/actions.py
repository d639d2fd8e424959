"""Fix actions: automatable remediations attached to readiness issues.

FixAction is a closed union discriminated on ``type``. Each variant carries
exactly the fields its handler needs.
"""

from typing import Annotated, Any, Literal, Union, get_args

from pydantic import Field, TypeAdapter

from .base import WireModel


class OpenPaymentsSettingsAction(WireModel):
    type: Literal["open_payments_settings"] = "open_payments_settings"


class OpenCatalogProductAction(WireModel):
    type: Literal["open_catalog_product"] = "open_catalog_product"
    # Optional on the wire; the dispatcher reports a missing id instead of rejecting
    product_id: str | None = None


class SyncOptionsAction(WireModel):
    type: Literal["sync_options"] = "sync_options"
    price_ids: list[str]


class EnableOneClickAction(WireModel):
    type: Literal["enable_one_click"] = "enable_one_click"
    step_id: str


class RepairOfferRoutingAction(WireModel):
    type: Literal["repair_offer_routing"] = "repair_offer_routing"
    step_id: str


class InsertOfferButtonsAction(WireModel):
    type: Literal["insert_offer_buttons"] = "insert_offer_buttons"
    step_id: str


class SplitCheckoutByBillingAction(WireModel):
    type: Literal["split_checkout_by_billing"] = "split_checkout_by_billing"
    step_id: str


FixAction = Annotated[
    Union[
        OpenPaymentsSettingsAction,
        OpenCatalogProductAction,
        SyncOptionsAction,
        EnableOneClickAction,
        RepairOfferRoutingAction,
        InsertOfferButtonsAction,
        SplitCheckoutByBillingAction,
    ],
    Field(discriminator="type"),
]

# Every variant class of the union, in declaration order
FIX_ACTION_TYPES: tuple[type[WireModel], ...] = get_args(get_args(FixAction)[0])

# Wire discriminator values, e.g. "sync_options"
FIX_ACTION_KINDS: frozenset[str] = frozenset(
    cls.model_fields["type"].default for cls in FIX_ACTION_TYPES
)

_FIX_ACTION_ADAPTER: TypeAdapter = TypeAdapter(FixAction)


def parse_fix_action(data: dict[str, Any]) -> FixAction:
    """Validate a wire payload into its FixAction variant.

    Raises:
        pydantic.ValidationError: If the type is unknown or fields are invalid
    """
    return _FIX_ACTION_ADAPTER.validate_python(data)
