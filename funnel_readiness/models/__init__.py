"""Data models for funnels, price snapshots, readiness results and fix actions."""

from .actions import (
    FIX_ACTION_KINDS,
    FIX_ACTION_TYPES,
    EnableOneClickAction,
    FixAction,
    InsertOfferButtonsAction,
    OpenCatalogProductAction,
    OpenPaymentsSettingsAction,
    RepairOfferRoutingAction,
    SplitCheckoutByBillingAction,
    SyncOptionsAction,
    parse_fix_action,
)
from .base import WireModel
from .catalog import Price, PriceBilling, PriceLookup, build_price_lookup
from .funnel import (
    CheckoutConfig,
    CheckoutItem,
    CheckoutStep,
    Funnel,
    OfferConfig,
    OfferRouting,
    OfferStep,
    OfferTemplate,
    OrderBump,
    PageStep,
    Step,
    SubscriptionSettings,
    ThankYouStep,
)
from .readiness import (
    ChecklistItem,
    FunnelReadiness,
    ReadinessIssue,
    StepBadges,
    StepReadiness,
)

__all__ = [
    # Catalog
    "Price",
    "PriceBilling",
    "PriceLookup",
    "build_price_lookup",
    # Funnel
    "CheckoutConfig",
    "CheckoutItem",
    "CheckoutStep",
    "Funnel",
    "OfferConfig",
    "OfferRouting",
    "OfferStep",
    "OfferTemplate",
    "OrderBump",
    "PageStep",
    "Step",
    "SubscriptionSettings",
    "ThankYouStep",
    # Fix actions
    "FIX_ACTION_KINDS",
    "FIX_ACTION_TYPES",
    "EnableOneClickAction",
    "FixAction",
    "InsertOfferButtonsAction",
    "OpenCatalogProductAction",
    "OpenPaymentsSettingsAction",
    "RepairOfferRoutingAction",
    "SplitCheckoutByBillingAction",
    "SyncOptionsAction",
    "parse_fix_action",
    # Readiness
    "ChecklistItem",
    "FunnelReadiness",
    "ReadinessIssue",
    "StepBadges",
    "StepReadiness",
    "WireModel",
]
