"""Centralized configuration for funnel readiness.

This module provides a single source of truth for the enums and constants
shared by the readiness engine, the fix-action dispatcher and the checkout
splitter.

Design Principles:
- Enums for type-safe status values
- Paths and placeholder badge values defined declaratively
- Environment overrides read once through ReadinessConfig.from_env()
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)

# =============================================================================
# Enums for Type Safety
# =============================================================================


class Severity(str, Enum):
    """Readiness issue severity. Only blockers prevent publishing."""

    BLOCKER = "blocker"
    WARNING = "warning"
    INFO = "info"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid severity values as strings."""
        return [severity.value for severity in cls]


class IssueScope(str, Enum):
    """Whether an issue belongs to the whole funnel or a single step."""

    GLOBAL = "global"
    STEP = "step"


class StepKind(str, Enum):
    """Kinds of funnel steps."""

    CHECKOUT = "checkout"
    OFFER = "offer"
    THANK_YOU = "thank_you"
    PAGE = "page"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid step kinds as strings."""
        return [kind.value for kind in cls]

    @property
    def takes_payment(self) -> bool:
        """Checkout and offer steps charge the customer."""
        return self in (StepKind.CHECKOUT, StepKind.OFFER)


class BillingType(str, Enum):
    """Billing type of a catalog price."""

    ONE_TIME = "one_time"
    RECURRING = "recurring"

    @property
    def badge_label(self) -> str:
        """Label shown in the step mode badge."""
        return "one-time" if self is BillingType.ONE_TIME else "subscription"


class ChecklistStatus(str, Enum):
    """Checklist row status derived from issue severity."""

    OK = "ok"
    WARN = "warn"
    FAIL = "fail"

    @classmethod
    def from_severity(cls, severity: Severity) -> "ChecklistStatus":
        return _STATUS_BY_SEVERITY[severity]


_STATUS_BY_SEVERITY = {
    Severity.BLOCKER: ChecklistStatus.FAIL,
    Severity.WARNING: ChecklistStatus.WARN,
    Severity.INFO: ChecklistStatus.OK,
}


class SyncStatus(str, Enum):
    """Payment-provider sync badge."""

    SYNCED = "synced"
    NEEDS_SYNC = "needs_sync"


class PublishStatus(str, Enum):
    """Overall publish decision shown to the user."""

    BLOCKED = "blocked"
    READY_WITH_WARNINGS = "ready_with_warnings"
    READY = "ready"


# =============================================================================
# Badge Placeholders
# =============================================================================

# Environment badge values. The real value comes from workspace settings,
# which are not modeled here.
ENVIRONMENTS = ("test", "live")
DEFAULT_ENVIRONMENT = "test"

# Checkout steps always charge when the form is submitted
CHECKOUT_CHARGE = "immediate"

OFFER_MODE = "one-click-offer"


# =============================================================================
# Paths and Naming
# =============================================================================

DEFAULT_PAYMENTS_SETTINGS_PATH = "/settings/payments"
DEFAULT_CATALOG_PRODUCT_PATH = "/catalog/products/{product_id}"
DEFAULT_SUBSCRIPTION_RETURN_PATH = "/f/{funnel_id}/thank-you"
DEFAULT_SUBSCRIPTION_STEP_NAME = "Subscription Checkout"

# Prefix for step ids synthesized by the checkout splitter
GENERATED_STEP_PREFIX = "step_"


# =============================================================================
# Readiness Configuration
# =============================================================================


@dataclass(frozen=True)
class ReadinessConfig:
    """Configuration for readiness evaluation and fix actions.

    All values can be overridden from environment variables via from_env().
    """

    payments_settings_path: str = DEFAULT_PAYMENTS_SETTINGS_PATH
    catalog_product_path: str = DEFAULT_CATALOG_PRODUCT_PATH
    subscription_return_path: str = DEFAULT_SUBSCRIPTION_RETURN_PATH
    subscription_step_name: str = DEFAULT_SUBSCRIPTION_STEP_NAME
    environment: str = DEFAULT_ENVIRONMENT
    log_level: str = "INFO"

    def product_path(self, product_id: str) -> str:
        """Router path for a catalog product."""
        return self.catalog_product_path.format(product_id=product_id)

    def return_path(self, funnel_id: str) -> str:
        """Return path used by subscription checkouts of a funnel."""
        return self.subscription_return_path.format(funnel_id=funnel_id)

    @classmethod
    def from_env(cls) -> "ReadinessConfig":
        """Create config from environment variables."""
        environment = os.getenv("FUNNEL_READINESS_ENVIRONMENT", DEFAULT_ENVIRONMENT).lower()
        if environment not in ENVIRONMENTS:
            logger.warning(f"Unknown environment '{environment}', defaulting to {DEFAULT_ENVIRONMENT}")
            environment = DEFAULT_ENVIRONMENT

        return cls(
            payments_settings_path=os.getenv(
                "FUNNEL_READINESS_PAYMENTS_SETTINGS_PATH", DEFAULT_PAYMENTS_SETTINGS_PATH
            ),
            catalog_product_path=os.getenv(
                "FUNNEL_READINESS_CATALOG_PRODUCT_PATH", DEFAULT_CATALOG_PRODUCT_PATH
            ),
            subscription_return_path=os.getenv(
                "FUNNEL_READINESS_SUBSCRIPTION_RETURN_PATH", DEFAULT_SUBSCRIPTION_RETURN_PATH
            ),
            subscription_step_name=os.getenv(
                "FUNNEL_READINESS_SUBSCRIPTION_STEP_NAME", DEFAULT_SUBSCRIPTION_STEP_NAME
            ),
            environment=environment,
            log_level=os.getenv("FUNNEL_READINESS_LOG_LEVEL", "INFO").upper(),
        )


DEFAULT_CONFIG = ReadinessConfig()
