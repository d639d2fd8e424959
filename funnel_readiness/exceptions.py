"""Exceptions raised by funnel_readiness.

Readiness issues are never raised; they are returned as data. These
exceptions cover caller mistakes and unreadable inputs.
"""


class FunnelReadinessError(Exception):
    """Base error for the funnel_readiness package."""


class CheckoutSplitError(FunnelReadinessError):
    """The checkout splitter was pointed at a missing or non-checkout step."""

    def __init__(self, message: str, step_id: str = ""):
        super().__init__(message)
        self.step_id = step_id


class SnapshotLoadError(FunnelReadinessError):
    """A funnel/price snapshot file could not be read or validated."""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path
