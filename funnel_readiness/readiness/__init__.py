"""Readiness evaluation for funnels.

Each step kind has a dedicated rule module (one file per kind) and the engine
rolls the results up into a publish decision.
"""

from .badges import build_badges, build_checklist
from .checkout_rules import check_checkout_step
from .engine import check_step, check_workspace_setup, evaluate, evaluate_step
from .offer_rules import check_offer_step

__all__ = [
    "evaluate",
    "evaluate_step",
    "check_step",
    "check_workspace_setup",
    "check_checkout_step",
    "check_offer_step",
    "build_badges",
    "build_checklist",
]
