"""
Plan pricing as a closed set of variants dispatched by pure functions.
"""

from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Optional, Union

from shared.errors import StrategyNotSelectedError


CENTS = Decimal("0.01")


class PricingPlan(str, Enum):
    """Commercial plans with a known fee."""

    VIP = "VIP"
    STARTER = "STARTER"
    PRO = "PRO"


# Multiplier applied to the gross amount (1 - fee rate)
PLAN_MULTIPLIERS = {
    PricingPlan.VIP: Decimal("0.98"),
    PricingPlan.STARTER: Decimal("0.90"),
    PricingPlan.PRO: Decimal("0.95"),
}


def resolve_plan(name: str) -> Optional[PricingPlan]:
    """Map a plan name to its variant, case-insensitively. Unknown names give None."""
    try:
        return PricingPlan(name.strip().upper())
    except ValueError:
        return None


def apply_plan(plan: Union[PricingPlan, str], amount: Decimal) -> Decimal:
    """Net amount for ``plan``; unknown plans leave the amount unchanged."""
    variant = plan if isinstance(plan, PricingPlan) else resolve_plan(plan)
    multiplier = PLAN_MULTIPLIERS.get(variant, Decimal("1"))
    return (Decimal(amount) * multiplier).quantize(CENTS, rounding=ROUND_HALF_UP)


def compute_net(plan: Optional[PricingPlan], amount: Decimal) -> Decimal:
    """Like :func:`apply_plan` but requires an explicitly selected plan."""
    if plan is None:
        raise StrategyNotSelectedError()
    return apply_plan(plan, amount)
