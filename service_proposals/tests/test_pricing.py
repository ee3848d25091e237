"""
Unit tests for plan pricing strategies.
"""

from decimal import Decimal

import pytest

from service_proposals.app.pricing.strategies import PricingPlan, apply_plan, compute_net, resolve_plan
from shared.errors import StrategyNotSelectedError


class TestPricingStrategies:
    """Test cases for plan pricing."""

    @pytest.mark.parametrize("plan,expected", [
        ("VIP", Decimal("980.00")),
        ("STARTER", Decimal("900.00")),
        ("PRO", Decimal("950.00")),
        ("vip", Decimal("980.00")),
        ("BASIC", Decimal("1000.00")),
    ])
    def test_apply_plan(self, plan, expected):
        """Known plans apply their fee; unknown plans are identity."""
        assert apply_plan(plan, Decimal("1000.00")) == expected

    def test_apply_plan_rounds_half_up(self):
        """Results are quantized to cents, half up."""
        assert apply_plan(PricingPlan.VIP, Decimal("0.25")) == Decimal("0.25")
        assert apply_plan(PricingPlan.STARTER, Decimal("10.05")) == Decimal("9.05")
        assert apply_plan("unknown", Decimal("10.005")) == Decimal("10.01")

    def test_resolve_plan(self):
        """Plan names resolve case-insensitively."""
        assert resolve_plan(" starter ") is PricingPlan.STARTER
        assert resolve_plan("gold") is None

    def test_compute_net_requires_plan(self):
        """Computing without a selected plan is an invalid operation."""
        with pytest.raises(StrategyNotSelectedError) as exc_info:
            compute_net(None, Decimal("1000"))

        assert exc_info.value.code == "INVALID_OPERATION"

    def test_compute_net_swaps_plans(self):
        """The same amount priced under different plans."""
        base = Decimal("1000")

        assert compute_net(PricingPlan.VIP, base) == Decimal("980.00")
        assert compute_net(PricingPlan.STARTER, base) == Decimal("900.00")
