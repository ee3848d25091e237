"""
Unit tests for batch netting.
"""

from decimal import Decimal

import pytest

from service_proposals.app.pricing.batch import (
    BATCH_THRESHOLD,
    BatchProposal,
    BatchResult,
    process_batch,
)


class TestProcessBatch:
    """Test cases for process_batch."""

    def test_keeps_only_large_proposals(self):
        """Proposals at or below the threshold are dropped."""
        proposals = [
            BatchProposal("001", Decimal("1500.0")),
            BatchProposal("002", Decimal("4500.0")),
            BatchProposal("003", Decimal("12000.0")),
        ]

        results = process_batch(proposals)

        assert results == [
            BatchResult("002", Decimal("4050.00")),
            BatchResult("003", Decimal("10800.00")),
        ]

    @pytest.mark.parametrize("amount,kept", [
        ("1999.99", False),
        ("2000", False),
        ("2000.00", False),
        ("2000.01", True),
    ])
    def test_threshold_is_exclusive(self, amount, kept):
        """Exactly the threshold is excluded."""
        assert BATCH_THRESHOLD == Decimal("2000")
        assert bool(process_batch([BatchProposal("x", Decimal(amount))])) is kept

    def test_netting_rounds_half_up_to_cents(self):
        """Net amounts are 90% of gross, quantized to cents."""
        results = process_batch([
            BatchProposal("a", Decimal("2000.01")),
            BatchProposal("b", Decimal("2222.25")),
        ])

        assert [r.net_amount for r in results] == [Decimal("1800.01"), Decimal("2000.03")]

    def test_empty_batch(self):
        """An empty batch yields no results."""
        assert process_batch([]) == []

    def test_accepts_any_iterable(self):
        """Generators are consumed once, in order."""
        results = process_batch(BatchProposal(str(i), Decimal(3000 + i)) for i in range(3))

        assert [r.id for r in results] == ["0", "1", "2"]
