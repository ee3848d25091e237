"""
Batch netting for large contracts.

Only proposals strictly above the threshold are kept; each one is netted at
a flat 10% deduction and quantized to cents.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List

from .strategies import CENTS


BATCH_THRESHOLD = Decimal("2000")
BATCH_MULTIPLIER = Decimal("0.90")


@dataclass(frozen=True)
class BatchProposal:
    """A proposal submitted for batch processing."""

    id: str
    amount: Decimal


@dataclass(frozen=True)
class BatchResult:
    """Net amount computed for one large proposal."""

    id: str
    net_amount: Decimal


def process_batch(proposals: Iterable[BatchProposal]) -> List[BatchResult]:
    """Net every proposal above :data:`BATCH_THRESHOLD`, preserving input order."""
    return [
        BatchResult(
            id=p.id,
            net_amount=(Decimal(p.amount) * BATCH_MULTIPLIER).quantize(CENTS, rounding=ROUND_HALF_UP),
        )
        for p in proposals
        if Decimal(p.amount) > BATCH_THRESHOLD
    ]
