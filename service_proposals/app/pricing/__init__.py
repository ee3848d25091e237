"""
Plan-based pricing strategies and batch netting.
"""

from .batch import BatchProposal, BatchResult, process_batch
from .strategies import PricingPlan, apply_plan, compute_net, resolve_plan

__all__ = [
    "BatchProposal",
    "BatchResult",
    "PricingPlan",
    "apply_plan",
    "compute_net",
    "process_batch",
    "resolve_plan",
]
