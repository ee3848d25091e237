"""
Domain layer for the Proposal Gateway.

Holds the proposal data model and the orchestrator that gates every
engine dispatch behind a fresh liveness probe.
"""

from .models import ContingencyOutcome, ProposalRequest, ProposalResponse
from .orchestrator import ProposalOrchestrator

__all__ = [
    "ContingencyOutcome",
    "ProposalOrchestrator",
    "ProposalRequest",
    "ProposalResponse",
]
