"""
Proposal orchestration: probe first, then dispatch or defer.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Optional, Union
from uuid import UUID

from shared.logging import get_logger, set_subject
from shared.metrics import MetricsCollector
from ..adapters.engine_client import ServiceClient
from ..adapters.health_probe import HealthProbe
from ..security.token_issuer import Credential, TokenIssuer
from .models import ContingencyOutcome, ProposalRequest, ProposalResponse


CALCULATE_ENDPOINT = "/api/calculate"


class OrchestrationState(str, Enum):
    """Per-call lifecycle of a proposal orchestration."""

    START = "start"
    PROBING = "probing"
    DISPATCHING = "dispatching"
    DONE = "done"
    DEFERRED = "deferred"


ProposalOutcome = Union[ProposalResponse, ContingencyOutcome]


class ProposalOrchestrator:
    """Generates proposals through the engine, deferring when it is offline.

    Every call re-probes the engine; nothing is cached between calls, so a
    single orchestrator can serve concurrent requests.
    """

    def __init__(
        self,
        client: ServiceClient,
        probe: HealthProbe,
        issuer: Optional[TokenIssuer] = None,
        metrics: Optional[MetricsCollector] = None,
    ):
        self.client = client
        self.probe = probe
        self.issuer = issuer or TokenIssuer()
        self.metrics = metrics
        self.logger = get_logger("proposals.orchestrator")

    async def generate_proposal(
        self,
        customer_id: UUID,
        gross_amount: Decimal,
        plan: str,
        credential: Union[Credential, str],
    ) -> ProposalOutcome:
        """Generate a proposal, or return a contingency outcome if the engine is down.

        Failures from the engine call itself propagate unchanged; the
        contingency branch applies only to a failed probe.
        """
        request = ProposalRequest(customer_id=customer_id, gross_amount=gross_amount, plan=plan)
        self.logger.info(
            "Orchestrating proposal",
            customer_id=str(customer_id),
            plan=plan,
            state=OrchestrationState.PROBING.value
        )

        healthy = await self.probe.check(self.client.base_url)
        if not healthy:
            self.logger.warning(
                "Engine offline, calculation deferred for later processing",
                customer_id=str(customer_id),
                state=OrchestrationState.DEFERRED.value
            )
            self._record("deferred")
            return ContingencyOutcome(customer_id=customer_id, gross_amount=gross_amount, plan=plan)

        self.logger.debug("Dispatching to engine", state=OrchestrationState.DISPATCHING.value)
        try:
            response = await self.client.post(CALCULATE_ENDPOINT, request, credential, ProposalResponse)
        except Exception:
            self._record("failed")
            raise

        self.logger.info(
            "Proposal calculated",
            customer_id=str(customer_id),
            proposal_id=str(response.proposal_id),
            net_amount=str(response.net_amount),
            state=OrchestrationState.DONE.value
        )
        self._record("completed")
        return response

    async def issue_and_generate(
        self,
        subject: str,
        customer_id: UUID,
        gross_amount: Decimal,
        plan: str,
    ) -> ProposalOutcome:
        """Issue a fresh credential for ``subject`` and generate the proposal."""
        credential = self.issuer.issue(subject, plan)
        set_subject(credential.subject)
        return await self.generate_proposal(customer_id, gross_amount, plan, credential)

    def _record(self, outcome: str) -> None:
        if self.metrics:
            self.metrics.increment_counter("proposals_total", outcome=outcome)
