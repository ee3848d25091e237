"""
Proposal Gateway service.

Fronts the calculation engine with credential issuance, a liveness probe
before every dispatch and a deferred contingency path when the engine is
offline.
"""

import asyncio
from decimal import Decimal
from typing import Dict, List, Optional
from uuid import UUID, uuid4

import httpx
from fastapi import Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from shared.base_service import BaseService
from shared.config import ServiceConfig, get_config
from .adapters.engine_client import ServiceClient
from .adapters.health_probe import HealthProbe
from .background.runner import BackgroundTaskRunner, grace_delay
from .domain.models import ContingencyOutcome
from .domain.orchestrator import ProposalOrchestrator
from .persistence.repository import InMemoryRepository, Quote, QuoteRepository
from .pricing.batch import BatchProposal, BatchResult, process_batch
from .pricing.strategies import apply_plan, resolve_plan
from .security.token_issuer import TokenIssuer


class ProposalCommand(BaseModel):
    """Inbound request to generate a proposal."""

    subject: Optional[str] = Field(None, description="Credential subject; defaults to the service identity")
    customer_id: UUID = Field(default_factory=uuid4, description="Customer identifier")
    gross_amount: Decimal = Field(..., ge=0, description="Gross amount before fees")
    plan: str = Field(..., min_length=1, description="Commercial plan")


class BatchItem(BaseModel):
    """One proposal submitted in a batch."""

    id: str = Field(..., min_length=1, description="Proposal identifier")
    amount: Decimal = Field(..., ge=0, description="Gross amount")


class BatchCommand(BaseModel):
    """Inbound batch of proposals to net in the background."""

    proposals: List[BatchItem] = Field(..., description="Proposals to process")


class ProposalGatewayService(BaseService):
    """Proposal Gateway service implementation."""

    def __init__(
        self,
        config: Optional[ServiceConfig] = None,
        *,
        engine_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__("proposal_gateway", 8000, config=config)
        self.token_issuer = TokenIssuer()
        self.engine_client = ServiceClient(
            self.config.engine_url,
            timeout=self.config.engine_request_timeout,
            transport=engine_transport,
            metrics=self.metrics,
        )
        self.health_probe = HealthProbe(
            self.config.health_probe_timeout,
            transport=engine_transport,
            metrics=self.metrics,
        )
        self.orchestrator = ProposalOrchestrator(
            self.engine_client,
            self.health_probe,
            issuer=self.token_issuer,
            metrics=self.metrics,
        )
        self.background = BackgroundTaskRunner("batches", metrics=self.metrics)
        self.quotes = QuoteRepository()
        self.batch_results: InMemoryRepository[BatchResult] = InMemoryRepository("batch_results")

        self._setup_proposal_routes()

        # Expose service instance via app state for introspection/testing
        self.app.state.gateway_service = self

    async def on_shutdown(self) -> None:
        if self.background.pending:
            await grace_delay(self.config.shutdown_grace_seconds, self.background)
        await self.engine_client.close()
        await self.health_probe.close()

    async def _check_dependencies(self) -> Dict[str, str]:
        healthy = await self.health_probe.check(self.engine_client.base_url)
        return {"engine": "ok" if healthy else "unavailable"}

    def _setup_proposal_routes(self):
        """Set up proposal routes."""

        @self.app.get("/")
        async def root():
            """Root endpoint."""
            return {
                "service": self.service_name,
                "message": "Proposal Gateway",
                "version": "1.0.0",
                "engine_url": self.engine_client.base_url
            }

        @self.app.post("/api/v1/proposals")
        async def create_proposal(command: ProposalCommand):
            """Generate a proposal, or defer it when the engine is offline."""
            subject = command.subject or self.config.default_subject
            outcome = await self.orchestrator.issue_and_generate(
                subject,
                command.customer_id,
                command.gross_amount,
                command.plan,
            )

            if isinstance(outcome, ContingencyOutcome):
                return JSONResponse(
                    status_code=202,
                    content={
                        "outcome": "deferred",
                        "contingency": outcome.model_dump(mode="json", by_alias=True)
                    }
                )

            self.quotes.save(Quote(id=outcome.proposal_id, amount=outcome.net_amount, customer=subject))
            return {
                "outcome": "completed",
                "proposal": outcome.model_dump(mode="json", by_alias=True)
            }

        @self.app.get("/api/v1/quotes")
        async def list_quotes():
            """List quotes recorded in this process."""
            quotes = self.quotes.list_all()
            return {
                "quotes": [
                    {"id": str(q.id), "amount": float(q.amount), "customer": q.customer}
                    for q in quotes
                ],
                "count": len(quotes)
            }

        @self.app.get("/api/v1/pricing/preview")
        async def pricing_preview(
            plan: str = Query(..., min_length=1),
            amount: Decimal = Query(..., ge=0),
        ):
            """Preview the local plan pricing for an amount."""
            variant = resolve_plan(plan)
            return {
                "plan": plan.upper(),
                "known_plan": variant is not None,
                "amount": float(amount),
                "net_amount": float(apply_plan(plan, amount))
            }

        @self.app.post("/api/v1/batches", status_code=202)
        async def launch_batch(command: BatchCommand):
            """Net large proposals in a detached unit; completion is not reported."""
            delay = self.config.batch_simulated_seconds
            items = [BatchProposal(id=p.id, amount=p.amount) for p in command.proposals]

            async def run_batch():
                await asyncio.sleep(delay)
                results = process_batch(items)
                for result in results:
                    self.batch_results.save(result)
                self.logger.info(
                    "Batch processed",
                    submitted=len(items),
                    kept=len(results),
                    results={r.id: str(r.net_amount) for r in results}
                )

            self.background.launch(run_batch, label="batch")
            return {"status": "accepted", "submitted": len(items), "pending": self.background.pending}


def create_app(config: Optional[ServiceConfig] = None, **kwargs):
    """Create the FastAPI app for the proposal gateway."""
    return ProposalGatewayService(config, **kwargs).app


def main():
    """Run the proposal gateway with uvicorn."""
    ProposalGatewayService(get_config("proposal_gateway", 8000)).run()


if __name__ == "__main__":
    main()
