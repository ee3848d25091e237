#!/usr/bin/env python3
"""
End-to-end walkthrough of the gateway flow against a running engine.

Launches a detached netting batch, probes the engine, issues a credential,
generates a proposal (or defers it), applies the shutdown grace delay and
finishes with the local quote and pricing collaborators.
"""

import argparse
import asyncio
import json
from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import uuid4

import httpx

from shared.config import BaseConfig, get_settings
from shared.logging import configure_logging, get_logger
from .adapters.engine_client import ServiceClient
from .adapters.health_probe import HealthProbe
from .background.runner import BackgroundTaskRunner, grace_delay
from .domain.models import ContingencyOutcome
from .domain.orchestrator import ProposalOrchestrator
from .persistence.repository import Quote, QuoteRepository
from .pricing.batch import BatchProposal, BatchResult, process_batch
from .pricing.strategies import PricingPlan, compute_net
from .security.token_issuer import TokenIssuer


DEMO_BATCH = (
    BatchProposal("001", Decimal("1500.0")),
    BatchProposal("002", Decimal("4500.0")),
    BatchProposal("003", Decimal("12000.0")),
)


async def run_demo(
    settings: Optional[BaseConfig] = None,
    *,
    subject: str = "demo-user",
    plan: str = "PRO",
    amount: Decimal = Decimal("10000.00"),
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Dict[str, Any]:
    """Run the walkthrough and return a summary of what happened."""
    settings = settings or get_settings()
    logger = get_logger("proposals.demo")
    summary: Dict[str, Any] = {}

    runner = BackgroundTaskRunner("batches")
    batch_seconds = settings.batch_simulated_seconds
    processed: List[BatchResult] = []

    async def run_batch():
        logger.info("Processing batch in background", submitted=len(DEMO_BATCH))
        await asyncio.sleep(batch_seconds)
        processed.extend(process_batch(DEMO_BATCH))
        logger.info("Batch processed", results={r.id: str(r.net_amount) for r in processed})

    runner.launch(run_batch, label="batch")
    logger.info("Main flow continues while the batch runs", pending=runner.pending)

    client = ServiceClient(settings.engine_url, timeout=settings.engine_request_timeout, transport=transport)
    probe = HealthProbe(settings.health_probe_timeout, transport=transport)
    issuer = TokenIssuer()
    orchestrator = ProposalOrchestrator(client, probe, issuer=issuer)

    try:
        credential = issuer.issue(subject, plan)
        logger.info("Access token issued", subject=subject, plan=credential.plan)

        outcome = await orchestrator.generate_proposal(uuid4(), amount, plan, credential)
        if isinstance(outcome, ContingencyOutcome):
            logger.info("Contingency action: calculation queued for later processing")
            summary["outcome"] = "deferred"
        else:
            logger.info("Proposal calculated", net_amount=str(outcome.net_amount))
            summary["outcome"] = "completed"
            summary["net_amount"] = str(outcome.net_amount)

        await grace_delay(settings.shutdown_grace_seconds, runner)
        summary["background_pending"] = runner.pending
        summary["batch_processed"] = len(processed)
    finally:
        await client.close()
        await probe.close()

    quotes = QuoteRepository()
    quotes.save(Quote(id=uuid4(), amount=Decimal("9500.00"), customer=subject))
    summary["quotes_saved"] = len(quotes.list_all())

    base = Decimal("1000")
    summary["pricing"] = {
        PricingPlan.VIP.value: str(compute_net(PricingPlan.VIP, base)),
        PricingPlan.STARTER.value: str(compute_net(PricingPlan.STARTER, base)),
    }
    logger.info("Pricing strategies applied", base=str(base), results=summary["pricing"])

    return summary


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Walk through the proposal gateway flow.")
    parser.add_argument("--engine-url", default=None, help="Engine base URL (defaults to configuration)")
    parser.add_argument("--subject", default="demo-user", help="Credential subject")
    parser.add_argument("--plan", default="PRO", help="Commercial plan")
    parser.add_argument("--amount", type=Decimal, default=Decimal("10000.00"), help="Gross amount")
    parser.add_argument("--grace-seconds", type=float, default=None, help="Shutdown grace delay override")
    return parser.parse_args()


def main():
    args = _parse_args()
    overrides: Dict[str, Any] = {}
    if args.engine_url:
        overrides["engine_url"] = args.engine_url
    if args.grace_seconds is not None:
        overrides["shutdown_grace_seconds"] = args.grace_seconds
    settings = get_settings(**overrides)

    configure_logging("proposal_gateway", settings.log_level)
    summary = asyncio.run(run_demo(settings, subject=args.subject, plan=args.plan, amount=args.amount))
    print(json.dumps(summary, indent=2))


if __name__ == "__main__":
    main()
