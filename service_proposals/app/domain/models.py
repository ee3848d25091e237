"""
Proposal data model shared by the orchestrator and the engine adapters.

Wire names are camelCase to match the calculation engine's JSON contract;
Python attributes stay snake_case. Decimal amounts are sent as exact
JSON strings so no precision is lost on the way to the engine.
"""

from decimal import Decimal
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _EngineModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class ProposalRequest(_EngineModel):
    """Request sent to the engine's calculate endpoint."""

    customer_id: UUID = Field(..., description="Customer identifier")
    gross_amount: Decimal = Field(..., description="Gross amount before fees")
    plan: str = Field(..., description="Commercial plan")


class ProposalResponse(_EngineModel):
    """Calculation result produced by the engine."""

    proposal_id: UUID = Field(..., description="Engine-assigned proposal identifier")
    net_amount: Decimal = Field(..., description="Amount after fees")
    applied_rate: Decimal = Field(..., description="Rate applied by the engine")
    status: str = Field(..., description="Engine processing status")


class ContingencyOutcome(_EngineModel):
    """Returned instead of a response when the engine failed its liveness probe."""

    status: Literal["DEFERRED"] = "DEFERRED"
    customer_id: UUID
    gross_amount: Decimal
    plan: str
    reason: str = "engine_unavailable"
    message: str = "Calculation deferred for later processing"
