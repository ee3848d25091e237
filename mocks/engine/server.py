"""
Mock calculation engine providing health and calculate endpoints.
"""

import asyncio
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional
from uuid import uuid4

from fastapi import FastAPI, Header, HTTPException
from fastapi.responses import JSONResponse

from shared.errors import AuthenticationError
from shared.logging import get_logger
from service_proposals.app.domain.models import ProposalRequest, ProposalResponse
from service_proposals.app.security.token_issuer import decode_claims


# Fee rate charged by the engine per plan
ENGINE_RATES = {
    "STARTER": Decimal("0.06"),
    "PRO": Decimal("0.15"),
}


class MockEngineServer:
    """Mock calculation engine implementation."""

    def __init__(self, port: int = 8080, latency_seconds: float = 0.0):
        self.port = port
        self.latency_seconds = latency_seconds
        self.healthy = True
        self.calculations = 0
        self.logger = get_logger("mock.engine")
        self.app = FastAPI(title="Mock Calculation Engine", version="1.0.0")

        self._setup_routes()

    def _setup_routes(self):
        """Set up mock engine routes."""

        @self.app.get("/health")
        async def health():
            """Liveness endpoint."""
            if not self.healthy:
                return JSONResponse(status_code=503, content={"status": "DOWN"})
            return {"status": "UP"}

        @self.app.post("/api/calculate")
        async def calculate(request: ProposalRequest, authorization: Optional[str] = Header(None)):
            """Calculate the net amount for a proposal request."""
            if not authorization or not authorization.startswith("Bearer "):
                raise HTTPException(status_code=401, detail="Missing bearer token")

            try:
                claims = decode_claims(authorization)
            except AuthenticationError as e:
                raise HTTPException(status_code=401, detail=e.message)

            self.logger.info("Validating permissions", claims=claims)
            if str(claims.get("plan", "")).upper() != request.plan.upper():
                raise HTTPException(status_code=403, detail="Token plan does not grant this calculation")

            if request.gross_amount < 0:
                raise HTTPException(status_code=400, detail="Gross amount must not be negative")

            if self.latency_seconds:
                await asyncio.sleep(self.latency_seconds)

            rate = ENGINE_RATES.get(request.plan.upper(), Decimal("0"))
            fee = (request.gross_amount * rate).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
            self.calculations += 1

            response = ProposalResponse(
                proposal_id=uuid4(),
                net_amount=request.gross_amount - fee,
                applied_rate=rate,
                status="PROCESSED",
            )
            self.logger.info(
                "Calculation processed",
                customer_id=str(request.customer_id),
                net_amount=str(response.net_amount)
            )
            return response.model_dump(mode="json", by_alias=True)


def create_app(**kwargs) -> FastAPI:
    """Create the mock engine app."""
    return MockEngineServer(**kwargs).app


def main():
    """Run the mock engine with uvicorn."""
    import uvicorn

    server = MockEngineServer()
    uvicorn.run(server.app, host="0.0.0.0", port=server.port)


if __name__ == "__main__":
    main()
