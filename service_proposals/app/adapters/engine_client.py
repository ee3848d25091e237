"""
Authenticated RPC client for the calculation engine.
"""

from __future__ import annotations

from typing import Optional, Type, TypeVar, Union

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from shared.config import get_settings
from shared.errors import EngineRequestError, EngineResponseError
from shared.logging import get_logger
from shared.metrics import MetricsCollector
from ..security.token_issuer import Credential


TResponse = TypeVar("TResponse", bound=BaseModel)


class ServiceClient:
    """Generic JSON-over-HTTP client for internal engine endpoints.

    The connection pool is shared across calls. Authorization is passed per
    call and never stored on the client, so concurrent calls with different
    credentials cannot observe each other's headers.

    Each ``post`` performs exactly one attempt; failures are raised to the
    caller without retry.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        metrics: Optional[MetricsCollector] = None,
    ) -> None:
        # Resolved once; later environment changes do not affect this client
        self.base_url = (base_url or get_settings().engine_url).rstrip("/")
        self.metrics = metrics
        self.logger = get_logger("proposals.engine_client")
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def post(
        self,
        endpoint: str,
        payload: BaseModel,
        credential: Union[Credential, str],
        response_model: Type[TResponse],
    ) -> TResponse:
        """POST ``payload`` to ``endpoint`` and decode the body into ``response_model``."""
        headers = {"Authorization": f"Bearer {credential}"}
        body = payload.model_dump(mode="json", by_alias=True)

        try:
            if self.metrics:
                with self.metrics.time_operation("engine_call_duration_seconds", endpoint=endpoint):
                    response = await self._client.post(endpoint, json=body, headers=headers)
            else:
                response = await self._client.post(endpoint, json=body, headers=headers)
        except httpx.HTTPError as e:
            self.logger.error("Engine HTTP error", endpoint=endpoint, error=str(e))
            raise EngineRequestError(
                "Engine unavailable",
                details={"endpoint": endpoint, "http_error": str(e) or type(e).__name__}
            ) from e

        if not response.is_success:
            self.logger.error(
                "Engine request failed",
                endpoint=endpoint,
                status_code=response.status_code,
                response=response.text
            )
            raise EngineRequestError(
                f"Unexpected status {response.status_code}",
                details={"endpoint": endpoint, "status_code": response.status_code, "body": response.text}
            )

        try:
            result = response_model.model_validate_json(response.content)
        except PydanticValidationError as e:
            self.logger.error(
                "Engine response could not be decoded",
                endpoint=endpoint,
                response_model=response_model.__name__,
                error=str(e)
            )
            raise EngineResponseError(
                f"Body does not match {response_model.__name__}",
                details={"endpoint": endpoint, "errors": e.errors(include_url=False, include_context=False, include_input=False)}
            ) from e

        self.logger.debug("Engine call succeeded", endpoint=endpoint, status_code=response.status_code)
        return result
