"""
Adapters package for the Proposal Gateway.

Contains HTTP client wrappers for the calculation engine. These adapters
encapsulate:

- Base URLs and request shapes
- Timeouts for liveness checks
- Error handling that maps to shared errors

Keep adapters thin and side-effect free outside of explicit calls.
"""

from .engine_client import ServiceClient
from .health_probe import HealthProbe

__all__ = [
    "HealthProbe",
    "ServiceClient",
]
