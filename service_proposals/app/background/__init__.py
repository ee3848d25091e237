"""
Detached background work for the Proposal Gateway.
"""

from .runner import BackgroundTaskRunner, grace_delay

__all__ = ["BackgroundTaskRunner", "grace_delay"]
