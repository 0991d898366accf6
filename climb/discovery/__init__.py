"""CLI structure discovery.

Public API:
    discover(argv, settings=None) -> RenderedReport
"""

from climb.discovery.orchestrator import discover
from climb.discovery.types import DiscoveryEntry, DiscoveryRequest, RenderedReport

__all__ = ["discover", "DiscoveryEntry", "DiscoveryRequest", "RenderedReport"]
