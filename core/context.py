# =============================================================================
# core/context.py  -  Application Context
# =============================================================================
#
# The one object built at startup that holds everything a request needs:
# settings, the Affinity client and the frozen registry.  It is passed
# explicitly to the dispatcher and the MCP layer; nothing is a module global.
# =============================================================================

from dataclasses import dataclass
from typing import Optional

import httpx

from core.affinity_client import AffinityClient
from core.catalog import build_registry
from core.config import Settings
from core.registry import OperationRegistry


@dataclass
class AppContext:
    settings: Settings
    client: AffinityClient
    registry: OperationRegistry

    async def aclose(self) -> None:
        await self.client.aclose()


def build_context(
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    registry: Optional[OperationRegistry] = None,
) -> AppContext:
    """Wire settings, client and registry together.

    Args:
        settings:  Loaded process configuration.
        transport: Optional httpx transport (tests pass a MockTransport).
        registry:  Optional pre-built registry; defaults to the full catalog.
    """
    client = AffinityClient(settings.api_key, base_url=settings.base_url, transport=transport)
    return AppContext(
        settings=settings,
        client=client,
        registry=registry if registry is not None else build_registry(),
    )
