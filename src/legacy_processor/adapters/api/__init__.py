"""HTTP adapters for the canonical, legacy and bus APIs."""

from __future__ import annotations

from .auth import M2MTokenProvider
from .bus import BusEventPublisher
from .canonical import HttpCanonicalChallenges
from .client import ServiceClient, TokenProvider
from .legacy import HttpLegacyGateway
from .lookups import HttpForeignLookup

__all__ = [
    "BusEventPublisher",
    "HttpCanonicalChallenges",
    "HttpForeignLookup",
    "HttpLegacyGateway",
    "M2MTokenProvider",
    "ServiceClient",
    "TokenProvider",
]
