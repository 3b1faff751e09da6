"""Match service adapter layer - the HTTP boundary to the scoring engine."""

from resumatch.adapters.match_service.base import AbstractMatchServiceClient
from resumatch.adapters.match_service.factory import create_match_client
from resumatch.adapters.match_service.http_client import HttpMatchServiceClient

__all__ = [
    "AbstractMatchServiceClient",
    "HttpMatchServiceClient",
    "create_match_client",
]
