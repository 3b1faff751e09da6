"""Factory for the match service client."""

from resumatch.adapters.match_service.base import AbstractMatchServiceClient
from resumatch.adapters.match_service.http_client import HttpMatchServiceClient
from resumatch.core.config import MatchServiceSettings, settings
from resumatch.core.errors import ValidationAppError


def create_match_client(
    match_settings: MatchServiceSettings | None = None,
) -> AbstractMatchServiceClient:
    """Build the HTTP client from configuration.

    Args:
        match_settings: Optional override; defaults to ``settings.match_service``.

    Returns:
        AbstractMatchServiceClient: Client pointed at the configured endpoint.

    Raises:
        ValidationAppError: If the base URL is empty or not http(s).
    """
    cfg = match_settings or settings.match_service
    base_url = cfg.base_url.strip()

    if not base_url:
        raise ValidationAppError(
            code="match_service_missing_url",
            message="Match service requires MATCH_SERVICE_BASE_URL",
        )
    if not base_url.startswith(("http://", "https://")):
        raise ValidationAppError(
            code="match_service_invalid_url",
            message=f"Match service URL must be http(s), got '{base_url}'",
            details={"field": "base_url"},
        )

    return HttpMatchServiceClient(
        base_url=base_url,
        endpoint_path=cfg.endpoint_path,
        timeout_seconds=cfg.timeout_seconds,
    )
