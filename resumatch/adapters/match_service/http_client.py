"""httpx adapter for the remote matching service."""

import json
import logging
from typing import Any

import httpx

from resumatch.adapters.match_service.base import AbstractMatchServiceClient
from resumatch.core.errors import (
    MALFORMED_RESPONSE_MESSAGE,
    SERVICE_FALLBACK_MESSAGE,
    TRANSPORT_FALLBACK_MESSAGE,
    ServiceAppError,
    TransportAppError,
)

logger = logging.getLogger(__name__)


def extract_error_detail(body: Any) -> str | None:
    """Pull a user-facing message out of an error response body.

    Accepts ``{"detail": "..."}`` and FastAPI's validation shape
    ``{"detail": [{"msg": "..."}, ...]}``; anything else yields ``None``.

    Args:
        body: Decoded JSON body of a non-success response.

    Returns:
        The message, or None when the body carries no usable detail.
    """
    if not isinstance(body, dict):
        return None

    detail = body.get("detail")
    if isinstance(detail, str):
        return detail.strip() or None

    if isinstance(detail, list):
        messages = [
            item["msg"]
            for item in detail
            if isinstance(item, dict) and isinstance(item.get("msg"), str) and item["msg"]
        ]
        return "; ".join(messages) or None

    return None


class HttpMatchServiceClient(AbstractMatchServiceClient):
    """Posts analyses to the match service over HTTP with JSON bodies.

    Uses a shared ``httpx.AsyncClient`` so connections are reused across
    submissions.
    """

    def __init__(
        self,
        base_url: str,
        endpoint_path: str = "/api/match",
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the async HTTP client.

        Args:
            base_url: Service root, e.g. ``https://resumatch.example.com``.
            endpoint_path: Match endpoint relative to base_url.
            timeout_seconds: Per-request timeout applied by httpx.
            transport: Optional transport override (tests use ``httpx.MockTransport``).
        """
        self.client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout_seconds,
            transport=transport,
            headers={"Accept": "application/json"},
        )
        self.endpoint_path = endpoint_path
        self.timeout_seconds = timeout_seconds

    async def analyze(self, resume: str, job_description: str) -> dict[str, Any]:
        payload = {"resume": resume, "job_description": job_description}

        try:
            response = await self.client.post(self.endpoint_path, json=payload)
        except httpx.TimeoutException as exc:
            raise TransportAppError(
                code="match_service_timeout",
                message=TRANSPORT_FALLBACK_MESSAGE,
                details={
                    "error_type": type(exc).__name__,
                    "timeout_seconds": self.timeout_seconds,
                },
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportAppError(
                code="match_service_unreachable",
                message=TRANSPORT_FALLBACK_MESSAGE,
                details={"error_type": type(exc).__name__},
            ) from exc

        if not response.is_success:
            raise self._service_error(response)

        try:
            body = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise TransportAppError(
                code="match_service_malformed_response",
                message=MALFORMED_RESPONSE_MESSAGE,
                details={"http_status": response.status_code, "error_type": type(exc).__name__},
            ) from exc

        if not isinstance(body, dict):
            raise TransportAppError(
                code="match_service_malformed_response",
                message=MALFORMED_RESPONSE_MESSAGE,
                details={"http_status": response.status_code, "error_type": type(body).__name__},
            )

        return body

    def _service_error(self, response: httpx.Response) -> ServiceAppError:
        try:
            detail = extract_error_detail(response.json())
        except (json.JSONDecodeError, UnicodeDecodeError):
            detail = None

        logger.warning(
            "match_service_error_status",
            extra={"http_status": response.status_code, "has_detail": detail is not None},
        )
        return ServiceAppError(
            code="match_service_error",
            message=detail or SERVICE_FALLBACK_MESSAGE,
            details={"http_status": response.status_code},
        )

    async def aclose(self) -> None:
        await self.client.aclose()
