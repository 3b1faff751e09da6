from functools import lru_cache
from typing import Annotated

from fastapi import APIRouter, Depends

from resumatch.adapters.match_service.base import AbstractMatchServiceClient
from resumatch.adapters.match_service.factory import create_match_client
from resumatch.schemas.match import AnalysisInput
from resumatch.schemas.view import AnalysisView
from resumatch.services.match_controller import MatchRequestController
from resumatch.services.view_builder import build_view

router = APIRouter(tags=["Match"])


@lru_cache(maxsize=1)
def get_match_client() -> AbstractMatchServiceClient:
    """Shared match service client, created on first use."""
    return create_match_client()


async def close_match_client() -> None:
    """Close the shared client if one was created, and forget it."""
    if get_match_client.cache_info().currsize:
        await get_match_client().aclose()
    get_match_client.cache_clear()


@router.post("/match/analyze", response_model=AnalysisView)
async def analyze_match(
    analysis_input: AnalysisInput,
    client: Annotated[AbstractMatchServiceClient, Depends(get_match_client)],
) -> AnalysisView:
    """Run one analysis and return the page model for its outcome.

    Takes the same body as the match service (``resume``, ``job_description``).
    Missing or blank fields are not a request error: they produce the usual
    failed view with "Both fields are required.".

    Args:
        analysis_input: Resume and job description text.
        client: Match service client.

    Returns:
        AnalysisView: Succeeded view with scores, or failed view with one message.
    """
    controller = MatchRequestController(client)
    state = await controller.submit(analysis_input)
    return build_view(state)
