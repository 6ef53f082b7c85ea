"""Initiative API routes.

- GET /v1/initiatives/{id}: Retrieve an agenda item
- POST /v1/initiatives/{id}/open: Open it for voting
- POST /v1/initiatives/{id}/close: Close it and fix the result
- GET /v1/initiatives/{id}/results: Live results and analysis
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Request

from legisvote.api.auth.actor import get_actor
from legisvote.api.converters import (
    initiative_to_response,
    results_to_response,
    tally_to_response,
)
from legisvote.api.dependencies.chamber import (
    get_initiative_service,
    get_tally_service,
)
from legisvote.api.errors import problem_exception
from legisvote.api.models.chamber import (
    InitiativeClosedResponse,
    InitiativeResponse,
    ProblemDetail,
    VotingResultsResponse,
)
from legisvote.application.services.initiative_service import InitiativeService
from legisvote.application.services.tally_service import TallyService
from legisvote.domain.exceptions import ChamberError
from legisvote.domain.models.member import Principal

router = APIRouter(prefix="/v1/initiatives", tags=["initiatives"])

_ERRORS = {
    403: {"model": ProblemDetail, "description": "Actor not allowed"},
    404: {"model": ProblemDetail, "description": "Initiative not found"},
    409: {"model": ProblemDetail, "description": "Lifecycle state conflict"},
}


@router.get("/{initiative_id}", response_model=InitiativeResponse, responses=_ERRORS)
async def get_initiative(
    request: Request,
    initiative_id: UUID,
    service: Annotated[InitiativeService, Depends(get_initiative_service)],
) -> InitiativeResponse:
    try:
        return initiative_to_response(await service.get(initiative_id))
    except ChamberError as e:
        raise problem_exception(e, request) from None


@router.post(
    "/{initiative_id}/open", response_model=InitiativeResponse, responses=_ERRORS
)
async def open_initiative(
    request: Request,
    initiative_id: UUID,
    actor: Annotated[Principal, Depends(get_actor)],
    service: Annotated[InitiativeService, Depends(get_initiative_service)],
) -> InitiativeResponse:
    """Open voting. Another open item of the session returns to pending."""
    try:
        return initiative_to_response(await service.open(initiative_id, actor))
    except ChamberError as e:
        raise problem_exception(e, request) from None


@router.post(
    "/{initiative_id}/close",
    response_model=InitiativeClosedResponse,
    responses=_ERRORS,
)
async def close_initiative(
    request: Request,
    initiative_id: UUID,
    actor: Annotated[Principal, Depends(get_actor)],
    service: Annotated[InitiativeService, Depends(get_initiative_service)],
) -> InitiativeClosedResponse:
    """Close voting and persist the result."""
    try:
        closed, tally = await service.close(initiative_id, actor)
    except ChamberError as e:
        raise problem_exception(e, request) from None
    return InitiativeClosedResponse(
        initiative=initiative_to_response(closed),
        tally=tally_to_response(tally),
        result=closed.result.value,
    )


@router.get(
    "/{initiative_id}/results",
    response_model=VotingResultsResponse,
    responses=_ERRORS,
)
async def get_results(
    request: Request,
    initiative_id: UUID,
    service: Annotated[TallyService, Depends(get_tally_service)],
) -> VotingResultsResponse:
    """Live counts, percentages, participation and projected result."""
    try:
        return results_to_response(await service.voting_results(initiative_id))
    except ChamberError as e:
        raise problem_exception(e, request) from None
