"""Ballot API routes.

- POST /v1/initiatives/{id}/votes: Cast or replace the actor's ballot
- DELETE /v1/initiatives/{id}/votes/{voter_id}: Remove a ballot (superadmin)
- GET /v1/initiatives/{id}/votes: Ballots with voter identity
- GET /v1/initiatives/{id}/votes/{voter_id}: One voter's ballot
- GET /v1/initiatives/{id}/non-voters: Legislators yet to vote
- GET /v1/members/{voter_id}/stats: Ballot statistics
- GET /v1/members/{voter_id}/sessions/{session_id}/votes
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request

from legisvote.api.auth.actor import get_actor
from legisvote.api.converters import (
    member_to_response,
    stats_to_response,
    vote_record_to_response,
    vote_to_response,
)
from legisvote.api.dependencies.chamber import get_vote_ledger_service
from legisvote.api.errors import problem_exception
from legisvote.api.models.chamber import (
    CastVoteRequest,
    MemberResponse,
    ProblemDetail,
    VoteRecordResponse,
    VoteRemovedResponse,
    VoteResponse,
    VoterStatsResponse,
)
from legisvote.application.services.vote_ledger_service import VoteLedgerService
from legisvote.domain.exceptions import ChamberError
from legisvote.domain.models.member import Principal

router = APIRouter(prefix="/v1", tags=["votes"])

_ERRORS = {
    400: {"model": ProblemDetail, "description": "Invalid ballot value"},
    403: {"model": ProblemDetail, "description": "Not allowed or not eligible"},
    404: {"model": ProblemDetail, "description": "Initiative or member not found"},
    409: {"model": ProblemDetail, "description": "Initiative not open"},
}

LedgerDep = Annotated[VoteLedgerService, Depends(get_vote_ledger_service)]


@router.post(
    "/initiatives/{initiative_id}/votes",
    response_model=VoteResponse,
    responses=_ERRORS,
)
async def cast_vote(
    request: Request,
    initiative_id: UUID,
    body: CastVoteRequest,
    actor: Annotated[Principal, Depends(get_actor)],
    ledger: LedgerDep,
) -> VoteResponse:
    """Cast the acting legislator's ballot; a re-cast replaces it."""
    try:
        vote = await ledger.cast(initiative_id, actor.id, body.value, actor=actor)
    except ChamberError as e:
        raise problem_exception(e, request) from None
    return vote_to_response(vote)


@router.delete(
    "/initiatives/{initiative_id}/votes/{voter_id}",
    response_model=VoteRemovedResponse,
    responses=_ERRORS,
)
async def remove_vote(
    request: Request,
    initiative_id: UUID,
    voter_id: UUID,
    actor: Annotated[Principal, Depends(get_actor)],
    ledger: LedgerDep,
) -> VoteRemovedResponse:
    try:
        removed = await ledger.remove(initiative_id, voter_id, actor)
    except ChamberError as e:
        raise problem_exception(e, request) from None
    return VoteRemovedResponse(
        initiative_id=initiative_id, voter_id=voter_id, removed=removed
    )


@router.get(
    "/initiatives/{initiative_id}/votes",
    response_model=list[VoteRecordResponse],
    responses=_ERRORS,
)
async def list_votes(
    request: Request,
    initiative_id: UUID,
    ledger: LedgerDep,
) -> list[VoteRecordResponse]:
    """Ballots, most recently cast first."""
    try:
        records = await ledger.list_votes(initiative_id)
    except ChamberError as e:
        raise problem_exception(e, request) from None
    return [vote_record_to_response(r) for r in records]


@router.get(
    "/initiatives/{initiative_id}/votes/{voter_id}",
    response_model=VoteResponse,
    responses={404: {"model": ProblemDetail, "description": "No ballot"}},
)
async def get_vote(
    request: Request,
    initiative_id: UUID,
    voter_id: UUID,
    ledger: LedgerDep,
) -> VoteResponse:
    vote = await ledger.get_vote(initiative_id, voter_id)
    if vote is None:
        raise HTTPException(
            status_code=404,
            detail={
                "type": "urn:legisvote:error:vote-not-found",
                "title": "Not Found",
                "status": 404,
                "detail": f"No ballot from {voter_id} on initiative {initiative_id}",
                "instance": str(request.url),
            },
        )
    return vote_to_response(vote)


@router.get(
    "/initiatives/{initiative_id}/non-voters",
    response_model=list[MemberResponse],
    responses=_ERRORS,
)
async def list_non_voters(
    request: Request,
    initiative_id: UUID,
    ledger: LedgerDep,
) -> list[MemberResponse]:
    try:
        members = await ledger.non_voters(initiative_id)
    except ChamberError as e:
        raise problem_exception(e, request) from None
    return [member_to_response(m) for m in members]


@router.get(
    "/members/{voter_id}/stats",
    response_model=VoterStatsResponse,
    responses=_ERRORS,
)
async def voter_stats(
    request: Request,
    voter_id: UUID,
    ledger: LedgerDep,
) -> VoterStatsResponse:
    """Counts and participation over initiatives of closed sessions."""
    try:
        return stats_to_response(await ledger.voter_stats(voter_id))
    except ChamberError as e:
        raise problem_exception(e, request) from None


@router.get(
    "/members/{voter_id}/sessions/{session_id}/votes",
    response_model=list[VoteResponse],
)
async def votes_in_session(
    voter_id: UUID,
    session_id: UUID,
    ledger: LedgerDep,
) -> list[VoteResponse]:
    return [
        vote_to_response(v) for v in await ledger.votes_in_session(voter_id, session_id)
    ]
