"""Domain-to-response conversions shared by the chamber routers."""

from legisvote.api.models.chamber import (
    EventLogEntryResponse,
    InitiativeResponse,
    InitiativeWithTallyResponse,
    MemberResponse,
    SessionDetailsResponse,
    SessionResponse,
    SessionStatsResponse,
    TallyResponse,
    VotePercentagesResponse,
    VoteRecordResponse,
    VoteResponse,
    VoterStatsResponse,
    VotingAnalysisResponse,
    VotingResultsResponse,
)
from legisvote.application.dtos.session_details import SessionDetails
from legisvote.application.dtos.voting_results import VoterStats, VotingResults
from legisvote.domain.models.event_log_entry import EventLogEntry
from legisvote.domain.models.initiative import Initiative
from legisvote.domain.models.member import Member
from legisvote.domain.models.session import Session
from legisvote.domain.models.tally import Tally
from legisvote.domain.models.vote import Vote, VoteRecord


def tally_to_response(tally: Tally) -> TallyResponse:
    return TallyResponse(**tally.to_dict())


def session_to_response(session: Session) -> SessionResponse:
    return SessionResponse(
        id=session.id,
        code=session.code,
        name=session.name,
        kind=session.kind.value,
        state=session.state.value,
        scheduled_at=session.scheduled_at,
        started_at=session.started_at,
        closed_at=session.closed_at,
        started_by=session.started_by,
        closed_by=session.closed_by,
        notes=session.notes,
        created_by=session.created_by,
        created_at=session.created_at,
    )


def initiative_to_response(initiative: Initiative) -> InitiativeResponse:
    return InitiativeResponse(
        id=initiative.id,
        session_id=initiative.session_id,
        ordinal=initiative.ordinal,
        title=initiative.title,
        description=initiative.description,
        presenter=initiative.presenter,
        party=initiative.party,
        majority_type=initiative.majority_type.value,
        status=initiative.status.value,
        result=initiative.result.value,
        votes_favor=initiative.votes_favor,
        votes_against=initiative.votes_against,
        votes_abstain=initiative.votes_abstain,
        opened_at=initiative.opened_at,
        opened_by=initiative.opened_by,
        closed_at=initiative.closed_at,
        closed_by=initiative.closed_by,
        created_at=initiative.created_at,
    )


def entry_to_response(entry: EventLogEntry) -> EventLogEntryResponse:
    return EventLogEntryResponse(
        entry_id=entry.entry_id,
        session_id=entry.session_id,
        kind=entry.kind.value,
        description=entry.description,
        actor_id=entry.actor_id,
        occurred_at=entry.occurred_at,
    )


def details_to_response(details: SessionDetails) -> SessionDetailsResponse:
    return SessionDetailsResponse(
        session=session_to_response(details.session),
        stats=SessionStatsResponse(
            total_initiatives=details.stats.total_initiatives,
            closed_initiatives=details.stats.closed_initiatives,
            open_initiatives=details.stats.open_initiatives,
            total_votes=details.stats.total_votes,
        ),
        initiatives=[
            InitiativeWithTallyResponse(
                initiative=initiative_to_response(summary.initiative),
                tally=tally_to_response(summary.tally),
            )
            for summary in details.initiatives
        ],
        history=[entry_to_response(e) for e in details.history],
    )


def vote_to_response(vote: Vote) -> VoteResponse:
    return VoteResponse(
        initiative_id=vote.initiative_id,
        voter_id=vote.voter_id,
        value=vote.value.value,
        cast_at=vote.cast_at,
    )


def vote_record_to_response(record: VoteRecord) -> VoteRecordResponse:
    return VoteRecordResponse(
        initiative_id=record.vote.initiative_id,
        voter_id=record.vote.voter_id,
        value=record.vote.value.value,
        cast_at=record.vote.cast_at,
        full_name=record.full_name,
        party=record.party,
        board_position=record.board_position,
    )


def member_to_response(member: Member) -> MemberResponse:
    return MemberResponse(
        id=member.id,
        full_name=member.full_name,
        role=member.role.value,
        active=member.active,
        party=member.party,
        board_position=member.board_position,
    )


def results_to_response(results: VotingResults) -> VotingResultsResponse:
    return VotingResultsResponse(
        initiative_id=results.initiative_id,
        majority_type=results.majority_type.value,
        tally=tally_to_response(results.tally),
        percentages=VotePercentagesResponse(
            favor=results.percentages.favor,
            against=results.percentages.against,
            abstain=results.percentages.abstain,
        ),
        eligible_count=results.eligible_count,
        participation_rate=results.participation_rate,
        required_favor=results.required_favor,
        projected_result=results.projected_result.value,
        analysis=VotingAnalysisResponse(
            participation_level=results.analysis.participation_level.value,
            consensus_level=results.analysis.consensus_level.value,
            abstention_rate=results.analysis.abstention_rate,
            turnout_sufficient=results.analysis.turnout_sufficient,
        ),
    )


def stats_to_response(stats: VoterStats) -> VoterStatsResponse:
    return VoterStatsResponse(
        voter_id=stats.voter_id,
        tally=tally_to_response(stats.tally),
        closed_initiatives=stats.closed_initiatives,
        participation_rate=stats.participation_rate,
    )
