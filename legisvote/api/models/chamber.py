"""Chamber API request/response models.

Pydantic models for the session, initiative and ballot endpoints.

Developer Golden Rules:
1. VALIDATE EARLY - Pydantic handles schema validation
2. FAIL LOUD - Invalid requests return 400/422 with a problem detail
3. DOMAIN OWNS RULES - Models check shape only, services check state
"""

from datetime import datetime
from enum import Enum
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, Field, PlainSerializer

# ISO 8601 with Z suffix
DateTimeWithZ = Annotated[
    datetime,
    PlainSerializer(
        lambda v: v.isoformat().replace("+00:00", "Z") if v else None, return_type=str
    ),
]


class MajorityTypeEnum(str, Enum):
    """Majority rule accepted on input."""

    SIMPLE = "simple"
    ABSOLUTE = "absolute"
    QUALIFIED = "qualified"
    UNANIMOUS = "unanimous"


class SessionKindEnum(str, Enum):
    """Kind of sitting accepted on input."""

    ORDINARY = "ordinary"
    EXTRAORDINARY = "extraordinary"
    SOLEMN = "solemn"


class SessionStateEnum(str, Enum):
    """Session state accepted as a listing filter."""

    PREPARED = "prepared"
    SCHEDULED = "scheduled"
    ACTIVE = "active"
    PAUSED = "paused"
    CLOSED = "closed"


# =============================================================================
# Requests
# =============================================================================


class InitiativeItemRequest(BaseModel):
    """One agenda item as supplied by the agenda source."""

    title: str = Field(..., max_length=2000, description="Agenda title (required)")
    description: str = Field(default="", max_length=20000)
    presenter: str = Field(default="", max_length=500)
    party: str = Field(default="", max_length=200)
    majority_type: MajorityTypeEnum | None = Field(
        default=None, description="Majority rule; simple when omitted"
    )


class CreateSessionRequest(BaseModel):
    """Request body for creating a session."""

    name: str | None = Field(default=None, max_length=500)
    code: str | None = Field(
        default=None,
        max_length=64,
        description="Unique session code; generated when omitted",
    )
    kind: SessionKindEnum = Field(default=SessionKindEnum.ORDINARY)
    scheduled_at: datetime | None = Field(
        default=None, description="Planned start; the session starts SCHEDULED"
    )
    notes: str = Field(default="", max_length=5000)
    initiatives: list[InitiativeItemRequest] = Field(default_factory=list)

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Ordinary session of 4 March",
                "kind": "ordinary",
                "scheduled_at": "2025-03-04T10:00:00Z",
                "initiatives": [
                    {"title": "Budget reform", "majority_type": "qualified"},
                    {"title": "Transit decree"},
                ],
            }
        }
    }


class AddInitiativesRequest(BaseModel):
    """Request body for appending agenda items."""

    initiatives: list[InitiativeItemRequest] = Field(..., min_length=1)


class CastVoteRequest(BaseModel):
    """Request body for casting a ballot. The voter is the acting member."""

    value: str = Field(..., description="favor, against or abstain")


# =============================================================================
# Responses
# =============================================================================


class TallyResponse(BaseModel):
    """Ballot counts."""

    favor: int = 0
    against: int = 0
    abstain: int = 0
    total: int = 0


class SessionResponse(BaseModel):
    """A session."""

    id: UUID
    code: str
    name: str
    kind: str
    state: str
    scheduled_at: DateTimeWithZ | None = None
    started_at: DateTimeWithZ | None = None
    closed_at: DateTimeWithZ | None = None
    started_by: UUID | None = None
    closed_by: UUID | None = None
    notes: str = ""
    created_by: UUID | None = None
    created_at: DateTimeWithZ


class InitiativeResponse(BaseModel):
    """An agenda item."""

    id: UUID
    session_id: UUID
    ordinal: int
    title: str
    description: str
    presenter: str
    party: str
    majority_type: str
    status: str
    result: str
    votes_favor: int
    votes_against: int
    votes_abstain: int
    opened_at: DateTimeWithZ | None = None
    opened_by: UUID | None = None
    closed_at: DateTimeWithZ | None = None
    closed_by: UUID | None = None
    created_at: DateTimeWithZ


class SessionCreatedResponse(BaseModel):
    """A new session with its initial agenda."""

    session: SessionResponse
    initiatives: list[InitiativeResponse]


class SessionListResponse(BaseModel):
    """One page of sessions."""

    sessions: list[SessionResponse]
    total: int
    page: int
    limit: int
    total_pages: int


class InitiativeWithTallyResponse(BaseModel):
    """An agenda item with its live counts."""

    initiative: InitiativeResponse
    tally: TallyResponse


class SessionStatsResponse(BaseModel):
    """Session counters."""

    total_initiatives: int
    closed_initiatives: int
    open_initiatives: int
    total_votes: int


class EventLogEntryResponse(BaseModel):
    """An audit trail entry."""

    entry_id: UUID
    session_id: UUID
    kind: str
    description: str
    actor_id: UUID | None = None
    occurred_at: DateTimeWithZ


class SessionDetailsResponse(BaseModel):
    """A session with agenda, counters and history."""

    session: SessionResponse
    stats: SessionStatsResponse
    initiatives: list[InitiativeWithTallyResponse]
    history: list[EventLogEntryResponse]


class InitiativeClosedResponse(BaseModel):
    """A closed initiative with its closure-time tally."""

    initiative: InitiativeResponse
    tally: TallyResponse
    result: str


class VoteResponse(BaseModel):
    """A ballot."""

    initiative_id: UUID
    voter_id: UUID
    value: str
    cast_at: DateTimeWithZ


class VoteRecordResponse(VoteResponse):
    """A ballot with the voter's identity."""

    full_name: str
    party: str | None = None
    board_position: str | None = None


class VoteRemovedResponse(BaseModel):
    """Outcome of a ballot removal."""

    initiative_id: UUID
    voter_id: UUID
    removed: bool


class MemberResponse(BaseModel):
    """A chamber member."""

    id: UUID
    full_name: str
    role: str
    active: bool
    party: str | None = None
    board_position: str | None = None


class VotePercentagesResponse(BaseModel):
    """Share of ballots per value, in percent."""

    favor: int
    against: int
    abstain: int


class VotingAnalysisResponse(BaseModel):
    """Qualitative reading of a tally."""

    participation_level: str
    consensus_level: str
    abstention_rate: float
    turnout_sufficient: bool


class VotingResultsResponse(BaseModel):
    """Live results of an initiative."""

    initiative_id: UUID
    majority_type: str
    tally: TallyResponse
    percentages: VotePercentagesResponse
    eligible_count: int
    participation_rate: int
    required_favor: int
    projected_result: str
    analysis: VotingAnalysisResponse


class VoterStatsResponse(BaseModel):
    """Ballot statistics of a legislator."""

    voter_id: UUID
    tally: TallyResponse
    closed_initiatives: int
    participation_rate: int


class ProblemDetail(BaseModel):
    """RFC 7807 problem detail."""

    type: str
    title: str
    status: int
    detail: str
    instance: str
