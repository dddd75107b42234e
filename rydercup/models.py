"""Data models for the Ryder Cup match-play scoring engine."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple


class HoleWinner(str, Enum):
    """Outcome of a single hole in match play."""
    TEAM_A = 'team_a'
    TEAM_B = 'team_b'
    HALVED = 'halved'

    @property
    def display_name(self) -> str:
        return {'team_a': 'Team A', 'team_b': 'Team B', 'halved': 'Halved'}[self.value]

    @property
    def delta(self) -> int:
        """Contribution to the running score (positive = Team A)."""
        if self is HoleWinner.TEAM_A:
            return 1
        if self is HoleWinner.TEAM_B:
            return -1
        return 0


class Team(str, Enum):
    TEAM_A = 'team_a'
    TEAM_B = 'team_b'


class MatchOutcome(str, Enum):
    NOT_FINISHED = 'not_finished'
    DECIDED = 'decided'
    HALVED = 'halved'


class MatchStatus(str, Enum):
    """Advisory match status, set by the calling layer."""
    SCHEDULED = 'scheduled'
    IN_PROGRESS = 'in_progress'
    FINAL = 'final'
    CANCELLED = 'cancelled'


class SessionType(str, Enum):
    FOURSOMES = 'foursomes'  # Alternate shot
    FOURBALL = 'fourball'    # Best ball
    SINGLES = 'singles'

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def players_per_team(self) -> int:
        return 1 if self is SessionType.SINGLES else 2


@dataclass(frozen=True)
class HoleResult:
    """One recorded outcome for one hole of one match."""
    match_id: str
    hole_number: int
    winner: HoleWinner
    recorded_at: datetime
    team_a_strokes: Optional[int] = None  # Optional stroke detail, not used for scoring
    team_b_strokes: Optional[int] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class Match:
    """Match configuration plus the hole results recorded against it."""
    id: str
    session_id: str
    total_holes: int = 18
    team_a_player_ids: Tuple[str, ...] = ()
    team_b_player_ids: Tuple[str, ...] = ()
    status: MatchStatus = MatchStatus.SCHEDULED
    hole_results: Tuple[HoleResult, ...] = ()
    match_order: int = 0


@dataclass(frozen=True)
class Session:
    """Ryder Cup session (e.g., Friday AM Foursomes)."""
    id: str
    name: str
    session_type: SessionType
    points_per_match: Decimal = Decimal('1')
    matches: Tuple[Match, ...] = ()

    @property
    def sorted_matches(self) -> list[Match]:
        return sorted(self.matches, key=lambda m: m.match_order)

    @property
    def total_points_available(self) -> Decimal:
        return self.points_per_match * len(self.matches)


@dataclass(frozen=True)
class MatchState:
    """Running state of a match, derived from its effective hole results."""
    total_holes: int
    holes_played: int
    holes_remaining: int
    current_score: int  # Positive = Team A leading
    is_dormie: bool
    is_closed_out: bool

    @property
    def leader(self) -> Optional[Team]:
        if self.current_score > 0:
            return Team.TEAM_A
        if self.current_score < 0:
            return Team.TEAM_B
        return None


@dataclass(frozen=True)
class MatchResult:
    """Terminal result descriptor for a match."""
    outcome: MatchOutcome
    leader: Optional[Team] = None
    margin: int = 0
    holes_remaining_at_decision: int = 0

    @property
    def is_finished(self) -> bool:
        return self.outcome is not MatchOutcome.NOT_FINISHED


@dataclass(frozen=True)
class MatchPoints:
    team_a_points: Decimal = Decimal('0')
    team_b_points: Decimal = Decimal('0')

    @property
    def total(self) -> Decimal:
        return self.team_a_points + self.team_b_points


@dataclass(frozen=True)
class TeamPointTotals:
    """Team point totals for a session or a whole trip."""
    team_a_total: Decimal = Decimal('0')
    team_b_total: Decimal = Decimal('0')
    matches_counted: int = 0
    matches_finished: int = 0

    @property
    def leader(self) -> Optional[Team]:
        if self.team_a_total > self.team_b_total:
            return Team.TEAM_A
        if self.team_b_total > self.team_a_total:
            return Team.TEAM_B
        return None

    @property
    def margin(self) -> Decimal:
        return abs(self.team_a_total - self.team_b_total)


@dataclass(frozen=True)
class ScoredMatch:
    """A match run through the engine: state, result and allocated points."""
    match: Match
    state: MatchState
    result: MatchResult
    points: MatchPoints
    points_per_match: Decimal


@dataclass(frozen=True)
class TripStandings:
    """Per-session subtotals plus the trip grand total."""
    sessions: dict[str, TeamPointTotals] = field(default_factory=dict)
    total: TeamPointTotals = field(default_factory=TeamPointTotals)
    matches_remaining: int = 0
    points_remaining: Decimal = Decimal('0')
