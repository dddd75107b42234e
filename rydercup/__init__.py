
from .models import (
    HoleResult,
    HoleWinner,
    Match,
    MatchOutcome,
    MatchPoints,
    MatchResult,
    MatchState,
    MatchStatus,
    ScoredMatch,
    Session,
    SessionType,
    Team,
    TeamPointTotals,
    TripStandings,
)
from .validators import ValidationError
from .scoring import (
    compute_match_state,
    effective_hole_results,
    match_status_text,
    can_continue,
    determine_hole_winner,
    fourball_hole_winner,
    momentum,
)
from .results import classify_result, format_result, describe_result
from .points import allocate_points, to_points
from .standings import (
    score_match,
    score_session,
    aggregate_team_totals,
    session_totals,
    trip_totals,
    player_points,
    clutch_performance,
    player_record,
    path_to_victory,
    default_points_to_win,
)
from .trip_scorer import (
    load_trip,
    build_sessions,
    score_trip,
    save_standings,
    score_trip_file,
)

__all__ = [
    # Models
    'HoleResult',
    'HoleWinner',
    'Match',
    'MatchOutcome',
    'MatchPoints',
    'MatchResult',
    'MatchState',
    'MatchStatus',
    'ScoredMatch',
    'Session',
    'SessionType',
    'Team',
    'TeamPointTotals',
    'TripStandings',
    'ValidationError',
    # Match state
    'compute_match_state',
    'effective_hole_results',
    'match_status_text',
    'can_continue',
    'determine_hole_winner',
    'fourball_hole_winner',
    'momentum',
    # Results and points
    'classify_result',
    'format_result',
    'describe_result',
    'allocate_points',
    'to_points',
    # Standings
    'score_match',
    'score_session',
    'aggregate_team_totals',
    'session_totals',
    'trip_totals',
    'player_points',
    'clutch_performance',
    'player_record',
    'path_to_victory',
    'default_points_to_win',
    # JSON-based trip scoring
    'load_trip',
    'build_sessions',
    'score_trip',
    'save_standings',
    'score_trip_file',
]
