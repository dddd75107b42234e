"""JSON-based trip scoring.

Reads a trip file (sessions, matches and recorded hole results), runs every
match through the scoring engine and writes a standings document. Nothing is
carried over between runs: standings are rebuilt from the hole results each
time.
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional

from .config import get_config
from .models import HoleResult, HoleWinner, Match, MatchStatus, Session, SessionType
from .points import to_points
from .results import describe_result, format_result
from .schemas import MatchRecord, SessionRecord, TripConfig, TripFile
from .scoring import match_status_text, momentum
from .standings import default_points_to_win, path_to_victory, score_session, trip_totals
from .utils import load_json, save_json
from .validators import validate_session_lineups, validate_standings

logger = logging.getLogger('rydercup.trip_scorer')


def load_trip(trip_path: str | Path) -> TripFile:
    """Load and validate a trip.json file."""
    return load_json(trip_path, schema=TripFile)


def build_match(record: MatchRecord, session_id: str, default_total_holes: int) -> Match:
    """Build a Match from its JSON record."""
    hole_results = tuple(
        HoleResult(
            match_id=record.id,
            hole_number=h.hole,
            winner=HoleWinner(h.winner),
            recorded_at=h.recorded_at,
            team_a_strokes=h.team_a_strokes,
            team_b_strokes=h.team_b_strokes,
            notes=h.notes,
        )
        for h in record.hole_results
    )
    return Match(
        id=record.id,
        session_id=session_id,
        total_holes=record.total_holes or default_total_holes,
        team_a_player_ids=tuple(record.team_a),
        team_b_player_ids=tuple(record.team_b),
        status=MatchStatus(record.status),
        hole_results=hole_results,
        match_order=record.match_order,
    )


def build_session(record: SessionRecord, config: TripConfig) -> Session:
    """Build a Session (and its matches) from its JSON record."""
    points_per_match = to_points(
        record.points_per_match if record.points_per_match is not None else config.default_points_per_match
    )
    return Session(
        id=record.id,
        name=record.name,
        session_type=SessionType(record.session_type),
        points_per_match=points_per_match,
        matches=tuple(build_match(m, record.id, config.default_total_holes) for m in record.matches),
    )


def build_sessions(trip: TripFile, config: Optional[TripConfig] = None) -> list[Session]:
    """Build all sessions of a trip, applying config defaults."""
    config = config or get_config()
    return [build_session(s, config) for s in trip.sessions]


def score_trip(
    trip: TripFile,
    config: Optional[TripConfig] = None,
    points_to_win: Optional[Any] = None,
) -> dict[str, Any]:
    """
    Score every match in a trip and build the standings document.

    Args:
        trip: Validated trip file
        config: Scoring defaults (loaded from data/trip_config.json if omitted)
        points_to_win: Override for the points needed to win the trip

    Returns:
        Standings dict with per-match results, session subtotals,
        trip totals and the path to victory

    Raises:
        ValidationError: If any hole result or points value is invalid
    """
    config = config or get_config()
    sessions = build_sessions(trip, config)
    team_a_name = trip.team_a_name or config.team_a_name
    team_b_name = trip.team_b_name or config.team_b_name

    for session in sessions:
        for error in validate_session_lineups(session):
            logger.warning(error)

    standings = trip_totals(sessions)

    for warning in validate_standings(standings.sessions, sessions):
        logger.warning(warning)

    total_available = sum((s.total_points_available for s in sessions), Decimal('0'))
    if points_to_win is None:
        points_to_win = trip.points_to_win or config.points_to_win
    if points_to_win is None:
        points_to_win = default_points_to_win(total_available)

    sessions_data = []
    for session in sessions:
        matches_data = []
        for scored in score_session(session):
            match_data = {
                'id': scored.match.id,
                'match_order': scored.match.match_order,
                'team_a': list(scored.match.team_a_player_ids),
                'team_b': list(scored.match.team_b_player_ids),
                'holes_played': scored.state.holes_played,
                'holes_remaining': scored.state.holes_remaining,
                'current_score': scored.state.current_score,
                'is_dormie': scored.state.is_dormie,
                'is_closed_out': scored.state.is_closed_out,
                'status_text': match_status_text(scored.state, team_a_name, team_b_name),
                'outcome': scored.result.outcome.value,
                'leader': scored.result.leader.value if scored.result.leader else None,
                'margin': scored.result.margin,
                'result': format_result(scored.result) if scored.result.is_finished else None,
                'summary': describe_result(scored.result, team_a_name, team_b_name),
                'team_a_points': scored.points.team_a_points,
                'team_b_points': scored.points.team_b_points,
                'momentum': momentum(scored.match.hole_results, config.momentum_window),
            }
            matches_data.append(match_data)

        subtotal = standings.sessions[session.id]
        sessions_data.append(
            {
                'id': session.id,
                'name': session.name,
                'session_type': session.session_type.value,
                'points_per_match': session.points_per_match,
                'team_a_points': subtotal.team_a_total,
                'team_b_points': subtotal.team_b_total,
                'matches_finished': subtotal.matches_finished,
                'matches': matches_data,
            }
        )

    logger.info(
        f'{trip.name}: {team_a_name} {standings.total.team_a_total} - '
        f'{team_b_name} {standings.total.team_b_total} '
        f'({standings.matches_remaining} matches remaining)'
    )

    return {
        'trip': trip.name,
        'team_a_name': team_a_name,
        'team_b_name': team_b_name,
        'sessions': sessions_data,
        'totals': {
            'team_a_points': standings.total.team_a_total,
            'team_b_points': standings.total.team_b_total,
            'matches_finished': standings.total.matches_finished,
            'matches_remaining': standings.matches_remaining,
            'points_remaining': standings.points_remaining,
        },
        'path_to_victory': path_to_victory(standings.total, points_to_win, standings.points_remaining),
    }


def save_standings(output_path: str | Path, standings: dict[str, Any]) -> None:
    """Save a standings document with an updated_at timestamp."""
    document = {'updated_at': datetime.now(timezone.utc).isoformat(), **standings}
    save_json(output_path, document)
    logger.info(f'Standings saved to {output_path}')


def score_trip_file(
    trip_path: str | Path,
    output_path: Optional[str | Path] = None,
    points_to_win: Optional[Any] = None,
) -> dict[str, Any]:
    """Load, score and (optionally) save standings for a trip file."""
    trip = load_trip(trip_path)
    standings = score_trip(trip, points_to_win=points_to_win)
    if output_path is not None:
        save_standings(output_path, standings)
    return standings
