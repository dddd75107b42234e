"""Session and trip standings.

Totals are always a full re-reduction over the current hole results of
every match. There is no running total to keep in sync: a hole correction
or undo is picked up by calling these functions again.
"""

import logging
from decimal import Decimal
from typing import Any, Iterable, Optional, Tuple

from .models import (
    Match,
    MatchOutcome,
    MatchResult,
    ScoredMatch,
    Session,
    Team,
    TeamPointTotals,
    TripStandings,
)
from .points import ZERO, allocate_points, to_points
from .results import classify_result
from .scoring import compute_match_state, effective_hole_results
from .validators import validate_hole_result

logger = logging.getLogger('rydercup.standings')


def score_match(match: Match, points_per_match: Any) -> ScoredMatch:
    """
    Run one match through the engine.

    Args:
        match: Match with its recorded hole results
        points_per_match: Points on offer for the match

    Returns:
        ScoredMatch with state, result and allocated points
    """
    points_per_match = to_points(points_per_match)
    state = compute_match_state(match.total_holes, match.hole_results)
    result = classify_result(state)
    points = allocate_points(result, points_per_match)
    return ScoredMatch(
        match=match,
        state=state,
        result=result,
        points=points,
        points_per_match=points_per_match,
    )


def score_session(session: Session) -> list[ScoredMatch]:
    """Score every match in a session, in match order."""
    return [score_match(m, session.points_per_match) for m in session.sorted_matches]


def aggregate_team_totals(matches: Iterable[Tuple[MatchResult, Any]]) -> TeamPointTotals:
    """
    Sum allocated points over a set of matches.

    Args:
        matches: (MatchResult, points_per_match) pairs

    Returns:
        TeamPointTotals for the set
    """
    team_a = ZERO
    team_b = ZERO
    counted = 0
    finished = 0

    for result, points_per_match in matches:
        points = allocate_points(result, points_per_match)
        team_a += points.team_a_points
        team_b += points.team_b_points
        counted += 1
        if result.is_finished:
            finished += 1

    return TeamPointTotals(
        team_a_total=team_a,
        team_b_total=team_b,
        matches_counted=counted,
        matches_finished=finished,
    )


def session_totals(session: Session) -> TeamPointTotals:
    """Team point totals for one session."""
    return aggregate_team_totals((s.result, s.points_per_match) for s in score_session(session))


def trip_totals(sessions: Iterable[Session]) -> TripStandings:
    """
    Compute per-session subtotals and the trip grand total.

    Both levels come from the same reduction over the same scored matches.
    """
    subtotals: dict[str, TeamPointTotals] = {}
    all_scored: list[ScoredMatch] = []

    for session in sessions:
        scored = score_session(session)
        subtotals[session.id] = aggregate_team_totals((s.result, s.points_per_match) for s in scored)
        all_scored.extend(scored)

    total = aggregate_team_totals((s.result, s.points_per_match) for s in all_scored)
    unfinished = [s for s in all_scored if not s.result.is_finished]
    points_remaining = sum((s.points_per_match for s in unfinished), ZERO)

    logger.debug(
        f'Trip totals over {len(all_scored)} matches: '
        f'A={total.team_a_total} B={total.team_b_total} remaining={points_remaining}'
    )

    return TripStandings(
        sessions=subtotals,
        total=total,
        matches_remaining=len(unfinished),
        points_remaining=points_remaining,
    )


def _player_side(match: Match, player_id: str) -> Optional[Team]:
    if player_id in match.team_a_player_ids:
        return Team.TEAM_A
    if player_id in match.team_b_player_ids:
        return Team.TEAM_B
    return None


def player_points(player_id: str, sessions: Iterable[Session]) -> Decimal:
    """Total points a player earned for their team across all finished matches."""
    total = ZERO
    for session in sessions:
        for scored in score_session(session):
            side = _player_side(scored.match, player_id)
            if side is Team.TEAM_A:
                total += scored.points.team_a_points
            elif side is Team.TEAM_B:
                total += scored.points.team_b_points
    return total


def player_record(player_id: str, sessions: Iterable[Session]) -> dict[str, int]:
    """
    Win/loss/halve record for a player.

    Returns:
        Dict with 'wins', 'losses' and 'halves' over finished matches
    """
    record = {'wins': 0, 'losses': 0, 'halves': 0}
    for session in sessions:
        for scored in score_session(session):
            side = _player_side(scored.match, player_id)
            if side is None or not scored.result.is_finished:
                continue
            if scored.result.outcome is MatchOutcome.HALVED:
                record['halves'] += 1
            elif scored.result.leader is side:
                record['wins'] += 1
            else:
                record['losses'] += 1
    return record


def clutch_performance(player_id: str, sessions: Iterable[Session], last_n: int = 3) -> dict[str, int]:
    """
    Holes a player won and lost down the stretch.

    Counts the last N effective holes of every finished match the player
    played in (fewer when the match was closed out early). Whether a match
    is finished comes from its engine result, never its stored status.

    Returns:
        Dict with 'holes_won' and 'holes_lost'
    """
    counts = {'holes_won': 0, 'holes_lost': 0}
    for session in sessions:
        for scored in score_session(session):
            side = _player_side(scored.match, player_id)
            if side is None or not scored.result.is_finished:
                continue
            effective = effective_hole_results(
                validate_hole_result(r, scored.match.total_holes) for r in scored.match.hole_results
            )
            for result in effective[-last_n:] if last_n > 0 else []:
                if result.winner.delta == 0:
                    continue
                if (result.winner.delta > 0) == (side is Team.TEAM_A):
                    counts['holes_won'] += 1
                else:
                    counts['holes_lost'] += 1
    return counts


def default_points_to_win(total_points: Any) -> Decimal:
    """Points needed to win outright: half the points on offer plus a half point (14.5 of 28)."""
    return Decimal(str(total_points)) / 2 + Decimal('0.5')


def path_to_victory(totals: TeamPointTotals, points_to_win: Any, points_remaining: Any) -> dict[str, Any]:
    """
    Work out clinch and elimination scenarios for both teams.

    Args:
        totals: Current trip totals
        points_to_win: Points a team needs to win the trip outright
        points_remaining: Points still on offer in unfinished matches

    Returns:
        Dict with 'team_a' and 'team_b' entries ('current_points',
        'points_needed', 'has_clinched', 'is_eliminated'), plus
        'points_to_win', 'points_remaining', 'is_decided' and 'dramatic'
    """
    points_to_win = to_points(points_to_win, 'points_to_win')
    points_remaining = Decimal(str(points_remaining))

    def team_path(current: Decimal) -> dict[str, Any]:
        return {
            'current_points': current,
            'points_needed': max(ZERO, points_to_win - current),
            'has_clinched': current >= points_to_win,
            'is_eliminated': current + points_remaining < points_to_win,
        }

    team_a = team_path(totals.team_a_total)
    team_b = team_path(totals.team_b_total)

    is_decided = team_a['has_clinched'] or team_b['has_clinched'] or points_remaining == 0
    dramatic = not is_decided and not team_a['is_eliminated'] and not team_b['is_eliminated']

    return {
        'team_a': team_a,
        'team_b': team_b,
        'points_to_win': points_to_win,
        'points_remaining': points_remaining,
        'is_decided': is_decided,
        'dramatic': dramatic,
    }
