"""Match-play state calculation from hole results.

Scoring rules:
    - Each hole is worth +1 (Team A), -1 (Team B) or 0 (halved)
    - Match score = sum over effective hole results (positive = Team A leading)
    - Dormie: lead equals holes remaining (and holes remain)
    - Closed out: lead exceeds holes remaining, the match is over

State is always re-derived from the full set of hole results; nothing here
keeps a running score between calls.
"""

import logging
from datetime import datetime, timezone
from typing import Iterable, Optional, Sequence, Tuple

from .models import HoleResult, HoleWinner, MatchState
from .validators import validate_hole_result, validate_total_holes

logger = logging.getLogger('rydercup.scoring')


def _utc(moment: datetime) -> datetime:
    # Naive timestamps are read as UTC
    return moment.replace(tzinfo=timezone.utc) if moment.tzinfo is None else moment


def effective_hole_results(hole_results: Iterable[HoleResult]) -> list[HoleResult]:
    """
    Reduce hole results to one effective result per hole number.

    The result with the latest recorded_at wins; earlier ones are superseded,
    not combined. Between results with identical timestamps, the one that
    appears later in the input wins. Naive timestamps compare as UTC.

    Returns:
        Effective results sorted by hole number
    """
    latest: dict[int, HoleResult] = {}
    for result in hole_results:
        current = latest.get(result.hole_number)
        if current is None or _utc(result.recorded_at) >= _utc(current.recorded_at):
            latest[result.hole_number] = result
    return [latest[hole] for hole in sorted(latest)]


def compute_match_state(total_holes: int, hole_results: Iterable[HoleResult]) -> MatchState:
    """
    Calculate the running state of a match.

    Args:
        total_holes: Holes in the match (conventionally 18)
        hole_results: Every recorded result for the match, in any order,
            including superseded corrections

    Returns:
        MatchState derived from the effective results only

    Raises:
        ValidationError: If any result has a hole number outside
            [1, total_holes] or an unrecognized winner
    """
    validate_total_holes(total_holes)
    validated = [validate_hole_result(r, total_holes) for r in hole_results]
    effective = effective_hole_results(validated)

    holes_played = len(effective)
    current_score = sum(r.winner.delta for r in effective)
    holes_remaining = total_holes - holes_played
    lead = abs(current_score)

    state = MatchState(
        total_holes=total_holes,
        holes_played=holes_played,
        holes_remaining=holes_remaining,
        current_score=current_score,
        is_dormie=lead == holes_remaining and holes_remaining > 0,
        is_closed_out=lead > holes_remaining,
    )
    logger.debug(
        f'State through {holes_played}/{total_holes}: score={current_score} '
        f'dormie={state.is_dormie} closed_out={state.is_closed_out}'
    )
    return state


def can_continue(state: MatchState) -> bool:
    """Whether more holes are still to be played in this match."""
    return not state.is_closed_out and state.holes_remaining > 0


def match_status_text(state: MatchState, team_a_name: str = 'Team A', team_b_name: str = 'Team B') -> str:
    """
    Render the live status line for a match.

    Examples:
        "All Square through 3", "Team A 2 UP through 9",
        "Team B Dormie (3 UP, 3 to play)", "Team A wins 4&3",
        "Team B wins 1 UP", "Match Halved"
    """
    lead = abs(state.current_score)
    leader = team_a_name if state.current_score > 0 else team_b_name

    if state.is_closed_out:
        if state.holes_remaining == 0:
            return f'{leader} wins {lead} UP'
        return f'{leader} wins {lead}&{state.holes_remaining}'
    if state.holes_played == state.total_holes:
        # Closed-out covers any non-zero lead here, so only a tie is left
        return 'Match Halved'
    if state.is_dormie:
        return f'{leader} Dormie ({lead} UP, {state.holes_remaining} to play)'
    if state.current_score == 0:
        return f'All Square through {state.holes_played}'
    return f'{leader} {lead} UP through {state.holes_played}'


def determine_hole_winner(team_a_net_score: int, team_b_net_score: int) -> HoleWinner:
    """Lower net score wins the hole; equal scores halve it."""
    if team_a_net_score < team_b_net_score:
        return HoleWinner.TEAM_A
    if team_b_net_score < team_a_net_score:
        return HoleWinner.TEAM_B
    return HoleWinner.HALVED


def fourball_hole_winner(
    team_a_scores: Sequence[Tuple[int, int]],
    team_b_scores: Sequence[Tuple[int, int]],
) -> HoleWinner:
    """
    Determine a fourball (best ball) hole winner.

    Args:
        team_a_scores: (gross, strokes_received) per Team A player
        team_b_scores: (gross, strokes_received) per Team B player

    Returns:
        Winner by each side's best net score. A side with no scores
        cannot win the hole.
    """
    best_a: Optional[int] = min((gross - strokes for gross, strokes in team_a_scores), default=None)
    best_b: Optional[int] = min((gross - strokes for gross, strokes in team_b_scores), default=None)

    if best_a is None and best_b is None:
        return HoleWinner.HALVED
    if best_a is None:
        return HoleWinner.TEAM_B
    if best_b is None:
        return HoleWinner.TEAM_A
    return determine_hole_winner(best_a, best_b)


def momentum(hole_results: Iterable[HoleResult], last_n: int = 5) -> dict[str, int]:
    """
    Count recent hole outcomes over the last N effective holes.

    Returns:
        Dict with 'team_a_wins', 'team_b_wins' and 'halves'
    """
    recent = effective_hole_results(hole_results)[-last_n:] if last_n > 0 else []
    counts = {'team_a_wins': 0, 'team_b_wins': 0, 'halves': 0}
    for result in recent:
        if result.winner == HoleWinner.TEAM_A:
            counts['team_a_wins'] += 1
        elif result.winner == HoleWinner.TEAM_B:
            counts['team_b_wins'] += 1
        else:
            counts['halves'] += 1
    return counts
