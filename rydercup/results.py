"""Classify a match state into a result and render it in match-play notation."""

from .models import MatchOutcome, MatchResult, MatchState, Team


def classify_result(state: MatchState) -> MatchResult:
    """
    Turn a running match state into a result descriptor.

    A closed-out match, or a complete match with a lead, is decided.
    holes_remaining_at_decision is taken from the state as given, so a
    caller that keeps recording past the closeout gets a smaller number
    of holes remaining rather than an error.

    Returns:
        MatchResult with outcome not_finished, decided or halved
    """
    if state.is_closed_out or (state.holes_played == state.total_holes and state.current_score != 0):
        return MatchResult(
            outcome=MatchOutcome.DECIDED,
            leader=Team.TEAM_A if state.current_score > 0 else Team.TEAM_B,
            margin=abs(state.current_score),
            holes_remaining_at_decision=state.holes_remaining,
        )

    if state.holes_played == state.total_holes:
        return MatchResult(outcome=MatchOutcome.HALVED)

    return MatchResult(outcome=MatchOutcome.NOT_FINISHED)


def format_result(result: MatchResult) -> str:
    """
    Render a finished result in conventional notation.

    "3&2" when holes were left unplayed, "1 UP" when decided on the
    last hole, "Halved" for a tied match.

    Raises:
        ValueError: If the match is not finished
    """
    if result.outcome is MatchOutcome.HALVED:
        return 'Halved'
    if result.outcome is MatchOutcome.DECIDED:
        if result.holes_remaining_at_decision == 0:
            return f'{result.margin} UP'
        return f'{result.margin}&{result.holes_remaining_at_decision}'
    raise ValueError('An unfinished match has no result notation')


def describe_result(result: MatchResult, team_a_name: str = 'Team A', team_b_name: str = 'Team B') -> str:
    """Share-card line for a match, e.g. "USA wins 3&2"."""
    if result.outcome is MatchOutcome.NOT_FINISHED:
        return 'In progress'
    if result.outcome is MatchOutcome.HALVED:
        return 'Match Halved'
    winner = team_a_name if result.leader is Team.TEAM_A else team_b_name
    return f'{winner} wins {format_result(result)}'
