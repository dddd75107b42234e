"""Validation for hole results, match configuration, lineups and standings.

Boundary checks that guard the scoring engine raise ``ValidationError``.
The lineup and standings sanity checks follow the ``validate_*`` convention
of returning a list of messages (empty if valid).
"""

import logging
from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from .models import HoleResult, HoleWinner, Match, Session, SessionType, TeamPointTotals

logger = logging.getLogger('rydercup.validators')


class ValidationError(ValueError):
    """Malformed input at the scoring engine boundary."""

    def __init__(
        self,
        message: str,
        hole_number: Optional[int] = None,
        match_id: Optional[str] = None,
    ):
        super().__init__(message)
        self.hole_number = hole_number
        self.match_id = match_id


def validate_total_holes(total_holes: int) -> int:
    """Ensure a match has a positive whole number of holes."""
    if isinstance(total_holes, bool) or not isinstance(total_holes, int) or total_holes < 1:
        logger.warning(f'Rejected total_holes={total_holes!r}')
        raise ValidationError(f'total_holes must be a positive integer, got {total_holes!r}')
    return total_holes


def parse_winner(value: Any, hole_number: Optional[int] = None, match_id: Optional[str] = None) -> HoleWinner:
    """
    Coerce a winner token to a HoleWinner.

    Accepts HoleWinner members or their serialized tokens
    ('team_a', 'team_b', 'halved').

    Raises:
        ValidationError: If the token is not recognized
    """
    if isinstance(value, HoleWinner):
        return value
    try:
        return HoleWinner(value)
    except ValueError:
        logger.warning(f'Rejected winner {value!r} on hole {hole_number} of match {match_id}')
        raise ValidationError(
            f'Hole {hole_number}: unrecognized winner {value!r} '
            f'(expected one of {", ".join(w.value for w in HoleWinner)})',
            hole_number=hole_number,
            match_id=match_id,
        ) from None


def validate_hole_result(result: HoleResult, total_holes: int) -> HoleResult:
    """
    Check one hole result against its match's hole count.

    Returns the result with its winner normalized to a HoleWinner member
    and a naive recorded_at read as UTC, so corrections recorded by
    different devices compare on one clock.

    Raises:
        ValidationError: If the hole number is outside [1, total_holes],
            the winner token is not recognized or recorded_at is not a datetime
    """
    hole = result.hole_number
    if isinstance(hole, bool) or not isinstance(hole, int) or not 1 <= hole <= total_holes:
        logger.warning(f'Rejected hole number {hole!r} for match {result.match_id}')
        raise ValidationError(
            f'Hole number {hole!r} outside 1-{total_holes} for match {result.match_id}',
            hole_number=hole if isinstance(hole, int) else None,
            match_id=result.match_id,
        )

    winner = parse_winner(result.winner, hole_number=hole, match_id=result.match_id)

    recorded_at = result.recorded_at
    if not isinstance(recorded_at, datetime):
        logger.warning(f'Rejected recorded_at {recorded_at!r} on hole {hole} of match {result.match_id}')
        raise ValidationError(
            f'Hole {hole}: recorded_at must be a datetime, got {recorded_at!r}',
            hole_number=hole,
            match_id=result.match_id,
        )
    if recorded_at.tzinfo is None:
        recorded_at = recorded_at.replace(tzinfo=timezone.utc)

    if winner is result.winner and recorded_at is result.recorded_at:
        return result
    return replace(result, winner=winner, recorded_at=recorded_at)


def validate_points_per_match(value: Any, name: str = 'points_per_match') -> Decimal:
    """
    Convert a session's points-per-match to an exact Decimal.

    Floats are converted through their shortest repr so 0.5 becomes
    Decimal('0.5') rather than its binary expansion.

    Raises:
        ValidationError: If the value is not a positive finite number
    """
    if isinstance(value, bool):
        raise ValidationError(f'{name} must be a number, got {value!r}')
    try:
        points = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        logger.warning(f'Rejected {name}={value!r}')
        raise ValidationError(f'{name} must be a number, got {value!r}') from None

    if not points.is_finite() or points <= 0:
        logger.warning(f'Rejected {name}={value!r}')
        raise ValidationError(f'{name} must be positive, got {value!r}')
    return points


def validate_match_lineup(match: Match, session_type: SessionType) -> list[str]:
    """
    Check that a match has the right number of players per side.

    Args:
        match: Match to validate
        session_type: Format of the session the match belongs to

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []
    needed = session_type.players_per_team

    if len(match.team_a_player_ids) != needed:
        errors.append(
            f'Match {match.id} has {len(match.team_a_player_ids)} Team A players '
            f'({session_type.display_name} needs {needed})'
        )
    if len(match.team_b_player_ids) != needed:
        errors.append(
            f'Match {match.id} has {len(match.team_b_player_ids)} Team B players '
            f'({session_type.display_name} needs {needed})'
        )

    overlap = set(match.team_a_player_ids) & set(match.team_b_player_ids)
    if overlap:
        errors.append(f'Match {match.id} has players on both sides: {", ".join(sorted(overlap))}')

    return errors


def validate_session_lineups(session: Session) -> list[str]:
    """
    Validate every pairing in a session.

    Checks:
    - Player counts per side match the session format
    - No player appears in more than one match of the session

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []
    for match in session.sorted_matches:
        errors.extend(validate_match_lineup(match, session.session_type))

    seen: set[str] = set()
    duplicates: set[str] = set()
    for match in session.matches:
        for player_id in (*match.team_a_player_ids, *match.team_b_player_ids):
            if player_id in seen:
                duplicates.add(player_id)
            seen.add(player_id)

    if duplicates:
        errors.append(
            f'{session.name} has players in multiple matches: {", ".join(sorted(duplicates))}'
        )

    return errors


def validate_standings(totals: dict[str, TeamPointTotals], sessions: list[Session]) -> list[str]:
    """
    Check that session totals never exceed the points on offer.

    Sanity checks:
    - Team totals are non-negative
    - Team A + Team B equals points_per_match times finished matches

    Args:
        totals: Dict of session id -> TeamPointTotals
        sessions: Sessions the totals were computed from

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []
    by_id = {s.id: s for s in sessions}

    for session_id, session_totals in totals.items():
        session = by_id.get(session_id)
        if session is None:
            warnings.append(f'Totals reported for unknown session {session_id}')
            continue

        if session_totals.team_a_total < 0 or session_totals.team_b_total < 0:
            warnings.append(f'{session.name} has a negative team total')

        expected = session.points_per_match * session_totals.matches_finished
        awarded = session_totals.team_a_total + session_totals.team_b_total
        if awarded != expected:
            warnings.append(
                f'{session.name} awarded {awarded} pts for {session_totals.matches_finished} '
                f'finished matches (expected {expected})'
            )

    return warnings
