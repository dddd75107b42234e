"""Point allocation for finished matches.

Points are Decimal throughout so half-point sessions stay exact when
summed over a whole trip.
"""

from decimal import Decimal
from typing import Any

from .models import MatchOutcome, MatchPoints, MatchResult, Team
from .validators import validate_points_per_match

ZERO = Decimal('0')
TWO = Decimal('2')


def to_points(value: Any, name: str = 'points_per_match') -> Decimal:
    """Convert a points value (int, str, float or Decimal) to an exact Decimal."""
    return validate_points_per_match(value, name)


def allocate_points(result: MatchResult, points_per_match: Any) -> MatchPoints:
    """
    Split a match's points between the two teams.

    Scoring:
        - Not finished: 0 / 0
        - Decided: full points to the leader, 0 to the other side
        - Halved: half each

    Args:
        result: Classified match result
        points_per_match: Session's points per match (positive)

    Returns:
        MatchPoints whose total is 0 or exactly points_per_match

    Raises:
        ValidationError: If points_per_match is not positive
    """
    points = to_points(points_per_match)

    if result.outcome is MatchOutcome.DECIDED:
        if result.leader is Team.TEAM_A:
            return MatchPoints(team_a_points=points, team_b_points=ZERO)
        return MatchPoints(team_a_points=ZERO, team_b_points=points)

    if result.outcome is MatchOutcome.HALVED:
        half = points / TWO
        return MatchPoints(team_a_points=half, team_b_points=half)

    return MatchPoints()
