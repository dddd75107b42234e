#!/usr/bin/env python3
"""
Ryder Cup Trip Scorer CLI

Scores every match in a trip file from its recorded hole results and writes
session and trip standings.

Usage:
    python score_trip.py --trip data/trip.json
    python score_trip.py --trip data/trip.json --output web/data/standings.json
    python score_trip.py --trip data/trip.json --points-to-win 14.5 --quiet
"""

import argparse
import logging
import sys
from pathlib import Path

from rydercup import ValidationError, load_trip, save_standings, score_trip
from rydercup.logging_config import get_logger, setup_logging


def print_standings(standings: dict) -> None:
    """Print session results and the trip scoreboard."""
    team_a = standings['team_a_name']
    team_b = standings['team_b_name']

    for session in standings['sessions']:
        print(f'\n{"=" * 60}')
        print(f'{session["name"]} ({session["session_type"]}, {session["points_per_match"]} pts/match)')
        print('=' * 60)
        for match in session['matches']:
            players = f'{" & ".join(match["team_a"]) or team_a} vs {" & ".join(match["team_b"]) or team_b}'
            print(f'  {players}: {match["status_text"]}')
        print(f'\n  {team_a} {session["team_a_points"]} - {session["team_b_points"]} {team_b}')

    totals = standings['totals']
    path = standings['path_to_victory']
    print(f'\n{"=" * 60}')
    print(f'{standings["trip"]}: {team_a} {totals["team_a_points"]} - {totals["team_b_points"]} {team_b}')
    print(f'  {totals["matches_remaining"]} matches remaining, {totals["points_remaining"]} pts available')
    print(f'  {path["points_to_win"]} pts to win')

    for key, name in (('team_a', team_a), ('team_b', team_b)):
        team_path = path[key]
        if team_path['has_clinched']:
            print(f'  🏆 {name} has clinched')
        elif team_path['is_eliminated']:
            print(f'  {name} can no longer win outright')
        else:
            print(f'  {name} needs {team_path["points_needed"]} more')


def main():
    parser = argparse.ArgumentParser(description="Ryder Cup trip match-play scorer")
    parser.add_argument(
        "--trip", "-t",
        default="data/trip.json",
        help="Path to trip JSON file",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Output path for standings JSON (defaults to <trip dir>/standings.json)",
    )
    parser.add_argument(
        "--points-to-win",
        default=None,
        help="Points needed to win the trip (defaults to half the points on offer plus 0.5)",
    )
    parser.add_argument(
        "--log-dir",
        default=None,
        help="Directory for log files (no log file if omitted)",
    )
    parser.add_argument(
        "--debug",
        action="append",
        default=[],
        metavar="MODULE",
        help="Log a module at DEBUG, e.g. --debug scoring (repeatable)",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress detailed output",
    )

    args = parser.parse_args()

    log_dir = Path(args.log_dir) if args.log_dir else None
    setup_logging(
        log_dir=log_dir,
        level=logging.WARNING if args.quiet else logging.INFO,
        log_to_file=log_dir is not None,
        debug_modules=args.debug,
    )
    logger = get_logger("cli")

    trip_path = Path(args.trip)
    output_path = Path(args.output) if args.output else trip_path.parent / "standings.json"

    if not trip_path.exists():
        print(f"❌ Trip file not found: {trip_path}")
        sys.exit(1)

    logger.info(f"Scoring {trip_path}")
    try:
        trip = load_trip(trip_path)
        standings = score_trip(trip, points_to_win=args.points_to_win)
    except ValidationError as e:
        if e.hole_number is not None:
            print(f"❌ Rejected hole result (hole {e.hole_number}): {e}")
        else:
            print(f"❌ Invalid value: {e}")
        sys.exit(1)
    except ValueError as e:
        print(f"❌ {e}")
        sys.exit(1)

    if not args.quiet:
        print_standings(standings)

    save_standings(output_path, standings)
    print(f"\n✅ Standings saved to {output_path}")


if __name__ == "__main__":
    main()
