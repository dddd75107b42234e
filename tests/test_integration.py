"""Integration tests for end-to-end workflows."""

import json
import logging
import sys
from decimal import Decimal
from unittest.mock import patch

import pytest

import score_trip
from rydercup.config import (
    clear_config_cache,
    get_config,
    get_default_points_per_match,
    get_default_total_holes,
    get_momentum_window,
    get_points_to_win,
    get_team_names,
)
from rydercup.schemas import TripConfig, TripFile
from rydercup.trip_scorer import build_sessions, load_trip, save_standings, score_trip as score_trip_doc, score_trip_file
from rydercup.utils import load_json, save_json, validate_json_file
from rydercup.validators import ValidationError


def hole_records(winners, start_hour=8):
    return [
        {'hole': i, 'winner': w, 'recorded_at': f'2026-04-10T{start_hour + i // 6:02d}:{(i * 10) % 60:02d}:00Z'}
        for i, w in enumerate(winners, 1)
    ]


@pytest.fixture
def config():
    return TripConfig(default_total_holes=18, default_points_per_match=Decimal('1'))


@pytest.fixture
def trip_data():
    """Two sessions: 3&2 win with a corrected hole 7, an unfinished match, and a halved half-point match."""
    closeout = hole_records(['team_a', 'team_a', 'team_a', 'team_a'] + ['halved'] * 12)
    closeout[6] = {'hole': 7, 'winner': 'team_a', 'recorded_at': '2026-04-10T09:10:00Z'}
    closeout.append({'hole': 7, 'winner': 'halved', 'recorded_at': '2026-04-10T09:15:00Z', 'notes': 'Corrected'})
    closeout[3] = {'hole': 4, 'winner': 'halved', 'recorded_at': '2026-04-10T08:40:00Z'}
    return {
        'name': 'Pinehurst 2026',
        'team_a_name': 'USA',
        'team_b_name': 'Europe',
        'sessions': [
            {
                'id': 'fri-am',
                'name': 'Friday AM Foursomes',
                'session_type': 'foursomes',
                'matches': [
                    {
                        'id': 'fri-am-1',
                        'match_order': 1,
                        'team_a': ['alex', 'blake'],
                        'team_b': ['casey', 'drew'],
                        'hole_results': closeout,
                    },
                    {
                        'id': 'fri-am-2',
                        'match_order': 2,
                        'team_a': ['erin', 'frankie'],
                        'team_b': ['gray', 'harper'],
                        'hole_results': hole_records(['team_b', 'team_a']),
                    },
                ],
            },
            {
                'id': 'fri-pm',
                'name': 'Friday PM Fourball',
                'session_type': 'fourball',
                'points_per_match': '0.5',
                'matches': [
                    {
                        'id': 'fri-pm-1',
                        'total_holes': 9,
                        'team_a': ['alex', 'erin'],
                        'team_b': ['casey', 'gray'],
                        'hole_results': hole_records(['team_a', 'team_b'] + ['halved'] * 7, start_hour=14),
                    },
                ],
            },
        ],
    }


@pytest.fixture
def trip_path(tmp_path, trip_data):
    path = tmp_path / 'trip.json'
    with open(path, 'w') as f:
        json.dump(trip_data, f, indent=2)
    return path


class TestTripScoring:
    """Tests for scoring a trip file."""

    def test_build_sessions_applies_defaults(self, trip_path, config):
        sessions = build_sessions(load_trip(trip_path), config)
        assert sessions[0].points_per_match == Decimal('1')
        assert sessions[0].matches[0].total_holes == 18
        assert sessions[1].points_per_match == Decimal('0.5')
        assert sessions[1].matches[0].total_holes == 9

    def test_match_results(self, trip_path, config):
        standings = score_trip_doc(load_trip(trip_path), config)
        closeout, unfinished = standings['sessions'][0]['matches']

        # Hole 7 corrected to halved: 3 up after 16
        assert closeout['current_score'] == 3
        assert closeout['holes_played'] == 16
        assert closeout['outcome'] == 'decided'
        assert closeout['result'] == '3&2'
        assert closeout['summary'] == 'USA wins 3&2'
        assert closeout['team_a_points'] == Decimal('1')

        assert unfinished['outcome'] == 'not_finished'
        assert unfinished['result'] is None
        assert unfinished['status_text'] == 'All Square through 2'
        assert unfinished['team_a_points'] == 0

        halved = standings['sessions'][1]['matches'][0]
        assert halved['result'] == 'Halved'
        assert halved['team_a_points'] == Decimal('0.25')

    def test_totals_and_path(self, trip_path, config):
        standings = score_trip_doc(load_trip(trip_path), config)
        assert standings['totals']['team_a_points'] == Decimal('1.25')
        assert standings['totals']['team_b_points'] == Decimal('0.25')
        assert standings['totals']['matches_remaining'] == 1
        assert standings['totals']['points_remaining'] == Decimal('1')
        # 2.5 points on offer -> 1.75 to win
        assert standings['path_to_victory']['points_to_win'] == Decimal('1.75')
        assert not standings['path_to_victory']['is_decided']

    def test_points_to_win_override(self, trip_path, config):
        standings = score_trip_doc(load_trip(trip_path), config, points_to_win='1.25')
        assert standings['path_to_victory']['team_a']['has_clinched']

    def test_save_and_reload_exact(self, trip_path, tmp_path, config):
        """Test half points survive the JSON round trip as exact strings."""
        output = tmp_path / 'out' / 'standings.json'
        save_standings(output, score_trip_doc(load_trip(trip_path), config))
        saved = load_json(output)
        assert saved['totals']['team_a_points'] == '1.25'
        assert saved['sessions'][1]['matches'][0]['team_b_points'] == '0.25'
        assert 'updated_at' in saved

    def test_rescore_is_identical(self, trip_path, config):
        first = score_trip_doc(load_trip(trip_path), config)
        second = score_trip_doc(load_trip(trip_path), config)
        assert first == second

    def test_score_trip_file(self, trip_path, tmp_path):
        output = tmp_path / 'standings.json'
        standings = score_trip_file(trip_path, output)
        assert output.exists()
        assert standings['trip'] == 'Pinehurst 2026'

    def test_naive_correction_of_aware_entry(self, trip_data, tmp_path, config):
        """Test a correction without a UTC offset supersedes an entry that has one."""
        ledger = trip_data['sessions'][0]['matches'][1]['hole_results']
        ledger.append({'hole': 7, 'winner': 'team_a', 'recorded_at': '2026-04-10T09:27:00Z'})
        ledger.append({'hole': 7, 'winner': 'halved', 'recorded_at': '2026-04-10T09:31:00'})
        path = tmp_path / 'mixed.json'
        with open(path, 'w') as f:
            json.dump(trip_data, f)
        match = score_trip_doc(load_trip(path), config)['sessions'][0]['matches'][1]
        assert match['holes_played'] == 3
        assert match['current_score'] == 0
        assert match['momentum']['halves'] == 1

    def test_hole_past_end_rejected(self, trip_data, tmp_path, config):
        """Test the engine rejects a hole past the configured default length."""
        trip_data['sessions'][0]['matches'][1]['hole_results'].append(
            {'hole': 19, 'winner': 'team_a', 'recorded_at': '2026-04-10T12:00:00Z'}
        )
        path = tmp_path / 'bad.json'
        with open(path, 'w') as f:
            json.dump(trip_data, f)
        with pytest.raises(ValidationError) as exc_info:
            score_trip_doc(load_trip(path), config)
        assert exc_info.value.hole_number == 19


class TestSchemas:
    """Tests for trip file validation."""

    def test_unknown_winner_rejected(self, trip_data, tmp_path):
        trip_data['sessions'][0]['matches'][0]['hole_results'][0]['winner'] = 'team_c'
        path = tmp_path / 'bad.json'
        with open(path, 'w') as f:
            json.dump(trip_data, f)
        is_valid, error = validate_json_file(path, TripFile)
        assert not is_valid
        assert 'Schema validation failed' in error

    def test_hole_past_declared_length_rejected(self, trip_data):
        trip_data['sessions'][1]['matches'][0]['hole_results'].append(
            {'hole': 10, 'winner': 'halved', 'recorded_at': '2026-04-10T16:00:00Z'}
        )
        with pytest.raises(ValueError):
            TripFile.model_validate(trip_data)

    def test_non_positive_points_rejected(self, trip_data):
        trip_data['sessions'][1]['points_per_match'] = '0'
        with pytest.raises(ValueError):
            TripFile.model_validate(trip_data)

    def test_duplicate_match_ids_rejected(self, trip_data):
        trip_data['sessions'][0]['matches'][1]['id'] = 'fri-am-1'
        with pytest.raises(ValueError):
            TripFile.model_validate(trip_data)

    def test_extra_fields_forbidden(self, trip_data):
        trip_data['sessions'][0]['running_total'] = 3
        with pytest.raises(ValueError):
            TripFile.model_validate(trip_data)

    def test_missing_file(self, tmp_path):
        is_valid, error = validate_json_file(tmp_path / 'nope.json', TripFile)
        assert not is_valid
        assert 'File not found' in error


class TestUtils:
    """Tests for JSON helpers."""

    def test_save_json_serializes_decimals(self, tmp_path):
        path = tmp_path / 'nested' / 'points.json'
        save_json(path, {'points': Decimal('0.5')})
        assert load_json(path) == {'points': '0.5'}

    def test_load_json_invalid(self, tmp_path):
        path = tmp_path / 'broken.json'
        path.write_text('{not json')
        with pytest.raises(json.JSONDecodeError):
            load_json(path)

    def test_save_json_rejects_unserializable(self, tmp_path):
        with pytest.raises(TypeError):
            save_json(tmp_path / 'x.json', {'value': object()})


class TestConfig:
    """Tests for the shipped configuration."""

    def test_defaults_loaded(self):
        clear_config_cache()
        config = get_config()
        assert config.default_total_holes == 18
        assert config.default_points_per_match == Decimal('1')
        assert get_default_total_holes() == 18
        assert get_team_names() == ('Team A', 'Team B')
        assert get_default_points_per_match() == Decimal('1')
        assert get_points_to_win() is None
        assert get_momentum_window() == 5

    def test_config_cached(self):
        clear_config_cache()
        assert get_config() is get_config()


class TestCli:
    """Tests for the score_trip command."""

    @pytest.fixture(autouse=True)
    def restore_loggers(self):
        names = ('rydercup', 'rydercup.scoring', 'rydercup.standings', 'rydercup.validators')
        saved = {name: (logging.getLogger(name).level, list(logging.getLogger(name).handlers)) for name in names}
        yield
        for name, (level, handlers) in saved.items():
            logging.getLogger(name).setLevel(level)
            logging.getLogger(name).handlers = handlers

    def test_writes_standings(self, trip_path, tmp_path, capsys):
        output = tmp_path / 'standings.json'
        argv = ['score_trip.py', '--trip', str(trip_path), '--output', str(output)]
        with patch.object(sys, 'argv', argv):
            score_trip.main()
        printed = capsys.readouterr().out
        assert 'Friday AM Foursomes' in printed
        assert 'USA wins 3&2' in printed
        assert json.loads(output.read_text())['totals']['team_a_points'] == '1.25'

    def test_missing_trip_exits(self, tmp_path):
        argv = ['score_trip.py', '--trip', str(tmp_path / 'missing.json'), '--quiet']
        with patch.object(sys, 'argv', argv):
            with pytest.raises(SystemExit) as exc_info:
                score_trip.main()
        assert exc_info.value.code == 1

    def test_invalid_hole_exits(self, trip_data, tmp_path, capsys):
        trip_data['sessions'][0]['matches'][1]['hole_results'].append(
            {'hole': 19, 'winner': 'team_a', 'recorded_at': '2026-04-10T12:00:00Z'}
        )
        path = tmp_path / 'bad.json'
        with open(path, 'w') as f:
            json.dump(trip_data, f)
        with patch.object(sys, 'argv', ['score_trip.py', '--trip', str(path), '--quiet']):
            with pytest.raises(SystemExit) as exc_info:
                score_trip.main()
        assert exc_info.value.code == 1
        assert 'hole 19' in capsys.readouterr().out

    def test_bad_points_to_win_is_not_a_hole_error(self, trip_path, tmp_path, capsys):
        output = tmp_path / 'standings.json'
        argv = ['score_trip.py', '--trip', str(trip_path), '--output', str(output), '--points-to-win', 'abc', '--quiet']
        with patch.object(sys, 'argv', argv):
            with pytest.raises(SystemExit) as exc_info:
                score_trip.main()
        assert exc_info.value.code == 1
        printed = capsys.readouterr().out
        assert 'hole result' not in printed
        assert 'Invalid value: points_to_win must be a number' in printed
        assert not output.exists()

    def test_debug_module_traces_match_states(self, trip_path, tmp_path, capsys):
        output = tmp_path / 'standings.json'
        argv = ['score_trip.py', '--trip', str(trip_path), '--output', str(output), '--quiet', '--debug', 'scoring']
        with patch.object(sys, 'argv', argv):
            score_trip.main()
        printed = capsys.readouterr().out
        assert 'DEBUG rydercup.scoring: State through 16/18' in printed
        assert 'Friday AM Foursomes' not in printed
