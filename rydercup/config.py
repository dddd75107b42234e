"""Trip scoring configuration management."""

from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from .schemas import TripConfig
from .utils import load_json

CONFIG_PATH = Path(__file__).parent.parent / 'data' / 'trip_config.json'


@lru_cache(maxsize=1)
def get_config() -> TripConfig:
    """
    Load scoring defaults from data/trip_config.json.

    Configuration is cached after first load.

    Returns:
        TripConfig object with validated settings

    Raises:
        FileNotFoundError: If trip_config.json doesn't exist
        ValueError: If config file has invalid structure

    Example:
        from rydercup.config import get_config
        config = get_config()
        print(f"Holes per match: {config.default_total_holes}")
    """
    return load_json(CONFIG_PATH, schema=TripConfig)


def get_default_total_holes() -> int:
    """Get the hole count used when a match doesn't specify one."""
    return get_config().default_total_holes


def get_default_points_per_match() -> Decimal:
    """Get the points per match used when a session doesn't specify one."""
    return get_config().default_points_per_match


def get_points_to_win() -> Decimal | None:
    """Get the configured points needed to win a trip (None = half the points plus a half)."""
    return get_config().points_to_win


def get_team_names() -> tuple[str, str]:
    """Get default display names for Team A and Team B."""
    config = get_config()
    return config.team_a_name, config.team_b_name


def get_momentum_window() -> int:
    """Get the number of recent holes counted for momentum."""
    return get_config().momentum_window


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this if the config file is modified during runtime
    and you need to reload it.
    """
    get_config.cache_clear()
