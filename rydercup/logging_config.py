"""Logging setup for the Ryder Cup scorer.

Every module logs under the ``rydercup`` namespace:

    rydercup.validators   rejected hole results, points and lineups (WARNING)
    rydercup.scoring      match state after each re-derivation (DEBUG)
    rydercup.standings    session and trip re-reductions (DEBUG)
    rydercup.trip_scorer  trip loads and the final score line (INFO)
    rydercup.utils        JSON file reads and writes (INFO)

Per-state scoring and re-reduction lines are noisy over a full trip, so
``rydercup.scoring`` and ``rydercup.standings`` are held at INFO unless asked
for by name. Rejections from
``rydercup.validators`` always reach the handlers, even in quiet runs.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

ROOT_LOGGER = 'rydercup'

# Most verbose level a module logs at unless named in debug_modules
MODULE_LEVELS = {
    'rydercup.scoring': logging.INFO,
    'rydercup.standings': logging.INFO,
}

# Modules whose warnings are never filtered out
ALWAYS_WARN = ('rydercup.validators',)


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """
    Get a logger in the rydercup namespace.

    Short names are qualified, so ``get_logger('scoring')`` and
    ``get_logger('rydercup.scoring')`` return the same logger. If
    setup_logging() hasn't been called, records propagate to whatever the
    root logger does.
    """
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + '.'):
        name = f'{ROOT_LOGGER}.{name}'
    return logging.getLogger(name)


def setup_logging(
    log_dir: Optional[Path] = None,
    level: int = logging.INFO,
    log_to_file: bool = True,
    log_to_console: bool = True,
    debug_modules: Iterable[str] = (),
) -> logging.Logger:
    """
    Configure the rydercup loggers.

    Args:
        log_dir: Directory for log files (default: ./logs)
        level: Level for the rydercup logger (default: INFO)
        log_to_file: Whether to write a timestamped log file
        log_to_console: Whether to log to stdout
        debug_modules: Modules to log at DEBUG regardless of level,
            e.g. ('scoring',) to trace every match state

    Returns:
        Configured 'rydercup' logger
    """
    logger = get_logger()
    logger.setLevel(level)
    logger.handlers = []

    module_levels = {name: max(level, cap) for name, cap in MODULE_LEVELS.items()}
    for name in ALWAYS_WARN:
        module_levels[name] = min(level, logging.WARNING)
    for name in debug_modules:
        module_levels[get_logger(name).name] = logging.DEBUG
    for name, module_level in module_levels.items():
        get_logger(name).setLevel(module_level)

    # Handlers pass whatever the module loggers let through
    handler_level = min([level, *module_levels.values()])

    detailed_formatter = logging.Formatter(
        '%(asctime)s %(name)s %(levelname)s [%(filename)s:%(lineno)d] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )
    console_formatter = logging.Formatter('%(levelname)s %(name)s: %(message)s')

    if log_to_file:
        if log_dir is None:
            log_dir = Path('logs')
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f'rydercup_{datetime.now().strftime("%Y%m%d_%H%M%S")}.log'
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(handler_level)
        file_handler.setFormatter(detailed_formatter)
        logger.addHandler(file_handler)

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(handler_level)
        console_handler.setFormatter(console_formatter)
        logger.addHandler(console_handler)

    return logger
