"""Logging and player-ordering utilities."""

# Swiss Pairing
# Copyright (C) 2025  Swiss Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.


import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Tuple

# the logger format used
LOG_FMT = "LVL: %(levelname)s | FILE PATH: %(pathname)s | FUN: %(funcName)s | msg: %(message)s | ln#:%(lineno)d"

# environment variables read when a logger is created
LOG_LEVEL_ENV = "SWISSPAIRING_LOG_LEVEL"
LOG_FILE_ENV = "SWISSPAIRING_LOG_FILE"
DEFAULT_LOG_LEVEL = logging.WARNING


def _resolve_level() -> int:
    """Read the log level from the environment, falling back to WARNING."""
    name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if not name:
        return DEFAULT_LOG_LEVEL
    level = logging.getLevelName(name)
    # getLevelName returns a string for unknown names
    return level if isinstance(level, int) else DEFAULT_LOG_LEVEL


# --- Logging Setup ---
def setup_logger(logger_name: str) -> logging.Logger:
    """Set up logger for a python module.

    Sets up a console handler and, when ``SWISSPAIRING_LOG_FILE`` is set,
    a rotating file handler.

    Parameters
    ----------
    logger_name : str
        The name for the logger, __name__ is idiomatic

    Returns
    -------
    logging.Logger
        the created logger
    """
    lgr = logging.getLogger(name=logger_name)
    level = _resolve_level()
    lgr.setLevel(level)
    # Remove any existing handlers on this logger to avoid duplicates
    for _h in list(lgr.handlers):
        lgr.removeHandler(_h)
    log_formatter = logging.Formatter(LOG_FMT)

    file_handler = None
    log_path = os.environ.get(LOG_FILE_ENV)
    if log_path:
        try:
            log_dir = os.path.dirname(log_path)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            # Use RotatingFileHandler to prevent unbounded log growth
            file_handler = RotatingFileHandler(
                log_path, maxBytes=5 * 1024 * 1024, backupCount=5, encoding="utf-8"
            )
            file_handler.setFormatter(log_formatter)
        except OSError:
            # continue without file logging
            file_handler = None

    # Console Handler
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(log_formatter)
    console_handler.setLevel(level)
    lgr.addHandler(console_handler)
    if file_handler:
        lgr.addHandler(file_handler)
    lgr.debug("logger %s initialized", logger_name)
    return lgr


def user_id_key(user_id: str) -> Tuple[str, str]:
    """Sort key for player ids.

    Ids compare case-insensitively; the raw id only separates ids that
    differ by case alone, so ``"a"`` sorts before ``"B"``.
    """
    return (user_id.casefold(), user_id)
