"""Exceptions for use in Swiss Pairing"""

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


# ========== Base Application Exception ==========


class SwissPairingException(Exception):
    """Base exception for all Swiss Pairing errors.

    All custom exceptions in the package inherit from this class.
    This enables catching all engine-specific errors with a single except clause.
    """

    pass


# ========== Pairing Exceptions ==========


class PairingException(SwissPairingException):
    """Base exception for pairing-related errors."""

    pass


class NoPairingAvailableException(PairingException):
    """Raised when the pairing engine is asked for a player it cannot supply.

    The only case is bye selection on a pool with no candidates, which means
    the caller broke the odd/even precondition.
    """

    pass


# ========== Result Exceptions ==========


class ResultException(SwissPairingException):
    """Base exception for match result errors."""

    pass


class InvalidResultException(ResultException):
    """Raised when a result code or game count cannot be understood."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(SwissPairingException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass
