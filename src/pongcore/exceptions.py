"""Exceptions for use in Pong Core"""

# Pong Core
# Copyright (C) 2025  Pong Core developers
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


class PongCoreException(Exception):
    """Base exception for all Pong Core errors.

    All custom exceptions in the package inherit from this class.
    This enables catching all package-specific errors with a single except clause.
    """

    pass


# ========== Bracket Exceptions ==========


class BracketException(PongCoreException):
    """Base exception for bracket generation and advancement errors."""

    pass


class InsufficientPlayersException(BracketException):
    """Raised when a bracket is requested with fewer than two players."""

    pass


class InvalidMatchStateException(BracketException):
    """Raised when a match is already completed or lacks a resolved participant."""

    pass


class UnknownMatchException(BracketException):
    """Raised when a match id is not present in the supplied bracket."""

    pass


# ========== Rating Exceptions ==========


class RatingException(PongCoreException):
    """Base exception for rating engine errors."""

    pass


class SamePlayerException(RatingException):
    """Raised when one player is given as both participants of a match."""

    pass


class InvalidScoreException(RatingException):
    """Raised when scores are non-numeric, negative, or tied."""

    pass


# ========== Tournament Exceptions ==========


class TournamentException(PongCoreException):
    """Base exception for tournament-related errors."""

    pass


class TournamentStateException(TournamentException):
    """Raised when tournament is in an invalid state for the requested operation."""

    pass


# ========== Player Exceptions ==========


class PlayerException(PongCoreException):
    """Base exception for player-related errors."""

    pass


class PlayerNotFoundException(PlayerException):
    """Raised when a requested player cannot be found."""

    pass


class DuplicatePlayerException(PlayerException):
    """Raised when attempting to add a player that already exists."""

    pass


class InvalidPlayerDataException(PlayerException):
    """Raised when player data is invalid or incomplete."""

    pass


# ========== Ladder Exceptions ==========


class MatchNotFoundException(PongCoreException):
    """Raised when a ladder match id is not in the match history."""

    pass


# ========== Boundary Exceptions ==========


class TimestampException(PongCoreException):
    """Raised when a stored timestamp cannot be converted to a datetime."""

    pass
