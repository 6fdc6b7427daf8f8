"""Exceptions raised by Bracketeer."""

# Bracketeer
# Copyright (C) 2025  Bracketeer developers
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


class BracketeerException(Exception):
    """Base exception for all Bracketeer errors.

    Every exception raised by the library inherits from this class, so a
    controlling application can catch all library errors with one clause.
    """

    pass


# ========== Competition State Exceptions ==========


class CompetitionStateException(BracketeerException):
    """Raised when the competition is in the wrong state for an operation."""

    pass


class PhaseStateException(CompetitionStateException):
    """Raised when a phase (segment) is missing, already exists, or is empty."""

    pass


class RoundStateException(CompetitionStateException):
    """Raised when a round cannot accept the requested change."""

    pass


class RoundNotFoundException(CompetitionStateException):
    """Raised when a requested round number is outside the existing range."""

    pass


class ParticipantStateException(CompetitionStateException):
    """Raised when a participant is already in the requested status."""

    pass


# ========== Participant Exceptions ==========


class ParticipantException(BracketeerException):
    """Base exception for participant-related errors."""

    pass


class ParticipantNotFoundException(ParticipantException):
    """Raised when a participant is unknown to the competition or match."""

    pass


class DuplicateParticipantException(ParticipantException):
    """Raised when enrolling a participant whose id is already enrolled."""

    pass


# ========== Result Exceptions ==========


class ResultException(BracketeerException):
    """Base exception for result recording errors."""

    pass


class InvalidResultException(ResultException):
    """Raised when a result vector is malformed for its match."""

    pass


class ResultNotFoundException(ResultException):
    """Raised when points are requested from a match without results."""

    pass


class MatchNotFoundException(ResultException):
    """Raised when a result refers to a match index the round does not have."""

    pass


# ========== Pairing Exceptions ==========


class PairingException(BracketeerException):
    """Base exception for pairing and seeding errors."""

    pass


class InvalidBracketSizeException(PairingException):
    """Raised when a bracket is requested for a size that is not a power of two."""

    pass


class InvalidCutException(PairingException):
    """Raised when a playoff cut cannot be seeded into a bracket."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(BracketeerException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass
