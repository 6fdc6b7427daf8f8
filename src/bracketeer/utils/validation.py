"""Validation utilities for Bracketeer.

This module provides reusable validation functions with consistent error handling.
"""

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

from typing import TYPE_CHECKING, Optional, Sequence

from bracketeer.constants import HEAD_TO_HEAD_RESULT_LENGTH
from bracketeer.exceptions import InvalidResultException
from bracketeer.models import ScoringMode
from bracketeer.type_hints import ResultVector

if TYPE_CHECKING:
    from bracketeer.models.competition import Match


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Optional[ResultVector] = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Result Vector Validation ==========


def expected_result_length(match: "Match") -> int:
    """Length a non-empty result vector must have for a match."""
    if match.scoring_mode is ScoringMode.PLACEMENT_GROUP:
        return match.participant_count
    return HEAD_TO_HEAD_RESULT_LENGTH


def validate_result_vector(
    match: "Match", results: Optional[Sequence[int]]
) -> ValidationResult:
    """Validate a raw result vector against a match.

    An empty vector is valid and clears the match. Head-to-head vectors hold
    exactly three entries; placement-group vectors hold one entry per seat.

    Args:
        match: Match the results are meant for
        results: Raw result entries

    Returns:
        ValidationResult with the vector copied into a list

    Example:
        >>> result = validate_result_vector(match, [2, 1, 0])
        >>> if result:
        ...     match.results = result.sanitized_value
    """
    if not results:
        return ValidationResult(is_valid=True, sanitized_value=[])

    values = list(results)
    expected = expected_result_length(match)
    if len(values) != expected:
        return ValidationResult(
            is_valid=False,
            error_message=(
                f"Result vector must hold {expected} entries "
                f"for a {match.scoring_mode} match, got {len(values)}"
            ),
        )

    for value in values:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid result entry: {value!r}",
            )

    return ValidationResult(is_valid=True, sanitized_value=values)


def validate_result_vector_strict(
    match: "Match", results: Optional[Sequence[int]]
) -> ResultVector:
    """Validate a result vector and raise exception if invalid.

    Returns:
        The validated vector

    Raises:
        InvalidResultException: If the vector does not fit the match
    """
    result = validate_result_vector(match, results)
    if not result.is_valid:
        raise InvalidResultException(result.error_message)
    return result.sanitized_value
