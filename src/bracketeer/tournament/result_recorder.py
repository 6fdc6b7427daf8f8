"""Result recording and validation for competitions.

This module handles recording match results with proper validation and error checking.
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

from typing import Optional, Sequence

from bracketeer.exceptions import InvalidResultException, MatchNotFoundException
from bracketeer.models.competition import Match, Round
from bracketeer.utils import setup_logger
from bracketeer.utils.validation import validate_result_vector_strict

logger = setup_logger(__name__)


class ResultRecorder:
    """Handles recording and validating match results.

    This class is responsible for:
    - Validating result vectors against the match they are meant for
    - Storing results on matches
    - Clearing results so a match can be re-entered
    """

    def record_result(
        self, round_data: Round, match_index: int, results: Optional[Sequence[int]]
    ) -> Match:
        """Record the result vector of one match in a round.

        Args:
            round_data: Round holding the match
            match_index: Position of the match in the round (0-indexed)
            results: Raw result vector; empty clears the match

        Returns:
            The updated match

        Raises:
            MatchNotFoundException: If the round has no match at that index
            InvalidResultException: If the vector does not fit the match or the
                match is a head-to-head bye
        """
        match = self.get_match(round_data, match_index)

        if match.has_fixed_result:
            raise InvalidResultException("Bye results are assigned automatically")

        values = validate_result_vector_strict(match, results)
        if match.has_results and values:
            logger.warning(
                f"Round {round_data.round_number}: overwriting result of {match!r}"
            )

        match.results = values
        logger.debug(f"Recorded: {match!r} in round {round_data.round_number}")
        return match

    def clear_result(self, round_data: Round, match_index: int) -> Match:
        """Remove the results of a match.

        Raises:
            MatchNotFoundException: If the round has no match at that index
            InvalidResultException: If the match is a head-to-head bye
        """
        match = self.get_match(round_data, match_index)
        if match.has_fixed_result:
            raise InvalidResultException("Bye results cannot be cleared")
        match.results = []
        logger.debug(f"Cleared: {match!r} in round {round_data.round_number}")
        return match

    @staticmethod
    def get_match(round_data: Round, match_index: int) -> Match:
        if not 0 <= match_index < round_data.match_count:
            raise MatchNotFoundException(
                f"Round {round_data.round_number} has no match {match_index}"
            )
        return round_data.matches[match_index]
