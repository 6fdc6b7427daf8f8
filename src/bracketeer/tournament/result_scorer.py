"""Match and game point accounting.

Converts a match's raw result vector into match points and game points for
one of its participants, under the match's scoring mode.
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

from typing import NamedTuple

from bracketeer.constants import (
    BYE_GAME_POINTS,
    BYE_MATCH_POINTS,
    BYE_RESULT,
    DRAWS_INDEX,
    GAME_WIN_POINTS,
    MATCH_DRAW_POINTS,
    MATCH_LOSS_POINTS,
    MATCH_WIN_POINTS,
    PLACEMENT_GAMES_PER_MATCH,
    PLACEMENT_POINTS,
    PLACEMENT_UNRANKED_POINTS,
)
from bracketeer.exceptions import ResultNotFoundException
from bracketeer.models import ScoringMode
from bracketeer.models.competition import Match
from bracketeer.participant import Participant


class MatchPoints(NamedTuple):
    """Points a participant earned from one match."""

    match_points: int
    game_points: int


class ResultScorer:
    """Scores matches for individual participants.

    Head-to-head vectors are ``(wins of seat 0, wins of seat 1, draws)``.
    Placement-group vectors hold one finishing position per seat.
    """

    def points(self, participant: Participant, match: Match) -> MatchPoints:
        """Match and game points earned by a participant in a match.

        Args:
            participant: A participant seated in the match
            match: A scored match

        Returns:
            MatchPoints for the participant

        Raises:
            ResultNotFoundException: If the match has no results
            ParticipantNotFoundException: If the participant is not in the match
        """
        seat = match.index_of(participant)
        if not match.has_results:
            raise ResultNotFoundException(f"Match {match!r} does not have results")

        if match.scoring_mode is ScoringMode.PLACEMENT_GROUP:
            points = PLACEMENT_POINTS.get(
                match.result_for(participant), PLACEMENT_UNRANKED_POINTS
            )
            return MatchPoints(points, points)

        return self._head_to_head_points(match, seat)

    def match_points(self, participant: Participant, match: Match) -> int:
        return self.points(participant, match).match_points

    def game_points(self, participant: Participant, match: Match) -> int:
        return self.points(participant, match).game_points

    def games_played(self, match: Match) -> int:
        """Number of games a match counts for.

        A placement-group match is one game whatever its size; a head-to-head
        match counts every game won by either side plus draws. Unscored
        matches count zero.
        """
        if not match.has_results:
            return 0
        if match.scoring_mode is ScoringMode.PLACEMENT_GROUP:
            return PLACEMENT_GAMES_PER_MATCH
        return sum(match.results)

    def is_loss(self, participant: Participant, match: Match) -> bool:
        """True when a scored match gave the participant no match points."""
        if not match.has_results:
            return False
        return self.match_points(participant, match) == MATCH_LOSS_POINTS

    def _head_to_head_points(self, match: Match, seat: int) -> MatchPoints:
        wins = match.results[seat]

        if match.is_bye:
            match_points = BYE_MATCH_POINTS if wins == BYE_RESULT[0] else 0
            return MatchPoints(match_points, BYE_GAME_POINTS)

        losses = match.results[(seat + 1) % 2]
        draws = match.results[DRAWS_INDEX] if len(match.results) > DRAWS_INDEX else 0

        if wins > losses:
            match_points = MATCH_WIN_POINTS
        elif wins == losses:
            match_points = MATCH_DRAW_POINTS
        else:
            match_points = MATCH_LOSS_POINTS

        return MatchPoints(match_points, wins * GAME_WIN_POINTS + draws)
