"""Round management for competitions.

This module handles round creation for a segment: ordering participants for
pairing, dropping eliminated participants and grouping the rest into matches.
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

import random
from typing import List, Optional, Sequence

from bracketeer.exceptions import PhaseStateException
from bracketeer.models.competition import Match, Round, Segment
from bracketeer.pairing import (
    EliminationFilter,
    MatchHistory,
    PairingEngine,
    group_size_bounds,
)
from bracketeer.tournament.result_scorer import ResultScorer
from bracketeer.tournament.standings import StandingsRanker
from bracketeer.utils import setup_logger

logger = setup_logger(__name__)


class RoundManager:
    """Creates and removes the rounds of a segment.

    This class is responsible for:
    - Ordering active participants before pairing
    - Dropping participants eliminated under the segment's rule
    - Running the pairing engine and recording the new round
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        scorer: Optional[ResultScorer] = None,
        ranker: Optional[StandingsRanker] = None,
    ):
        """Initialize the round manager.

        Args:
            rng: Random source for shuffles and pairing tie-breaks
            scorer: Scorer used for loss counts
            ranker: Ranker used to order participants by standings
        """
        self.rng = rng or random.Random()
        self.scorer = scorer or ResultScorer()
        self.ranker = ranker or StandingsRanker(self.scorer)

    def order_for_pairing(
        self, segment: Segment, competition_rounds: Sequence[Round]
    ) -> None:
        """Reorder a segment's active participants in place.

        Seeded segments keep their bracket order. Without elimination the
        first round is shuffled and later rounds follow the standings. With
        elimination the first round is shuffled then sorted by standings,
        so ties are broken at random, and later rounds keep that order.
        """
        if segment.seeded:
            return

        first_round = segment.round_count == 0
        eliminating = segment.elimination_rule.is_eliminating
        active = segment.active_participants

        if first_round:
            self.rng.shuffle(active)
        if first_round == eliminating:
            active[:] = self.ranker.rank(active, _all_matches(competition_rounds))

    def create_next_round(
        self, segment: Segment, competition_rounds: Sequence[Round]
    ) -> Round:
        """Generate the next round of a segment.

        Args:
            segment: Segment the round belongs to
            competition_rounds: Every round of the competition so far

        Returns:
            The new round, already appended to the segment
        """
        round_number = len(competition_rounds) + 1

        self.order_for_pairing(segment, competition_rounds)
        entrants = tuple(segment.active_participants)

        history = MatchHistory.from_rounds(
            self.scorer, competition_rounds, segment.rounds
        )
        eligible = EliminationFilter(history).eligible(
            segment.active_participants, segment.elimination_rule
        )
        segment.active_participants[:] = eligible

        logger.info(
            f"Creating round {round_number} with {len(eligible)} eligible participants"
        )

        min_size, max_size = group_size_bounds(segment.scoring_mode)
        matches = PairingEngine(history, self.rng).pair(
            eligible,
            segment.pairing_discipline,
            min_size,
            max_size,
            segment.elimination_rule,
            segment.scoring_mode,
        )

        round_data = Round(
            round_number=round_number,
            pairing_discipline=segment.pairing_discipline,
            elimination_rule=segment.elimination_rule,
            scoring_mode=segment.scoring_mode,
            participants=tuple(eligible),
            matches=matches,
            entrants=entrants,
        )
        segment.rounds.append(round_data)
        return round_data

    def undo_last_round(self, segment: Segment) -> Round:
        """Remove the segment's most recent round.

        Participants the round's elimination step dropped become active
        again, in the order they entered the round. Participants enrolled
        or deactivated since then keep their current status.

        Raises:
            PhaseStateException: If the segment has no rounds
        """
        if not segment.rounds:
            raise PhaseStateException("Cannot undo: segment has no rounds")
        round_data = segment.remove_current_round()

        eliminated = round_data.eliminated
        if eliminated:
            active = segment.active_participants
            restored = [
                p for p in round_data.entrants if p in active or p in eliminated
            ]
            active[:] = restored + [p for p in active if p not in restored]
            logger.info(
                f"Restored {len(eliminated)} participant(s) eliminated "
                f"in round {round_data.round_number}"
            )

        logger.info(f"Removed round {round_data.round_number}")
        return round_data


def _all_matches(rounds: Sequence[Round]) -> List[Match]:
    return [match for round_data in rounds for match in round_data.matches]
