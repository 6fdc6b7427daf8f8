"""Group formation for a single round.

The engine walks an ordered list of participants into a chain of groups,
then repairs the tail of the chain so every group respects the size bounds
and forced byes land on participants who can take them.
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
from typing import List, Optional, Set

from bracketeer.constants import GROUP_SIZE_BOUNDS
from bracketeer.models import EliminationRule, PairingDiscipline, ScoringMode
from bracketeer.models.competition import Match
from bracketeer.pairing.history import ParticipantHistory
from bracketeer.participant import Participant
from bracketeer.type_hints import GroupBounds, GroupChain, Participants, ParticipantId
from bracketeer.utils import setup_logger

logger = setup_logger(__name__)


def group_size_bounds(scoring_mode: ScoringMode) -> GroupBounds:
    """(minimum, maximum) participants per match for a scoring mode."""
    return GROUP_SIZE_BOUNDS[scoring_mode]


class PairingChain:
    """An ordered chain of pairing groups addressed by index.

    Group ``i - 1`` is the predecessor of group ``i``; groups are created on
    demand when a participant is pushed past the end of the chain.
    """

    def __init__(
        self,
        history: ParticipantHistory,
        discipline: PairingDiscipline,
        min_group_size: int,
        max_group_size: int,
        rng: random.Random,
    ) -> None:
        self.history = history
        self.discipline = discipline
        self.min_group_size = min_group_size
        self.max_group_size = max_group_size
        self.rng = rng
        self.groups: GroupChain = [[]]

    def __len__(self) -> int:
        return len(self.groups)

    # ========== Insertion ==========

    def insert(self, participant: Participant, start: int = 0) -> int:
        """Place a participant in the first group from ``start`` that takes them.

        Returns:
            Index of the receiving group
        """
        index = start
        while True:
            if index == len(self.groups):
                self.groups.append([])
            if self._accepts(self.groups[index], participant):
                self.groups[index].append(participant)
                return index
            index += 1

    def _accepts(self, group: List[Participant], participant: Participant) -> bool:
        if len(group) >= self.max_group_size:
            return False
        if self.discipline.avoids_rematches:
            return not any(
                self.history.has_played(participant, occupant) for occupant in group
            )
        return True

    # ========== Cleanup ==========

    def cleanup(self) -> None:
        """Repair groups from the tail of the chain back to the head."""
        for index in reversed(range(len(self.groups))):
            if self.max_group_size > 2:
                self._fill_from_predecessor(index)
            else:
                self._resolve_bye(index)

        self.groups = [group for group in self.groups if group]

    def _fill_from_predecessor(self, index: int) -> None:
        if index == 0:
            return
        group = self.groups[index]
        previous = self.groups[index - 1]
        while len(group) < self.min_group_size and len(previous) > self.min_group_size:
            group.append(previous.pop())

    def _resolve_bye(self, index: int) -> None:
        """Find an opponent for a lone participant who should not sit out.

        A lone participant is moved when they have already had a bye or when
        the preceding group is also a lone participant. Each participant is
        offered to the earlier groups at most once per group being repaired.
        """
        group = self.groups[index]
        tried: Set[ParticipantId] = set()

        while len(group) == 1:
            candidate = group[0]
            predecessor_alone = index > 0 and len(self.groups[index - 1]) == 1
            if not (self.history.has_had_bye(candidate) or predecessor_alone):
                return

            if index > 0 and candidate.id not in tried:
                tried.add(candidate.id)
                group.remove(candidate)
                if self.find_new_opponent(candidate, index - 1):
                    continue
                group.append(candidate)

            if predecessor_alone:
                # Two byes in a row: pair them even if they have met before
                previous = self.groups[index - 1]
                if self.history.has_played(candidate, previous[0]):
                    logger.warning(
                        f"Accepting rematch between {previous[0].name} "
                        f"and {candidate.name}"
                    )
                previous.append(group.pop())
            else:
                logger.warning(f"Accepting repeat bye for {candidate.name}")
            return

    def find_new_opponent(self, candidate: Participant, index: int) -> bool:
        """Seat a candidate in the nearest earlier group that can take them.

        A full group swaps the candidate in beside an occupant they have not
        played, in a random order, and the displaced occupant is reinserted
        from that group onwards. A group at minimum size takes the candidate
        only if that creates no rematch.

        Returns:
            True when the candidate was seated
        """
        for position in range(index, -1, -1):
            group = self.groups[position]

            if len(group) > self.min_group_size and len(group) >= 2:
                first, second = group[0], group[1]
                options = [(first, second), (second, first)]
                if self.rng.randrange(2):
                    options.reverse()

                for kept, displaced in options:
                    if not self.history.has_played(candidate, kept):
                        logger.debug(
                            f"Seating {candidate.name} with {kept.name}, "
                            f"displacing {displaced.name}"
                        )
                        group.remove(displaced)
                        group.append(candidate)
                        self.insert(displaced, position)
                        return True

            elif (
                len(group) == self.min_group_size
                and len(group) < self.max_group_size
                and not any(
                    self.history.has_played(candidate, occupant) for occupant in group
                )
            ):
                group.append(candidate)
                return True

        return False


class PairingEngine:
    """Groups ordered participants into the matches of a round."""

    def __init__(
        self, history: ParticipantHistory, rng: Optional[random.Random] = None
    ) -> None:
        self.history = history
        self.rng = rng or random.Random()

    def pair(
        self,
        participants: Participants,
        discipline: PairingDiscipline,
        min_group_size: int,
        max_group_size: int,
        elimination_rule: EliminationRule,
        scoring_mode: ScoringMode,
    ) -> List[Match]:
        """Produce the matches of a round.

        Under double elimination with placement-group scoring, participants
        without a loss and participants with losses are grouped separately,
        winners first. Every other combination groups one pool.

        Args:
            participants: Eligible participants, already in pairing order
            discipline: Pairing discipline of the round
            min_group_size: Fewest participants a match may hold
            max_group_size: Most participants a match may hold
            elimination_rule: Elimination rule of the round
            scoring_mode: Scoring mode of the created matches

        Returns:
            Matches in order; every participant appears in exactly one
        """
        participants = list(participants)

        if (
            elimination_rule is EliminationRule.DOUBLE
            and scoring_mode is ScoringMode.PLACEMENT_GROUP
        ):
            winners = [p for p in participants if self.history.loss_count(p) == 0]
            losers = [p for p in participants if self.history.loss_count(p) > 0]
            pools = [winners, losers]
        else:
            pools = [participants]

        matches: List[Match] = []
        for pool in pools:
            if not pool:
                continue
            for group in self.group(pool, discipline, min_group_size, max_group_size):
                matches.append(Match(group, scoring_mode))

        logger.debug(
            f"Paired {len(participants)} participants into {len(matches)} matches"
        )
        return matches

    def group(
        self,
        participants: Participants,
        discipline: PairingDiscipline,
        min_group_size: int,
        max_group_size: int,
    ) -> GroupChain:
        """Run the grouping algorithm over one pool.

        Returns:
            Non-empty groups in chain order
        """
        chain = PairingChain(
            self.history, discipline, min_group_size, max_group_size, self.rng
        )
        for participant in participants:
            chain.insert(participant)
        chain.cleanup()
        return chain.groups
