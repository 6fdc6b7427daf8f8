"""Participant history queried while pairing a round."""

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

from collections import Counter
from dataclasses import dataclass, field
from itertools import combinations
from typing import TYPE_CHECKING, Iterable, Protocol, Set

from bracketeer.models.competition import Round
from bracketeer.participant import Participant
from bracketeer.type_hints import MeetingKey, ParticipantId

if TYPE_CHECKING:
    from bracketeer.tournament.result_scorer import ResultScorer


class ParticipantHistory(Protocol):
    """Questions the pairing engine and elimination filter ask about history."""

    def has_played(self, first: Participant, second: Participant) -> bool: ...

    def has_had_bye(self, participant: Participant) -> bool: ...

    def loss_count(self, participant: Participant) -> int: ...


@dataclass
class MatchHistory:
    """Snapshot of meetings, byes and losses taken from round history.

    Attributes
    ----------
    previous_meetings : set of frozenset of str
        Participant id pairs who have shared a match anywhere in the competition.
    bye_recipients : set of str
        Ids of participants who have sat alone in a match.
    losses : Counter of str
        Losses per participant id, counted in eliminating rounds of the
        current segment only.
    """

    previous_meetings: Set[MeetingKey] = field(default_factory=set)
    bye_recipients: Set[ParticipantId] = field(default_factory=set)
    losses: Counter = field(default_factory=Counter)

    @classmethod
    def from_rounds(
        cls,
        scorer: "ResultScorer",
        competition_rounds: Iterable[Round],
        segment_rounds: Iterable[Round] = (),
    ) -> "MatchHistory":
        """Build a history snapshot.

        Args:
            scorer: Scorer used to detect losses
            competition_rounds: Every round of the competition, for meetings and byes
            segment_rounds: Rounds of the current segment, for loss counts
        """
        history = cls()

        for round_data in competition_rounds:
            for match in round_data.matches:
                if match.is_bye:
                    history.record_bye(match.participants[0])
                for first, second in combinations(match.participants, 2):
                    history.add_meeting(first, second)

        for round_data in segment_rounds:
            if not round_data.elimination_rule.is_eliminating:
                continue
            for match in round_data.matches:
                for participant in match.participants:
                    if scorer.is_loss(participant, match):
                        history.losses[participant.id] += 1

        return history

    def add_meeting(self, first: Participant, second: Participant) -> None:
        """Record that two participants have shared a match."""
        self.previous_meetings.add(frozenset({first.id, second.id}))

    def record_bye(self, participant: Participant) -> None:
        self.bye_recipients.add(participant.id)

    def has_played(self, first: Participant, second: Participant) -> bool:
        """Check if two participants have previously shared a match."""
        return frozenset({first.id, second.id}) in self.previous_meetings

    def has_had_bye(self, participant: Participant) -> bool:
        return participant.id in self.bye_recipients

    def loss_count(self, participant: Participant) -> int:
        return self.losses[participant.id]
