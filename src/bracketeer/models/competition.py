"""Match, round and segment data models.

A competition is split into segments (regulation and playoff phases); each
segment holds its rounds, and each round holds the matches it was paired into.
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

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from bracketeer.constants import BYE_RESULT
from bracketeer.exceptions import (
    ParticipantNotFoundException,
    ParticipantStateException,
    PhaseStateException,
    ResultNotFoundException,
)
from bracketeer.models.enums import EliminationRule, PairingDiscipline, ScoringMode
from bracketeer.participant import Participant
from bracketeer.type_hints import ResultVector


class Match:
    """A group of one to four participants and their raw result vector.

    A one-participant head-to-head match is a bye and is scored at creation.
    """

    def __init__(
        self, participants: Iterable[Participant], scoring_mode: ScoringMode
    ) -> None:
        self.participants: List[Participant] = list(participants)
        self.scoring_mode = scoring_mode
        self.results: ResultVector = []

        if self.has_fixed_result:
            self.results = list(BYE_RESULT)

    @property
    def participant_count(self) -> int:
        return len(self.participants)

    @property
    def is_bye(self) -> bool:
        return len(self.participants) == 1

    @property
    def has_results(self) -> bool:
        return len(self.results) > 0

    @property
    def has_fixed_result(self) -> bool:
        """True for a head-to-head bye, whose result is set at creation."""
        return self.is_bye and self.scoring_mode is ScoringMode.HEAD_TO_HEAD

    def contains(self, participant: Participant) -> bool:
        return participant in self.participants

    def index_of(self, participant: Participant) -> int:
        """Seat of a participant in this match.

        Raises:
            ParticipantNotFoundException: If the participant is not in the match
        """
        try:
            return self.participants.index(participant)
        except ValueError:
            raise ParticipantNotFoundException(
                f"{participant} was not in this match"
            ) from None

    def opponents_of(self, participant: Participant) -> List[Participant]:
        """All other participants in this match.

        Raises:
            ParticipantNotFoundException: If the participant is not in the match
        """
        self.index_of(participant)
        return [p for p in self.participants if p != participant]

    def result_for(self, participant: Participant) -> int:
        """Raw result entry at the participant's seat.

        Raises:
            ParticipantNotFoundException: If the participant is not in the match
            ResultNotFoundException: If the match has no results
        """
        index = self.index_of(participant)
        if not self.has_results:
            raise ResultNotFoundException("Match does not have results")
        return self.results[index]

    def __repr__(self) -> str:
        names = ", ".join(p.name for p in self.participants)
        return f"Match([{names}], results={self.results})"


@dataclass
class Round:
    """All data for a single round.

    Attributes:
        round_number: Competition-wide round number (1-indexed)
        pairing_discipline: Discipline used to pair this round
        elimination_rule: Elimination rule in force for this round
        scoring_mode: Scoring mode of the round's matches
        participants: Participants eligible for this round, in pairing order
        matches: Matches generated for this round, in order
        entrants: Active participants before elimination, in pairing order
    """

    round_number: int
    pairing_discipline: PairingDiscipline
    elimination_rule: EliminationRule
    scoring_mode: ScoringMode
    participants: Tuple[Participant, ...] = ()
    matches: List[Match] = field(default_factory=list)
    entrants: Tuple[Participant, ...] = ()

    @property
    def has_matches(self) -> bool:
        return bool(self.matches)

    @property
    def match_count(self) -> int:
        return len(self.matches)

    @property
    def bye_count(self) -> int:
        return sum(1 for match in self.matches if match.is_bye)

    @property
    def outstanding_result_count(self) -> int:
        """Number of matches still waiting for a result."""
        return sum(1 for match in self.matches if not match.has_results)

    @property
    def is_completed(self) -> bool:
        return self.has_matches and self.outstanding_result_count == 0

    @property
    def eliminated(self) -> List[Participant]:
        """Entrants the elimination filter dropped before pairing."""
        return [p for p in self.entrants if p not in self.participants]

    def match_for(self, participant: Participant) -> Optional[Match]:
        for match in self.matches:
            if match.contains(participant):
                return match
        return None

    def participant_has_match(self, participant: Participant) -> bool:
        return self.match_for(participant) is not None


@dataclass
class Segment:
    """A phase of the competition (regulation or playoff).

    Attributes:
        elimination_rule: Elimination rule for every round of the phase
        pairing_discipline: Pairing discipline for every round of the phase
        scoring_mode: Scoring mode for every round of the phase
        participants: Participants admitted to the phase
        active_participants: Admitted participants still in play, in pairing order
        seeded: True when the order is a fixed bracket seeding
        rounds: Rounds of the phase, in order
    """

    elimination_rule: EliminationRule
    pairing_discipline: PairingDiscipline
    scoring_mode: ScoringMode
    participants: List[Participant] = field(default_factory=list)
    active_participants: List[Participant] = field(default_factory=list)
    seeded: bool = False
    rounds: List[Round] = field(default_factory=list)

    @classmethod
    def start(
        cls,
        participants: Iterable[Participant],
        elimination_rule: EliminationRule,
        pairing_discipline: PairingDiscipline,
        scoring_mode: ScoringMode,
        seeded: bool = False,
    ) -> "Segment":
        """Create a phase with every admitted participant active."""
        admitted = list(participants)
        return cls(
            elimination_rule=elimination_rule,
            pairing_discipline=pairing_discipline,
            scoring_mode=scoring_mode,
            participants=admitted,
            active_participants=list(admitted),
            seeded=seeded,
        )

    @property
    def round_count(self) -> int:
        return len(self.rounds)

    @property
    def current_round(self) -> Round:
        """Most recent round of the phase.

        Raises:
            PhaseStateException: If the phase has no rounds yet
        """
        if not self.rounds:
            raise PhaseStateException("Segment has not begun yet")
        return self.rounds[-1]

    def is_active(self, participant: Participant) -> bool:
        return participant in self.active_participants

    def deactivate(self, participant: Participant) -> None:
        if participant not in self.active_participants:
            raise ParticipantStateException(f"{participant} is already inactive")
        self.active_participants.remove(participant)

    def reactivate(self, participant: Participant) -> None:
        if participant in self.active_participants:
            raise ParticipantStateException(f"{participant} is already active")
        if participant not in self.participants:
            raise ParticipantStateException(
                f"{participant} is not involved in this segment"
            )
        self.active_participants.append(participant)

    def remove_current_round(self) -> Round:
        if not self.rounds:
            raise PhaseStateException("Segment has not begun yet")
        return self.rounds.pop()
