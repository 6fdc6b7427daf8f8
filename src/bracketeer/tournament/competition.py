"""Main Competition class - orchestrates all competition operations.

This is the primary interface for competition management, coordinating the
round manager, result recorder and standings ranker behind one API.
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

import math
import random
from typing import Dict, Iterable, List, Optional, Sequence

from bracketeer.exceptions import (
    CompetitionStateException,
    DuplicateParticipantException,
    InvalidCutException,
    ParticipantNotFoundException,
    PhaseStateException,
    RoundNotFoundException,
    RoundStateException,
)
from bracketeer.models import (
    EliminationRule,
    PairingDiscipline,
    ParticipantStatus,
    ScoringMode,
)
from bracketeer.models.competition import Match, Round, Segment
from bracketeer.pairing import BracketSeeder, MatchHistory
from bracketeer.pairing.bracket_seeding import is_power_of_two
from bracketeer.participant import Participant
from bracketeer.tournament.models import CompetitionConfig
from bracketeer.tournament.result_recorder import ResultRecorder
from bracketeer.tournament.result_scorer import ResultScorer
from bracketeer.tournament.round_manager import RoundManager
from bracketeer.tournament.standings import StandingsEntry, StandingsRanker
from bracketeer.type_hints import ParticipantId
from bracketeer.utils import setup_logger

logger = setup_logger(__name__)

REGULATION = 0
PLAYOFF = 1


class Competition:
    """Main competition management class.

    This class coordinates all competition operations through specialized managers:
    - RoundManager: orders, filters and pairs participants for each round
    - ResultRecorder: validates and stores match results
    - StandingsRanker: aggregates results and applies the tiebreak cascade

    A competition runs a regulation phase and, optionally, a playoff phase.
    Participants carry no reference back to the competition; every derived
    figure is computed here from the match history.
    """

    def __init__(
        self,
        name: str,
        participants: Optional[Iterable[Participant]] = None,
        elimination_rule: EliminationRule = EliminationRule.NONE,
        pairing_discipline: PairingDiscipline = PairingDiscipline.SWISS,
        scoring_mode: ScoringMode = ScoringMode.HEAD_TO_HEAD,
        random_seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """Initialize a new competition.

        Args
        ----
        name: Competition name
        participants: Participants to enroll, in enrollment order
        elimination_rule: Elimination rule of the regulation phase
        pairing_discipline: Pairing discipline of the regulation phase
        scoring_mode: How match results are scored
        random_seed: Seed for the competition's random source
        rng: Random source to use instead of a seeded one
        """
        # Configuration
        self.config = CompetitionConfig(
            name=name,
            elimination_rule=elimination_rule,
            pairing_discipline=pairing_discipline,
            scoring_mode=scoring_mode,
            random_seed=random_seed,
        )
        self.rng = rng or random.Random(random_seed)

        # Participants, in enrollment order
        self._participants: Dict[ParticipantId, Participant] = {}

        # Phases: regulation first, then playoff
        self.segments: List[Segment] = []

        # Specialized managers
        self.scorer = ResultScorer()
        self.ranker = StandingsRanker(self.scorer)
        self.round_manager = RoundManager(self.rng, self.scorer, self.ranker)
        self.result_recorder = ResultRecorder()

        for participant in participants or ():
            self.add_participant(participant)

    @classmethod
    def from_config(
        cls,
        config: CompetitionConfig,
        participants: Optional[Iterable[Participant]] = None,
        rng: Optional[random.Random] = None,
    ) -> "Competition":
        """Create a competition from a configuration object."""
        return cls(
            name=config.name,
            participants=participants,
            elimination_rule=config.elimination_rule,
            pairing_discipline=config.pairing_discipline,
            scoring_mode=config.scoring_mode,
            random_seed=config.random_seed,
            rng=rng,
        )

    # ========== Properties ==========

    @property
    def name(self) -> str:
        """Get competition name."""
        return self.config.name

    @name.setter
    def name(self, value: str) -> None:
        """Set competition name."""
        self.config.name = value

    @property
    def elimination_rule(self) -> EliminationRule:
        return self.config.elimination_rule

    @elimination_rule.setter
    def elimination_rule(self, value: EliminationRule) -> None:
        self._require_not_started("elimination rule")
        self.config.elimination_rule = value

    @property
    def pairing_discipline(self) -> PairingDiscipline:
        return self.config.pairing_discipline

    @pairing_discipline.setter
    def pairing_discipline(self, value: PairingDiscipline) -> None:
        self._require_not_started("pairing discipline")
        self.config.pairing_discipline = value

    @property
    def scoring_mode(self) -> ScoringMode:
        return self.config.scoring_mode

    @scoring_mode.setter
    def scoring_mode(self, value: ScoringMode) -> None:
        self._require_not_started("scoring mode")
        self.config.scoring_mode = value

    def _require_not_started(self, setting: str) -> None:
        if self.has_started:
            raise CompetitionStateException(
                f"Cannot change the {setting} after the competition has started"
            )

    # ========== Participant Management ==========

    @property
    def participants(self) -> List[Participant]:
        """Enrolled participants ordered by last name, then first name."""
        return sorted(self._participants.values(), key=Participant.alphabetical_key)

    @property
    def participant_count(self) -> int:
        return len(self._participants)

    def add_participant(self, participant: Participant) -> None:
        """Enroll a participant.

        A participant enrolled after the regulation phase has begun joins
        that phase as active, and the roster of its current round.

        Raises:
            DuplicateParticipantException: If the id is already enrolled
            PhaseStateException: If the playoff phase has begun
        """
        if participant.id in self._participants:
            raise DuplicateParticipantException(
                f"Participant {participant.id} is already enrolled"
            )
        if len(self.segments) > 1:
            raise PhaseStateException("Cannot enroll after playoffs have begun")

        self._participants[participant.id] = participant

        if self.segments:
            regulation = self.segments[REGULATION]
            regulation.participants.append(participant)
            regulation.active_participants.append(participant)
            if regulation.rounds:
                current = regulation.current_round
                current.participants = current.participants + (participant,)

        logger.info(f"Enrolled {participant.name} in {self.name}")

    def remove_participant(self, participant: Participant) -> None:
        """Withdraw a participant; matches already played keep their record.

        Raises:
            ParticipantNotFoundException: If the participant is not enrolled
        """
        self._require_participant(participant)
        del self._participants[participant.id]
        for segment in self.segments:
            if segment.is_active(participant):
                segment.active_participants.remove(participant)
        logger.info(f"Removed {participant.name} from {self.name}")

    def get_participant(self, participant_id: ParticipantId) -> Participant:
        """Look up an enrolled participant by id.

        Raises:
            ParticipantNotFoundException: If no participant has that id
        """
        try:
            return self._participants[participant_id]
        except KeyError:
            raise ParticipantNotFoundException(
                f"No participant with id {participant_id}"
            ) from None

    def is_participant(self, participant: Participant) -> bool:
        return participant.id in self._participants

    def _require_participant(self, *participants: Participant) -> None:
        for participant in participants:
            if not self.is_participant(participant):
                raise ParticipantNotFoundException(
                    f"{participant} is not enrolled in {self.name}"
                )

    # ========== Participant Status ==========

    def deactivate_participant(self, participant: Participant) -> None:
        """Remove a participant from contention in the current phase.

        Raises:
            ParticipantNotFoundException: If the participant is not enrolled
            PhaseStateException: If no phase has begun
            ParticipantStateException: If the participant is already inactive
        """
        self._require_participant(participant)
        self._require_current_segment().deactivate(participant)
        logger.info(f"Deactivated {participant.name}")

    def reactivate_participant(self, participant: Participant) -> None:
        """Return a participant to contention in the current phase.

        Raises:
            ParticipantNotFoundException: If the participant is not enrolled
            PhaseStateException: If no phase has begun
            ParticipantStateException: If the participant is already active
                or was not admitted to the current phase
        """
        self._require_participant(participant)
        self._require_current_segment().reactivate(participant)
        logger.info(f"Reactivated {participant.name}")

    def participant_status(self, participant: Participant) -> ParticipantStatus:
        """Active until the current phase drops or deactivates the participant."""
        self._require_participant(participant)
        segment = self.current_segment
        if segment is None or segment.is_active(participant):
            return ParticipantStatus.ACTIVE
        return ParticipantStatus.INACTIVE

    @property
    def active_participants(self) -> List[Participant]:
        segment = self.current_segment
        if segment is None:
            return list(self._participants.values())
        return list(segment.active_participants)

    # ========== Phases ==========

    @property
    def has_started(self) -> bool:
        return bool(self.segments)

    @property
    def current_segment(self) -> Optional[Segment]:
        return self.segments[-1] if self.segments else None

    @property
    def regulation_segment(self) -> Segment:
        """The regulation phase.

        Raises:
            PhaseStateException: If regulation play has not begun
        """
        if not self.segments:
            raise PhaseStateException("Regulation play has not begun")
        return self.segments[REGULATION]

    @property
    def playoff_segment(self) -> Segment:
        """The playoff phase.

        Raises:
            PhaseStateException: If playoff play has not begun
        """
        if len(self.segments) <= PLAYOFF:
            raise PhaseStateException("Playoff play has not begun")
        return self.segments[PLAYOFF]

    @property
    def playoffs_started(self) -> bool:
        return len(self.segments) > PLAYOFF

    def _require_current_segment(self) -> Segment:
        segment = self.current_segment
        if segment is None:
            raise PhaseStateException(f"{self.name} has not begun")
        return segment

    def create_regulation_phase(self) -> Segment:
        """Start regulation play with every enrolled participant.

        Raises:
            PhaseStateException: If the competition has already begun
        """
        if self.segments:
            raise PhaseStateException(
                "Competition has begun. Cannot start regulation play a second time"
            )

        segment = Segment.start(
            self._participants.values(),
            self.elimination_rule,
            self.pairing_discipline,
            self.scoring_mode,
        )
        self.segments.append(segment)
        logger.info(
            f"Started regulation play of {self.name} with "
            f"{len(segment.participants)} participants"
        )
        return segment

    def create_playoff_phase(
        self,
        cut: Optional[int] = None,
        elimination_rule: EliminationRule = EliminationRule.SINGLE,
        pairing_discipline: PairingDiscipline = PairingDiscipline.NONE,
    ) -> Segment:
        """Start playoff play.

        Args:
            cut: Number of top-ranked participants to keep, seeded into a
                bracket; None keeps every active participant, unseeded
            elimination_rule: Elimination rule of the playoff phase
            pairing_discipline: Pairing discipline of the playoff phase

        Returns:
            The playoff segment

        Raises:
            PhaseStateException: If regulation play has not begun or
                playoffs already exist
            InvalidCutException: If the cut is not a power of two of at
                least 2, or exceeds the number of participants
        """
        if not self.segments:
            raise PhaseStateException(
                "Competition has not begun. Cannot start playoffs"
            )
        if self.playoffs_started:
            raise PhaseStateException(
                "Playoff play has begun. Cannot start playoff play a second time"
            )

        if cut is None:
            admitted = list(self.regulation_segment.active_participants)
            seeded = False
        else:
            if cut < 2 or not is_power_of_two(cut):
                raise InvalidCutException(
                    f"Cut size must be a power of two, got {cut}"
                )
            if cut > self.participant_count:
                raise InvalidCutException(
                    f"Cut of {cut} exceeds the {self.participant_count} participants"
                )
            admitted = BracketSeeder().seed(self.standings()[:cut])
            seeded = True

        segment = Segment.start(
            admitted,
            elimination_rule,
            pairing_discipline,
            self.scoring_mode,
            seeded=seeded,
        )
        self.segments.append(segment)
        logger.info(
            f"Started playoff play of {self.name} with {len(admitted)} participants "
            f"({elimination_rule} elimination, {'seeded' if seeded else 'unseeded'})"
        )
        return segment

    # ========== Rounds ==========

    @property
    def rounds(self) -> List[Round]:
        """Every round of the competition, in order."""
        return [
            round_data for segment in self.segments for round_data in segment.rounds
        ]

    @property
    def round_count(self) -> int:
        return sum(segment.round_count for segment in self.segments)

    @property
    def current_round(self) -> Round:
        """The most recent round.

        Raises:
            RoundNotFoundException: If no round exists yet
        """
        rounds = self.rounds
        if not rounds:
            raise RoundNotFoundException("No rounds have been created")
        return rounds[-1]

    def get_round(self, round_number: int) -> Round:
        """Get a round by competition-wide number (1-indexed).

        Raises:
            RoundNotFoundException: If the round does not exist
        """
        rounds = self.rounds
        if not 1 <= round_number <= len(rounds):
            raise RoundNotFoundException(
                f"Round {round_number} is outside of 1..{len(rounds)}"
            )
        return rounds[round_number - 1]

    def create_next_round(self) -> Round:
        """Order, filter and pair the current phase's next round.

        Raises:
            PhaseStateException: If no phase has begun
            RoundStateException: If the current round still awaits results
        """
        segment = self._require_current_segment()
        rounds = self.rounds
        if rounds and rounds[-1].outstanding_result_count:
            raise RoundStateException(
                f"Round {rounds[-1].round_number} still has "
                f"{rounds[-1].outstanding_result_count} outstanding result(s)"
            )
        return self.round_manager.create_next_round(segment, rounds)

    def remove_current_round(self) -> Round:
        """Undo the most recent round.

        Participants eliminated when the round was created are active again,
        so correcting an earlier result before recreating the round changes
        who is eliminated. A phase left without rounds is removed as well.

        Raises:
            PhaseStateException: If no phase has begun or it has no rounds
        """
        segment = self._require_current_segment()
        round_data = self.round_manager.undo_last_round(segment)
        segment.active_participants[:] = [
            p for p in segment.active_participants if self.is_participant(p)
        ]
        if segment.round_count == 0:
            self.segments.pop()
            logger.info(f"Removed empty phase from {self.name}")
        return round_data

    def matches_for_round(self, round_number: int) -> List[Match]:
        return list(self.get_round(round_number).matches)

    def match_for_participant(
        self, participant: Participant, round_number: int
    ) -> Optional[Match]:
        """The participant's match in a round, or None if they sat out."""
        self._require_participant(participant)
        return self.get_round(round_number).match_for(participant)

    @property
    def completed_round_count(self) -> int:
        return sum(1 for round_data in self.rounds if round_data.is_completed)

    @property
    def outstanding_result_count(self) -> int:
        """Matches of the current round still waiting for a result."""
        rounds = self.rounds
        if not rounds:
            return 0
        return rounds[-1].outstanding_result_count

    @property
    def suggested_round_count(self) -> int:
        """Rounds needed to find a winner.

        ceil(log2(n)) for n participants, doubled under double elimination.

        Once playoffs exist the playoff suggestion is added to the rounds
        already played in regulation.
        """
        if self.playoffs_started:
            playoff = self.playoff_segment
            return (
                _suggested_rounds(len(playoff.participants), playoff.elimination_rule)
                + self.regulation_segment.round_count
            )
        if self.segments:
            regulation = self.regulation_segment
            return _suggested_rounds(
                len(regulation.participants), regulation.elimination_rule
            )
        return _suggested_rounds(self.participant_count, self.elimination_rule)

    # ========== Results ==========

    def record_result(
        self, round_number: int, match_index: int, results: Sequence[int]
    ) -> Match:
        """Record the raw result vector of a match.

        Raises:
            RoundNotFoundException: If the round does not exist
            MatchNotFoundException: If the round has no match at that index
            InvalidResultException: If the vector does not fit the match
        """
        round_data = self.get_round(round_number)
        return self.result_recorder.record_result(round_data, match_index, results)

    def clear_result(self, round_number: int, match_index: int) -> Match:
        round_data = self.get_round(round_number)
        return self.result_recorder.clear_result(round_data, match_index)

    # ========== Participant Queries ==========

    def matches_of(self, participant: Participant) -> List[Match]:
        """Every match the participant has been seated in, in round order."""
        self._require_participant(participant)
        return [
            match
            for round_data in self.rounds
            for match in round_data.matches
            if match.contains(participant)
        ]

    def _scored_matches_of(self, participant: Participant) -> List[Match]:
        return [match for match in self.matches_of(participant) if match.has_results]

    def match_points(self, participant: Participant) -> int:
        return sum(
            self.scorer.match_points(participant, match)
            for match in self._scored_matches_of(participant)
        )

    def match_points_at_round(self, participant: Participant, round_number: int) -> int:
        """Match points accumulated over rounds 1..round_number.

        Raises:
            RoundNotFoundException: If the round does not exist
        """
        self._require_participant(participant)
        self.get_round(round_number)
        total = 0
        for round_data in self.rounds[:round_number]:
            match = round_data.match_for(participant)
            if match is not None and match.has_results:
                total += self.scorer.match_points(participant, match)
        return total

    def game_points(self, participant: Participant) -> int:
        return sum(
            self.scorer.game_points(participant, match)
            for match in self._scored_matches_of(participant)
        )

    def games_played(self, participant: Participant) -> int:
        return sum(
            self.scorer.games_played(match)
            for match in self._scored_matches_of(participant)
        )

    def loss_count(self, participant: Participant) -> int:
        """Losses in eliminating rounds of the current phase."""
        self._require_participant(participant)
        segment = self.current_segment
        if segment is None:
            return 0
        history = MatchHistory.from_rounds(self.scorer, (), segment.rounds)
        return history.loss_count(participant)

    def has_played(self, first: Participant, second: Participant) -> bool:
        self._require_participant(first, second)
        history = MatchHistory.from_rounds(self.scorer, self.rounds)
        return history.has_played(first, second)

    def has_had_bye(self, participant: Participant) -> bool:
        self._require_participant(participant)
        history = MatchHistory.from_rounds(self.scorer, self.rounds)
        return history.has_had_bye(participant)

    def opponents_of(self, participant: Participant) -> List[Participant]:
        """Opponents faced, one entry per match played against them."""
        return [
            opponent
            for match in self.matches_of(participant)
            for opponent in match.opponents_of(participant)
        ]

    # ========== Standings ==========

    def _all_matches(self) -> List[Match]:
        return [match for round_data in self.rounds for match in round_data.matches]

    def standings(self) -> List[Participant]:
        """Enrolled participants ranked best first.

        Participants tied on every tiebreak keep enrollment order.
        """
        return self.ranker.rank(list(self._participants.values()), self._all_matches())

    def standings_table(self) -> List[StandingsEntry]:
        """Standings rows with tiebreak values, best first."""
        return self.ranker.standings(
            list(self._participants.values()), self._all_matches()
        )

    def standing_of(self, participant: Participant) -> int:
        """1-based standings position of a participant."""
        self._require_participant(participant)
        return self.standings().index(participant) + 1

    def __repr__(self) -> str:
        return (
            f"Competition(name='{self.name}', participants={self.participant_count}, "
            f"rounds={self.round_count})"
        )


def _suggested_rounds(participant_count: int, elimination_rule: EliminationRule) -> int:
    if participant_count < 2:
        return 0
    suggested = math.ceil(math.log2(participant_count))
    if elimination_rule is EliminationRule.DOUBLE:
        suggested *= 2
    return suggested
