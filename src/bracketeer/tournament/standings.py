"""Standings computation for competitions.

This module aggregates scored matches into per-participant records and
orders participants by the tiebreak cascade: match points, opponents'
match-win percentage, game-win percentage, opponents' game-win percentage.
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

import functools
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from bracketeer.constants import (
    GAME_WIN_POINTS,
    MATCH_WIN_POINTS,
    OPPONENT_PERCENTAGE_FLOOR,
    PERCENTAGE_TOLERANCE,
    TB_GAME_WIN,
    TB_MATCH_POINTS,
    TB_OPPONENTS_GAME_WIN,
    TB_OPPONENTS_MATCH_WIN,
    TIEBREAK_ORDER,
)
from bracketeer.models.competition import Match
from bracketeer.participant import Participant
from bracketeer.tournament.result_scorer import ResultScorer
from bracketeer.type_hints import ParticipantId
from bracketeer.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class ParticipantRecord:
    """Aggregated results of one participant over scored matches.

    Attributes:
        match_points: Total match points
        game_points: Total game points
        matches_played: Scored matches, byes included
        games_played: Games counted across scored matches
        opponents: One entry per opponent per scored match
    """

    match_points: int = 0
    game_points: int = 0
    matches_played: int = 0
    games_played: int = 0
    opponents: List[ParticipantId] = field(default_factory=list)

    @property
    def match_win_percentage(self) -> float:
        """Match points over the maximum available, floored for opponents' use."""
        if self.matches_played == 0:
            return OPPONENT_PERCENTAGE_FLOOR
        percentage = self.match_points / (self.matches_played * MATCH_WIN_POINTS)
        return max(percentage, OPPONENT_PERCENTAGE_FLOOR)

    @property
    def game_win_percentage(self) -> float:
        """Game points over the maximum available; 0 without games, never floored."""
        if self.games_played == 0:
            return 0.0
        return self.game_points / (self.games_played * GAME_WIN_POINTS)


@dataclass
class StandingsEntry:
    """A participant's row in the standings table."""

    rank: int
    participant: Participant
    match_points: int
    opponents_match_win_pct: float
    game_win_pct: float
    opponents_game_win_pct: float

    def tiebreak(self, key: str) -> float:
        return {
            TB_MATCH_POINTS: self.match_points,
            TB_OPPONENTS_MATCH_WIN: self.opponents_match_win_pct,
            TB_GAME_WIN: self.game_win_pct,
            TB_OPPONENTS_GAME_WIN: self.opponents_game_win_pct,
        }[key]


class StandingsRanker:
    """Ranks participants from their match history.

    Percentages compare with a small tolerance so that values which differ
    only by float rounding fall through to the next key. Sorting is stable:
    participants tied on every key keep their input order.
    """

    def __init__(self, scorer: Optional[ResultScorer] = None) -> None:
        self.scorer = scorer or ResultScorer()

    # ========== Aggregation ==========

    def compile_records(
        self, participants: Iterable[Participant], matches: Iterable[Match]
    ) -> Dict[ParticipantId, ParticipantRecord]:
        """Aggregate scored matches into one record per participant.

        Participants who only appear in matches get records as well, so
        opponents who have since left the competition still count.
        """
        records: Dict[ParticipantId, ParticipantRecord] = {
            participant.id: ParticipantRecord() for participant in participants
        }

        for match in matches:
            if not match.has_results:
                continue
            games = self.scorer.games_played(match)
            for participant in match.participants:
                record = records.setdefault(participant.id, ParticipantRecord())
                points = self.scorer.points(participant, match)
                record.match_points += points.match_points
                record.game_points += points.game_points
                record.matches_played += 1
                record.games_played += games
                record.opponents.extend(
                    opponent.id for opponent in match.opponents_of(participant)
                )

        return records

    def opponents_match_win_percentage(
        self, record: ParticipantRecord, records: Dict[ParticipantId, ParticipantRecord]
    ) -> float:
        """Average of each opponent's floored match-win percentage."""
        if not record.opponents:
            return 0.0
        total = sum(
            records[opponent].match_win_percentage for opponent in record.opponents
        )
        return total / len(record.opponents)

    def opponents_game_win_percentage(
        self, record: ParticipantRecord, records: Dict[ParticipantId, ParticipantRecord]
    ) -> float:
        """Average of each opponent's game-win percentage, floored per opponent."""
        if not record.opponents:
            return 0.0
        total = sum(
            max(records[opponent].game_win_percentage, OPPONENT_PERCENTAGE_FLOOR)
            for opponent in record.opponents
        )
        return total / len(record.opponents)

    # ========== Ranking ==========

    def standings(
        self, participants: Sequence[Participant], matches: Iterable[Match]
    ) -> List[StandingsEntry]:
        """Rank participants and return their standings rows.

        Args:
            participants: Everyone to rank, in tie-preserving order
            matches: Every match of the competition

        Returns:
            Standings rows, best first, with 1-based ranks
        """
        records = self.compile_records(participants, matches)

        entries = []
        for participant in participants:
            record = records[participant.id]
            entries.append(
                StandingsEntry(
                    rank=0,
                    participant=participant,
                    match_points=record.match_points,
                    opponents_match_win_pct=self.opponents_match_win_percentage(
                        record, records
                    ),
                    game_win_pct=record.game_win_percentage,
                    opponents_game_win_pct=self.opponents_game_win_percentage(
                        record, records
                    ),
                )
            )

        entries.sort(key=functools.cmp_to_key(self._compare_entries), reverse=True)
        for rank, entry in enumerate(entries, start=1):
            entry.rank = rank

        logger.debug(f"Ranked {len(entries)} participants")
        return entries

    def rank(
        self, participants: Sequence[Participant], matches: Iterable[Match]
    ) -> List[Participant]:
        """Participants ordered best first."""
        return [entry.participant for entry in self.standings(participants, matches)]

    def _compare_entries(self, e1: StandingsEntry, e2: StandingsEntry) -> int:
        """Compare two entries for standings order.

        Returns:
            1 if e1 ranks higher, -1 if e2 ranks higher, 0 if equal
        """
        for tb_key in TIEBREAK_ORDER:
            tb1 = e1.tiebreak(tb_key)
            tb2 = e2.tiebreak(tb_key)
            if math.isclose(tb1, tb2, rel_tol=0.0, abs_tol=PERCENTAGE_TOLERANCE):
                continue
            return 1 if tb1 > tb2 else -1
        return 0
