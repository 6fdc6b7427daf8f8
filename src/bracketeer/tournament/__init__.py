"""Competition management system for Bracketeer.

This package provides the competition facade and the managers it
coordinates: round creation, result recording, scoring and standings.
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

from bracketeer.tournament.models import CompetitionConfig, Match, Round, Segment
from bracketeer.tournament.result_scorer import MatchPoints, ResultScorer
from bracketeer.tournament.standings import (
    ParticipantRecord,
    StandingsEntry,
    StandingsRanker,
)
from bracketeer.tournament.result_recorder import ResultRecorder
from bracketeer.tournament.round_manager import RoundManager
from bracketeer.tournament.competition import Competition

__all__ = [
    "Competition",
    "CompetitionConfig",
    "Match",
    "Round",
    "Segment",
    "MatchPoints",
    "ResultScorer",
    "ParticipantRecord",
    "StandingsEntry",
    "StandingsRanker",
    "ResultRecorder",
    "RoundManager",
]
