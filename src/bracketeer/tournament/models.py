"""Core data models for competition management.

This module holds the competition configuration and re-exports the match,
round and segment models used throughout the competition system.
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

from dataclasses import dataclass
from typing import Any, Dict, Optional

from bracketeer.exceptions import InvalidConfigurationException
from bracketeer.models import EliminationRule, PairingDiscipline, ScoringMode
from bracketeer.models.competition import Match, Round, Segment

__all__ = ["CompetitionConfig", "Match", "Round", "Segment"]


@dataclass
class CompetitionConfig:
    """Configuration settings for a competition.

    Attributes:
        name: Competition name
        elimination_rule: Elimination rule of the regulation phase
        pairing_discipline: Pairing discipline of the regulation phase
        scoring_mode: How match results are scored, fixed for the competition
        random_seed: Seed for the competition's random source, or None
    """

    name: str
    elimination_rule: EliminationRule = EliminationRule.NONE
    pairing_discipline: PairingDiscipline = PairingDiscipline.SWISS
    scoring_mode: ScoringMode = ScoringMode.HEAD_TO_HEAD
    random_seed: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "name": self.name,
            "elimination_rule": self.elimination_rule.value,
            "pairing_discipline": self.pairing_discipline.value,
            "scoring_mode": self.scoring_mode.value,
            "random_seed": self.random_seed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CompetitionConfig":
        """Deserialize configuration from dictionary.

        Raises:
            InvalidConfigurationException: If an enum value is not recognised
        """
        try:
            return cls(
                name=data.get("name", "Untitled Competition"),
                elimination_rule=EliminationRule(
                    data.get("elimination_rule", EliminationRule.NONE.value)
                ),
                pairing_discipline=PairingDiscipline(
                    data.get("pairing_discipline", PairingDiscipline.SWISS.value)
                ),
                scoring_mode=ScoringMode(
                    data.get("scoring_mode", ScoringMode.HEAD_TO_HEAD.value)
                ),
                random_seed=data.get("random_seed"),
            )
        except ValueError as exc:
            raise InvalidConfigurationException(str(exc)) from exc

