"""Enumerations describing how a competition phase is run."""

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

from enum import Enum


class EliminationRule(Enum):
    """How many match losses a participant may take before being dropped."""

    NONE = "none"
    SINGLE = "single"
    DOUBLE = "double"

    @property
    def is_eliminating(self) -> bool:
        return self is not EliminationRule.NONE

    def __str__(self) -> str:
        return self.value.capitalize()


class PairingDiscipline(Enum):
    """Pairing discipline used to group participants into matches.

    SWISS avoids rematches while grouping; NONE and DANISH group strictly in
    the order participants are supplied.
    """

    NONE = "none"
    SWISS = "swiss"
    DANISH = "danish"

    @property
    def avoids_rematches(self) -> bool:
        return self is PairingDiscipline.SWISS

    def __str__(self) -> str:
        return self.value.capitalize()


class ScoringMode(Enum):
    """How a match result vector is interpreted."""

    HEAD_TO_HEAD = "head_to_head"
    PLACEMENT_GROUP = "placement_group"

    def __str__(self) -> str:
        return self.value.replace("_", " ").title()


class ParticipantStatus(Enum):
    """Whether a participant is still active in the current phase."""

    ACTIVE = "active"
    INACTIVE = "inactive"

    def __str__(self) -> str:
        return self.value.capitalize()
