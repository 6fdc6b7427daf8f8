"""A participant enrolled in a competition."""

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

from __future__ import annotations

from typing import Optional, Tuple

from bracketeer.type_hints import ParticipantId
from bracketeer.utils import generate_id, setup_logger

logger = setup_logger(__name__)


class Participant:
    """Represents a participant in a competition.

    A participant only carries identity. Everything derived from play
    (points, standings, history) is computed by the owning competition,
    which takes the participant as a parameter.

    Attributes:
        id: Unique, stable identifier
        first_name: Given name
        last_name: Family name (may be empty)
    """

    def __init__(
        self,
        first_name: str,
        last_name: str = "",
        participant_id: Optional[ParticipantId] = None,
    ) -> None:
        self.id: ParticipantId = participant_id or generate_id(
            self.__class__.__name__
        )
        self.first_name: str = first_name.strip()
        self.last_name: str = last_name.strip()

        if not self.first_name and not self.last_name:
            logger.warning(f"Participant {self.id} created without a name")

    @property
    def name(self) -> str:
        """Display name: first name followed by last name."""
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    def alphabetical_key(self) -> Tuple[str, str]:
        """Sort key ordering by last name, then first name."""
        return self.last_name, self.first_name

    def matches_filter(self, filter_value: str) -> bool:
        """Case-insensitive substring match against either name."""
        needle = filter_value.lower()
        return needle in self.first_name.lower() or needle in self.last_name.lower()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Participant):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"Participant(name='{self.name}', id='{self.id}')"

    def __str__(self) -> str:
        return self.name
