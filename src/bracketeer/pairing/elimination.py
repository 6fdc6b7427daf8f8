"""Elimination filtering applied before each round is paired."""

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

from typing import Iterable, List, Optional

from bracketeer.constants import DOUBLE_ELIMINATION_LOSSES, SINGLE_ELIMINATION_LOSSES
from bracketeer.models import EliminationRule
from bracketeer.pairing.history import ParticipantHistory
from bracketeer.participant import Participant
from bracketeer.utils import setup_logger

logger = setup_logger(__name__)


class EliminationFilter:
    """Drops participants who have reached the loss limit of a rule."""

    def __init__(self, history: ParticipantHistory) -> None:
        self.history = history

    @staticmethod
    def loss_limit(rule: EliminationRule) -> Optional[int]:
        """Losses that eliminate a participant, or None if nobody is eliminated."""
        if rule is EliminationRule.SINGLE:
            return SINGLE_ELIMINATION_LOSSES
        if rule is EliminationRule.DOUBLE:
            return DOUBLE_ELIMINATION_LOSSES
        return None

    def eligible(
        self, participants: Iterable[Participant], rule: EliminationRule
    ) -> List[Participant]:
        """Participants still eligible to be paired, in their original order.

        Args:
            participants: Active participants of the current segment
            rule: Elimination rule in force

        Returns:
            The retained participants
        """
        participants = list(participants)
        limit = self.loss_limit(rule)
        if limit is None:
            return participants

        retained = []
        for participant in participants:
            losses = self.history.loss_count(participant)
            if losses >= limit:
                logger.info(
                    f"{participant.name} eliminated with {losses} loss(es) "
                    f"under {rule} elimination"
                )
                continue
            retained.append(participant)
        return retained
