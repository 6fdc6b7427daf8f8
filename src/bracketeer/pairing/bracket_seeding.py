"""Standard single-elimination bracket seeding."""

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

from typing import List, Sequence, TypeVar

from bracketeer.exceptions import InvalidBracketSizeException

T = TypeVar("T")


def is_power_of_two(value: int) -> bool:
    """True for 1, 2, 4, 8, ..."""
    return value > 0 and value & (value - 1) == 0


class BracketSeeder:
    """Orders a ranked cut into bracket slots.

    Seeds are 1-based positions in the ranked cut. Adjacent slots of the
    seed order meet in the first round, so seed 1 meets the lowest
    surviving seed at every depth of the bracket.
    """

    @staticmethod
    def seed_order(count: int) -> List[int]:
        """Canonical seed order for a bracket of ``count`` slots.

        Args:
            count: Bracket size, a power of two of at least 2

        Returns:
            A permutation of 1..count, e.g. ``[1, 8, 4, 5, 2, 7, 3, 6]`` for 8

        Raises:
            InvalidBracketSizeException: If count is not a power of two >= 2
        """
        if count < 2 or not is_power_of_two(count):
            raise InvalidBracketSizeException(
                f"Bracket size must be a power of two of at least 2, got {count}"
            )

        order = [1, 2]
        while len(order) < count:
            length = len(order) * 2
            doubled = []
            for seed in order:
                doubled.append(seed)
                doubled.append(length + 1 - seed)
            order = doubled
        return order

    def seed(self, ranked: Sequence[T]) -> List[T]:
        """Rearrange a ranked cut into bracket order.

        Raises:
            InvalidBracketSizeException: If the cut size is not a power of two >= 2
        """
        return [ranked[seed - 1] for seed in self.seed_order(len(ranked))]
