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

from bracketeer.models import ScoringMode

# --- Constants ---

# Head-to-head match points
MATCH_WIN_POINTS = 3
MATCH_DRAW_POINTS = 1
MATCH_LOSS_POINTS = 0

# Game points per game won (draws are worth one game point each)
GAME_WIN_POINTS = 3

# A head-to-head bye is recorded as a 2-0 win with no draws
BYE_RESULT = (2, 0, 0)
BYE_MATCH_POINTS = MATCH_WIN_POINTS
BYE_GAME_POINTS = 6

# Head-to-head result vectors are (wins of first, wins of second, draws)
HEAD_TO_HEAD_RESULT_LENGTH = 3
DRAWS_INDEX = 2

# Placement-group match points by finishing position
PLACEMENT_POINTS = {
    1: 6,
    2: 3,
    3: 1,
}
PLACEMENT_UNRANKED_POINTS = 0

# A placement-group match counts as one game regardless of group size
PLACEMENT_GAMES_PER_MATCH = 1

# Floor applied to each opponent's win percentage before averaging
OPPONENT_PERCENTAGE_FLOOR = 0.33

# Tolerance for treating two tiebreak percentages as equal
PERCENTAGE_TOLERANCE = 1e-9

# Losses a participant may carry before being dropped, per elimination rule
SINGLE_ELIMINATION_LOSSES = 1
DOUBLE_ELIMINATION_LOSSES = 2

# (minimum, maximum) participants per match for each scoring mode
GROUP_SIZE_BOUNDS = {
    ScoringMode.HEAD_TO_HEAD: (1, 2),
    ScoringMode.PLACEMENT_GROUP: (3, 4),
}

# Tiebreak keys, in cascade order
TB_MATCH_POINTS = "match_points"
TB_OPPONENTS_MATCH_WIN = "opponents_match_win_pct"
TB_GAME_WIN = "game_win_pct"
TB_OPPONENTS_GAME_WIN = "opponents_game_win_pct"

TIEBREAK_NAMES = {
    TB_MATCH_POINTS: "Match Points",
    TB_OPPONENTS_MATCH_WIN: "Opp Match Win %",
    TB_GAME_WIN: "Game Win %",
    TB_OPPONENTS_GAME_WIN: "Opp Game Win %",
}

TIEBREAK_ORDER = [
    TB_MATCH_POINTS,
    TB_OPPONENTS_MATCH_WIN,
    TB_GAME_WIN,
    TB_OPPONENTS_GAME_WIN,
]

# Environment variable read by configure_logging
LOG_LEVEL_ENV_VAR = "BRACKETEER_LOG_LEVEL"
