# Swiss Pairing
# Copyright (C) 2025  Swiss Pairing developers
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

# --- Match points ---
WIN_POINTS = 3
DRAW_POINTS = 1
BYE_POINTS = WIN_POINTS

# Weight of a drawn match when computing a match-win rate
DRAW_WIN_RATE_WEIGHT = 0.5

# --- Tiebreakers ---
# OMW% floor: no opponent ever counts for less than a third
OMW_FLOOR = 1.0 / 3.0
# Absolute tolerance used for every percentage comparison
TIEBREAK_TOLERANCE = 0.0001

# Tiebreaker keys, in sort priority after match points
TB_OMW = "omw_percent"
TB_GW = "gw_percent"
TB_OGW = "ogw_percent"
TB_OOMW = "oomw_percent"

TIEBREAK_SORT_ORDER = [TB_OMW, TB_GW, TB_OGW, TB_OOMW]

# --- Result codes (wire values used by the surrounding system) ---
RESULT_PLAYER_A_WIN = "PLAYER_A_WIN"
RESULT_PLAYER_B_WIN = "PLAYER_B_WIN"
RESULT_DRAW = "DRAW"
RESULT_INTENTIONAL_DRAW = "INTENTIONAL_DRAW"
RESULT_DOUBLE_LOSS = "DOUBLE_LOSS"
RESULT_PLAYER_A_DQ = "PLAYER_A_DQ"
RESULT_PLAYER_B_DQ = "PLAYER_B_DQ"

# --- Tournament ---
DEFAULT_TOP_CUT_SIZE = 8
UNKNOWN_PLAYER_NAME = "Unknown"
