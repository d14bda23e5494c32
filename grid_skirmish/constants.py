"""
Game constants - all magic numbers in one place.
NO UI DEPENDENCIES.
"""

# =============================================================================
# BOARD
# =============================================================================
BOARD_SIZE = 5                # cells per side (N x N)

# =============================================================================
# TEAMS
# =============================================================================
UNITS_PER_TEAM = 4            # exactly this many units before battle starts
MAX_HIT_POINTS = 3            # a fresh unit survives two hits

# =============================================================================
# RULES
# =============================================================================
MOVE_RANGE = 2                # max cells along one cardinal axis per move
ATTACK_RADIUS = 1             # Chebyshev radius around each friendly unit
NEAR_RADIUS = 1               # Chebyshev radius of the "near miss" scan
ATTACK_DAMAGE = 1             # hit points lost per attack
