"""Attack and move legality for the skirmish engine.

Pure functions over a Roster; nothing here mutates state.
"""

from typing import Set

from .constants import ATTACK_RADIUS, BOARD_SIZE, MOVE_RANGE, NEAR_RADIUS
from .geometry import cardinal_cells_up_to, neighborhood
from .models import CellPosition, Outcome, Team
from .roster import Roster


def attackable_cells(team: Team, roster: Roster, size: int = BOARD_SIZE,
                     radius: int = ATTACK_RADIUS) -> Set[CellPosition]:
    """
    Get all cells team may attack this turn.

    The union of each friendly unit's 3x3 neighborhood (its own cell
    included), minus every cell a friendly unit stands on.
    """
    candidates: Set[CellPosition] = set()
    for unit in roster.units(team):
        candidates |= neighborhood(unit.position, radius, size)
    return candidates - roster.positions(team)


def movable_cells(origin: CellPosition, team: Team, roster: Roster,
                  size: int = BOARD_SIZE,
                  move_range: int = MOVE_RANGE) -> Set[CellPosition]:
    """
    Get all cells the unit at origin may move to.

    1..move_range cells along one cardinal axis. Friendly units block
    their cell; enemy units do not, so a unit may end on an enemy's cell.
    """
    return cardinal_cells_up_to(origin, move_range, size) - roster.positions(team)


def classify_attack(target: CellPosition, roster: Roster, defender: Team,
                    size: int = BOARD_SIZE) -> Outcome:
    """
    Classify an attack on target against defender's units.

    Must be evaluated before damage is applied. A unit on the target
    cell always wins over the neighborhood scan.
    """
    unit = roster.unit_at(defender, target)
    if unit is not None:
        if unit.hit_points <= 1:
            return Outcome.DEAD
        return Outcome.HIT

    occupied = roster.positions(defender)
    if occupied & neighborhood(target, NEAR_RADIUS, size):
        return Outcome.NEAR
    return Outcome.MISS
